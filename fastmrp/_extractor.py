"""
_extractor.py
=============
Stack machine that turns a stream of NEWICK trees into MRP bipartitions
without ever building a tree object.

Public API
----------
  BipartitionExtractor(randomize=False, seed=None)
      .add_tree(line)       parse one tree; returns its (start, end) span
      .add_trees(lines)     parse many; blank lines are skipped

State (read-only once parsing is finished)
------------------------------------------
  registry           : TaxonRegistry        taxon name <-> dense ID
  boundaries         : TreeBoundaryIndex    last column per tree
  columns_per_taxon  : list[list[int]]      ascending column indices whose
                                            clade contains the taxon
  trees_per_taxon    : list[set[int]]       trees in which the taxon is a leaf
  polarity           : list[bool]           per column; True maps clade
                                            members to the "one" symbol
  n_columns, n_trees : int

Algorithm
---------
Every ``(`` pushes an empty set.  A name is added to the set on top of the
stack.  Every ``)`` pops the top set, allocates the next column for it, and
folds the popped members into the new top, so a taxon belongs to every
clade enclosing it.  The outermost ``)`` also yields a column (the clade of
all taxa of that tree); it is kept even though it is uninformative for an
unrooted tree.

Columns are allocated in closing order across the whole forest, which keeps
every per-taxon column list sorted without any sorting step.
"""

import logging
from typing import Iterable, List, Optional, Set, Tuple

import numpy as np

from fastmrp._errors import MalformedTreeError
from fastmrp._registry import TaxonRegistry, TreeBoundaryIndex
from fastmrp._tokenizer import CLOSE, END, OPEN, tokenize
from fastmrp._utils import format_newick

logger = logging.getLogger(__name__)


class BipartitionExtractor:
    """
    Incremental bipartition extractor for a forest of NEWICK trees.

    Parameters
    ----------
    randomize : bool, default False
        Draw each column's polarity as a uniform random boolean at the moment
        the column is created.  When False every column has polarity True.
    seed : int or None, default None
        Seed for ``numpy.random.default_rng``.  Ignored unless *randomize*;
        ``None`` seeds from OS entropy.
    """

    def __init__(self, randomize: bool = False, seed: Optional[int] = None) -> None:
        self.registry = TaxonRegistry()
        self.boundaries = TreeBoundaryIndex()
        self.columns_per_taxon: List[List[int]] = []
        self.trees_per_taxon: List[Set[int]] = []
        self.polarity: List[bool] = []

        self.randomize = randomize
        self._rng = np.random.default_rng(seed) if randomize else None

        self.n_trees = 0
        self._last_column = -1

        # Trees whose parentheses were left open at ';'
        self.unbalanced_trees: List[int] = []

    @property
    def n_columns(self) -> int:
        return self._last_column + 1

    @property
    def n_taxa(self) -> int:
        return len(self.registry)

    # ================================================================== #
    # Parsing                                                              #
    # ================================================================== #

    def add_trees(self, lines: Iterable[str]) -> int:
        """
        Parse every non-blank line of *lines* as one tree.

        Returns
        -------
        int   Number of trees added.

        Raises
        ------
        MalformedTreeError   on the first line that does not start with '('.
        """
        added = 0
        for line in lines:
            if not line.strip():
                continue
            self.add_tree(line)
            added += 1
        return added

    def add_tree(self, line: str) -> Tuple[int, int]:
        """
        Parse one NEWICK tree and append its bipartitions.

        Parameters
        ----------
        line : str   A single tree; a missing trailing ';' is tolerated.

        Returns
        -------
        (int, int)   Inclusive column span (start, end) of this tree;
                     start > end if it contributed no columns.

        Raises
        ------
        MalformedTreeError   if the first token is not '(' (including an
                             empty line).  Nothing is recorded in that case.
        """
        tree = self.n_trees
        tokens = tokenize(format_newick(line))

        if next(tokens, None) != OPEN:
            raise MalformedTreeError(tree, line)

        start = self._last_column + 1
        stack: List[Set[int]] = [set()]

        for token in tokens:
            if token == OPEN:
                stack.append(set())
            elif token == CLOSE:
                if not stack:
                    # Unmatched ')'; nothing to close.
                    continue
                clade = stack.pop()
                self._add_bipartition(clade)
                if stack:
                    stack[-1] |= clade
            elif token == END:
                break
            else:
                taxon = self._add_taxon_to_tree(token, tree)
                if stack:
                    stack[-1].add(taxon)

        if stack:
            self.unbalanced_trees.append(tree)
            logger.debug(
                "Tree %d: %d unclosed parenthesis(es) discarded", tree, len(stack)
            )

        self.boundaries.add_end_index(self._last_column)
        self.n_trees += 1
        return start, self._last_column

    def _add_taxon_to_tree(self, name: str, tree: int) -> int:
        taxon = self.registry.intern(name)
        if taxon == len(self.trees_per_taxon):
            self.trees_per_taxon.append(set())
            self.columns_per_taxon.append([])
        self.trees_per_taxon[taxon].add(tree)
        return taxon

    def _add_bipartition(self, clade: Set[int]) -> int:
        self._last_column += 1
        column = self._last_column
        if self._rng is None:
            self.polarity.append(True)
        else:
            self.polarity.append(bool(self._rng.integers(2)))
        for taxon in clade:
            self.columns_per_taxon[taxon].append(column)
        return column
