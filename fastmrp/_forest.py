"""
_forest.py
==========
A forest of NEWICK trees and its Matrix Representation with Parsimony (MRP)
supermatrix.

Public API
----------
  MRPForest(newick_strings, randomize=False, seed=None)
      Constructor.  Parses every tree in one forward pass and freezes the
      resulting column / boundary / membership structures.

  MRPForest.from_file(path, randomize=False, seed=None)
      Same, reading one tree per line from *path*.

  .encode_row(taxon, alphabet=BINARY) -> str
  .rows(alphabet=BINARY)              -> iterator of (name, row)
  .to_array(alphabet=BINARY)          -> <U1 ndarray (n_taxa, n_columns)
  .write(path, fmt='NEXUS', alphabet=BINARY)

Two-phase lifecycle
-------------------
Every structure is built during construction and is read-only afterwards.
Row emission needs the complete, forest-wide boundary index, so no row can
be produced before the last tree has been parsed.

Logging
-------
One logger per module, all children of ``'fastmrp'``:

  INFO level:    tree/taxon/bipartition counts, namespace overlap,
                 missing-data fraction, written output.
  WARNING level: trees with unclosed parentheses, low namespace overlap.

    import logging
    logging.getLogger('fastmrp').setLevel(logging.WARNING)

or use ``fastmrp.quiet()``.

Arrays
------
  polarity     : bool  (n_columns,)        True maps clade members to 'one'
  boundaries   : int64 (n_trees,)          last column index of each tree
  taxa_present : bool  (n_trees, n_taxa)   taxon occurs as a leaf in tree
"""

import logging
from typing import Iterable, Iterator, List, Optional, Tuple, Union

import numpy as np

from fastmrp._extractor import BipartitionExtractor
from fastmrp._formats import write_matrix_file
from fastmrp._logging import (
    compute_missing_fraction,
    log_forest_statistics,
    log_unbalanced_warning,
)
from fastmrp._matrix import BINARY, Alphabet, MatrixEncoder, get_alphabet

logger = logging.getLogger(__name__)


class MRPForest:
    """
    An immutable forest of trees encoded as MRP bipartitions.

    Parameters
    ----------
    newick_input : iterable of str
        One NEWICK tree per item (a file handle works).  Blank items are
        skipped.
    randomize : bool, default False
        Random polarity per column (see ``BipartitionExtractor``).
    seed : int or None, default None
        Seed for the polarity draws; only used with *randomize*.

    Attributes (read-only after construction)
    -----------------------------------------
    n_trees, n_taxa, n_columns : int
    taxa         : list[str]   taxon names in row order (a fresh copy per access)
    polarity     : bool  ndarray (n_columns,)
    boundaries   : int64 ndarray (n_trees,)
    taxa_present : bool  ndarray (n_trees, n_taxa)

    Raises
    ------
    MalformedTreeError   if a tree does not start with '('.
    TypeError            if *newick_input* is a single string.

    Examples
    --------
    >>> forest = MRPForest(['(A,(B,C));'])
    >>> dict(forest.rows())
    {'A': '01', 'B': '11', 'C': '11'}
    """

    # ================================================================== #
    # Construction                                                         #
    # ================================================================== #

    def __init__(
        self,
        newick_input: Iterable[str],
        randomize: bool = False,
        seed: Optional[int] = None,
    ) -> None:
        if isinstance(newick_input, str):
            raise TypeError(
                "newick_input must be an iterable of NEWICK strings, got a single str"
            )

        extractor = BipartitionExtractor(randomize=randomize, seed=seed)
        if randomize:
            logger.info(
                "Randomized column polarity (%s)",
                "unseeded" if seed is None else f"seed={seed}",
            )

        logger.info("Extracting bipartitions...")
        extractor.add_trees(newick_input)

        self._extractor = extractor
        self._encoder = MatrixEncoder(extractor)

        self.n_trees: int = extractor.n_trees
        self.n_taxa: int = extractor.n_taxa
        self.n_columns: int = extractor.n_columns

        self.polarity = np.asarray(extractor.polarity, dtype=bool)
        self.boundaries = extractor.boundaries.to_array()
        self._build_presence()
        for arr in (self.polarity, self.boundaries, self.taxa_present):
            arr.flags.writeable = False

        log_unbalanced_warning(
            len(extractor.unbalanced_trees), extractor.unbalanced_trees, self.n_trees
        )
        self._log_statistics_method()

    @property
    def taxa(self) -> List[str]:
        """Taxon names in row order (a copy)."""
        return list(self._extractor.registry.names)

    @classmethod
    def from_file(
        cls, path, randomize: bool = False, seed: Optional[int] = None
    ) -> "MRPForest":
        """Build a forest from a file holding one NEWICK tree per line."""
        logger.info("Reading trees from %s", path)
        with open(path, encoding="utf-8") as fh:
            return cls(fh, randomize=randomize, seed=seed)

    def _build_presence(self) -> None:
        """
        **Private.**  Build the dense (n_trees, n_taxa) membership mask from
        the per-taxon tree sets.
        """
        present = np.zeros((self.n_trees, self.n_taxa), dtype=bool)
        for taxon, trees in enumerate(self._extractor.trees_per_taxon):
            present[sorted(trees), taxon] = True
        self.taxa_present = present

    def _log_statistics_method(self) -> None:
        """**Private.**  Compute overlap/sparsity figures and log them."""
        if self.n_trees and self.n_taxa:
            mean_taxa = float(self.taxa_present.sum(axis=1).mean())
            mean_trees = float(self.taxa_present.sum(axis=0).mean())
        else:
            mean_taxa = mean_trees = 0.0

        log_forest_statistics(
            self.n_trees,
            self.n_taxa,
            self.n_columns,
            mean_taxa,
            mean_trees,
            compute_missing_fraction(self.boundaries, self.taxa_present),
        )

    # ================================================================== #
    # Queries                                                              #
    # ================================================================== #

    def taxon_id(self, taxon: Union[str, int]) -> int:
        """
        Return the row index of *taxon* (a name or an already-resolved ID).

        Raises
        ------
        KeyError     if a name is unknown.
        IndexError   if an ID is out of range.
        """
        if isinstance(taxon, str):
            return self._extractor.registry.id_of(taxon)
        taxon = int(taxon)
        if not 0 <= taxon < self.n_taxa:
            raise IndexError(f"Taxon ID {taxon} out of range [0, {self.n_taxa}).")
        return taxon

    def columns_of(self, taxon: Union[str, int]) -> List[int]:
        """Ascending columns whose clade contains *taxon*."""
        return list(self._extractor.columns_per_taxon[self.taxon_id(taxon)])

    def trees_of(self, taxon: Union[str, int]) -> List[int]:
        """Sorted indices of the trees in which *taxon* is a leaf."""
        return sorted(self._extractor.trees_per_taxon[self.taxon_id(taxon)])

    def tree_span(self, tree: int) -> Tuple[int, int]:
        """Inclusive column range (start, end) of *tree*; empty if start > end."""
        return self._extractor.boundaries.span(tree)

    # ================================================================== #
    # Matrix emission                                                      #
    # ================================================================== #

    def encode_row(
        self, taxon: Union[str, int], alphabet: Union[Alphabet, str] = BINARY
    ) -> str:
        """Return the matrix row of *taxon* (name or ID)."""
        return self._encoder.encode_row(
            self.taxon_id(taxon), _resolve_alphabet(alphabet)
        )

    def rows(
        self, alphabet: Union[Alphabet, str] = BINARY
    ) -> Iterator[Tuple[str, str]]:
        """Yield ``(name, row)`` for every taxon, in first-seen order."""
        return self._encoder.iter_rows(_resolve_alphabet(alphabet))

    def to_array(self, alphabet: Union[Alphabet, str] = BINARY) -> np.ndarray:
        """
        Return the supermatrix as a ``<U1`` array of shape
        ``(n_taxa, n_columns)``.
        """
        matrix = np.empty((self.n_taxa, self.n_columns), dtype="<U1")
        for i, (_, row) in enumerate(self.rows(alphabet)):
            matrix[i] = list(row)
        return matrix

    def write(
        self, path, fmt: str = "NEXUS", alphabet: Union[Alphabet, str] = BINARY
    ) -> None:
        """
        Write the supermatrix to *path* in NEXUS, PHYLIP or FASTA layout.

        The file is replaced atomically; on failure the previous content (if
        any) is left in place and the error propagates.
        """
        write_matrix_file(path, self, fmt, _resolve_alphabet(alphabet))

    def __repr__(self) -> str:
        return (
            f"MRPForest(n_trees={self.n_trees}, n_taxa={self.n_taxa}, "
            f"n_columns={self.n_columns})"
        )


def _resolve_alphabet(alphabet: Union[Alphabet, str]) -> Alphabet:
    if isinstance(alphabet, str):
        return get_alphabet(alphabet)
    return Alphabet(*alphabet)
