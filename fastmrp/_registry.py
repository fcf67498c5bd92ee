"""
_registry.py
============
Append-only support structures shared by the extractor and the encoder.

  TaxonRegistry
      Interns taxon names to dense integer IDs (0, 1, 2, ...) in first-seen
      order.  ``names[id]`` and ``id_of(name)`` are inverse mappings.

  TreeBoundaryIndex
      For each tree, in input order, the index of the last column (character)
      that tree contributed.  A tree that contributed no columns repeats the
      previous boundary; before any column exists the boundary is -1.

Both structures only grow while the forest is being parsed and are read-only
afterwards.
"""

from typing import Dict, Iterator, List, Tuple

import numpy as np


class TaxonRegistry:
    """
    Bijective name <-> ID map with IDs assigned in order of first sight.

    Examples
    --------
    >>> reg = TaxonRegistry()
    >>> reg.intern('A'), reg.intern('B'), reg.intern('A')
    (0, 1, 0)
    >>> reg.names
    ['A', 'B']
    """

    def __init__(self) -> None:
        self._name_to_id: Dict[str, int] = {}
        self.names: List[str] = []

    def intern(self, name: str) -> int:
        """Return the ID of *name*, assigning the next free ID if it is new."""
        taxon_id = self._name_to_id.get(name)
        if taxon_id is None:
            taxon_id = len(self.names)
            self._name_to_id[name] = taxon_id
            self.names.append(name)
        return taxon_id

    def id_of(self, name: str) -> int:
        """
        Return the ID of a known taxon.

        Raises
        ------
        KeyError   if *name* has never been interned.
        """
        if name not in self._name_to_id:
            raise KeyError(f"Taxon '{name}' not found in registry.")
        return self._name_to_id[name]

    def name_of(self, taxon_id: int) -> str:
        return self.names[taxon_id]

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, name) -> bool:
        return name in self._name_to_id

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)


class TreeBoundaryIndex:
    """
    Last-column index per tree.

    ``span(t)`` gives the inclusive column range ``(start, end)`` owned by
    tree *t*; ``start > end`` for a tree that contributed nothing.
    """

    def __init__(self) -> None:
        self._ends: List[int] = []

    def add_end_index(self, last_column: int) -> None:
        """
        Record the boundary of the next tree.

        Raises
        ------
        ValueError   if *last_column* is below the previous boundary.
        """
        if self._ends and last_column < self._ends[-1]:
            raise ValueError(
                f"Tree boundaries must be non-decreasing; got {last_column} "
                f"after {self._ends[-1]}."
            )
        self._ends.append(last_column)

    def span(self, tree: int) -> Tuple[int, int]:
        start = self._ends[tree - 1] + 1 if tree > 0 else 0
        return start, self._ends[tree]

    def to_array(self) -> np.ndarray:
        """Return the boundaries as an int64 array of length ``n_trees``."""
        return np.asarray(self._ends, dtype=np.int64)

    def __getitem__(self, tree: int) -> int:
        return self._ends[tree]

    def __len__(self) -> int:
        return len(self._ends)

    def __iter__(self) -> Iterator[int]:
        return iter(self._ends)
