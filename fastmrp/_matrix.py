"""
_matrix.py
==========
Row encoder for the MRP supermatrix.

Public API
----------
  Alphabet(one, zero, missing)      symbol triple (NamedTuple)
  BINARY, NUCLEOTIDE                ('1','0','?') and ('A','T','-')
  get_alphabet(name)                resolve 'binary' / 'dna' by name
  MatrixEncoder(extractor)
      .encode_row(taxon_id, alphabet=BINARY) -> str
      .iter_rows(alphabet=BINARY)            -> iterator of (name, row)

Row algorithm
-------------
For one taxon, a cursor walks columns 0..n_columns-1 tree by tree, using the
tree boundary index to know where each tree's columns end.

  * Taxon present in the tree: every column of the tree is emitted.  A
    column equal to the value under the forward pointer into the taxon's
    (ascending) column list is a clade the taxon belongs to; the pointer is
    then advanced.  Polarity decides which of one/zero that maps to.
  * Taxon absent: the tree's whole column range is emitted as one run of
    the missing symbol, and the column list is not consulted.

The pointer is never rewound, so each row costs O(n_columns) with no lookups
into other taxa's data.
"""

from typing import Iterator, NamedTuple, Tuple


class Alphabet(NamedTuple):
    """Symbols for (member, non-member, absent-from-tree)."""

    one: str
    zero: str
    missing: str


BINARY = Alphabet("1", "0", "?")
NUCLEOTIDE = Alphabet("A", "T", "-")

_ALPHABETS = {
    "binary": BINARY,
    "default": BINARY,
    "dna": NUCLEOTIDE,
    "nucleotide": NUCLEOTIDE,
}


def get_alphabet(name: str) -> Alphabet:
    """
    Return the alphabet registered under *name* (case-insensitive).

    Raises
    ------
    ValueError   if *name* is not one of 'binary', 'default', 'dna',
                 'nucleotide'.
    """
    key = name.strip().lower()
    if key not in _ALPHABETS:
        raise ValueError(
            f"Unknown alphabet '{name}'. Known alphabets: {', '.join(sorted(_ALPHABETS))}"
        )
    return _ALPHABETS[key]


class MatrixEncoder:
    """
    Read-only view over a finished ``BipartitionExtractor`` that produces
    matrix rows.

    Parameters
    ----------
    extractor : BipartitionExtractor
        Must not receive further trees while rows are being encoded.
    """

    def __init__(self, extractor) -> None:
        self._columns_per_taxon = extractor.columns_per_taxon
        self._trees_per_taxon = extractor.trees_per_taxon
        self._boundaries = extractor.boundaries
        self._polarity = extractor.polarity
        self._names = extractor.registry.names

    def encode_row(self, taxon_id: int, alphabet: Alphabet = BINARY) -> str:
        """Return the full row of symbols for *taxon_id*."""
        one, zero, missing = alphabet
        polarity = self._polarity
        member_of = self._trees_per_taxon[taxon_id]

        clade_columns = iter(self._columns_per_taxon[taxon_id])
        next_clade = next(clade_columns, -1)

        out = []
        column = 0
        for tree, end in enumerate(self._boundaries):
            if tree in member_of:
                while column <= end:
                    if column == next_clade:
                        out.append(one if polarity[column] else zero)
                        next_clade = next(clade_columns, -1)
                    else:
                        out.append(zero if polarity[column] else one)
                    column += 1
            elif end >= column:
                out.append(missing * (end - column + 1))
                column = end + 1
        return "".join(out)

    def iter_rows(self, alphabet: Alphabet = BINARY) -> Iterator[Tuple[str, str]]:
        """Yield ``(taxon_name, row)`` for every taxon in registry order."""
        for taxon_id, name in enumerate(self._names):
            yield name, self.encode_row(taxon_id, alphabet)
