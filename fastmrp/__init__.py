"""
fastmrp
=======

Matrix Representation with Parsimony (MRP) supermatrices from forests of
phylogenetic trees.

Each internal node of each input tree becomes one character (column); taxa
inside the clade are coded one way, other taxa of the same tree the other
way, and taxa absent from the tree are coded as missing.

Main Classes
------------
MRPForest : Parse a forest of NEWICK trees and emit its supermatrix
BipartitionExtractor : Streaming, stack-based bipartition extraction
MatrixEncoder : Linear-time row encoder
TaxonRegistry, TreeBoundaryIndex : Support structures

Context Managers
----------------
quiet : Suppress logging during operations
suppress_logger : Suppress specific logger

Utilities
---------
tokenize : Lazy NEWICK tokenizer
format_newick : Format NEWICK strings consistently
write_matrix, write_matrix_file : NEXUS / PHYLIP / FASTA output

Examples
--------
>>> from fastmrp import MRPForest
>>> forest = MRPForest(['(A,B);', '(C,D);'])
>>> for name, row in forest.rows():
...     print(name, row)
A 1?
B 1?
C ?1
D ?1

>>> from fastmrp import NUCLEOTIDE
>>> forest.write('out.phy', 'PHYLIP', NUCLEOTIDE)
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Main classes
from ._forest import MRPForest
from ._extractor import BipartitionExtractor
from ._matrix import MatrixEncoder, Alphabet, BINARY, NUCLEOTIDE, get_alphabet
from ._registry import TaxonRegistry, TreeBoundaryIndex

# Errors
from ._errors import MRPError, MalformedTreeError

# Context managers
from ._context import quiet, suppress_logger

# Utilities
from ._tokenizer import tokenize
from ._utils import format_newick, normalize_format_name
from ._formats import write_matrix, write_matrix_file

# Public API
__all__ = [
    # Main classes
    "MRPForest",
    "BipartitionExtractor",
    "MatrixEncoder",
    "TaxonRegistry",
    "TreeBoundaryIndex",
    # Alphabets
    "Alphabet",
    "BINARY",
    "NUCLEOTIDE",
    "get_alphabet",
    # Errors
    "MRPError",
    "MalformedTreeError",
    # Context managers
    "quiet",
    "suppress_logger",
    # Utilities
    "tokenize",
    "format_newick",
    "normalize_format_name",
    "write_matrix",
    "write_matrix_file",
    # Version info
    "__version__",
]
