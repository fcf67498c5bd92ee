"""
_errors.py
==========
Exception types raised by fastmrp.

Only conditions that abort a run get their own type.  I/O failures are left
as the built-in ``OSError`` raised by the file layer.
"""


class MRPError(Exception):
    """Base class for all fastmrp errors."""


class MalformedTreeError(MRPError, ValueError):
    """
    A NEWICK line could not be turned into bipartitions.

    Raised when a tree's token stream does not begin with ``(``.  Parsing
    cannot resume past such a line because every later column and tree
    boundary index would be shifted.

    Attributes
    ----------
    tree_index : int
        0-based index of the offending tree (blank lines are not counted).
    line : str
        The offending line, as read.
    """

    def __init__(self, tree_index: int, line: str, reason: str = None) -> None:
        self.tree_index = tree_index
        self.line = line
        if reason is None:
            reason = "the tree does not start with '('"
        preview = line if len(line) <= 60 else line[:57] + "..."
        super().__init__(f"Malformed tree at index {tree_index}: {reason} ({preview!r})")
