"""
_utils.py
=========
General-purpose helpers for fastmrp.

These are standalone functions that don't depend on the main classes.
"""


def format_newick(newick: str) -> str:
    """
    Format a NEWICK string for consistent representation.

    Ensures the NEWICK string:
    - Ends with a semicolon
    - Has no leading/trailing whitespace

    Parameters
    ----------
    newick : str
        NEWICK string to format.

    Returns
    -------
    str
        Formatted NEWICK string.  An empty (or whitespace-only) input is
        returned as ``''``.

    Examples
    --------
    >>> format_newick('((A:1,B:1):1,(C:1,D:1):1)')
    '((A:1,B:1):1,(C:1,D:1):1);'

    >>> format_newick('  ((A:1,B:1):1);  ')
    '((A:1,B:1):1);'

    >>> format_newick('   ')
    ''
    """
    newick = newick.strip()
    if newick and not newick.endswith(';'):
        newick += ';'
    return newick


def normalize_format_name(fmt: str) -> str:
    """
    Return the canonical output layout name for *fmt*.

    ``'nexus'`` and ``'phylip'`` are matched case-insensitively; every other
    value selects the FASTA layout.

    Examples
    --------
    >>> normalize_format_name('Nexus')
    'NEXUS'
    >>> normalize_format_name('phylip')
    'PHYLIP'
    >>> normalize_format_name('fa')
    'FASTA'
    """
    name = fmt.strip().upper()
    if name in ("NEXUS", "PHYLIP"):
        return name
    return "FASTA"
