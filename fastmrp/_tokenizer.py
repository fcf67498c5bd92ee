"""
_tokenizer.py
=============
Lazy tokenizer for single-line NEWICK trees.

Public API
----------
  tokenize(line, strip=True)
      Generator over the structural tokens of one NEWICK line.

Token alphabet
--------------
  OPEN   '('
  CLOSE  ')'
  END    ';'
  any other string is a taxon name

In the default (stripping) mode, branch lengths (``:0.123``) and the label or
support value that may follow a closing parenthesis (``)0.95``) are consumed
and never surfaced.  The tokenizer does not check that parentheses balance;
it reports whatever tokens it finds and leaves validation to the caller.

Notes
-----
Tokens are produced by a single compiled alternation that is scanned with
``re.finditer``.  The last alternative (a name) can match the empty string;
those empty matches stand in for the separators (``,``) and are dropped.
"""

import re
from typing import Iterator

OPEN = "("
CLOSE = ")"
END = ";"

# Groups:  1 '('   2 ')' + trailing label   3 ';'   4 ':'   5 name / length
_STRIP_PATTERN = re.compile(r"(\()|(\)[^,:;)]*)|(;)|(:)|([^,);(:]*)")

# Groups:  1 '('   2 ')' + trailing label/length   3 ';'   4 name + length
_RAW_PATTERN = re.compile(r"(\()|(\)[^,;)]*)|(;)|([^,);(]*)")

_G_OPEN, _G_CLOSE, _G_END, _G_COLON, _G_NAME = 1, 2, 3, 4, 5


def tokenize(line: str, strip: bool = True) -> Iterator[str]:
    """
    Yield the tokens of the NEWICK tree in *line*.

    Parameters
    ----------
    line : str
        One tree.  Anything after the first ``;`` is still tokenized; callers
        stop consuming at ``END``.
    strip : bool, default True
        Discard branch lengths and internal node labels.  With
        ``strip=False`` a closing token keeps its trailing annotation
        (e.g. ``')0.95:0.2'``) and names keep their ``:length`` suffix.

    Yields
    ------
    str
        ``'('``, ``')'``, ``';'`` or a whitespace-trimmed, non-empty name.

    Examples
    --------
    >>> list(tokenize('((A:0.1,B:0.2)0.95:0.5,C);'))
    ['(', '(', 'A', 'B', ')', 'C', ')', ';']
    >>> list(tokenize('(A:1,B)x:2;', strip=False))
    ['(', 'A:1', 'B', ')x:2', ';']
    """
    if not strip:
        yield from _tokenize_raw(line)
        return

    in_length = False
    for match in _STRIP_PATTERN.finditer(line):
        group = match.lastindex

        if group == _G_COLON:
            in_length = True
            continue

        if group == _G_NAME:
            if in_length:
                # Branch length: drop it, even when empty.
                in_length = False
                continue
            name = match.group().strip()
            if name:
                yield name
            continue

        in_length = False
        if group == _G_OPEN:
            yield OPEN
        elif group == _G_CLOSE:
            yield CLOSE
        elif group == _G_END:
            yield END


def _tokenize_raw(line: str) -> Iterator[str]:
    for match in _RAW_PATTERN.finditer(line):
        token = match.group().strip()
        if token:
            yield token
