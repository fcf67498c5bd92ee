"""
_formats.py
===========
Text layouts for the MRP supermatrix.

  NEXUS    '#NEXUS' data block with ntax/nchar dimensions, one
           ``'<name>' <row>`` line per taxon, closed by ``;`` / ``end;``.
  PHYLIP   ``<ntax> <nchar>`` header, then ``<name> <row>`` per taxon.
  FASTA    ``><name>`` then ``<row>`` per taxon.  Any format name other than
           NEXUS or PHYLIP selects this layout.

Format names are case-insensitive.

``write_matrix_file`` never leaves a truncated matrix behind: rows go to a
temporary file next to the destination, which replaces the destination only
after the last line has been written.
"""

import os
import stat
import tempfile
from typing import TextIO

from fastmrp._logging import log_matrix_written
from fastmrp._matrix import BINARY, Alphabet
from fastmrp._utils import normalize_format_name

NEXUS_HEADER = (
    "#NEXUS\n"
    "begin data;\n"
    "\t dimensions ntax = {n_taxa} nchar = {n_columns};\n"
    "\t format missing = {missing};\n"
    "\tmatrix\n"
)
NEXUS_FOOTER = "\t;\nend;\n"
PHYLIP_HEADER = "{n_taxa} {n_columns}\n"


def write_matrix(
    handle: TextIO, forest, fmt: str = "NEXUS", alphabet: Alphabet = BINARY
) -> str:
    """
    Write the supermatrix of *forest* to an open text *handle*.

    Parameters
    ----------
    handle : TextIO
        Destination; left open.
    forest : MRPForest
        A fully built forest.
    fmt : str, default 'NEXUS'
        'NEXUS', 'PHYLIP' or anything else for FASTA.
    alphabet : Alphabet, default BINARY

    Returns
    -------
    str   The canonical layout name that was written.
    """
    layout = normalize_format_name(fmt)
    dims = {"n_taxa": forest.n_taxa, "n_columns": forest.n_columns}

    if layout == "NEXUS":
        handle.write(NEXUS_HEADER.format(missing=alphabet.missing, **dims))
        for name, row in forest.rows(alphabet):
            handle.write(f"\t'{name}' {row}\n")
        handle.write(NEXUS_FOOTER)
    elif layout == "PHYLIP":
        handle.write(PHYLIP_HEADER.format(**dims))
        for name, row in forest.rows(alphabet):
            handle.write(f"{name} {row}\n")
    else:
        for name, row in forest.rows(alphabet):
            handle.write(f">{name}\n{row}\n")

    return layout


def _output_mode(path: str) -> int:
    """
    Permission bits for a finished matrix file: those of the file being
    replaced, or what a plain ``open(path, "w")`` would give under the
    current umask.
    """
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        pass
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_matrix_file(
    path, forest, fmt: str = "NEXUS", alphabet: Alphabet = BINARY
) -> None:
    """
    Write the supermatrix of *forest* to *path*, atomically.

    Raises
    ------
    OSError   on any I/O failure.  The destination is left untouched and
              the temporary file is removed.
    """
    path = os.fspath(path)
    directory = os.path.dirname(os.path.abspath(path))

    tmp = tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        dir=directory,
        prefix=f".{os.path.basename(path)}.",
        suffix=".tmp",
        delete=False,
    )
    try:
        with tmp:
            layout = write_matrix(tmp, forest, fmt, alphabet)
        os.chmod(tmp.name, _output_mode(path))
        os.replace(tmp.name, path)
    except BaseException:
        if os.path.exists(tmp.name):
            os.unlink(tmp.name)
        raise

    log_matrix_written(path, layout, forest.n_taxa, forest.n_columns)
