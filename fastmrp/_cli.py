"""
_cli.py
=======
Command-line entry point.

    fastmrp <trees_file> <output> <output_format> [--dna] [--randomize [SEED]]

Exit status
-----------
  0   matrix written
  1   malformed tree or I/O failure (reported through logging)
  2   usage error, including a non-integer seed (reported by argparse)
"""

import argparse
import logging
import sys
from contextlib import nullcontext
from typing import List, Optional, Tuple

from fastmrp import __version__
from fastmrp._context import quiet
from fastmrp._errors import MalformedTreeError
from fastmrp._forest import MRPForest
from fastmrp._matrix import BINARY, NUCLEOTIDE

logger = logging.getLogger(__name__)

# Value of --randomize when given without a seed.  Not a str, so argparse
# does not run it through type=int.
_UNSEEDED = object()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fastmrp",
        description="Build a Matrix Representation with Parsimony (MRP) "
        "supermatrix from a file of NEWICK trees.",
    )
    parser.add_argument(
        "trees_file", help="A file containing Newick trees, one tree per line"
    )
    parser.add_argument(
        "output", help="The name of the output matrix representation (MR) file"
    )
    parser.add_argument(
        "output_format",
        help="NEXUS for nexus, PHYLIP for phylip, or FASTA for fasta formatted "
        "output (case-insensitive; anything else is written as FASTA)",
    )
    parser.add_argument(
        "--dna",
        "-dna",
        action="store_true",
        help="output As and Ts (missing: -) instead of 1 and 0 (missing: ?)",
    )
    parser.add_argument(
        "--randomize",
        "-randomize",
        nargs="?",
        type=int,
        const=_UNSEEDED,
        default=None,
        metavar="SEED",
        help="randomize 0-1 codings per character; the integer seed is optional",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enables debug output"
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Only report warnings and errors"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def randomization_settings(args: argparse.Namespace) -> Tuple[bool, Optional[int]]:
    """Return (randomize, seed) from parsed arguments; seed is None when unseeded."""
    if args.randomize is None:
        return False, None
    if args.randomize is _UNSEEDED:
        return True, None
    return True, args.randomize


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line tool; returns the process exit status."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    randomize, seed = randomization_settings(args)
    alphabet = NUCLEOTIDE if args.dna else BINARY

    with quiet(logging.WARNING) if args.quiet else nullcontext():
        try:
            forest = MRPForest.from_file(args.trees_file, randomize=randomize, seed=seed)
            forest.write(args.output, args.output_format, alphabet)
        except MalformedTreeError as exc:
            logger.error("%s", exc)
            return 1
        except OSError as exc:
            logger.error("I/O failure: %s", exc)
            return 1
        except UnicodeDecodeError as exc:
            logger.error("Trees file is not valid UTF-8: %s", exc)
            return 1
    return 0


def run() -> None:
    sys.exit(main())
