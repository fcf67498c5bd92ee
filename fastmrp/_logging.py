"""
_logging.py
===========
Logging functions for fastmrp.

All ``log_*`` functions in this module have NO side effects except logging.
They take computed data as parameters and format/emit log messages.  The
``compute_*`` helpers at the bottom do the opposite: computation only.

This separation ensures:
- Logging can be easily disabled/mocked in tests
- Computation is separate from presentation
"""

import logging
from typing import List

import numpy as np


logger = logging.getLogger(__name__)


# ============================================================================ #
# Forest Logging (called during construction)
# ============================================================================ #


def log_unbalanced_warning(
    n_unbalanced: int, unbalanced_indices: List[int], n_trees: int
) -> None:
    """
    Emit a consolidated warning for trees whose parentheses were left open.

    Parameters
    ----------
    n_unbalanced : int
        Number of trees with unclosed parentheses.
    unbalanced_indices : List[int]
        Indices of those trees.
    n_trees : int
        Total number of trees in the forest.
    """
    if n_unbalanced == 0:
        return
    if n_unbalanced == 1:
        logger.warning(
            "1 tree had unclosed parentheses (tree index %d). "
            "The unclosed clades produced no characters.",
            unbalanced_indices[0],
        )
    elif n_unbalanced <= 5:
        logger.warning(
            "%d trees had unclosed parentheses (tree indices: %s). "
            "The unclosed clades produced no characters.",
            n_unbalanced,
            ", ".join(map(str, unbalanced_indices)),
        )
    else:
        logger.warning(
            "%d trees had unclosed parentheses (%.1f%% of total). "
            "The unclosed clades produced no characters.",
            n_unbalanced,
            100.0 * n_unbalanced / n_trees,
        )


def log_forest_statistics(
    n_trees: int,
    n_taxa: int,
    n_columns: int,
    taxa_per_tree_mean: float,
    trees_per_taxon_mean: float,
    missing_fraction: float,
) -> None:
    """
    Log forest statistics: counts, namespace overlap and matrix sparsity.

    Parameters
    ----------
    n_trees : int
        Number of trees parsed.
    n_taxa : int
        Number of distinct taxa (matrix rows).
    n_columns : int
        Number of bipartitions (matrix columns).
    taxa_per_tree_mean : float
        Average number of distinct taxa per tree.
    trees_per_taxon_mean : float
        Average number of trees each taxon occurs in.
    missing_fraction : float
        Fraction of matrix cells that will hold the missing symbol.
    """
    logger.info(
        "Forest parsed: %d trees, %d taxa, %d bipartitions",
        n_trees,
        n_taxa,
        n_columns,
    )

    if n_trees == 0:
        logger.warning("No trees were parsed; the matrix will be empty.")
        return

    logger.info(
        "Namespace overlap: %.1f taxa/tree (avg), %.1f trees/taxon (avg)",
        taxa_per_tree_mean,
        trees_per_taxon_mean,
    )

    # Highly disjoint taxon sets make the supermatrix mostly missing data
    if trees_per_taxon_mean < 2.0 and n_trees > 2:
        logger.warning(
            "Low namespace overlap detected: average taxon appears in %.1f trees. "
            "Most of the supermatrix will be missing data.",
            trees_per_taxon_mean,
        )

    logger.info("Missing data: %.1f%% of matrix cells", 100.0 * missing_fraction)


def log_matrix_written(path: str, fmt: str, n_taxa: int, n_columns: int) -> None:
    """Log a completed write of the supermatrix."""
    logger.info(
        "Wrote %s matrix (%d taxa x %d characters) to %s", fmt, n_taxa, n_columns, path
    )


# ============================================================================ #
# Helper Functions for Computing Data (not logging)
# ============================================================================ #


def compute_missing_fraction(boundaries: np.ndarray, taxa_present: np.ndarray) -> float:
    """
    Fraction of matrix cells coded as missing.

    Parameters
    ----------
    boundaries : int64 ndarray (n_trees,)
        Last column index per tree.
    taxa_present : bool ndarray (n_trees, n_taxa)
        ``taxa_present[t, i]`` is True when taxon *i* occurs in tree *t*.

    Returns
    -------
    float
        Missing cells / total cells, or 0.0 for an empty matrix.
    """
    n_trees, n_taxa = taxa_present.shape
    if n_trees == 0 or n_taxa == 0:
        return 0.0
    widths = np.diff(boundaries, prepend=-1)
    total = int(widths.sum()) * n_taxa
    if total == 0:
        return 0.0
    present = int(widths @ taxa_present.sum(axis=1))
    return (total - present) / total
