"""
tests/test_forest.py
====================
Pytest test suite for MRPForest.

Test data
---------
tests/trees/overlap.trees: three trees (plus a blank line):

  Tree 0: ((A:0.1,B:0.2)0.95:0.5,(C:0.3,D:0.4)0.87:0.6);
  Tree 1: (A:1,(B:1,(C:1,(E:1,F:1):1):1):1);
  Tree 2: ((A,C)label,(X,Y));

taxa_present (row=tree, col=taxon id):
       A  B  C  D  E  F  X  Y
  t0 [ 1  1  1  1  0  0  0  0 ]
  t1 [ 1  1  1  0  1  1  0  0 ]
  t2 [ 1  0  1  0  0  0  1  1 ]

Column widths per tree: 3, 4, 3  →  missing cells 36 of 80 (45%).
"""

import logging
import os
import random
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from fastmrp import MRPForest, MalformedTreeError, NUCLEOTIDE, quiet, suppress_logger
from fastmrp._logging import compute_missing_fraction

_TREES_DIR = os.path.join(os.path.dirname(__file__), "trees")


def tree_path(filename: str) -> str:
    return os.path.join(_TREES_DIR, filename)


@pytest.fixture(scope="module")
def overlap():
    return MRPForest.from_file(tree_path("overlap.trees"))


def random_newick(taxa, rng: random.Random) -> str:
    """Random rooted binary topology over *taxa*, as NEWICK with lengths."""
    nodes = list(taxa)
    while len(nodes) > 1:
        a = nodes.pop(rng.randrange(len(nodes)))
        b = nodes.pop(rng.randrange(len(nodes)))
        nodes.append(f"({a}:{rng.random():.3f},{b}:{rng.random():.3f})")
    return nodes[0] + ";"


# ======================================================================== #
# Construction                                                              #
# ======================================================================== #


class TestConstruction:
    def test_counts(self, overlap):
        assert (overlap.n_trees, overlap.n_taxa, overlap.n_columns) == (3, 8, 10)

    def test_arrays(self, overlap):
        assert overlap.polarity.dtype == bool
        assert overlap.polarity.shape == (10,)
        np.testing.assert_array_equal(overlap.boundaries, [2, 6, 9])
        expected = np.array(
            [
                [1, 1, 1, 1, 0, 0, 0, 0],
                [1, 1, 1, 0, 1, 1, 0, 0],
                [1, 0, 1, 0, 0, 0, 1, 1],
            ],
            dtype=bool,
        )
        np.testing.assert_array_equal(overlap.taxa_present, expected)

    def test_single_string_rejected(self):
        with pytest.raises(TypeError):
            MRPForest("(A,B);")

    def test_generator_input(self):
        forest = MRPForest(line for line in ["(A,B);", "(B,C);"])
        assert forest.n_trees == 2

    def test_malformed_aborts(self):
        with pytest.raises(MalformedTreeError) as info:
            MRPForest.from_file(tree_path("malformed.trees"))
        assert info.value.tree_index == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            MRPForest.from_file(tmp_path / "nope.trees")

    def test_empty_forest(self):
        forest = MRPForest([])
        assert (forest.n_trees, forest.n_taxa, forest.n_columns) == (0, 0, 0)
        assert forest.to_array().shape == (0, 0)

    def test_arrays_read_only(self, overlap):
        for arr in (overlap.polarity, overlap.boundaries, overlap.taxa_present):
            assert not arr.flags.writeable
            with pytest.raises(ValueError):
                arr[0] = arr[0]

    def test_taxa_is_a_copy(self):
        forest = MRPForest(["(A,(B,C));"])
        forest.taxa.append("Z")
        forest.taxa[0] = "Q"
        assert forest.taxa == ["A", "B", "C"]
        assert dict(forest.rows()) == {"A": "01", "B": "11", "C": "11"}

    def test_repr(self, overlap):
        assert repr(overlap) == "MRPForest(n_trees=3, n_taxa=8, n_columns=10)"


# ======================================================================== #
# Queries                                                                   #
# ======================================================================== #


class TestQueries:
    def test_taxon_round_trip(self, overlap):
        for name in overlap.taxa:
            assert overlap.taxa[overlap.taxon_id(name)] == name
        assert sorted(overlap.taxon_id(n) for n in overlap.taxa) == list(range(8))

    def test_unknown_taxon(self, overlap):
        with pytest.raises(KeyError):
            overlap.taxon_id("Z")
        with pytest.raises(IndexError):
            overlap.taxon_id(8)

    def test_columns_and_trees(self, overlap):
        assert overlap.columns_of("D") == [1, 2]
        assert overlap.trees_of("A") == [0, 1, 2]
        assert overlap.trees_of(1) == [0, 1]
        assert overlap.tree_span(1) == (3, 6)


# ======================================================================== #
# Matrix emission                                                           #
# ======================================================================== #


class TestRows:
    def test_scenario_single_tree(self):
        forest = MRPForest.from_file(tree_path("single.trees"))
        assert forest.taxa == ["A", "B", "C"]
        assert forest.n_columns == 2
        assert dict(forest.rows()) == {"A": "01", "B": "11", "C": "11"}

    def test_scenario_disjoint(self):
        forest = MRPForest.from_file(tree_path("disjoint.trees"))
        assert forest.encode_row("A") == "1?"
        assert forest.encode_row("B") == "1?"
        assert forest.encode_row("C") == "?1"
        assert forest.encode_row("D") == "?1"

    def test_alphabet_by_name(self, overlap):
        assert overlap.encode_row("D", "dna") == "TAA-------"
        assert overlap.encode_row("D", NUCLEOTIDE) == "TAA-------"

    def test_to_array(self, overlap):
        matrix = overlap.to_array()
        assert matrix.shape == (8, 10)
        assert "".join(matrix[0]) == "1010001101"
        assert (matrix[overlap.taxon_id("X"), :7] == "?").all()

    def test_coding_consistency(self, overlap):
        matrix = overlap.to_array()
        for tree in range(overlap.n_trees):
            start, end = overlap.tree_span(tree)
            for column in range(start, end + 1):
                assert overlap.polarity[column]
                for taxon, name in enumerate(overlap.taxa):
                    symbol = matrix[taxon, column]
                    if not overlap.taxa_present[tree, taxon]:
                        assert symbol == "?"
                    elif column in overlap.columns_of(name):
                        assert symbol == "1"
                    else:
                        assert symbol == "0"

    def test_randomized_coding_consistency(self):
        with open(tree_path("overlap.trees")) as fh:
            lines = fh.readlines()
        forest = MRPForest(lines * 10, randomize=True, seed=11)
        matrix = forest.to_array()
        for taxon, name in enumerate(forest.taxa):
            members = set(forest.columns_of(name))
            for tree in forest.trees_of(name):
                start, end = forest.tree_span(tree)
                for column in range(start, end + 1):
                    inside = column in members
                    one = inside == bool(forest.polarity[column])
                    assert matrix[taxon, column] == ("1" if one else "0")

    def test_seed_reproducible(self):
        trees = ["((A,B),(C,D));", "((A,C),(B,D));"] * 5
        a = MRPForest(trees, randomize=True, seed=5)
        b = MRPForest(trees, randomize=True, seed=5)
        assert list(a.rows()) == list(b.rows())


@pytest.mark.large_scale
class TestLargeForest:
    def test_random_forest_invariants(self):
        rng = random.Random(2024)
        pool = [f"t{i}" for i in range(60)]
        trees = [random_newick(rng.sample(pool, rng.randint(4, 30)), rng) for _ in range(300)]

        with quiet():
            forest = MRPForest(trees, randomize=True, seed=7)

        # rooted binary tree on n leaves closes n - 1 clades
        assert forest.n_columns == sum(t.count("(") for t in trees)
        assert forest.boundaries[-1] == forest.n_columns - 1
        assert (np.diff(forest.boundaries) >= 0).all()

        matrix = forest.to_array()
        assert matrix.shape == (forest.n_taxa, forest.n_columns)
        missing = float((matrix == "?").mean())
        assert missing == pytest.approx(
            compute_missing_fraction(forest.boundaries, forest.taxa_present)
        )


# ======================================================================== #
# Logging                                                                   #
# ======================================================================== #


class TestLogging:
    def test_statistics_logged(self, caplog):
        caplog.set_level(logging.INFO, logger="fastmrp")
        MRPForest.from_file(tree_path("overlap.trees"))
        text = caplog.text
        assert "3 trees, 8 taxa, 10 bipartitions" in text
        assert "Missing data: 45.0%" in text
        assert "Low namespace overlap" in text

    def test_unbalanced_warning(self, caplog):
        caplog.set_level(logging.INFO, logger="fastmrp")
        MRPForest(["(A,B);", "(C,D;", "(A,C);"])
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert any("tree index 1" in r.getMessage() for r in warnings)

    def test_quiet(self, caplog):
        caplog.set_level(logging.INFO, logger="fastmrp")
        with quiet():
            MRPForest(["(A,B);", "(C,D;"])
        assert caplog.records == []
        assert logging.getLogger("fastmrp").level == logging.INFO

    def test_suppress_logger(self, caplog):
        caplog.set_level(logging.INFO, logger="fastmrp")
        with suppress_logger("fastmrp._logging", logging.WARNING):
            MRPForest(["(A,B);"])
        assert not any(r.name == "fastmrp._logging" for r in caplog.records)
        assert any(r.name == "fastmrp._forest" for r in caplog.records)

    def test_missing_fraction_helper(self):
        present = np.array([[True, False], [True, True]])
        assert compute_missing_fraction(np.array([1, 2]), present) == pytest.approx(
            2 / 6
        )
        assert compute_missing_fraction(np.array([], dtype=np.int64), np.zeros((0, 0), bool)) == 0.0
