"""Tests for bk_layout.compaction — block placement and shift application."""

from __future__ import annotations

import sys

import pytest

from bk_layout.alignment import vertical_alignment
from bk_layout.compaction import horizontal_compaction, separation
from bk_layout.config import CompactionOptions
from bk_layout.conflicts import collect_type1_conflicts
from bk_layout.ir.graph import LayeredGraph, build_layering
from bk_layout.neighbors import predecessors_by_order

# ─── Helpers ──────────────────────────────────────────────────────────────────


def compact(graph: LayeredGraph, options=None) -> dict[str, float]:
    """Align upward, compact, and return the x of every node."""
    layering = build_layering(graph)
    conflicts = collect_type1_conflicts(graph, layering)
    vertical_alignment(graph, layering, conflicts, predecessors_by_order(graph))
    horizontal_compaction(graph, layering, options)
    return graph.x_coordinates()


# ─── separation Tests ─────────────────────────────────────────────────────────


class TestSeparation:
    def test_real_nodes(self):
        g = LayeredGraph.from_layers([["a", "b"]], default_width=40)
        assert separation(g, CompactionOptions(), "b", "a") == 90

    def test_dummy_nodes(self):
        g = LayeredGraph.from_layers([["a", "b"]], dummies=("a", "b"), default_width=40)
        assert separation(g, CompactionOptions(), "b", "a") == 50

    def test_mixed_nodes(self):
        g = LayeredGraph.from_layers([["a", "b"]], dummies=("a",), widths={"a": 10, "b": 30})
        # 10/2 + 10/2 + 50/2 + 30/2
        assert separation(g, CompactionOptions(), "b", "a") == 50

    def test_custom_options(self):
        g = LayeredGraph.from_layers([["a", "b"]])
        assert separation(g, CompactionOptions(nodesep=20, edgesep=4), "b", "a") == 20


# ─── horizontal_compaction Tests ──────────────────────────────────────────────


class TestHorizontalCompaction:
    def test_single_node_at_zero(self):
        g = LayeredGraph.from_layers([["a"]])
        assert compact(g) == {"a": 0}

    def test_two_parallel_blocks(self):
        g = LayeredGraph.from_layers([["a", "b"], ["c", "d"]], [("a", "c"), ("b", "d")])
        assert compact(g) == {"a": 0, "b": 50, "c": 0, "d": 50}

    def test_blocks_share_coordinates(self):
        g = LayeredGraph.from_layers([["a"], ["b"], ["c"]], [("a", "b"), ("b", "c")], dummies=("a", "b", "c"))
        xs = compact(g)
        assert xs == {"a": 0, "b": 0, "c": 0}

    def test_constraint_from_lower_member(self):
        """d sits right of b's block member c, so it lands two gaps over."""
        g = LayeredGraph.from_layers([["a", "b"], ["c", "d"]], [("b", "c"), ("a", "d")])
        assert compact(g) == {"a": 0, "b": 50, "c": 50, "d": 100}

    def test_dummy_separation_end_to_end(self):
        g = LayeredGraph.from_layers(
            [["a", "b"], ["c", "d"]],
            [("a", "c"), ("b", "d")],
            dummies=("a", "b", "c", "d"),
            default_width=40,
        )
        xs = compact(g, {"nodesep": 50, "edgesep": 10})
        assert xs["d"] - xs["c"] == 50
        assert xs["b"] - xs["a"] == 50

    def test_real_separation_end_to_end(self):
        g = LayeredGraph.from_layers([["a", "b"], ["c", "d"]], [("a", "c"), ("b", "d")], default_width=40)
        xs = compact(g, {"nodesep": 50, "edgesep": 10})
        assert xs["d"] - xs["c"] == 90
        assert xs["b"] - xs["a"] == 90

    def test_mapping_options(self):
        g = LayeredGraph.from_layers([["a", "b"]])
        assert compact(g, {"nodesep": 20}) == {"a": 0, "b": 20}

    def test_invalid_options(self):
        g = LayeredGraph.from_layers([["a", "b"]])
        with pytest.raises(ValueError):
            compact(g, {"edgesep": -1})

    def test_shift_pulls_other_class_left(self):
        """b's block is pinned by a; the wide c below gets pulled left to clear d."""
        g = LayeredGraph.from_layers(
            [["a", "b"], ["c", "d"]],
            [("b", "d")],
            widths={"c": 100},
        )
        xs = compact(g)
        assert xs == {"a": 0, "b": 50, "c": -50, "d": 50}
        assert xs["d"] - xs["c"] == separation(g, CompactionOptions(), "d", "c")

    def test_mixed_graph(self):
        g = LayeredGraph.from_layers(
            [["a", "b"], ["c", "d", "e"], ["f", "g"]],
            [("a", "c"), ("b", "d"), ("a", "e"), ("c", "f"), ("e", "f"), ("d", "g"), ("e", "g")],
            dummies=("b", "d"),
        )
        assert compact(g) == {"a": 0, "b": 50, "c": 0, "d": 50, "e": 80, "f": 0, "g": 50}

    def test_stale_x_is_ignored(self):
        g = LayeredGraph.from_layers([["a", "b"]])
        g.label("a").x = 999
        g.label("b").x = -5
        assert compact(g) == {"a": 0, "b": 50}

    def test_idempotent(self):
        """Clearing x and compacting again with the same blocks gives the same result."""
        g = LayeredGraph.from_layers(
            [["a", "b"], ["c", "d"]],
            [("b", "d")],
            widths={"c": 100},
        )
        first = compact(g)
        for _, label in g.nodes():
            label.x = None
        horizontal_compaction(g, build_layering(g))
        assert g.x_coordinates() == first

    def test_deep_dependency_chain_does_not_recurse(self):
        """A wide layer inserted right to left makes every block wait on its left neighbor."""
        n = sys.getrecursionlimit() + 500
        g = LayeredGraph()
        for order in reversed(range(n)):
            g.add_node(f"n{order}", rank=0, order=order)
        xs = compact(g)
        assert xs["n0"] == 0
        assert xs[f"n{n - 1}"] == 50 * (n - 1)
        assert all(xs[f"n{i + 1}"] - xs[f"n{i}"] == 50 for i in range(n - 1))
