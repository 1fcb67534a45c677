"""Neighbor-selection strategies for vertical alignment.

The aligner asks a strategy for the "driving" neighbors of each node. An
upward scan aligns a node with its predecessors, a downward scan with its
successors. Both list neighbors by ascending order so the median picks are
well defined.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from bk_layout.ir.graph import LayeredGraph


class NeighborFn(Protocol):
    def __call__(self, node_id: str) -> Sequence[str]: ...


def predecessors_by_order(graph: LayeredGraph) -> NeighborFn:
    def neighbors(node_id: str) -> list[str]:
        return sorted(graph.predecessors(node_id), key=lambda u: graph.label(u).order)

    return neighbors


def successors_by_order(graph: LayeredGraph) -> NeighborFn:
    def neighbors(node_id: str) -> list[str]:
        return sorted(graph.successors(node_id), key=lambda u: graph.label(u).order)

    return neighbors
