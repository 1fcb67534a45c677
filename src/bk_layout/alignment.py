"""Vertical alignment: group nodes into blocks along median neighbors."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from dataclasses import dataclass, field

from bk_layout.conflicts import ConflictSet
from bk_layout.ir.graph import LayeredGraph, Layering
from bk_layout.neighbors import NeighborFn

logger = logging.getLogger(__name__)


@dataclass
class Blocks:
    """Block structure produced by one alignment pass.

    ``root[v]`` is the representative of v's block; ``align[v]`` is the next
    member down the block, with the last member pointing back at the root.
    """

    root: dict[str, str] = field(default_factory=dict)
    align: dict[str, str] = field(default_factory=dict)

    def roots(self) -> list[str]:
        return [v for v, r in self.root.items() if v == r]

    def members(self, root: str) -> list[str]:
        """Walk the align cycle starting at ``root``."""
        result = [root]
        w = self.align[root]
        while w != root:
            result.append(w)
            w = self.align[w]
        return result

    def block_of(self, node_id: str) -> list[str]:
        return self.members(self.root[node_id])

    def __iter__(self) -> Iterator[list[str]]:
        for r in self.roots():
            yield self.members(r)

    def __len__(self) -> int:
        return len(self.roots())

    def apply(self, graph: LayeredGraph) -> None:
        """Write this block structure back onto the graph's labels."""
        for node_id, label in graph.nodes():
            label.root = self.root[node_id]
            label.align = self.align[node_id]

    @classmethod
    def from_graph(cls, graph: LayeredGraph) -> Blocks:
        blocks = cls()
        for node_id, label in graph.nodes():
            blocks.root[node_id] = label.root
            blocks.align[node_id] = label.align
        return blocks


def vertical_alignment(
    graph: LayeredGraph,
    layering: Layering,
    conflicts: ConflictSet,
    neighbor_fn: NeighborFn,
) -> Blocks:
    """Align each node with one of its median neighbors where possible.

    A candidate is skipped if the connecting edge has a type-1 conflict, or if
    an earlier node in the same layer already aligned with a neighbor at or to
    the right of it, since the two blocks would then cross. With two medians
    the left one is tried first.
    """
    for node_id, label in graph.nodes():
        label.root = node_id
        label.align = node_id

    for layer in layering:
        prev_idx = -1
        for v in layer:
            ws = neighbor_fn(v)
            if not ws:
                continue
            mp = (len(ws) - 1) / 2
            v_label = graph.label(v)
            for i in range(math.floor(mp), math.ceil(mp) + 1):
                w = ws[i]
                w_label = graph.label(w)
                if v_label.align == v and prev_idx < w_label.order and not conflicts.has(v, w):
                    w_label.align = v
                    v_label.align = v_label.root = w_label.root
                    prev_idx = w_label.order

    blocks = Blocks.from_graph(graph)
    logger.debug("aligned %d nodes into %d blocks", graph.node_count(), len(blocks))
    return blocks
