"""Horizontal compaction: turn blocks into x-coordinates.

Every block is placed as far left as its left neighbors allow. Blocks that
end up in different classes (different sinks) are not pushed directly;
instead the required offset is recorded on the neighboring class's sink and
applied to all of its members in a final pass.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass

from bk_layout.config import CompactionOptions
from bk_layout.errors import MissingNodeError
from bk_layout.ir.graph import LayeredGraph, Layering

logger = logging.getLogger(__name__)


def separation(graph: LayeredGraph, options: CompactionOptions, v: str, u: str) -> float:
    """Minimum distance between the centers of ``u`` and ``v`` (u left of v)."""
    v_label = graph.label(v)
    u_label = graph.label(u)
    node_sep = options.nodesep / 2
    edge_sep = options.edgesep / 2
    return (
        u_label.width / 2
        + (edge_sep if u_label.dummy else node_sep)
        + (edge_sep if v_label.dummy else node_sep)
        + v_label.width / 2
    )


@dataclass
class _Frame:
    """A block being placed: its root, the member being visited, and the
    left-neighbor block that member depends on (once it has been looked up)."""

    root: str
    member: str
    dependency: str | None = None


class _Compactor:
    def __init__(self, graph: LayeredGraph, layering: Layering, options: CompactionOptions) -> None:
        self.graph = graph
        self.options = options
        self.sink: dict[str, str] = {}
        self.shift: dict[str, float] = {}
        self.xs: dict[str, float] = {}
        # node -> its left neighbor within its layer
        self.left: dict[str, str | None] = {}
        for layer in layering:
            for i, v in enumerate(layer):
                self.left[v] = layer[i - 1] if i > 0 else None

    def left_neighbor(self, v: str) -> str | None:
        try:
            return self.left[v]
        except KeyError:
            raise MissingNodeError(v) from None

    def place_block(self, v: str) -> None:
        if v in self.xs:
            return
        stack: list[_Frame] = []
        self._push(stack, v)

        while stack:
            frame = stack[-1]
            if frame.dependency is None:
                pred = self.left_neighbor(frame.member)
                if pred is not None:
                    u = self.graph.label(pred).root
                    frame.dependency = u
                    if u not in self.xs:
                        self._push(stack, u)
                        continue
            if frame.dependency is not None:
                self._constrain(frame.root, frame.member, frame.dependency)

            frame.member = self.graph.label(frame.member).align
            frame.dependency = None
            if frame.member == frame.root:
                stack.pop()

    def _push(self, stack: list[_Frame], v: str) -> None:
        self.xs[v] = 0.0
        stack.append(_Frame(root=v, member=v))

    def _constrain(self, v: str, w: str, u: str) -> None:
        """Keep member ``w`` of block ``v`` clear of the block ``u`` to its left."""
        if self.sink[v] == v:
            self.sink[v] = self.sink[u]

        delta = separation(self.graph, self.options, w, u)
        if self.sink[v] != self.sink[u]:
            self.shift[self.sink[u]] = min(self.shift[self.sink[u]], self.xs[v] - self.xs[u] - delta)
        else:
            self.xs[v] = max(self.xs[v], self.xs[u] + delta)

    def run(self) -> None:
        for node_id in self.graph.node_ids():
            self.sink[node_id] = node_id
            self.shift[node_id] = math.inf

        for node_id, label in self.graph.nodes():
            if label.root == node_id:
                self.place_block(node_id)

        for _, label in self.graph.nodes():
            root = label.root
            x = self.xs[root]
            pending = self.shift[self.sink[root]]
            if pending < math.inf:
                x += pending
            label.x = x

        shifted = sum(1 for s in self.shift.values() if s < math.inf)
        logger.debug("placed %d blocks, %d sinks shifted", len(self.xs), shifted)


def horizontal_compaction(
    graph: LayeredGraph,
    layering: Layering,
    options: CompactionOptions | Mapping[str, float] | None = None,
) -> None:
    """Assign ``x`` to every node from the block structure in root/align.

    ``options`` may be a CompactionOptions, a plain mapping with ``nodesep``
    and/or ``edgesep``, or None for the defaults. Any ``x`` values already on
    the labels are ignored and overwritten.
    """
    if not isinstance(options, CompactionOptions):
        options = CompactionOptions.from_mapping(options)
    _Compactor(graph, layering, options).run()
