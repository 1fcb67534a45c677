"""Type-1 conflict detection (Brandes & Köpf, "Fast and Simple Horizontal
Coordinate Assignment").

A type-1 conflict is a non-inner segment crossing an inner segment, where an
inner segment is an edge whose endpoints are both dummy nodes. Alignment must
never put the two endpoints of a conflicting edge into the same block.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from bk_layout.ir.graph import LayeredGraph, Layering

logger = logging.getLogger(__name__)


class ConflictSet:
    """Unordered node pairs in type-1 conflict.

    Pairs are stored under the smaller id, so ``has(v, w) == has(w, v)``.
    """

    def __init__(self) -> None:
        self._conflicts: dict[str, set[str]] = {}

    def add(self, v: str, w: str) -> None:
        if v > w:
            v, w = w, v
        self._conflicts.setdefault(v, set()).add(w)

    def has(self, v: str, w: str) -> bool:
        if v > w:
            v, w = w, v
        return w in self._conflicts.get(v, ())

    def __contains__(self, pair: object) -> bool:
        if not isinstance(pair, tuple) or len(pair) != 2:
            return False
        return self.has(*pair)

    def __len__(self) -> int:
        return sum(len(ws) for ws in self._conflicts.values())

    def __bool__(self) -> bool:
        return bool(self._conflicts)

    def __repr__(self) -> str:
        return f"ConflictSet({sorted(self.pairs())!r})"

    def pairs(self) -> Iterator[tuple[str, str]]:
        for v, ws in self._conflicts.items():
            for w in ws:
                yield v, w


def add_type1_conflict(conflicts: ConflictSet, v: str, w: str) -> None:
    conflicts.add(v, w)


def has_type1_conflict(conflicts: ConflictSet, v: str, w: str) -> bool:
    return conflicts.has(v, w)


def find_other_inner_segment_node(graph: LayeredGraph, v: str) -> str | None:
    """Return the first dummy predecessor of a dummy node ``v``, if any."""
    if not graph.label(v).dummy:
        return None
    for u in graph.predecessors(v):
        if graph.label(u).dummy:
            return u
    return None


def collect_type1_conflicts(graph: LayeredGraph, layering: Layering) -> ConflictSet:
    """Find every non-inner segment that crosses an inner segment.

    Each layer is scanned left to right against the layer above it. Nodes are
    collected until one is found that ends an inner segment (or the last node
    of the layer is reached); the predecessors of the collected nodes are then
    checked against the window ``[k0, k1]`` of previous-layer orders bounded
    by the last two inner segments. Anything outside the window crosses one
    of them.

    A dummy node is assumed to have a single predecessor between the two
    layers being scanned.
    """
    conflicts = ConflictSet()

    for prev_layer, layer in zip(layering, layering[1:]):
        # order of the previous-layer endpoint of the last inner segment seen
        k0 = 0
        # first node of this layer not yet checked for crossings
        scan_pos = 0
        last_index = len(layer) - 1

        for i, v in enumerate(layer):
            w = find_other_inner_segment_node(graph, v)
            if w is None and i != last_index:
                continue
            k1 = graph.label(w).order if w is not None else len(prev_layer)

            for scan_node in layer[scan_pos : i + 1]:
                scan_dummy = graph.label(scan_node).dummy
                for u in graph.predecessors(scan_node):
                    u_label = graph.label(u)
                    if (u_label.order < k0 or k1 < u_label.order) and not (u_label.dummy and scan_dummy):
                        conflicts.add(u, scan_node)

            scan_pos = i + 1
            k0 = k1

    logger.debug("type-1 conflicts: %d across %d layers", len(conflicts), len(layering))
    return conflicts
