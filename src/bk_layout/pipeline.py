"""One directional Brandes-Köpf pass: conflicts, alignment, compaction."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from bk_layout.alignment import Blocks, vertical_alignment
from bk_layout.compaction import horizontal_compaction
from bk_layout.config import CompactionOptions
from bk_layout.conflicts import ConflictSet, collect_type1_conflicts
from bk_layout.ir.graph import LayeredGraph, Layering, build_layering
from bk_layout.neighbors import NeighborFn, predecessors_by_order

logger = logging.getLogger(__name__)


class BrandesKopf:
    """Runs the three coordinate assignment phases once on a layered graph.

    ``layering`` is the scan order for alignment and compaction; pass the
    layers bottom-up together with ``successors_by_order`` for a downward
    pass. Type-1 conflicts are always collected top-down from the node ranks,
    since the same set applies to every scan direction.

    Picking a scan direction and balancing the four directional results is
    left to the caller; each call to ``run`` is one independent pass.
    """

    def __init__(self, options: CompactionOptions | Mapping[str, float] | None = None) -> None:
        if not isinstance(options, CompactionOptions):
            options = CompactionOptions.from_mapping(options)
        self.options = options
        self.conflicts: ConflictSet | None = None
        self.blocks: Blocks | None = None

    def run(
        self,
        graph: LayeredGraph,
        layering: Layering | None = None,
        neighbor_fn: NeighborFn | None = None,
    ) -> dict[str, float]:
        ranked = build_layering(graph)
        if layering is None:
            layering = ranked
        if neighbor_fn is None:
            neighbor_fn = predecessors_by_order(graph)

        logger.debug("bk pass: %d nodes in %d layers", graph.node_count(), len(layering))
        self.conflicts = collect_type1_conflicts(graph, ranked)
        self.blocks = vertical_alignment(graph, layering, self.conflicts, neighbor_fn)
        horizontal_compaction(graph, layering, self.options)
        return {node_id: label.x for node_id, label in graph.nodes()}


def position_x(
    graph: LayeredGraph,
    layering: Layering | None = None,
    neighbor_fn: NeighborFn | None = None,
    options: CompactionOptions | Mapping[str, float] | None = None,
) -> dict[str, float]:
    """Run a single pass with a throwaway engine and return ``{id: x}``."""
    return BrandesKopf(options).run(graph, layering, neighbor_fn)
