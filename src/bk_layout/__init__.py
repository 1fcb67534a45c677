"""bk-layout: Brandes-Köpf horizontal coordinate assignment for layered graphs."""

from bk_layout.alignment import Blocks, vertical_alignment
from bk_layout.compaction import horizontal_compaction, separation
from bk_layout.config import DEFAULT_EDGESEP, DEFAULT_NODESEP, CompactionOptions
from bk_layout.conflicts import (
    ConflictSet,
    add_type1_conflict,
    collect_type1_conflicts,
    find_other_inner_segment_node,
    has_type1_conflict,
)
from bk_layout.errors import LayoutError, MissingNodeError
from bk_layout.ir.graph import LayeredGraph, Layering, NodeLabel, build_layering
from bk_layout.neighbors import NeighborFn, predecessors_by_order, successors_by_order
from bk_layout.pipeline import BrandesKopf, position_x

__all__ = [
    "DEFAULT_EDGESEP",
    "DEFAULT_NODESEP",
    "Blocks",
    "BrandesKopf",
    "CompactionOptions",
    "ConflictSet",
    "LayeredGraph",
    "Layering",
    "LayoutError",
    "MissingNodeError",
    "NeighborFn",
    "NodeLabel",
    "add_type1_conflict",
    "build_layering",
    "collect_type1_conflicts",
    "find_other_inner_segment_node",
    "has_type1_conflict",
    "horizontal_compaction",
    "position_x",
    "predecessors_by_order",
    "separation",
    "successors_by_order",
    "vertical_alignment",
]
