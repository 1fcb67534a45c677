"""Centralized configuration for bk-layout."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields

DEFAULT_NODESEP: float = 50
DEFAULT_EDGESEP: float = 10


@dataclass(frozen=True)
class CompactionOptions:
    """Separation settings for horizontal compaction.

    nodesep: minimum gap between two adjacent real nodes.
    edgesep: gap contributed by a dummy node (an edge segment).

    Each side of a pair contributes half of its own separation, so a real
    node next to a dummy node is kept ``nodesep / 2 + edgesep / 2`` apart,
    plus half of both widths.
    """

    nodesep: float = DEFAULT_NODESEP
    edgesep: float = DEFAULT_EDGESEP

    def __post_init__(self) -> None:
        for name in ("nodesep", "edgesep"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, float] | None) -> CompactionOptions:
        """Build options from a plain dict; missing keys keep their defaults."""
        if not mapping:
            return cls()
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            raise ValueError(f"Unknown option(s) {', '.join(unknown)}; use nodesep or edgesep")
        return cls(**dict(mapping))
