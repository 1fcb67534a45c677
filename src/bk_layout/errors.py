"""Exceptions raised by bk-layout."""

from __future__ import annotations


class LayoutError(Exception):
    """Base class for coordinate assignment errors."""


class MissingNodeError(LayoutError, KeyError):
    """A node id referenced by the layering or an edge has no label."""

    def __init__(self, node_id: object) -> None:
        super().__init__(node_id)
        self.node_id = node_id

    def __str__(self) -> str:
        return f"node {self.node_id!r} is not in the graph"
