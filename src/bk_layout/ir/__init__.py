"""Intermediate representation: the layered graph and its node labels."""

from bk_layout.ir.graph import LayeredGraph, Layering, NodeLabel, build_layering

__all__ = [
    "LayeredGraph",
    "Layering",
    "NodeLabel",
    "build_layering",
]
