"""Layered graph IR — a networkx DiGraph whose nodes carry layout labels.

Earlier pipeline stages (ranking, ordering, dummy insertion) produce the
rank/order/dummy/width attributes; coordinate assignment fills in
root/align/x in place. Each node's label lives under the ``"label"`` node
attribute of the wrapped DiGraph.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

import networkx as nx

from bk_layout.errors import MissingNodeError

Layering = list[list[str]]

LABEL_KEY = "label"


@dataclass
class NodeLabel:
    rank: int
    order: int
    dummy: bool = False
    width: float = 0.0
    root: str | None = None
    align: str | None = None
    x: float | None = None


class LayeredGraph:
    """A ranked and ordered directed graph ready for coordinate assignment.

    Wraps a networkx DiGraph and exposes the handful of queries the
    Brandes-Köpf phases need.
    """

    def __init__(self, digraph: nx.DiGraph | None = None) -> None:
        self.digraph: nx.DiGraph = digraph if digraph is not None else nx.DiGraph()

    @classmethod
    def from_layers(
        cls,
        layers: Iterable[Iterable[str]],
        edges: Iterable[tuple[str, str]] = (),
        dummies: Iterable[str] = (),
        widths: Mapping[str, float] | None = None,
        default_width: float = 0.0,
    ) -> LayeredGraph:
        """Build a graph whose rank/order come from each node's position in ``layers``."""
        dummy_ids = set(dummies)
        widths = widths or {}
        graph = cls()
        for rank, layer in enumerate(layers):
            for order, node_id in enumerate(layer):
                graph.add_node(
                    node_id,
                    rank=rank,
                    order=order,
                    dummy=node_id in dummy_ids,
                    width=widths.get(node_id, default_width),
                )
        for src, tgt in edges:
            graph.add_edge(src, tgt)
        return graph

    def add_node(self, node_id: str, rank: int, order: int, dummy: bool = False, width: float = 0.0) -> NodeLabel:
        label = NodeLabel(rank=rank, order=order, dummy=dummy, width=width)
        self.digraph.add_node(node_id, **{LABEL_KEY: label})
        return label

    def add_edge(self, src: str, tgt: str) -> None:
        if src not in self.digraph:
            raise MissingNodeError(src)
        if tgt not in self.digraph:
            raise MissingNodeError(tgt)
        self.digraph.add_edge(src, tgt)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.digraph

    def label(self, node_id: str) -> NodeLabel:
        try:
            return self.digraph.nodes[node_id][LABEL_KEY]
        except KeyError:
            raise MissingNodeError(node_id) from None

    def node_ids(self) -> list[str]:
        return list(self.digraph.nodes)

    def nodes(self) -> Iterator[tuple[str, NodeLabel]]:
        for node_id, attrs in self.digraph.nodes(data=LABEL_KEY):
            yield node_id, attrs

    def predecessors(self, node_id: str) -> list[str]:
        if node_id not in self.digraph:
            raise MissingNodeError(node_id)
        return list(self.digraph.predecessors(node_id))

    def successors(self, node_id: str) -> list[str]:
        if node_id not in self.digraph:
            raise MissingNodeError(node_id)
        return list(self.digraph.successors(node_id))

    def node_count(self) -> int:
        return self.digraph.number_of_nodes()

    def edge_count(self) -> int:
        return self.digraph.number_of_edges()

    def reset_layout(self) -> None:
        """Clear root/align/x so the phases can run again on this graph."""
        for _, label in self.nodes():
            label.root = None
            label.align = None
            label.x = None

    def x_coordinates(self) -> dict[str, float | None]:
        return {node_id: label.x for node_id, label in self.nodes()}


def build_layering(graph: LayeredGraph) -> Layering:
    """Group node ids by rank, each layer sorted by ascending order."""
    max_rank = max((label.rank for _, label in graph.nodes()), default=-1)
    layering: Layering = [[] for _ in range(max_rank + 1)]
    for node_id, label in graph.nodes():
        layering[label.rank].append(node_id)
    for layer in layering:
        layer.sort(key=lambda v: graph.label(v).order)
    return layering
