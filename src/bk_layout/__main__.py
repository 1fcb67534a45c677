"""CLI entry point for bk-layout.

Reads a layered graph as JSON and prints one ``id<TAB>x`` line per node::

    {"layers": [["a", "b"], ["c", "d"]],
     "edges": [["a", "c"], ["b", "d"]],
     "dummies": ["c"],
     "widths": {"a": 40},
     "default_width": 10}
"""

import json
import logging
import sys

import click

from bk_layout.config import CompactionOptions
from bk_layout.errors import LayoutError
from bk_layout.ir.graph import LayeredGraph, build_layering
from bk_layout.neighbors import predecessors_by_order, successors_by_order
from bk_layout.pipeline import BrandesKopf

_NEIGHBOR_MAP = {
    "up": predecessors_by_order,
    "down": successors_by_order,
}


def _load_graph(text: str) -> LayeredGraph:
    doc = json.loads(text)
    if not isinstance(doc, dict) or "layers" not in doc:
        raise ValueError("expected a JSON object with a 'layers' list")
    return LayeredGraph.from_layers(
        doc["layers"],
        edges=[tuple(e) for e in doc.get("edges", [])],
        dummies=doc.get("dummies", []),
        widths=doc.get("widths"),
        default_width=doc.get("default_width", 0.0),
    )


def _format_x(x: float) -> str:
    return str(int(x)) if float(x).is_integer() else f"{x:g}"


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--nodesep", "-n", "nodesep", type=float, default=None, help="Gap between real nodes (default 50)")
@click.option("--edgesep", "-e", "edgesep", type=float, default=None, help="Gap around dummy nodes (default 10)")
@click.option(
    "--direction",
    "-d",
    "direction",
    type=click.Choice(sorted(_NEIGHBOR_MAP)),
    default="up",
    help="Align with predecessors (up) or successors (down)",
)
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--verbose", "-v", "verbose", is_flag=True, help="Log phase summaries to stderr")
def main(
    input: str | None,
    nodesep: float | None,
    edgesep: float | None,
    direction: str,
    output: str | None,
    verbose: bool,
) -> None:
    """Brandes-Köpf x-coordinates for a layered graph."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if input:
        try:
            with open(input) as f:
                text = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    overrides = {k: v for k, v in (("nodesep", nodesep), ("edgesep", edgesep)) if v is not None}
    try:
        options = CompactionOptions.from_mapping(overrides)
    except ValueError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    try:
        graph = _load_graph(text)
    except (ValueError, TypeError, LayoutError) as e:
        click.echo(f"error: invalid graph: {e}", err=True)
        sys.exit(1)

    layering = build_layering(graph)
    if direction == "down":
        layering.reverse()

    engine = BrandesKopf(options)
    xs = engine.run(graph, layering, _NEIGHBOR_MAP[direction](graph))
    rendered = "".join(f"{node_id}\t{_format_x(x)}\n" for node_id, x in xs.items())

    if output:
        try:
            with open(output, "w") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered, nl=False)


if __name__ == "__main__":
    main()
