"""Draw terms as lambda diagrams.

Each variable gets its own column. Lambdas are blue bars spanning the
columns of their body, variables are red boxes linked up to the bar of the
lambda binding them, and applications are orange frames with a black link
from the function to the argument.
"""

from __future__ import annotations

from typing import Iterable, Optional

import polars as pl
import svg

from .dataframe import to_nodes
from .term import Term

__all__ = ["compute_layout", "display"]

# an inclusive range of columns
Interval = tuple[int, int]


def union(a: Interval, b: Interval) -> Interval:
    return min(a[0], b[0]), max(a[1], b[1])


def compute_layout(
    nodes: pl.DataFrame,
) -> tuple[dict[int, Interval], dict[int, int]]:
    """
    Compute the columns covered by each node and the row it is drawn on.

    A lambda body goes one row down. The argument of an application stays on
    the row of the application, and so does the function unless it is itself
    an application.
    """
    rows = nodes.select("id", "arg", "index").sort("id").rows()
    y = {0: 0}
    for node, arg, index in rows:
        if index is not None:
            continue
        child = node + 1
        if arg is not None:
            func_is_app = rows[child][1] is not None
            y[child] = y[node] + (1 if func_is_app else 0)
            y[arg] = y[node]
        else:
            y[child] = y[node] + 1

    x: dict[int, Interval] = {}
    next_x = nodes.select(pl.col("index").count()).item() - 1
    for node, arg, index in reversed(rows):
        if index is not None:
            x[node] = (next_x, next_x)
            next_x -= 1
        elif arg is not None:
            x[node] = union(x[node + 1], x[arg])
        else:
            x[node] = x[node + 1]
    return x, y


def draw(
    x: dict[int, Interval],
    y: dict[int, int],
    node: int,
    ref: Optional[int],
    arg: Optional[int],
    index: Optional[int],
) -> Iterable[svg.Element]:
    x_node = x[node]
    y_node = y[node]

    if index is not None:
        yield svg.Rect(
            x=0.1 + x_node[0],
            y=0.1 + y_node,
            width=0.8,
            height=0.8,
            fill="red",
        )
        if ref is not None:
            yield svg.Line(
                x1=x_node[0] + 0.5,
                y1=y_node + 0.1,
                x2=x_node[0] + 0.5,
                y2=y[ref] + 0.9,
                stroke="gray",
                stroke_width=0.2,
            )
    elif arg is None:
        yield svg.Rect(
            x=0.1 + x_node[0],
            y=0.1 + y_node,
            width=0.8 + x_node[1] - x_node[0],
            height=0.8,
            fill="blue",
        )
    else:
        func = x[node + 1]
        x_arg = x[arg]
        yield svg.Rect(
            x=0.1 + x_node[0],
            y=0.1 + y_node,
            width=0.8 + x_node[1] - x_node[0],
            height=0.8,
            fill="none",
            stroke="orange",
            stroke_width=0.1,
        )
        yield svg.Line(
            x1=0.5 + func[1],
            y1=0.5 + y_node,
            x2=0.5 + x_arg[0],
            y2=0.5 + y_node,
            stroke="black",
            stroke_width=0.05,
        )
        yield svg.Circle(cx=0.5 + func[1], cy=0.5 + y_node, r=0.1, fill="black")


def display(term: Term) -> svg.SVG:
    nodes = to_nodes(term)
    x, y = compute_layout(nodes)
    width = nodes.select(pl.col("index").count()).item()
    height = max(y.values()) + 1

    elements: list[svg.Element] = []
    for node, ref, arg, index in (
        nodes.select("id", "ref", "arg", "index").sort("id", descending=True).iter_rows()
    ):
        elements.extend(draw(x, y, node, ref, arg, index))

    # prefered size in pixels
    H = height * 40
    return svg.SVG(
        xmlns="http://www.w3.org/2000/svg",
        viewBox=f"-1 0 {width + 2} {height}",  # type: ignore
        style=f"max-height:{H}px",
        elements=elements,
    )
