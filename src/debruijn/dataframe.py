"""Flat table view of terms, one row per node.

Nodes are numbered in prefix order: a node comes before its children, and
the function of an application comes before its argument.

- a lambda has null `ref`, `arg` and `index`; its body is node `id + 1`
- an application has its function at `id + 1` and its argument at `arg`
- a variable has its De Bruijn `index`, and `ref` is the id of the lambda
  binding it (null if the variable is free)

`depth` is the number of lambdas around the node.
"""

from __future__ import annotations

from typing import Iterable, Optional

import polars as pl
from polars import Schema, UInt32

from .show import show
from .term import App, Lam, Term, Var

__all__ = ["SCHEMA", "to_nodes", "from_nodes", "trace_frame"]

SCHEMA = Schema(
    {
        "id": UInt32,
        "ref": UInt32,
        "arg": UInt32,
        "index": UInt32,
        "depth": UInt32,
    },
)

MAX_INDEX = 2**32 - 1

TRACE_SCHEMA = Schema(
    {
        "step": UInt32,
        "term": pl.String,
        "size": UInt32,
        "lambdas": UInt32,
        "applications": UInt32,
        "variables": UInt32,
    },
)


def to_nodes(term: Term) -> pl.DataFrame:
    """
    Raises:
        ValueError: if a variable index does not fit in the UInt32 column.
    """
    rows: list[dict[str, Optional[int]]] = []

    def visit(t: Term, context: list[int]):
        row: dict[str, Optional[int]] = {
            "id": len(rows),
            "ref": None,
            "arg": None,
            "index": None,
            "depth": len(context),
        }
        rows.append(row)
        if isinstance(t, Var):
            if t.index > MAX_INDEX:
                raise ValueError(f"variable index {t.index} does not fit in UInt32")
            row["index"] = t.index
            if t.index < len(context):
                row["ref"] = context[-1 - t.index]
        elif isinstance(t, Lam):
            visit(t.body, context + [row["id"]])
        elif isinstance(t, App):
            visit(t.func, context)
            row["arg"] = len(rows)
            visit(t.arg, context)
        else:
            raise TypeError(f"not a term: {t!r}")

    visit(term, [])
    return pl.DataFrame(rows, schema=SCHEMA)


def from_nodes(nodes: pl.DataFrame) -> Term:
    """
    Rebuild a term from its node table.

    Raises:
        ValueError: if the rows do not describe a single term in prefix order.
    """
    if len(nodes) == 0:
        raise ValueError("empty node table")
    rows = nodes.select("id", "arg", "index").sort("id").rows()
    if [row[0] for row in rows] != list(range(len(rows))):
        raise ValueError("node ids must be numbered from 0 without gaps")

    def build(node: int) -> tuple[Term, int]:
        """Returns the subtree rooted at `node` and the id following it."""
        if node >= len(rows):
            raise ValueError(f"missing node {node}")
        _, arg, index = rows[node]
        if index is not None:
            return Var(index), node + 1
        if arg is None:
            body, end = build(node + 1)
            return Lam(body), end
        func, end = build(node + 1)
        if end != arg:
            raise ValueError(f"argument of node {node} should be {end}, not {arg}")
        arg_term, end = build(arg)
        return App(func, arg_term), end

    term, end = build(0)
    if end != len(rows):
        raise ValueError(f"nodes after {end - 1} are not part of the term")
    return term


def trace_frame(terms: Iterable[Term]) -> pl.DataFrame:
    """
    Summarize a reduction trace, one row per term.

    Example:
        trace_frame(reduction_chain(parse("(λa a) λb b")))
    """
    rows = []
    for step, term in enumerate(terms):
        counts = to_nodes(term).select(
            size=pl.len(),
            lambdas=(
                pl.col("index").is_null() & pl.col("arg").is_null()
            ).sum(),
            applications=pl.col("arg").is_not_null().sum(),
            variables=pl.col("index").is_not_null().sum(),
        )
        rows.append({"step": step, "term": show(term), **counts.row(0, named=True)})
    return pl.DataFrame(rows, schema=TRACE_SCHEMA)
