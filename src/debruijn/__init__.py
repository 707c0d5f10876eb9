"""Untyped lambda calculus with De Bruijn indices.

```
>>> from debruijn import parse, reduction_chain, show
>>> [show(t) for t in reduction_chain(parse("((λa λb b a) λc c)"))]
['(λλ0 1) (λ0)', 'λ0 (λ0)']
```
"""

try:
    import polars  # noqa: F401
except ImportError:
    raise ImportError(
        "debruijn needs the `polars` library. \n Please install it, typically with `pip install polars`"
    )

from .core import (
    ReductionLimitExceeded,
    is_value,
    normalize,
    reduce_step,
    reduction_chain,
    shift,
    substitute,
)
from .dataframe import from_nodes, to_nodes, trace_frame
from .display import display
from .parser import BINDER, ParseError, parse, parse_de_bruijn, parse_strict
from .show import show, show_named
from .term import App, Lam, Term, Var

__all__ = [
    "Term",
    "Var",
    "Lam",
    "App",
    "BINDER",
    "ParseError",
    "parse",
    "parse_strict",
    "parse_de_bruijn",
    "show",
    "show_named",
    "ReductionLimitExceeded",
    "shift",
    "substitute",
    "is_value",
    "reduce_step",
    "reduction_chain",
    "normalize",
    "to_nodes",
    "from_nodes",
    "trace_frame",
    "display",
]
