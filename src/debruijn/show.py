"""Render terms back to text."""

from __future__ import annotations

import string

from .parser import BINDER, check_binder
from .term import App, Lam, Term, Var

__all__ = ["show", "show_named"]

# precedence of the position a subterm is printed in
BODY = 0
FUNC = 1
ARG = 2


def show(term: Term, binder: str = BINDER) -> str:
    """
    Render a term in De Bruijn notation, e.g. `λλ0 1`.

    A lambda is parenthesized unless it is a body or the whole term, an
    application only when it is an argument. `debruijn.parser.parse_de_bruijn`
    reads the output back.
    """
    check_binder(binder)

    def show_term(t: Term, precedence: int) -> str:
        if isinstance(t, Var):
            return str(t.index)
        if isinstance(t, Lam):
            body = show_term(t.body, BODY)
            return f"({binder}{body})" if precedence > BODY else f"{binder}{body}"
        if isinstance(t, App):
            func = show_term(t.func, FUNC)
            arg = show_term(t.arg, ARG)
            return f"({func} {arg})" if precedence > FUNC else f"{func} {arg}"
        raise TypeError(f"not a term: {t!r}")

    return show_term(term, BODY)


def show_named(term: Term, binder: str = BINDER) -> str:
    """
    Render a closed term in named notation, accepted by `debruijn.parser.parse`.

    The lambda at nesting depth d binds the d-th letter of the alphabet,
    e.g. `λa λb b a`.

    Raises:
        ValueError: if the term has a free variable or more than 26
            nested lambdas.
    """
    check_binder(binder)
    names = string.ascii_lowercase

    def show_term(t: Term, depth: int, precedence: int) -> str:
        if isinstance(t, Var):
            if t.index >= depth:
                raise ValueError(f"cannot name free variable {t.index}")
            return names[depth - 1 - t.index]
        if isinstance(t, Lam):
            if depth >= len(names):
                raise ValueError(f"more than {len(names)} nested lambdas")
            body = show_term(t.body, depth + 1, BODY)
            text = f"{binder}{names[depth]} {body}"
            return f"({text})" if precedence > BODY else text
        if isinstance(t, App):
            func = show_term(t.func, depth, FUNC)
            arg = show_term(t.arg, depth, ARG)
            return f"({func} {arg})" if precedence > FUNC else f"{func} {arg}"
        raise TypeError(f"not a term: {t!r}")

    return show_term(term, 0, BODY)
