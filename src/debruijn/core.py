"""Core engine of lambda-calculus reduction.

Terms are reduced one step at a time with a fixed strategy:

1. In an application, the function is reduced first.
2. Once the function is a lambda, the argument is reduced (call-by-value).
3. Once the argument is a value, the redex is contracted (beta-reduction).
4. Nothing is ever reduced inside a lambda body.

Two primitives on De Bruijn indices do the bookkeeping:

- `shift(term, amount, cutoff)` renumbers the variables of `term` that point
  outside of it, when `term` is moved under `amount` more lambdas.
- `substitute(term, index, replacement)` replaces the variable `index` and
  renumbers the variables bound further out, since its lambda disappears.

Indices that point past every enclosing lambda (free variables) are never
substituted and never make these functions fail.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from .show import show
from .term import App, Lam, Term, Var

__all__ = [
    "ReductionLimitExceeded",
    "shift",
    "substitute",
    "is_value",
    "reduce_step",
    "reduction_chain",
    "normalize",
]

logger = logging.getLogger(__name__)


class ReductionLimitExceeded(RuntimeError):
    """
    Raised when a term is still reducible after the allowed number of steps.

    Attributes:
        steps: the number of reductions performed
        term: the last term reached
    """

    def __init__(self, steps: int, term: Term):
        super().__init__(f"no normal form reached after {steps} steps")
        self.steps = steps
        self.term = term


def shift(term: Term, amount: int, cutoff: int = 0) -> Term:
    """
    Add `amount` to every variable index greater or equal to `cutoff`.

    The cutoff grows by one under each lambda, so variables bound inside
    `term` are left alone.
    """
    if isinstance(term, Var):
        if term.index < cutoff:
            return term
        return Var(term.index + amount)
    elif isinstance(term, Lam):
        return Lam(shift(term.body, amount, cutoff + 1))
    elif isinstance(term, App):
        return App(shift(term.func, amount, cutoff), shift(term.arg, amount, cutoff))
    raise TypeError(f"not a term: {term!r}")


def substitute(term: Term, index: int, replacement: Term) -> Term:
    """
    Replace the variable `index` by `replacement` in `term`.

    Variables above `index` lose one level since the lambda binding `index`
    is removed. Variables below `index` are bound inside and stay as they are.
    """
    if isinstance(term, Var):
        if term.index == index:
            return replacement
        elif term.index > index:
            return Var(term.index - 1)
        return term
    elif isinstance(term, Lam):
        return Lam(substitute(term.body, index + 1, shift(replacement, 1, 0)))
    elif isinstance(term, App):
        return App(
            substitute(term.func, index, replacement),
            substitute(term.arg, index, replacement),
        )
    raise TypeError(f"not a term: {term!r}")


def is_value(term: Term) -> bool:
    """Lambdas and variables are values, applications are not."""
    return isinstance(term, (Lam, Var))


def reduce_step(term: Term) -> Optional[Term]:
    """
    Perform one reduction step.

    Returns None if the term is in normal form for this strategy.
    """
    # the head of the function spine is a variable or a lambda, so only the
    # innermost application can take a step
    spine = []
    while isinstance(term, App):
        spine.append(term)
        term = term.func
    if not spine:
        # variables are already reduced, lambda bodies are never entered
        return None

    reduced = contract(spine.pop())
    if reduced is None:
        return None
    for app in reversed(spine):
        reduced = App(reduced, app.arg)
    return reduced


def contract(app: App) -> Optional[Term]:
    """Reduce an application whose function is not an application."""
    if not isinstance(app.func, Lam):
        return None

    arg = reduce_step(app.arg)
    if arg is not None:
        return App(app.func, arg)

    if is_value(app.arg):
        return substitute(app.func.body, 0, shift(app.arg, 1, 0))
    return None


def reduction_chain(term: Term, max_steps: Optional[int] = None) -> Iterator[Term]:
    """
    Yield `term`, then every term obtained by reducing it one more step,
    until a normal form is reached.

    Without `max_steps`, a term with no normal form yields forever.

    Raises:
        ReductionLimitExceeded: once `max_steps` reductions were yielded
            and the last term can still be reduced.
    """
    steps = 0
    while True:
        yield term
        reduced = reduce_step(term)
        if reduced is None:
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("normal form after %d steps: %s", steps, show(term))
            return
        if max_steps is not None and steps >= max_steps:
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("giving up after %d steps: %s", steps, show(term))
            raise ReductionLimitExceeded(steps, term)
        steps += 1
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("step %d: %s", steps, show(reduced))
        term = reduced


def normalize(term: Term, max_steps: Optional[int] = None) -> Term:
    last = term
    for last in reduction_chain(term, max_steps):
        pass
    return last
