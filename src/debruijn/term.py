"""
Lambda calculus term representation using De Bruijn indices.

A term is one of three immutable nodes:

- `Var`, a reference to an enclosing lambda by its De Bruijn index
- `Lam`, an abstraction over a single body
- `App`, the application of a function to an argument

Nothing in here shifts, substitutes or reduces: those live in `debruijn.core`
and work on terms from the outside.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

__all__ = ["Term", "Var", "Lam", "App"]


class Term(ABC):
    """
    Base class for lambda calculus terms.

    Terms are never mutated: every transformation builds new nodes, so
    subtrees can be shared freely between terms.
    """

    def __call__(self, arg: Term) -> Term:
        """Apply this term to an argument"""
        return App(self, arg)

    @abstractmethod
    def is_valid(self, depth: int = 0) -> bool:
        """
        Check that every De Bruijn index points to an enclosing lambda,
        assuming `depth` lambdas already surround this term.

        ```
        Lam(Var(0)) # valid

        Lam(Var(1)) # invalid, the variable is free
        ```
        """
        ...

    def is_closed(self) -> bool:
        return self.is_valid(0)


@dataclass(frozen=True)
class Var(Term):
    """
    A variable reference.

    The index indicates how many lambda binders to traverse upward
    to find the binding lambda:
    - index=0: bound by the immediately enclosing lambda
    - index=1: bound by the next outer lambda
    - etc.

    Example:
        λx. λy. x  =>  Lam(Lam(Var(1)))
        λx. λy. y  =>  Lam(Lam(Var(0)))
    """

    index: int

    def __post_init__(self):
        if isinstance(self.index, bool) or not isinstance(self.index, int):
            raise ValueError(f"Variable index must be an integer, got {self.index!r}")
        if self.index < 0:
            raise ValueError(f"Variable index must be non-negative, got {self.index}")

    def is_valid(self, depth: int = 0) -> bool:
        return self.index < depth


@dataclass(frozen=True)
class Lam(Term):
    """
    Lambda abstraction.

    The body refers to the bound variable with `Var(0)`.

    Example:
        λx. x      =>  Lam(Var(0))
        λx. λy. x  =>  Lam(Lam(Var(1)))
    """

    body: Term

    def is_valid(self, depth: int = 0) -> bool:
        return self.body.is_valid(depth + 1)


@dataclass(frozen=True)
class App(Term):
    """
    Function application.

    Example:
        (λx. x) (λy. y)  =>  App(Lam(Var(0)), Lam(Var(0)))
    """

    func: Term
    arg: Term

    def is_valid(self, depth: int = 0) -> bool:
        return self.func.is_valid(depth) and self.arg.is_valid(depth)
