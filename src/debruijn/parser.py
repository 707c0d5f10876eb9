"""Recursive-descent parser from lambda notation to De Bruijn terms.

Two notations are read:

- named notation, the input language: `(λa λb b a) λc c`. Variables are
  single lowercase letters and must be bound by an enclosing lambda.
- De Bruijn notation, as printed by `debruijn.show.show`: `(λλ0 1) (λ0)`.

Grammar of the named notation (whitespace is allowed between tokens):

    term     ::= atom (atom)*
    atom     ::= BINDER varname term
               | '(' term ')'
               | varname
    varname  ::= [a-z]

A lambda body extends as far right as possible, so `λa a b` is `λa (a b)`.
"""

from __future__ import annotations

import logging
from typing import NoReturn, Optional

from .term import App, Lam, Term, Var

__all__ = ["BINDER", "ParseError", "parse", "parse_strict", "parse_de_bruijn"]

logger = logging.getLogger(__name__)

BINDER = "λ"


class ParseError(ValueError):
    def __init__(self, message: str, position: int):
        super().__init__(f"{message} at position {position}")
        self.message = message
        self.position = position


def check_binder(binder: str) -> str:
    if (
        len(binder) != 1
        or (binder.isascii() and binder.isalnum())
        or binder.isspace()
        or binder in "()"
    ):
        raise ValueError(
            f"binder must be a single character other than a letter, digit, "
            f"parenthesis or whitespace, got {binder!r}"
        )
    return binder


class _Parser:
    """
    Parses one input string.

    `scope` holds the names of the lambdas enclosing the current position,
    innermost last. In De Bruijn notation lambdas have no names and only the
    length of `scope` matters.
    """

    def __init__(self, text: str, binder: str, named: bool):
        self.text = text
        self.binder = check_binder(binder)
        self.named = named
        self.position = 0
        self.scope: list[Optional[str]] = []

    def peek(self) -> Optional[str]:
        if self.position < len(self.text):
            return self.text[self.position]
        return None

    def skip_whitespace(self):
        while self.position < len(self.text) and self.text[self.position].isspace():
            self.position += 1

    def fail(self, message: str) -> NoReturn:
        raise ParseError(message, self.position)

    def starts_atom(self, char: Optional[str]) -> bool:
        if char is None:
            return False
        if char == self.binder or char == "(":
            return True
        if self.named:
            return is_varname(char)
        return is_digit(char)

    def parse(self) -> Term:
        try:
            term = self.parse_term()
        except RecursionError:
            raise ParseError("term nested too deeply", self.position) from None
        self.skip_whitespace()
        if self.peek() is not None:
            self.fail(f"unexpected {self.peek()!r}")
        return term

    def parse_term(self) -> Term:
        self.skip_whitespace()
        if not self.starts_atom(self.peek()):
            if self.peek() is None:
                self.fail("expected a term, found end of input")
            self.fail(f"expected a term, found {self.peek()!r}")

        term = self.parse_atom()
        while True:
            self.skip_whitespace()
            if not self.starts_atom(self.peek()):
                return term
            term = App(term, self.parse_atom())

    def parse_atom(self) -> Term:
        char = self.peek()
        if char == self.binder:
            return self.parse_lambda()
        if char == "(":
            start = self.position
            self.position += 1
            term = self.parse_term()
            self.skip_whitespace()
            if self.peek() != ")":
                raise ParseError("unmatched '('", start)
            self.position += 1
            return term
        if self.named:
            return self.parse_name()
        return self.parse_index()

    def parse_lambda(self) -> Term:
        self.position += 1
        name = None
        if self.named:
            self.skip_whitespace()
            name = self.peek()
            if name is None or not is_varname(name):
                self.fail("expected a variable name after the binder")
            self.position += 1

        self.scope.append(name)
        body = self.parse_term()
        self.scope.pop()
        return Lam(body)

    def parse_name(self) -> Term:
        name = self.text[self.position]
        for distance, bound in enumerate(reversed(self.scope)):
            if bound == name:
                self.position += 1
                return Var(distance)
        self.fail(f"unbound variable {name!r}")

    def parse_index(self) -> Term:
        start = self.position
        while self.position < len(self.text) and is_digit(self.text[self.position]):
            self.position += 1
        index = int(self.text[start : self.position])
        if index >= len(self.scope):
            raise ParseError(f"unbound index {index}", start)
        return Var(index)


def is_varname(char: str) -> bool:
    return "a" <= char <= "z"


def is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def parse_strict(text: str, binder: str = BINDER) -> Term:
    """
    Parse a closed term written in named notation.

    Raises:
        ParseError: if the text is not a single complete closed term.
    """
    return _Parser(text, binder, named=True).parse()


def parse(text: str, binder: str = BINDER) -> Optional[Term]:
    """
    Parse a closed term written in named notation.

    Returns None if parsing fails, without any partial result.
    """
    try:
        return parse_strict(text, binder)
    except ParseError as e:
        logger.debug("could not parse %r: %s", text, e)
        return None


def parse_de_bruijn(text: str, binder: str = BINDER) -> Term:
    """
    Parse a closed term written in De Bruijn notation, the inverse of
    `debruijn.show.show`.

    Raises:
        ParseError: if the text is not a single complete closed term.
    """
    return _Parser(text, binder, named=False).parse()
