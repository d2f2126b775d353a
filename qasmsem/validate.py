"""Walks over the semantic graph that visit resolved symbols."""

from __future__ import annotations

from typing import Iterator

from .exprs import Identifier, SymbolIdResult, TExpr
from .stmts import Assignment, DeclareClassical, DeclareQuantum, Program
from .symbols import SymbolError, SymbolTable


def _expr_symbols(texpr: TExpr | None) -> Iterator[SymbolIdResult]:
    if texpr is not None and isinstance(texpr.expression, Identifier):
        yield texpr.expression.symbol


def walk_symbols(program: Program) -> Iterator[SymbolIdResult]:
    """Yield the symbol results found in the program's statements, in order.

    Declarations yield the declared name, then any identifier used as the
    initializer; assignments yield an identifier used as the right-hand side.
    """
    for stmt in program:
        if isinstance(stmt, DeclareClassical):
            yield stmt.name
            yield from _expr_symbols(stmt.initializer)
        elif isinstance(stmt, DeclareQuantum):
            yield stmt.name
        elif isinstance(stmt, Assignment):
            yield from _expr_symbols(stmt.rvalue)


def count_symbol_errors(program: Program, symtab: SymbolTable) -> int:
    """Return how many of the walked symbols failed to resolve."""
    return sum(isinstance(result, SymbolError) for result in walk_symbols(program))