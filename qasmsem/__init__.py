"""Semantic model of OpenQASM 3 programs: types, symbol tables, a typed ASG and diagnostics."""

__version__ = "0.1.0"

__all__ = [
    "context",
    "exprs",
    "semantic_error",
    "stmts",
    "symbols",
    "types",
    "validate",
]