"""Statements and programs of the semantic graph."""

from __future__ import annotations

import pprint
import sys
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, TextIO, Union, overload

from .exprs import (
    GateModifier,
    IndexedIdentifier,
    RangeExpression,
    SetExpression,
    SymbolIdResult,
    TExpr,
)


def _freeze(obj: object, name: str) -> None:
    """Store a sequence attribute of a frozen dataclass as a tuple."""
    object.__setattr__(obj, name, tuple(getattr(obj, name)))


def _freeze_optional(obj: object, name: str) -> None:
    """Like `_freeze`, but leave ``None`` in place."""
    if getattr(obj, name) is not None:
        _freeze(obj, name)


class SimpleStmt(Enum):
    """Statements that carry no content, including recognised stubs."""

    ALIAS = auto()
    BOX = auto()
    BREAK = auto()
    CAL = auto()
    CONTINUE = auto()
    DEF = auto()
    DEFCAL = auto()
    DELAY = auto()
    END = auto()
    EXTERN = auto()
    IO_DECLARATION = auto()
    NULL = auto()
    OLD_STYLE_DECLARATION = auto()


@dataclass(frozen=True)
class OpenQASMVersion:
    """The language version declared by a program."""

    major: int
    minor: int


@dataclass(frozen=True)
class Include:
    """An ``include`` of another source file."""

    file_path: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "file_path", str(self.file_path))


@dataclass(frozen=True)
class Annotation:
    """An annotation attached to the following statement."""

    annotation_text: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "annotation_text", str(self.annotation_text))


@dataclass(frozen=True)
class AnnotatedStmt:
    """A statement together with the annotations preceding it."""

    statement: "Stmt"
    annotations: tuple[Annotation, ...]

    def __post_init__(self) -> None:
        if isinstance(self.statement, AnnotatedStmt):
            raise ValueError("Annotation of annotated statement is not allowed.")
        _freeze(self, "annotations")


@dataclass(frozen=True)
class ExprStmt:
    """An expression evaluated as a statement."""

    expr: TExpr


LValue = Union[SymbolIdResult, IndexedIdentifier]
"""The target of an assignment: a plain symbol or an indexed identifier."""


@dataclass(frozen=True)
class Assignment:
    """Assignment of ``rvalue`` to ``lvalue``."""

    lvalue: LValue
    rvalue: TExpr


@dataclass(frozen=True)
class DeclareClassical:
    """Declaration of a classical variable; its type lives in the symbol."""

    name: SymbolIdResult
    initializer: TExpr | None = None


@dataclass(frozen=True)
class DeclareQuantum:
    """Declaration of a qubit or qubit register."""

    name: SymbolIdResult


@dataclass(frozen=True)
class Block:
    """A sequence of statements in braces."""

    statements: tuple["Stmt", ...] = ()

    def __post_init__(self) -> None:
        _freeze(self, "statements")


@dataclass(frozen=True)
class GateDeclaration:
    """Definition of a gate; ``params`` is None when no parentheses are given."""

    name: SymbolIdResult
    params: tuple[SymbolIdResult, ...] | None
    qubits: tuple[SymbolIdResult, ...]
    block: Block

    def __post_init__(self) -> None:
        _freeze_optional(self, "params")
        _freeze(self, "qubits")


@dataclass(frozen=True)
class Barrier:
    """A barrier; ``qubits`` None stands for ``barrier;`` over all qubits."""

    qubits: tuple[TExpr, ...] | None = None

    def __post_init__(self) -> None:
        _freeze_optional(self, "qubits")


@dataclass(frozen=True)
class GateCall:
    """Application of a gate to qubits, with optional parameters and modifiers."""

    name: SymbolIdResult
    params: tuple[TExpr, ...] | None
    qubits: tuple[TExpr, ...]
    modifiers: tuple[GateModifier, ...] = ()

    def __post_init__(self) -> None:
        _freeze_optional(self, "params")
        _freeze(self, "qubits")
        _freeze(self, "modifiers")


@dataclass(frozen=True)
class GPhaseCall:
    """A global phase ``gphase(arg)``."""

    arg: TExpr


@dataclass(frozen=True)
class ModifiedGPhaseCall:
    """A global phase preceded by gate modifiers."""

    arg: TExpr
    modifiers: tuple[GateModifier, ...]

    def __post_init__(self) -> None:
        _freeze(self, "modifiers")


@dataclass(frozen=True)
class Reset:
    """Reset of a qubit operand."""

    gate_operand: TExpr


@dataclass(frozen=True)
class If:
    """Conditional with an optional else branch."""

    condition: TExpr
    then_branch: Block
    else_branch: Block | None = None


@dataclass(frozen=True)
class While:
    """A while loop."""

    condition: TExpr
    loop_body: Block


ForIterable = Union[SetExpression, RangeExpression, TExpr]
"""What a for loop iterates over."""


@dataclass(frozen=True)
class ForStmt:
    """A for loop binding ``loop_var`` over ``iterable``."""

    loop_var: SymbolIdResult
    iterable: ForIterable
    loop_body: Block


@dataclass(frozen=True)
class CaseExpr:
    """One ``case`` of a switch: constant integer values and a body."""

    control_values: tuple[TExpr, ...]
    statements: tuple["Stmt", ...]

    def __post_init__(self) -> None:
        _freeze(self, "control_values")
        _freeze(self, "statements")


@dataclass(frozen=True)
class SwitchCaseStmt:
    """A switch statement with cases and an optional default block."""

    control: TExpr
    cases: tuple[CaseExpr, ...]
    default_block: tuple["Stmt", ...] | None = None

    def __post_init__(self) -> None:
        _freeze(self, "cases")
        _freeze_optional(self, "default_block")


@dataclass(frozen=True)
class Pragma:
    """A pragma; the text omits the ``pragma`` or ``#pragma`` directive."""

    pragma_text: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "pragma_text", str(self.pragma_text))


Stmt = Union[
    SimpleStmt,
    AnnotatedStmt,
    Assignment,
    Barrier,
    Block,
    DeclareClassical,
    DeclareQuantum,
    ExprStmt,
    ForStmt,
    GPhaseCall,
    GateCall,
    GateDeclaration,
    If,
    Include,
    ModifiedGPhaseCall,
    Pragma,
    Reset,
    SwitchCaseStmt,
    While,
]


@dataclass
class Program:
    """A sequence of statements and an optional language version."""

    version: OpenQASMVersion | None = None
    stmts: list[Stmt] = field(default_factory=list)

    def insert_stmt(self, stmt: Stmt) -> None:
        """Append a statement."""
        self.stmts.append(stmt)

    def set_version(self, version: OpenQASMVersion) -> None:
        """Set the version; it may be set only once."""
        if self.version is not None:
            raise ValueError("OpenQASM version cannot be set more than once")
        self.version = version

    def print_asg_debug(self, file: TextIO | None = None) -> None:
        """Print each statement's representation on one line."""
        out = sys.stdout if file is None else file
        for stmt in self:
            print(repr(stmt), file=out)

    def print_asg_debug_pretty(self, file: TextIO | None = None) -> None:
        """Print each statement's representation, pretty-printed."""
        out = sys.stdout if file is None else file
        for stmt in self:
            print(pprint.pformat(stmt), file=out)

    def __iter__(self) -> Iterator[Stmt]:
        return iter(self.stmts)

    def __len__(self) -> int:
        return len(self.stmts)

    @overload
    def __getitem__(self, index: int) -> Stmt: ...

    @overload
    def __getitem__(self, index: slice) -> list[Stmt]: ...

    def __getitem__(self, index):
        return self.stmts[index]


def render_stmt(stmt: Stmt) -> str:
    """Render a statement as source text.

    Only ``include`` has a textual form so far; every other statement
    renders as a bare ``;``.
    """
    if isinstance(stmt, Include):
        return f'include "{stmt.file_path}";'
    return ";"