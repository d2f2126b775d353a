"""State carried while building the semantic graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .semantic_error import SemanticErrorKind, SemanticErrorList, SyntaxSpan
from .stmts import Annotation, Program
from .symbols import SymbolError, SymbolId, SymbolRecord, SymbolTable, SymbolTableError
from .types import Type


@dataclass
class Context:
    """The program under construction, its errors, symbols and pending annotations."""

    semantic_errors: SemanticErrorList
    program: Program = field(default_factory=Program)
    symbol_table: SymbolTable = field(default_factory=SymbolTable)
    annotations: list[Annotation] = field(default_factory=list)

    def __init__(self, file_path: str | Path) -> None:
        self.program = Program()
        self.semantic_errors = SemanticErrorList(Path(file_path))
        self.symbol_table = SymbolTable()
        self.annotations = []

    def push_included(self, errors: SemanticErrorList) -> None:
        """Attach the errors found in an included file."""
        self.semantic_errors.push_included(errors)

    def as_tuple(self) -> tuple[Program, SemanticErrorList, SymbolTable]:
        """Return the program, errors and symbol table."""
        return self.program, self.semantic_errors, self.symbol_table

    def push_annotation(self, annotation: Annotation) -> None:
        """Queue an annotation for the next statement."""
        self.annotations.append(annotation)

    def clear_annotations(self) -> None:
        """Drop all queued annotations."""
        self.annotations.clear()

    def take_annotations(self) -> list[Annotation]:
        """Return the queued annotations and clear the queue."""
        taken = list(self.annotations)
        self.annotations.clear()
        return taken

    def insert_error(self, error_kind: SemanticErrorKind, node: SyntaxSpan) -> None:
        """Record a semantic error at ``node``."""
        self.semantic_errors.insert(error_kind, node)

    def _lookup(
        self, name: str, node: SyntaxSpan, error_kind: SemanticErrorKind
    ) -> SymbolRecord | SymbolError:
        try:
            return self.symbol_table.lookup(name)
        except SymbolTableError as exc:
            self.semantic_errors.insert(error_kind, node)
            return exc.error

    def lookup_symbol(self, name: str, node: SyntaxSpan) -> SymbolRecord | SymbolError:
        """Look up ``name``; if unbound, record an undefined-variable error."""
        return self._lookup(name, node, SemanticErrorKind.UNDEF_VAR_ERROR)

    def lookup_gate_symbol(
        self, name: str, node: SyntaxSpan
    ) -> SymbolRecord | SymbolError:
        """Look up gate ``name``; if unbound, record an undefined-gate error."""
        return self._lookup(name, node, SemanticErrorKind.UNDEF_GATE_ERROR)

    def new_binding(self, name: str, typ: Type, node: SyntaxSpan) -> SymbolId | SymbolError:
        """Bind ``name`` in the current scope; on redeclaration record an error."""
        try:
            return self.symbol_table.new_binding(name, typ)
        except SymbolTableError as exc:
            self.semantic_errors.insert(SemanticErrorKind.REDECLARATION_ERROR, node)
            return exc.error