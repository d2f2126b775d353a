"""Symbols, scopes and the scoped symbol table."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator

from .types import IsConst, Type, TypeKind

_BUILTIN_CONSTANTS = ("pi", "π", "euler", "ℇ", "tau", "τ")


class ScopeType(Enum):
    """Kinds of scope."""

    GLOBAL = auto()
    """Top level."""
    SUBROUTINE = auto()
    """Body of ``gate`` and ``def``."""
    CALIBRATION = auto()
    """``cal`` and ``defcal`` blocks."""
    LOCAL = auto()
    """Control flow blocks."""


@dataclass(frozen=True, order=True)
class SymbolId:
    """Unique label of a symbol; also its index in the table."""

    index: int


class SymbolError(Enum):
    """Reasons a symbol could not be resolved or bound."""

    MISSING_BINDING = auto()
    ALREADY_BOUND = auto()


class SymbolTableError(LookupError):
    """Raised when a lookup or binding fails."""

    def __init__(self, error: SymbolError, name: str) -> None:
        self.error = error
        self.name = name
        super().__init__(f"{error.name}: {name!r}")


@dataclass(frozen=True)
class Symbol:
    """A named, typed symbol."""

    name: str
    typ: Type


@dataclass(frozen=True)
class SymbolRecord:
    """Result of looking up a name: the symbol, its id and scope depth."""

    symbol: Symbol
    symbol_id: SymbolId
    scope_level: int

    def symbol_type(self) -> Type:
        """Return the type of the symbol."""
        return self.symbol.typ


def symbol_type(record: SymbolRecord | SymbolError | None) -> Type:
    """Return the record's type, or the undefined type if there is no record."""
    if isinstance(record, SymbolRecord):
        return record.symbol_type()
    return Type(TypeKind.UNDEFINED)


@dataclass
class _Scope:
    scope_type: ScopeType
    table: dict[str, SymbolId] = field(default_factory=dict)


class SymbolTable:
    """A stack of scopes mapping names to symbols.

    A new table starts in the global scope with the built-in constants
    and the ``U`` gate already bound.
    """

    def __init__(self) -> None:
        self._scopes: list[_Scope] = []
        self._all_symbols: list[Symbol] = []
        self.enter_scope(ScopeType.GLOBAL)
        const_float = Type(TypeKind.FLOAT, 64, IsConst.TRUE)
        for name in _BUILTIN_CONSTANTS:
            self.new_binding(name, const_float)
        self.new_binding("U", Type(TypeKind.GATE, num_params=3, num_qubits=1))

    def number_of_scopes(self) -> int:
        """Return the depth of the scope stack."""
        return len(self._scopes)

    def enter_scope(self, scope_type: ScopeType) -> None:
        """Push a new scope. The global scope may only be the first."""
        if scope_type is ScopeType.GLOBAL and self._scopes:
            raise ValueError("The unique global scope must be the first scope.")
        self._scopes.append(_Scope(scope_type))

    def exit_scope(self) -> None:
        """Pop the current scope."""
        if self._scopes:
            self._scopes.pop()

    @contextmanager
    def scope(self, scope_type: ScopeType) -> Iterator["SymbolTable"]:
        """Enter a scope for the duration of a ``with`` block."""
        self.enter_scope(scope_type)
        try:
            yield self
        finally:
            self.exit_scope()

    def _current_scope(self) -> _Scope:
        if not self._scopes:
            raise RuntimeError("symbol table has no open scope")
        return self._scopes[-1]

    def new_binding(self, name: str, typ: Type) -> SymbolId:
        """Bind ``name`` to a new symbol of type ``typ`` in the current scope.

        Raises `SymbolTableError` with `SymbolError.ALREADY_BOUND` if the
        name is already bound in the current scope.
        """
        scope = self._current_scope()
        if name in scope.table:
            raise SymbolTableError(SymbolError.ALREADY_BOUND, name)
        symbol_id = SymbolId(len(self._all_symbols))
        self._all_symbols.append(Symbol(name, typ))
        scope.table[name] = symbol_id
        return symbol_id

    def current_scope_type(self) -> ScopeType:
        """Return the kind of the innermost scope."""
        return self._current_scope().scope_type

    def len_current_scope(self) -> int:
        """Return the number of bindings in the innermost scope."""
        return len(self._current_scope().table)

    def lookup(self, name: str) -> SymbolRecord:
        """Find ``name`` in the innermost scope that binds it.

        Raises `SymbolTableError` with `SymbolError.MISSING_BINDING` if no
        visible scope binds it.
        """
        depth = len(self._scopes)
        for level_from_top, scope in enumerate(reversed(self._scopes)):
            symbol_id = scope.table.get(name)
            if symbol_id is not None:
                return SymbolRecord(
                    self._all_symbols[symbol_id.index],
                    symbol_id,
                    depth - level_from_top - 1,
                )
        raise SymbolTableError(SymbolError.MISSING_BINDING, name)

    def __getitem__(self, symbol_id: SymbolId) -> Symbol:
        return self._all_symbols[symbol_id.index]