"""Typed expressions of the semantic graph."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Union

from .symbols import SymbolError, SymbolId
from .types import ArrayDims, IsConst, Type, TypeKind

SymbolIdResult = Union[SymbolId, SymbolError]
"""A resolved symbol id, or the reason resolution failed."""

_U128_LIMIT = 1 << 128


def _freeze(obj: object, name: str) -> None:
    """Store a sequence attribute of a frozen dataclass as a tuple."""
    object.__setattr__(obj, name, tuple(getattr(obj, name)))


class StubExpr(Enum):
    """Expressions that are recognised but carry no content yet."""

    CALL = auto()
    SET = auto()
    ARRAY_LITERAL = auto()


@dataclass(frozen=True)
class TExpr:
    """An expression tagged with its type."""

    expression: "Expr"
    typ: Type


@dataclass(frozen=True)
class Identifier:
    """A use of a name, with the symbol it resolved to."""

    name: str
    symbol: SymbolIdResult

    def to_texpr(self, typ: Type) -> TExpr:
        """Wrap in a typed expression of type ``typ``."""
        return TExpr(self, typ)


@dataclass(frozen=True)
class HardwareQubit:
    """A physical qubit such as ``$0``."""

    identifier: str

    def to_texpr(self) -> TExpr:
        """Wrap in a typed expression of hardware-qubit type."""
        return TExpr(self, Type(TypeKind.HARDWARE_QUBIT))


@dataclass(frozen=True)
class ExpressionList:
    """A comma-separated list of expressions, as in ``v[1, 2]``."""

    expressions: tuple[TExpr, ...]

    def __post_init__(self) -> None:
        _freeze(self, "expressions")


@dataclass(frozen=True)
class SetExpression:
    """A set of expressions, as in ``{1, 2, 3}``."""

    expressions: tuple[TExpr, ...]

    def __post_init__(self) -> None:
        _freeze(self, "expressions")


IndexOperator = Union[SetExpression, ExpressionList]


@dataclass(frozen=True)
class IndexedIdentifier:
    """A name followed by one or more index operators."""

    identifier: SymbolIdResult
    indexes: tuple[IndexOperator, ...]

    def __post_init__(self) -> None:
        _freeze(self, "indexes")

    def to_texpr(self) -> TExpr:
        """Wrap in a typed expression; the type is not yet computed."""
        return TExpr(self, Type(TypeKind.TODO))


@dataclass(frozen=True)
class IndexExpression:
    """An arbitrary expression followed by an index operator."""

    expr: TExpr
    index: IndexOperator

    def to_texpr(self) -> TExpr:
        """Wrap in a typed expression; the type is not yet computed."""
        return TExpr(self, Type(TypeKind.TODO))


@dataclass(frozen=True)
class RangeExpression:
    """A range ``start:step:stop``; ``step`` may be absent."""

    start: TExpr
    step: TExpr | None
    stop: TExpr


ArraySliceIndex = Union[TExpr, RangeExpression]


@dataclass(frozen=True)
class ArraySlice:
    """A slice of an array such as ``v[3:4]``, possibly multidimensional."""

    name: SymbolIdResult
    indices: tuple[ArraySliceIndex, ...]

    def __post_init__(self) -> None:
        _freeze(self, "indices")

    def to_texpr(self, base_type: Type) -> TExpr:
        """Wrap in a typed expression of type ``base_type``."""
        return TExpr(self, base_type)


@dataclass(frozen=True)
class ReturnExpression:
    """A ``return`` with an optional value."""

    value: TExpr | None = None

    def to_texpr(self) -> TExpr:
        """Wrap in a typed expression of the value's type, or void."""
        typ = self.value.typ if self.value is not None else Type(TypeKind.VOID)
        return TExpr(self, typ)


@dataclass(frozen=True)
class MeasureExpression:
    """Measurement of a qubit operand."""

    operand: TExpr

    def to_texpr(self) -> TExpr:
        """Wrap in a typed expression: a bit per measured qubit."""
        operand_type = self.operand.typ
        if operand_type.kind in (TypeKind.QUBIT, TypeKind.HARDWARE_QUBIT):
            out_type = Type(TypeKind.BIT, const=IsConst.FALSE)
        elif operand_type.kind is TypeKind.QUBIT_ARRAY:
            out_type = Type(
                TypeKind.BIT_ARRAY,
                const=IsConst.FALSE,
                array_dims=operand_type.array_dims,
            )
        else:
            out_type = Type(TypeKind.UNDEFINED)
        return TExpr(self, out_type)


@dataclass(frozen=True)
class BoolLiteral:
    """``true`` or ``false``."""

    value: bool

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", bool(self.value))

    def to_texpr(self) -> TExpr:
        """Wrap in a typed expression of const bool type."""
        return TExpr(self, Type(TypeKind.BOOL, const=IsConst.TRUE))


@dataclass(frozen=True)
class IntLiteral:
    """An unsigned 128-bit magnitude with a sign; ``sign`` True is positive."""

    value: int
    sign: bool = True

    def __post_init__(self) -> None:
        if not 0 <= self.value < _U128_LIMIT:
            raise ValueError(f"integer literal out of 128-bit range: {self.value}")

    def to_texpr(self) -> TExpr:
        """Wrap in a typed expression of const 128-bit uint type."""
        return TExpr(self, Type(TypeKind.UINT, 128, IsConst.TRUE))


@dataclass(frozen=True)
class FloatLiteral:
    """A floating point literal, kept as its text."""

    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", str(self.value))

    def to_texpr(self) -> TExpr:
        """Wrap in a typed expression of const 64-bit float type."""
        return TExpr(self, Type(TypeKind.FLOAT, 64, IsConst.TRUE))


@dataclass(frozen=True)
class BitStringLiteral:
    """A bit string such as ``"1001"``."""

    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", str(self.value))

    def to_texpr(self) -> TExpr:
        """Wrap in a typed expression of a const bit array of matching width."""
        return TExpr(
            self,
            Type(
                TypeKind.BIT_ARRAY,
                const=IsConst.TRUE,
                array_dims=ArrayDims(len(self.value)),
            ),
        )


@dataclass(frozen=True)
class StringLiteral:
    """A string literal; it appears only in restricted contexts."""

    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", str(self.value))


Literal = Union[BoolLiteral, IntLiteral, FloatLiteral, BitStringLiteral]


@dataclass(frozen=True)
class Cast:
    """Conversion of an operand to type ``typ``."""

    operand: TExpr
    typ: Type

    def to_texpr(self) -> TExpr:
        """Wrap in a typed expression of the target type."""
        return TExpr(self, self.typ)


class UnaryOp(Enum):
    """Unary operators."""

    MINUS = auto()
    NOT = auto()
    BIT_NOT = auto()


@dataclass(frozen=True)
class UnaryExpr:
    """A unary operator applied to an operand."""

    op: UnaryOp
    operand: TExpr

    def to_texpr(self) -> TExpr:
        """Wrap in a typed expression: bool for ``!``, else the operand's type."""
        if self.op is UnaryOp.NOT:
            return TExpr(self, Type(TypeKind.BOOL, const=IsConst.FALSE))
        return TExpr(self, self.operand.typ)


class ArithOp(Enum):
    """Arithmetic and bitwise binary operators."""

    ADD = auto()
    SUB = auto()
    MUL = auto()
    DIV = auto()
    MOD = auto()
    REM = auto()
    SHL = auto()
    SHR = auto()
    BIT_XOR = auto()
    BIT_AND = auto()


class CmpOp(Enum):
    """Comparison operators."""

    EQ = auto()


class ConcatenationOp(Enum):
    """The concatenation operator ``++``."""

    CONCATENATION = auto()


BinaryOp = Union[ArithOp, CmpOp, ConcatenationOp]


@dataclass(frozen=True)
class BinaryExpr:
    """A binary operator applied to two operands."""

    op: BinaryOp
    left: TExpr
    right: TExpr

    def to_texpr(self, typ: Type) -> TExpr:
        """Wrap in a typed expression of type ``typ``."""
        return TExpr(self, typ)


def binary_texpr_with_cast(op: BinaryOp, left: TExpr, right: TExpr) -> TExpr:
    """Build a binary expression, casting operands to their promoted type."""
    from .types import promote_types

    promoted = promote_types(left.typ, right.typ)
    if left.typ != promoted:
        left = Cast(left, promoted).to_texpr()
    if right.typ != promoted:
        right = Cast(right, promoted).to_texpr()
    return BinaryExpr(op, left, right).to_texpr(promoted)


@dataclass(frozen=True)
class GateOperand:
    """An operand of a gate call, reset, barrier or measurement."""

    operand: Union[Identifier, HardwareQubit, IndexedIdentifier]

    def __post_init__(self) -> None:
        if not isinstance(self.operand, (Identifier, HardwareQubit, IndexedIdentifier)):
            raise TypeError(
                f"gate operand must be an identifier, hardware qubit or "
                f"indexed identifier, got {type(self.operand).__name__}"
            )

    def to_texpr(self, typ: Type) -> TExpr:
        """Wrap in a typed expression of type ``typ``."""
        return TExpr(self, typ)


class GateModifierKind(Enum):
    """Gate modifiers."""

    INV = auto()
    POW = auto()
    CTRL = auto()
    NEG_CTRL = auto()


@dataclass(frozen=True)
class GateModifier:
    """A gate modifier and its argument.

    ``inv`` takes no argument, ``pow`` requires one, and ``ctrl`` and
    ``negctrl`` take an optional one.
    """

    kind: GateModifierKind
    argument: TExpr | None = None

    def __post_init__(self) -> None:
        if self.kind is GateModifierKind.INV and self.argument is not None:
            raise ValueError("inv modifier takes no argument")
        if self.kind is GateModifierKind.POW and self.argument is None:
            raise ValueError("pow modifier requires an argument")


Expr = Union[
    ArraySlice,
    BinaryExpr,
    UnaryExpr,
    BoolLiteral,
    IntLiteral,
    FloatLiteral,
    BitStringLiteral,
    Cast,
    Identifier,
    HardwareQubit,
    IndexExpression,
    IndexedIdentifier,
    GateOperand,
    ReturnExpression,
    MeasureExpression,
    StubExpr,
]