"""Types used to annotate expressions and symbols in the semantic graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class IsConst(Enum):
    """Whether a type carries the ``const`` attribute."""

    TRUE = True
    FALSE = False

    @classmethod
    def from_bool(cls, value: bool) -> "IsConst":
        """Return the member matching the truth value of ``value``."""
        return cls.TRUE if value else cls.FALSE

    def __bool__(self) -> bool:
        return self.value


class TypeKind(Enum):
    """The variety of a `Type`."""

    # Scalars
    BIT = auto()
    QUBIT = auto()
    HARDWARE_QUBIT = auto()
    INT = auto()
    UINT = auto()
    FLOAT = auto()
    ANGLE = auto()
    COMPLEX = auto()
    BOOL = auto()
    DURATION = auto()
    STRETCH = auto()
    # Arrays
    BIT_ARRAY = auto()
    QUBIT_ARRAY = auto()
    INT_ARRAY = auto()
    UINT_ARRAY = auto()
    FLOAT_ARRAY = auto()
    ANGLE_ARRAY = auto()
    COMPLEX_ARRAY = auto()
    BOOL_ARRAY = auto()
    DURATION_ARRAY = auto()
    # Other
    GATE = auto()
    RANGE = auto()
    VOID = auto()
    TODO = auto()
    UNDEFINED = auto()


_WIDTH_KINDS = frozenset(
    {TypeKind.INT, TypeKind.UINT, TypeKind.FLOAT, TypeKind.ANGLE, TypeKind.COMPLEX}
)

_CONST_KINDS = _WIDTH_KINDS | frozenset(
    {
        TypeKind.BIT,
        TypeKind.BOOL,
        TypeKind.DURATION,
        TypeKind.STRETCH,
        TypeKind.BIT_ARRAY,
    }
)

_SCALAR_KINDS = _WIDTH_KINDS | frozenset(
    {TypeKind.BIT, TypeKind.BOOL, TypeKind.DURATION, TypeKind.STRETCH}
)

_ARRAY_KINDS = frozenset(
    {
        TypeKind.BIT_ARRAY,
        TypeKind.QUBIT_ARRAY,
        TypeKind.INT_ARRAY,
        TypeKind.UINT_ARRAY,
        TypeKind.FLOAT_ARRAY,
        TypeKind.ANGLE_ARRAY,
        TypeKind.COMPLEX_ARRAY,
        TypeKind.BOOL_ARRAY,
        TypeKind.DURATION_ARRAY,
    }
)

_MAX_ARRAY_DIMS = 3


@dataclass(frozen=True, init=False)
class ArrayDims:
    """Dimensions of an array type: one to three sizes."""

    sizes: tuple[int, ...] = field()

    def __init__(self, *sizes: int) -> None:
        if not 1 <= len(sizes) <= _MAX_ARRAY_DIMS:
            raise ValueError(
                f"arrays have between 1 and {_MAX_ARRAY_DIMS} dimensions, got {len(sizes)}"
            )
        if any(size < 0 for size in sizes):
            raise ValueError(f"array sizes must be non-negative: {sizes}")
        object.__setattr__(self, "sizes", tuple(sizes))

    def num_dims(self) -> int:
        """Return the number of dimensions."""
        return len(self.sizes)

    def dims(self) -> list[int]:
        """Return the size of each dimension."""
        return list(self.sizes)


@dataclass(frozen=True)
class Type:
    """A semantic type.

    ``bit_width`` applies to int, uint, float, angle and complex types
    (``None`` means no width was given). ``const`` applies to classical
    scalar types and bit arrays. ``array_dims`` applies to array types,
    and ``num_params``/``num_qubits`` to gates.
    """

    kind: TypeKind
    bit_width: int | None = None
    const: IsConst | None = None
    array_dims: ArrayDims | None = None
    num_params: int | None = None
    num_qubits: int | None = None

    def __post_init__(self) -> None:
        kind = self.kind
        if self.bit_width is not None:
            if kind not in _WIDTH_KINDS:
                raise ValueError(f"{kind.name} does not take a bit width")
            if self.bit_width < 0:
                raise ValueError(f"bit width must be non-negative: {self.bit_width}")

        if kind in _CONST_KINDS:
            if self.const is None:
                object.__setattr__(self, "const", IsConst.FALSE)
            elif isinstance(self.const, bool):
                object.__setattr__(self, "const", IsConst.from_bool(self.const))
        elif self.const is not None:
            raise ValueError(f"{kind.name} does not take a const attribute")

        if kind in _ARRAY_KINDS:
            if self.array_dims is None:
                raise ValueError(f"{kind.name} requires array dimensions")
        elif self.array_dims is not None:
            raise ValueError(f"{kind.name} does not take array dimensions")

        if kind is TypeKind.GATE:
            if self.num_params is None or self.num_qubits is None:
                raise ValueError("GATE requires num_params and num_qubits")
        elif self.num_params is not None or self.num_qubits is not None:
            raise ValueError(f"{kind.name} does not take gate parameter counts")

    def is_scalar(self) -> bool:
        """Return True for classical types that are not arrays."""
        return self.kind in _SCALAR_KINDS

    def width(self) -> int | None:
        """Return the bit width, if the type has one."""
        if self.kind in _WIDTH_KINDS:
            return self.bit_width
        return None

    def is_const(self) -> bool:
        """Return True if the type has the ``const`` attribute.

        Types that cannot carry the attribute count as const.
        """
        if self.kind in _CONST_KINDS:
            return self.const is IsConst.TRUE
        return True

    def is_quantum(self) -> bool:
        """Return True for a qubit or a qubit register."""
        return self.kind in (TypeKind.QUBIT, TypeKind.QUBIT_ARRAY)

    def dims(self) -> list[int] | None:
        """Return the array dimensions of qubit and int arrays, else None."""
        if self.kind in (TypeKind.QUBIT_ARRAY, TypeKind.INT_ARRAY):
            assert self.array_dims is not None
            return self.array_dims.dims()
        return None


def _promote_constness(ty1: Type, ty2: Type) -> IsConst:
    return IsConst.from_bool(ty1.is_const() and ty2.is_const())


def _promote_width(ty1: Type, ty2: Type) -> int | None:
    width1, width2 = ty1.width(), ty2.width()
    if width1 is None or width2 is None:
        return None
    return max(width1, width2)


def promote_types(ty1: Type, ty2: Type) -> Type:
    """Return the common type of the operands of a binary arithmetic operation.

    Combinations with no promotion rule yield the void type.
    """
    if ty1 == ty2:
        return ty1
    isconst = _promote_constness(ty1, ty2)
    pair = (ty1.kind, ty2.kind)
    if pair == (TypeKind.INT, TypeKind.INT):
        return Type(TypeKind.INT, _promote_width(ty1, ty2), isconst)
    if pair == (TypeKind.UINT, TypeKind.UINT):
        return Type(TypeKind.UINT, _promote_width(ty1, ty2), isconst)
    if pair == (TypeKind.INT, TypeKind.FLOAT):
        return ty2
    if pair == (TypeKind.FLOAT, TypeKind.INT):
        return ty1
    return Type(TypeKind.VOID)


def can_cast_loose(from_type: Type, to_type: Type) -> bool:
    """Return True if ``from_type`` may be cast to ``to_type``.

    This check is permissive: only bit-to-bit is rejected.
    """
    return not (from_type.kind is TypeKind.BIT and to_type.kind is TypeKind.BIT)