import pytest

from qasmsem.types import (
    ArrayDims,
    IsConst,
    Type,
    TypeKind,
    can_cast_loose,
    promote_types,
)


def test_type_enum1():
    t = Type(TypeKind.BIT, const=IsConst.FALSE)
    assert not t.is_const()
    assert t.width() is None
    assert not t.is_quantum()
    assert t.is_scalar()


def test_type_enum2():
    t = Type(TypeKind.QUBIT)
    assert t.is_const()
    assert t.width() is None
    assert t.is_quantum()
    assert not t.is_scalar()


def test_int_type_const():
    typ = Type(TypeKind.INT, 32, IsConst.TRUE)
    assert typ.width() == 32
    assert typ.is_scalar()
    assert typ.is_const()
    assert not typ.is_quantum()


def test_int_type_not_const():
    typ = Type(TypeKind.INT, 32, IsConst.FALSE)
    assert typ.width() == 32
    assert typ.is_scalar()
    assert not typ.is_const()
    assert not typ.is_quantum()


def test_int_type_no_width():
    typ = Type(TypeKind.INT, None, IsConst.FALSE)
    assert typ.width() is None
    assert typ.is_scalar()
    assert not typ.is_const()
    assert not typ.is_quantum()


def test_qubit_type_single_qubit():
    typ = Type(TypeKind.QUBIT)
    assert typ.width() is None
    assert not typ.is_scalar()
    assert typ.is_const()
    assert typ.is_quantum()


def test_is_const_from_bool():
    assert IsConst.from_bool(True) is IsConst.TRUE
    assert IsConst.from_bool(False) is IsConst.FALSE
    assert bool(IsConst.TRUE) is True
    assert bool(IsConst.FALSE) is False


def test_const_defaults_to_false():
    assert Type(TypeKind.BOOL) == Type(TypeKind.BOOL, const=IsConst.FALSE)


def test_const_accepts_bool():
    assert Type(TypeKind.BOOL, const=True).const is IsConst.TRUE


def test_array_dims():
    dims = ArrayDims(2, 3)
    assert dims.num_dims() == 2
    assert dims.dims() == [2, 3]
    assert ArrayDims(4) == ArrayDims(4)
    assert ArrayDims(4) != ArrayDims(5)


@pytest.mark.parametrize("sizes", [(), (1, 2, 3, 4)])
def test_array_dims_count_limits(sizes):
    with pytest.raises(ValueError):
        ArrayDims(*sizes)


def test_array_dims_negative():
    with pytest.raises(ValueError):
        ArrayDims(-1)


def test_qubit_array_dims_and_quantum():
    typ = Type(TypeKind.QUBIT_ARRAY, array_dims=ArrayDims(3))
    assert typ.dims() == [3]
    assert typ.is_quantum()
    assert typ.is_const()
    assert not typ.is_scalar()


def test_int_array_dims():
    typ = Type(TypeKind.INT_ARRAY, array_dims=ArrayDims(2, 2))
    assert typ.dims() == [2, 2]


def test_dims_absent_for_bit_array():
    typ = Type(TypeKind.BIT_ARRAY, array_dims=ArrayDims(4), const=IsConst.TRUE)
    assert typ.dims() is None
    assert typ.is_const()


def test_width_absent_for_bit():
    assert Type(TypeKind.BOOL, const=IsConst.TRUE).width() is None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"kind": TypeKind.BIT, "bit_width": 8},
        {"kind": TypeKind.QUBIT, "const": IsConst.TRUE},
        {"kind": TypeKind.QUBIT_ARRAY},
        {"kind": TypeKind.QUBIT, "array_dims": ArrayDims(2)},
        {"kind": TypeKind.GATE},
        {"kind": TypeKind.VOID, "num_params": 1, "num_qubits": 1},
        {"kind": TypeKind.INT, "bit_width": -1},
    ],
)
def test_invalid_type_construction(kwargs):
    with pytest.raises(ValueError):
        Type(**kwargs)


def test_gate_type():
    typ = Type(TypeKind.GATE, num_params=3, num_qubits=1)
    assert typ.num_params == 3
    assert typ.num_qubits == 1
    assert typ.is_const()


def test_promote_equal_types():
    typ = Type(TypeKind.FLOAT, 64, IsConst.TRUE)
    assert promote_types(typ, typ) == typ


def test_promote_int_widths():
    a = Type(TypeKind.INT, 32, IsConst.TRUE)
    b = Type(TypeKind.INT, 64, IsConst.FALSE)
    assert promote_types(a, b) == Type(TypeKind.INT, 64, IsConst.FALSE)


def test_promote_int_missing_width():
    a = Type(TypeKind.INT, 32, IsConst.TRUE)
    b = Type(TypeKind.INT, None, IsConst.TRUE)
    assert promote_types(a, b) == Type(TypeKind.INT, None, IsConst.TRUE)


def test_promote_uint():
    a = Type(TypeKind.UINT, 8, IsConst.TRUE)
    b = Type(TypeKind.UINT, 128, IsConst.TRUE)
    assert promote_types(a, b) == Type(TypeKind.UINT, 128, IsConst.TRUE)


def test_promote_int_float():
    i = Type(TypeKind.INT, 32, IsConst.FALSE)
    f = Type(TypeKind.FLOAT, 64, IsConst.TRUE)
    assert promote_types(i, f) == f
    assert promote_types(f, i) == f


def test_promote_unrelated_is_void():
    a = Type(TypeKind.UINT, 128, IsConst.TRUE)
    b = Type(TypeKind.FLOAT, 64, IsConst.TRUE)
    assert promote_types(a, b) == Type(TypeKind.VOID)


def test_can_cast_loose():
    bit = Type(TypeKind.BIT, const=IsConst.FALSE)
    bit_const = Type(TypeKind.BIT, const=IsConst.TRUE)
    bits = Type(TypeKind.BIT_ARRAY, array_dims=ArrayDims(4), const=IsConst.TRUE)
    assert can_cast_loose(bit, bit_const) is False
    assert can_cast_loose(bits, Type(TypeKind.BIT_ARRAY, array_dims=ArrayDims(4))) is True
    assert can_cast_loose(Type(TypeKind.INT, 32, IsConst.FALSE), bit) is True