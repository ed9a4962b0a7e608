import galois
import numpy as np
import pytest

from modint.errors import ModulusMismatchError
from modint.mod_int import Modulus
from modint.mod_int_array import ModIntArray

MOD = Modulus(998244353)


def test_zero_filled():
    array = MOD.array(5)
    assert len(array) == 5
    assert array.to_list() == [0] * 5


def test_from_function():
    array = MOD.array(4, lambda i: MOD.new(i * i - 5))
    assert array.to_list() == [MOD.mod - 5, MOD.mod - 4, MOD.mod - 1, 4]
    assert array[1] == MOD.new(-4)


def test_array_of_reduces_negative_and_wide_values():
    array = MOD.array_of([-1, MOD.mod, 1 << 70, 7])
    assert array.to_list() == [MOD.mod - 1, 0, (1 << 70) % MOD.mod, 7]
    assert MOD.array_of(np.array([-3, 3], dtype=np.int64)).to_list() == [MOD.mod - 3, 3]
    assert len(MOD.array_of([])) == 0


def test_copy_truncates_and_extends():
    array = MOD.array_of([1, 2, 3])
    assert array.copy(2).to_list() == [1, 2]
    assert array.copy(5).to_list() == [1, 2, 3, 0, 0]
    copied = array.copy()
    copied[0] = MOD.new(9)
    assert array[0] == MOD.new(1)


def test_setitem():
    array = MOD.array(3)
    array[0] = MOD.new(-1)
    array[1] = -2
    assert array.to_list() == [MOD.mod - 1, MOD.mod - 2, 0]
    with pytest.raises(ModulusMismatchError):
        array[2] = Modulus(469762049).new(1)


def test_iteration_and_contains():
    array = MOD.array_of([4, 5])
    assert list(array) == [MOD.new(4), MOD.new(5)]
    assert MOD.new(5) in array
    assert MOD.new(6) not in array


def test_pointwise_arithmetic():
    a = MOD.array_of([1, 2, MOD.mod - 1])
    b = MOD.array_of([3, MOD.mod - 2, 2])
    assert (a + b).to_list() == [4, 0, 1]
    assert (a - b).to_list() == [MOD.mod - 2, 4, MOD.mod - 3]
    assert (a * b).to_list() == [3, MOD.mod - 4, MOD.mod - 2]
    assert (-a).to_list() == [MOD.mod - 1, MOD.mod - 2, 1]


def test_pointwise_length_mismatch():
    with pytest.raises(ValueError):
        MOD.array(2) + MOD.array(3)


def test_equality():
    assert MOD.array_of([1, 2]) == MOD.array_of([1, 2])
    assert MOD.array_of([1, 2]) != MOD.array_of([2, 1])
    assert MOD.array_of([1, 2]) != Modulus(469762049).array_of([1, 2])


def test_galois_roundtrip():
    GF = galois.GF(MOD.mod)
    values = GF([0, 1, 123456789, MOD.mod - 1])
    array = ModIntArray.from_galois(values)
    assert array.modulus == MOD
    assert array.to_list() == [0, 1, 123456789, MOD.mod - 1]
    assert np.array_equal(array.to_galois(), values)


def test_rejects_wide_modulus():
    with pytest.raises(ValueError):
        Modulus((1 << 61) - 1).array(1)


def test_array_of_narrow_dtypes():
    assert MOD.array_of(np.array([-1, 5], dtype=np.int8)).to_list() == [MOD.mod - 1, 5]
    assert MOD.array_of(np.array([65535, 2], dtype=np.uint16)).to_list() == [65535, 2]
    assert MOD.array_of(np.array([True, False])).to_list() == [1, 0]
    assert MOD.array_of(np.array([1 << 63], dtype=np.uint64)).to_list() == [(1 << 63) % MOD.mod]


def test_array_of_rejects_floats():
    with pytest.raises(TypeError):
        MOD.array_of([1.5])
    with pytest.raises(TypeError):
        MOD.array_of([1, 2.0])
    with pytest.raises(TypeError):
        MOD.array_of(np.array([1.0, 2.0]))


def test_constructor_shares_buffer():
    data = np.array([1, 2, 3], dtype=np.int64)
    array = ModIntArray(data, MOD)
    assert np.shares_memory(array.data, data)
    array[0] = MOD.new(7)
    assert data[0] == 7
    assert not np.shares_memory(array.copy().data, data)
    assert not np.shares_memory(MOD.array_of(data).data, data)


def test_slicing():
    array = MOD.array_of([1, 2, 3, 4, 5])
    head = array[:2]
    assert isinstance(head, ModIntArray)
    assert head.modulus == MOD
    assert head.to_list() == [1, 2]
    assert array[::2].to_list() == [1, 3, 5]
    assert array[-1] == MOD.new(5)
    head[0] = MOD.new(9)
    assert array[0] == MOD.new(1)
