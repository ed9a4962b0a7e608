from numbers import Integral
from typing import Callable, Iterable, Iterator, List, Optional, Union

import galois
import numpy as np

from .errors import ModulusMismatchError
from .mod_int import ModInt, Modulus

# residues below 2^31 keep products of two residues inside int64
MAX_ARRAY_MODULUS = 1 << 31

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


class ModIntArray:
    """
    Fixed-length mutable sequence of ModInt values sharing one Modulus.

    Residues are kept in a contiguous int64 numpy buffer (``data``) instead
    of a list of ModInt objects. Every supported modulus is below 2^31, so
    the product of two residues still fits in int64 and vectorized code can
    multiply then reduce without overflow.

    Code that writes ``data`` directly must keep every entry in [0, mod).
    The constructor takes ownership of ``data``: an int64 contiguous array
    is used as is, not copied, so in-place transforms on the ModIntArray
    also rewrite the caller's array. Use ``copy()`` or ``Modulus.array_of``
    to get a private buffer.
    """

    def __init__(self, data: np.ndarray, modulus: Modulus):
        if modulus.mod > MAX_ARRAY_MODULUS:
            raise ValueError(
                f"ModIntArray supports moduli up to 2^31, got {modulus.mod}"
            )
        self.data = np.ascontiguousarray(data, dtype=np.int64)
        self.modulus = modulus

    @classmethod
    def zeros(cls, size: int, modulus: Modulus) -> "ModIntArray":
        return cls(np.zeros(size, dtype=np.int64), modulus)

    @classmethod
    def from_function(
        cls, size: int, init: Callable[[int], ModInt], modulus: Modulus
    ) -> "ModIntArray":
        array = cls.zeros(size, modulus)
        for i in range(size):
            array[i] = init(i)
        return array

    @classmethod
    def from_ints(cls, values: Iterable[int], modulus: Modulus) -> "ModIntArray":
        """
        Reduce arbitrary (possibly negative) integers into the field.

        Raises:
            TypeError: a value is not an integer (floats are not truncated)
        """
        if isinstance(values, np.ndarray):
            values = values.reshape(-1)
            if values.dtype.kind in "iub":
                # widen first, the modulus does not fit in narrow dtypes
                wide = np.uint64 if values.dtype.kind == "u" else np.int64
                return cls(np.mod(values.astype(wide), modulus.mod), modulus)
            if values.dtype.kind != "O":
                raise TypeError(f"expected integers, got an array of {values.dtype}")
            values = values.tolist()
        else:
            values = list(values)

        for v in values:
            if not isinstance(v, Integral):
                raise TypeError(f"expected integers, got {type(v).__name__}")
        if all(INT64_MIN <= v <= INT64_MAX for v in values):
            return cls(np.mod(np.array(values, dtype=np.int64), modulus.mod), modulus)
        # ints wider than 64 bits are reduced one by one
        return cls(np.array([int(v) % modulus.mod for v in values], dtype=np.int64), modulus)
    @classmethod
    def from_galois(cls, array: galois.FieldArray) -> "ModIntArray":
        field = type(array)
        if field.degree != 1:
            raise ValueError(f"{field.name} is not a prime field")
        return cls(array.view(np.ndarray).astype(np.int64), Modulus(int(field.characteristic)))

    def to_galois(self) -> galois.FieldArray:
        GF = galois.GF(self.modulus.mod)
        return GF(self.data.tolist())

    @property
    def mod(self) -> int:
        return self.modulus.mod

    def copy(self, size: Optional[int] = None) -> "ModIntArray":
        """Return a new array, truncated or zero-extended to ``size``."""
        if size is None:
            return ModIntArray(self.data.copy(), self.modulus)
        data = np.zeros(size, dtype=np.int64)
        keep = min(size, len(self.data))
        data[:keep] = self.data[:keep]
        return ModIntArray(data, self.modulus)

    def to_list(self) -> List[int]:
        return self.data.tolist()

    def _check_same(self, other: "ModIntArray"):
        if other.modulus != self.modulus:
            raise ModulusMismatchError(
                f"cannot combine arrays modulo {self.mod} and {other.mod}"
            )
        if len(other) != len(self):
            raise ValueError(f"length mismatch: {len(self)} != {len(other)}")

    def __getitem__(self, index: Union[int, slice]):
        """An int index gives a ModInt; a slice gives a new ModIntArray."""
        if isinstance(index, slice):
            return ModIntArray(self.data[index].copy(), self.modulus)
        return self.modulus.raw(int(self.data[index]))

    def __setitem__(self, index: int, value):
        if isinstance(value, ModInt):
            if value.modulus != self.modulus:
                raise ModulusMismatchError(
                    f"cannot store a value modulo {value.mod} in an array modulo {self.mod}"
                )
            self.data[index] = value.x
        else:
            self.data[index] = int(value) % self.mod

    def __len__(self):
        return len(self.data)

    def __iter__(self) -> Iterator[ModInt]:
        for x in self.data.tolist():
            yield self.modulus.raw(x)

    def __contains__(self, value):
        if not isinstance(value, ModInt) or value.modulus != self.modulus:
            return False
        return bool(np.any(self.data == value.x))

    def __add__(self, other: "ModIntArray") -> "ModIntArray":
        self._check_same(other)
        return ModIntArray((self.data + other.data) % self.mod, self.modulus)

    def __sub__(self, other: "ModIntArray") -> "ModIntArray":
        self._check_same(other)
        return ModIntArray((self.data - other.data) % self.mod, self.modulus)

    def __mul__(self, other: "ModIntArray") -> "ModIntArray":
        # pointwise, not a convolution
        self._check_same(other)
        return ModIntArray(self.data * other.data % self.mod, self.modulus)

    def __neg__(self) -> "ModIntArray":
        return ModIntArray(-self.data % self.mod, self.modulus)

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, ModIntArray):
            return NotImplemented
        return self.modulus == other.modulus and np.array_equal(self.data, other.data)

    __hash__ = None

    def __repr__(self):
        return f"ModIntArray({self.data.tolist()}, mod={self.mod})"
