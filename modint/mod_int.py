from dataclasses import dataclass
from numbers import Integral
from typing import TYPE_CHECKING, Callable, Iterable, Optional

from .errors import ModulusMismatchError, NotInvertibleError

if TYPE_CHECKING:
    from .mod_int_array import ModIntArray


@dataclass(frozen=True)
class Modulus:
    """
    Holds the divisor shared by a family of ModInt values.

    Every ModInt carries its Modulus, so values of different moduli can
    never be combined silently.

        m = Modulus(998244353)
        x = m.new(1234567890)
        y = m.raw(5)
    """

    mod: int

    def __post_init__(self):
        if self.mod < 1:
            raise ValueError(f"modulus must be positive, got {self.mod}")

    def raw(self, x: int) -> "ModInt":
        """Fast constructor. x must already satisfy 0 <= x < mod."""
        return ModInt(x, self)

    def new(self, x: int) -> "ModInt":
        """Reduce any integer (negative or wider than mod) into range."""
        return ModInt(int(x) % self.mod, self)

    def array(
        self, size: int, init: Optional[Callable[[int], "ModInt"]] = None
    ) -> "ModIntArray":
        from .mod_int_array import ModIntArray

        if init is None:
            return ModIntArray.zeros(size, self)
        return ModIntArray.from_function(size, init, self)

    def array_of(self, values: Iterable[int]) -> "ModIntArray":
        from .mod_int_array import ModIntArray

        return ModIntArray.from_ints(values, self)

    def __str__(self):
        return f"Z/{self.mod}Z"


class ModInt:
    """
    Integer residue that reduces itself modulo its Modulus.

    Instances are immutable; arithmetic returns new values. Plain ints are
    accepted on either side of an operator and normalized with Modulus.new.
    """

    __slots__ = ("x", "modulus")

    def __init__(self, x: int, modulus: Modulus):
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "modulus", modulus)

    def __setattr__(self, name, value):
        raise AttributeError("ModInt is immutable")

    @property
    def mod(self) -> int:
        return self.modulus.mod

    def _coerce(self, other) -> Optional["ModInt"]:
        if isinstance(other, ModInt):
            if other.modulus != self.modulus:
                raise ModulusMismatchError(
                    f"cannot combine values modulo {self.mod} and {other.mod}"
                )
            return other
        if isinstance(other, Integral):
            return self.modulus.new(other)
        return None

    def inv(self) -> "ModInt":
        """
        Multiplicative inverse via the extended Euclidean algorithm.

        The modulus does not have to be prime, but x must be coprime to it.

        Raises:
            NotInvertibleError: gcd(x, mod) != 1
        """
        s, t = self.x, self.mod
        xs, xt = 1, 0
        while t != 0:
            div = s // t
            s, t = t, s - t * div
            xs, xt = xt, xs - xt * div
        if s != 1:
            raise NotInvertibleError(f"{self.x} is not invertible modulo {self.mod}")
        return self.modulus.new(xs)

    def pow(self, n: int) -> "ModInt":
        """Square-and-multiply power; negative n uses the inverse."""
        if n < 0:
            return self.pow(-n).inv()
        result = self.modulus.raw(1 % self.mod)
        base = self
        while n > 0:
            if n & 1:
                result = result * base
            n >>= 1
            base = base * base
        return result

    def __pos__(self):
        return self

    def __neg__(self):
        return self.modulus.raw(0 if self.x == 0 else self.mod - self.x)

    def __add__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        total = self.x + other.x
        return self.modulus.raw(total if total < self.mod else total - self.mod)

    def __sub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        if self.x >= other.x:
            return self.modulus.raw(self.x - other.x)
        return self.modulus.raw(self.x + self.mod - other.x)

    def __mul__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.modulus.raw(self.x * other.x % self.mod)

    def __truediv__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self * other.inv()

    def __pow__(self, n):
        if not isinstance(n, Integral):
            return NotImplemented
        return self.pow(int(n))

    def __radd__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other + self

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other - self

    def __rmul__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other * self

    def __rtruediv__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other / self

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, ModInt):
            return NotImplemented
        return self.x == other.x and self.modulus == other.modulus

    def __hash__(self):
        return hash((self.x, self.modulus))

    def __int__(self):
        return self.x

    def __str__(self):
        return str(self.x)

    def __repr__(self):
        return f"ModInt({self.x}, mod={self.mod})"

