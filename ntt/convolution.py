import logging
from numbers import Integral
from typing import Optional, Sequence, Union

import numpy as np

from modint.errors import ModulusMismatchError
from modint.mod_int import Modulus
from modint.mod_int_array import ModIntArray

from .constants import INT64_MAX, INT64_MODULI, SMALL_CONV_MAX, SMALL_MODULI
from .crt import garner_int64, garner_small
from .errors import PreconditionError
from .parameters import DEFAULT_PARAMETERS, ConvolutionParameters
from .roots import DEFAULT_CACHE, RootTableCache
from .transform import intt, ntt
from .utils import next_power_of_two

_logger = logging.getLogger(__name__)

IntSequence = Union[Sequence[int], np.ndarray]


def naive_convolve(f: ModIntArray, g: ModIntArray) -> ModIntArray:
    """O(n*m) product; h[i + j] += f[i] * g[j]."""
    if len(f) < len(g):
        f, g = g, f
    p = f.mod
    n = len(f)
    h = np.zeros(n + len(g) - 1, dtype=np.int64)
    for j, gx in enumerate(g.data.tolist()):
        h[j : j + n] = (h[j : j + n] + f.data * gx) % p
    return ModIntArray(h, f.modulus)


def _as_int64(values: IntSequence) -> np.ndarray:
    if isinstance(values, np.ndarray):
        if values.dtype.kind not in "iub":
            raise TypeError(f"expected integers, got an array of {values.dtype}")
    else:
        values = list(values)
        for v in values:
            if not isinstance(v, Integral):
                raise TypeError(f"expected integers, got {type(v).__name__}")
    # values outside int64 raise OverflowError here
    return np.asarray(values, dtype=np.int64).reshape(-1)


def _magnitude_bound(f: np.ndarray, g: np.ndarray) -> int:
    # largest |h[i]| possible for inputs with these extremes
    f_max = max(int(f.max()), -int(f.min()))
    g_max = max(int(g.max()), -int(g.min()))
    return f_max * g_max * min(len(f), len(g))


class Convolution:
    """
    Polynomial multiplication over NTT-friendly primes and over int64.

    Args:
        parameters: thresholds and checking policy
        cache: root tables to use; pass a private RootTableCache to control
            its lifetime, the process-wide one is used otherwise

    The engine never mutates its inputs: transforms run on padded copies.
    """

    def __init__(
        self,
        parameters: ConvolutionParameters = DEFAULT_PARAMETERS,
        cache: Optional[RootTableCache] = None,
    ):
        self.parameters = parameters
        self.cache = DEFAULT_CACHE if cache is None else cache

    def convolve_modular(self, f: ModIntArray, g: ModIntArray) -> ModIntArray:
        """
        Product of two polynomials over the same field.

        Raises:
            ModulusMismatchError: f and g use different moduli
            UnsupportedModulusError: the NTT path is needed but the modulus
                is not in the prime table
        """
        if f.modulus != g.modulus:
            raise ModulusMismatchError(
                f"cannot convolve arrays modulo {f.mod} and {g.mod}"
            )

        f_size, g_size = len(f), len(g)
        if f_size == 0 or g_size == 0:
            return f.copy(0)

        if min(f_size, g_size) <= self.parameters.naive_threshold:
            _logger.debug("naive convolution of %d x %d mod %d", f_size, g_size, f.mod)
            return naive_convolve(f, g)

        size = next_power_of_two(f_size + g_size - 1)
        _logger.debug(
            "NTT convolution of %d x %d mod %d, transform size %d",
            f_size,
            g_size,
            f.mod,
            size,
        )
        f_tmp = f.copy(size)
        g_tmp = g.copy(size)
        ntt(f_tmp, self.cache)
        ntt(g_tmp, self.cache)

        h = f_tmp * g_tmp
        intt(h, self.cache)
        return h.copy(f_size + g_size - 1)

    def _residues(self, f: np.ndarray, g: np.ndarray, moduli):
        residues = []
        for mod in moduli:
            modulus = Modulus(mod)
            h = self.convolve_modular(modulus.array_of(f), modulus.array_of(g))
            residues.append(h.data)
        return residues

    def _check_bound(self, f, g, limit: int, strict: Optional[bool]):
        if strict is None:
            strict = self.parameters.strict
        if not strict or len(f) == 0 or len(g) == 0:
            return
        bound = _magnitude_bound(f, g)
        if bound > limit:
            raise PreconditionError(
                f"convolution values may reach {bound}, above the limit {limit}"
            )

    def convolve_integer(
        self, f: IntSequence, g: IntSequence, strict: Optional[bool] = None
    ) -> np.ndarray:
        """
        Exact product of integer polynomials, negative coefficients allowed.

        Every coefficient of the result must fit in a signed 64-bit integer;
        otherwise it comes back wrapped modulo 2^64. With ``strict`` the
        inputs are checked against a worst-case bound first.

        Raises:
            PreconditionError: strict and the result may leave the int64 range
            OverflowError: an input value does not fit in int64
        """
        f, g = _as_int64(f), _as_int64(g)
        self._check_bound(f, g, INT64_MAX, strict)
        _logger.debug("integer convolution of %d x %d over 3 primes", len(f), len(g))
        return garner_int64(self._residues(f, g, INT64_MODULI))

    def convolve_integer_small(
        self, f: IntSequence, g: IntSequence, strict: Optional[bool] = None
    ) -> np.ndarray:
        """
        Faster variant of ``convolve_integer`` using two primes.

        Valid only when every |h[i]| <= 2,252,081,290,784,276,480; larger
        values produce wrong output unless ``strict`` is set.

        Raises:
            PreconditionError: strict and the result may exceed the bound
            OverflowError: an input value does not fit in int64
        """
        f, g = _as_int64(f), _as_int64(g)
        self._check_bound(f, g, SMALL_CONV_MAX, strict)
        _logger.debug("integer convolution of %d x %d over 2 primes", len(f), len(g))
        return garner_small(self._residues(f, g, SMALL_MODULI))


_default = Convolution()


def convolve_modular(f: ModIntArray, g: ModIntArray) -> ModIntArray:
    return _default.convolve_modular(f, g)


def convolve_integer(f: IntSequence, g: IntSequence, strict: Optional[bool] = None) -> np.ndarray:
    return _default.convolve_integer(f, g, strict)


def convolve_integer_small(
    f: IntSequence, g: IntSequence, strict: Optional[bool] = None
) -> np.ndarray:
    return _default.convolve_integer_small(f, g, strict)
