import logging
import threading
from typing import Dict, List, Tuple, Union

import galois
import numpy as np

from modint.mod_int import Modulus

from .constants import PRIMITIVE_ROOTS
from .errors import UnsupportedModulusError
from .utils import get_two_adicity

_logger = logging.getLogger(__name__)


def power_vector(base: int, count: int, modulus: int) -> np.ndarray:
    """Return [base^0, base^1, ..., base^(count-1)] mod modulus as int64."""
    powers = np.ones(count, dtype=np.int64)
    filled = 1
    step = base % modulus  # base^filled
    while filled < count:
        take = min(filled, count - filled)
        powers[filled : filled + take] = powers[:take] * step % modulus
        filled += take
        step = step * step % modulus
    return powers


class RootTable:
    """
    Roots of unity of power-of-two order for one NTT-friendly prime.

    ``zetas[k]`` is a primitive 2^k-th root of unity, g^((p-1) >> k), for
    k = 0..L where L is the two-adicity of p - 1. ``zeta_invs`` holds the
    inverses used by the inverse transform.
    """

    def __init__(self, modulus: Modulus):
        mod = modulus.mod
        if mod not in PRIMITIVE_ROOTS:
            raise UnsupportedModulusError(mod)

        self.modulus = modulus
        self.root = PRIMITIVE_ROOTS[mod]
        self.max_level = get_two_adicity(mod)

        g = modulus.raw(self.root)
        self.zetas = [g.pow((mod - 1) >> k) for k in range(self.max_level + 1)]
        self.zeta_invs = [zeta.inv() for zeta in self.zetas]

        self._twiddles: Dict[Tuple[int, bool], np.ndarray] = {}
        self._lock = threading.Lock()

    def twiddles(self, level: int, inverse: bool = False) -> np.ndarray:
        """
        Running twiddle powers for the butterfly pass pairing blocks of
        half-size 2^(level-1): zeta^0, zeta^1, ..., zeta^(2^(level-1) - 1)
        with zeta = zetas[level] (or its inverse).
        """
        key = (level, inverse)
        powers = self._twiddles.get(key)
        if powers is None:
            with self._lock:
                powers = self._twiddles.get(key)
                if powers is None:
                    zeta = self.zeta_invs[level] if inverse else self.zetas[level]
                    powers = power_vector(zeta.x, 1 << (level - 1), self.modulus.mod)
                    powers.setflags(write=False)
                    self._twiddles[key] = powers
        return powers

    def __repr__(self):
        return (
            f"RootTable(modulus={self.modulus.mod}, root={self.root}, "
            f"max_level={self.max_level})"
        )


class RootTableCache:
    """
    Memoizes one RootTable per modulus.

    Tables are built on first request and kept for the lifetime of the
    cache. Population is serialized by a lock, so a table is built at most
    once even under concurrent first use.
    """

    def __init__(self):
        self._tables: Dict[int, RootTable] = {}
        self._lock = threading.Lock()

    def get_or_build(self, modulus: Union[Modulus, int]) -> RootTable:
        if not isinstance(modulus, Modulus):
            modulus = Modulus(modulus)
        table = self._tables.get(modulus.mod)
        if table is not None:
            return table
        with self._lock:
            table = self._tables.get(modulus.mod)
            if table is None:
                table = RootTable(modulus)
                _logger.debug(
                    "built root table for %d (root %d, two-adicity %d)",
                    modulus.mod,
                    table.root,
                    table.max_level,
                )
                self._tables[modulus.mod] = table
        return table

    def preload(self, moduli=None):
        """Build tables eagerly, by default for every supported prime."""
        for mod in PRIMITIVE_ROOTS if moduli is None else moduli:
            self.get_or_build(mod)

    def __contains__(self, modulus):
        if isinstance(modulus, Modulus):
            modulus = modulus.mod
        return modulus in self._tables

    def __len__(self):
        return len(self._tables)


DEFAULT_CACHE = RootTableCache()


def get_or_build(modulus: Union[Modulus, int]) -> RootTable:
    return DEFAULT_CACHE.get_or_build(modulus)


def verify_prime_table() -> List[Tuple[int, int, bool]]:
    """
    Check every (modulus, root) pair of the prime table with galois.

    A wrong root corrupts every transform without raising anything.

    Returns:
        (modulus, root, ok) for each entry.
    """
    results = []
    for mod, root in PRIMITIVE_ROOTS.items():
        ok = bool(galois.is_prime(mod)) and bool(galois.is_primitive_root(root, mod))
        if not ok:
            _logger.error("%d is not a primitive root of %d", root, mod)
        results.append((mod, root, ok))
    return results
