"""
In-place number-theoretic transform over a ModIntArray.

The forward transform is a decimation-in-frequency pass that skips the
bit-reversal permutation, so its output is in a scrambled order. ``intt``
is the exact mirror (decimation-in-time) and consumes that order, which is
all a convolution needs: transform, multiply pointwise, transform back.

Each butterfly pass is evaluated for all blocks at once by viewing the
buffer as (blocks, 2, half) and combining the two halves.
"""

from modint.mod_int_array import ModIntArray

from .errors import PreconditionError
from .roots import DEFAULT_CACHE, RootTable, RootTableCache
from .utils import ceil_log2, is_power_of_two


def _prepare(seq: ModIntArray, cache: RootTableCache) -> RootTable:
    size = len(seq)
    if not is_power_of_two(size):
        raise PreconditionError(f"transform length must be a power of two, got {size}")
    table = cache.get_or_build(seq.modulus)
    if ceil_log2(size) > table.max_level:
        raise PreconditionError(
            f"transform length {size} exceeds 2^{table.max_level}, "
            f"the largest supported modulo {seq.mod}"
        )
    return table


def ntt(seq: ModIntArray, cache: RootTableCache = DEFAULT_CACHE) -> None:
    """
    Forward transform, in place, without reordering.

    Args:
        seq: array whose length is a power of two; it is overwritten.

    Raises:
        UnsupportedModulusError: the modulus has no entry in the prime table
        PreconditionError: the length is not a power of two or is too large
    """
    table = _prepare(seq, cache)
    p = seq.mod
    a = seq.data

    for k in range(ceil_log2(len(seq)) - 1, -1, -1):
        half = 1 << k
        twiddles = table.twiddles(k + 1)
        blocks = a.reshape(-1, 2, half)

        left = blocks[:, 0, :].copy()
        right = blocks[:, 1, :]
        blocks[:, 0, :] = (left + right) % p
        blocks[:, 1, :] = (left - right) % p * twiddles % p


def intt(seq: ModIntArray, cache: RootTableCache = DEFAULT_CACHE) -> None:
    """
    Inverse of ``ntt``, in place, including the 1/N normalization.

    Args:
        seq: array in the order produced by ``ntt``; it is overwritten.

    Raises:
        UnsupportedModulusError: the modulus has no entry in the prime table
        PreconditionError: the length is not a power of two or is too large
    """
    table = _prepare(seq, cache)
    p = seq.mod
    a = seq.data

    for k in range(ceil_log2(len(seq))):
        half = 1 << k
        twiddles = table.twiddles(k + 1, inverse=True)
        blocks = a.reshape(-1, 2, half)

        left = blocks[:, 0, :].copy()
        right = blocks[:, 1, :] * twiddles % p
        blocks[:, 0, :] = (left + right) % p
        blocks[:, 1, :] = (left - right) % p

    n_inv = seq.modulus.new(len(seq)).inv()
    a[:] = a * n_inv.x % p
