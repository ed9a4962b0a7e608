"""
Garner reconstruction of integer convolutions from their residues.

Residues arrive as int64 numpy arrays in [0, M_i). Every intermediate stays
below 2^62 so int64 arithmetic is exact; the final combination for the
three-prime case is done in uint64 and wraps modulo 2^64.
"""

from typing import Sequence

import numpy as np

from modint.mod_int import Modulus

from .constants import INT64_MODULI, SMALL_CONV_MAX, SMALL_MODULI

M0, M1, M2 = INT64_MODULI

M0_INV_MOD_M1 = Modulus(M1).raw(M0).inv().x
M0M1_INV_MOD_M2 = Modulus(M2).new(M0 * M1).inv().x
M0M1_MOD_2_64 = np.uint64(M0 * M1 % (1 << 64))

S0, S1 = SMALL_MODULI
S0_INV_MOD_S1 = Modulus(S1).raw(S0).inv().x


def garner_int64(residues: Sequence[np.ndarray]) -> np.ndarray:
    """
    Rebuild signed 64-bit values from residues modulo (M0, M1, M2).

    Each residue is first shifted by -INT64_MIN (i.e. +2^63) so the value
    being reconstructed is non-negative, then shifted back at the end.
    Values outside the int64 range come back wrapped modulo 2^64.
    """
    h0, h1, h2 = residues

    r0 = (h0 + (1 << 63) % M0) % M0
    r1 = (h1 + (1 << 63) % M1) % M1
    r2 = (h2 + (1 << 63) % M2) % M2

    # x = r0 + v0 * M0 + v1 * M0 * M1
    v0 = (r1 - r0) % M1 * M0_INV_MOD_M1 % M1
    v1 = (r2 - r0 - v0 * M0 % M2) % M2 * M0M1_INV_MOD_M2 % M2

    x = (
        r0.astype(np.uint64)
        + v0.astype(np.uint64) * np.uint64(M0)
        + v1.astype(np.uint64) * M0M1_MOD_2_64
    )
    return (x + np.uint64(1 << 63)).view(np.int64)


def garner_small(residues: Sequence[np.ndarray]) -> np.ndarray:
    """
    Rebuild values with |x| <= SMALL_CONV_MAX from residues modulo (S0, S1).

    The shift by SMALL_CONV_MAX maps the admissible range onto [0, S0 * S1),
    which fits in int64, so no wraparound is involved.
    """
    h0, h1 = residues

    r0 = (h0 + SMALL_CONV_MAX % S0) % S0
    r1 = (h1 + SMALL_CONV_MAX % S1) % S1

    v0 = (r1 - r0) % S1 * S0_INV_MOD_S1 % S1
    return r0 + v0 * S0 - SMALL_CONV_MAX
