# NTT-friendly primes p = c * 2^k + 1 and a primitive root of each.
# Convolution over any other modulus is only possible on the naive path.
PRIMITIVE_ROOTS = {
    167772161: 3,  # 2^25
    469762049: 3,  # 2^26
    754974721: 11,  # 2^24
    998244353: 3,  # 2^23
    1107296257: 10,  # 2^25
    1811939329: 13,  # 2^26
    2013265921: 31,  # 2^27
    2113929217: 5,  # 2^25
    2130706433: 3,  # 2^24
}

DEFAULT_MODULUS = 998244353

# Moduli for the three-prime integer convolution (results must fit in int64)
INT64_MODULI = (2013265921, 2113929217, 2130706433)

# Moduli for the two-prime integer convolution
SMALL_MODULI = (2113929217, 2130706433)

# (2113929217 * 2130706433 - 1) // 2
SMALL_CONV_MAX = 2252081290784276480

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

# Below this many elements in the shorter input the naive product is faster
NAIVE_THRESHOLD = 60
