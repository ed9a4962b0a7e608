def is_power_of_two(n):
    return n > 0 and n & (n - 1) == 0


def next_power_of_two(n):
    return 1 if n <= 1 else 1 << (n - 1).bit_length()


def ceil_log2(n):
    return (n - 1).bit_length() if n > 1 else 0


def get_two_adicity(modulus):
    n = modulus - 1

    # Count trailing zeros to get two-adicity
    adicity = 0
    while n & 1 == 0:
        adicity += 1
        n >>= 1

    return adicity
