import pytest

from modint.mod_int import Modulus
from ntt.constants import PRIMITIVE_ROOTS
from ntt.errors import UnsupportedModulusError
from ntt.roots import DEFAULT_CACHE, RootTableCache, get_or_build, power_vector, verify_prime_table


def test_prime_table_is_valid():
    results = verify_prime_table()
    assert len(results) == len(PRIMITIVE_ROOTS)
    assert all(ok for _, _, ok in results)


def test_zetas_have_exact_order():
    cache = RootTableCache()
    for mod in PRIMITIVE_ROOTS:
        table = cache.get_or_build(mod)
        assert len(table.zetas) == table.max_level + 1
        assert table.zetas[0] == table.modulus.new(1)
        for k in range(1, table.max_level + 1):
            zeta = table.zetas[k]
            assert zeta.pow(1 << k) == table.modulus.new(1)
            assert zeta.pow(1 << (k - 1)) == table.modulus.new(-1)
            assert zeta * table.zeta_invs[k] == table.modulus.new(1)


def test_table_size_for_998244353():
    table = RootTableCache().get_or_build(Modulus(998244353))
    # 998244353 - 1 = 119 * 2^23
    assert table.max_level == 23
    assert table.zetas[23] == Modulus(998244353).new(3).pow(119)


def test_unsupported_modulus():
    cache = RootTableCache()
    with pytest.raises(UnsupportedModulusError) as excinfo:
        cache.get_or_build(97)
    assert excinfo.value.modulus == 97
    assert 97 not in cache
    assert len(cache) == 0


def test_cache_builds_once():
    cache = RootTableCache()
    first = cache.get_or_build(998244353)
    second = cache.get_or_build(Modulus(998244353))
    assert first is second
    assert len(cache) == 1


def test_preload():
    cache = RootTableCache()
    cache.preload()
    assert len(cache) == len(PRIMITIVE_ROOTS)


def test_twiddles():
    table = RootTableCache().get_or_build(998244353)
    forward = table.twiddles(4)
    inverse = table.twiddles(4, inverse=True)
    assert len(forward) == 8
    assert forward.tolist() == [table.zetas[4].pow(i).x for i in range(8)]
    assert inverse.tolist() == [table.zeta_invs[4].pow(i).x for i in range(8)]
    assert table.twiddles(4) is forward


def test_power_vector():
    assert power_vector(3, 7, 17).tolist() == [pow(3, i, 17) for i in range(7)]
    assert power_vector(5, 1, 17).tolist() == [1]
    assert power_vector(5, 0, 17).tolist() == []


def test_default_cache():
    table = get_or_build(2013265921)
    assert table is DEFAULT_CACHE.get_or_build(2013265921)
    assert table.root == 31
    assert table.max_level == 27
