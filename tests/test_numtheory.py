import pytest

from tonal import numtheory


def test_isprime():
    assert numtheory.isprime(2)
    assert numtheory.isprime(97)
    assert not numtheory.isprime(1)
    assert not numtheory.isprime(0)
    assert not numtheory.isprime(91)
    assert numtheory.isprime(2**61 - 1)
    assert not numtheory.isprime(2**61 + 1)


def test_primes_upto():
    assert numtheory.primes_upto(20) == [2, 3, 5, 7, 11, 13, 17, 19]


def test_factorize():
    assert numtheory.factorize(360) == {2: 3, 3: 2, 5: 1}
    assert numtheory.factorize(1) == {}
    assert numtheory.prime_division(30) == [(2, 1), (3, 1), (5, 1)]
    with pytest.raises(ValueError):
        numtheory.factorize(0)


def test_factorize_big_semiprime():
    # both factors are beyond the trial division limit
    assert numtheory.factorize(1000003 * 1000033) == {1000003: 1, 1000033: 1}
    assert numtheory.factorize(4503599627370496) == {2: 52}


def test_max_min_prime_factor():
    assert numtheory.max_prime_factor(7254) == 31
    assert numtheory.min_prime_factor(7254) == 2
    assert numtheory.max_prime_factor(1) is None
