"""
Primality and prime factorization for the integers found in ratios

The primality test is the strong pseudo-prime machinery of NZMATH,
extended with a fixed set of Miller-Rabin bases so that it covers
the 64 bit range (and far beyond) deterministically. Factorization
uses trial division by small primes followed by Pollard's rho
(Brent's variant), so numerators and denominators of deep continued
fraction convergents can still be decomposed.
"""
from __future__ import annotations
import math
from math import gcd
from typing import Iterator as Iter, Tuple

PRIMES_LE_31 = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31)
PRIMONIAL_31 = 200560490130

# Testing against these bases is deterministic for n < 3.3 * 10**24
_MR_BASES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41)

_TRIAL_LIMIT = 1000


def vp(n:int, p:int, k=0) -> Tuple[int, int]:
    """
    Return p-adic valuation and indivisible part of given integer.

    For example:
    >>> vp(100, 2)
    (2, 25)

    That means, 100 is 2 times divisible by 2, and the factor 25 of
    100 is indivisible by 2.

    The optional argument k will be added to the valuation.
    """
    q = p
    while not (n % q):
        k += 1
        q *= p
    return (k, n // (q // p))


def spsp(n:int, base:int, s:int=None, t:int=None) -> bool:
    """
    Strong Pseudo-Prime test.  Optional third and fourth argument
    s and t are the numbers such that n-1 = 2**s * t and t is odd.
    """
    if s is None or t is None:
        s, t = vp(n-1, 2)
    z = pow(base, t, n)
    if z != 1 and z != n-1:
        j = 0
        while j < s:
            j += 1
            z = pow(z, 2, n)
            if z == n-1:
                break
        else:
            return False
    return True


def trial_division(n:int, bound:int=0) -> bool:
    """
    Trial division primality test for an odd natural number.
    Optional second argument is a search bound of primes.
    If the bound is given and less than the sqaure root of n
    and True is returned, it only means there is no prime factor
    less than the bound.
    """
    if bound:
        m = min(bound, math.isqrt(n))
    else:
        m = math.isqrt(n)
    for p in range(3, m+1, 2):
        if not (n % p):
            return False
    return True


def isprime(n:int) -> bool:
    """
    Return True iff n is prime.

    Small numbers are checked by trial division, bigger ones with
    strong pseudo-prime tests against a fixed set of bases
    """
    if int(n) != n:
        raise ValueError(f"non-integer for isprime(): {n}")
    n = int(n)
    if n <= 1:
        return False
    if gcd(n, PRIMONIAL_31) > 1:
        return n in PRIMES_LE_31
    if n < 2000000:
        return trial_division(n)
    s, t = vp(n - 1, 2)
    return all(spsp(n, base, s, t) for base in _MR_BASES)


def primes_generator() -> Iter[int]:
    """
    Generate primes from 2 to infinity.
    """
    yield 2
    yield 3
    yield 5
    coprimeTo30 = (7, 11, 13, 17, 19, 23, 29, 31)
    times30 = 0
    while True:
        for i in coprimeTo30:
            if isprime(i + times30):
                yield i + times30
        times30 += 30


def primes_upto(n: int) -> list[int]:
    """
    All primes <= n

    Example::

        >>> primes_upto(20)
        [2, 3, 5, 7, 11, 13, 17, 19]
    """
    out = []
    for p in primes_generator():
        if p > n:
            break
        out.append(p)
    return out


def _pollard_brent(n: int) -> int:
    """
    Find a non-trivial factor of the odd composite n
    """
    if n % 2 == 0:
        return 2
    c = 1
    while True:
        y, r, q = 2, 1, 1
        g = 1
        m = 128
        x = ys = y
        while g == 1:
            x = y
            for _ in range(r):
                y = (y * y + c) % n
            k = 0
            while k < r and g == 1:
                ys = y
                for _ in range(min(m, r - k)):
                    y = (y * y + c) % n
                    q = q * abs(x - y) % n
                g = gcd(q, n)
                k += m
            r *= 2
        if g == n:
            g = 1
            while g == 1:
                ys = (ys * ys + c) % n
                g = gcd(abs(x - ys), n)
        if g != n:
            return g
        # unlucky constant, retry with the next one
        c += 1


def factorize(n: int) -> dict[int, int]:
    """
    Prime factorization of n as a dict {prime: exponent}

    Args:
        n: a positive integer. 1 has no prime factors

    Returns:
        a dict mapping each prime factor to its exponent, sorted by prime

    Example::

        >>> factorize(360)
        {2: 3, 3: 2, 5: 1}
    """
    if int(n) != n:
        raise ValueError(f"non-integer for factorize(): {n}")
    n = int(n)
    if n < 1:
        raise ValueError(f"Only positive integers can be factorized, got {n}")
    factors: dict[int, int] = {}
    for p in (2, 3, 5):
        if n % p == 0:
            k, n = vp(n, p)
            factors[p] = k
    p = 7
    while p <= _TRIAL_LIMIT and p * p <= n:
        if n % p == 0:
            k, n = vp(n, p)
            factors[p] = k
        p += 2
    if n > 1:
        stack = [n]
        while stack:
            m = stack.pop()
            if m == 1:
                continue
            if isprime(m):
                factors[m] = factors.get(m, 0) + 1
                continue
            d = _pollard_brent(m)
            stack.append(d)
            stack.append(m // d)
    return dict(sorted(factors.items()))


def prime_division(n: int) -> list[tuple[int, int]]:
    """
    Prime factorization of n as a list of (prime, exponent) pairs

    Example::

        >>> prime_division(30)
        [(2, 1), (3, 1), (5, 1)]
    """
    return list(factorize(n).items())


def max_prime_factor(n: int) -> int | None:
    """
    The biggest prime factor of n, or None if n == 1
    """
    factors = factorize(n)
    return max(factors) if factors else None


def min_prime_factor(n: int) -> int | None:
    """
    The smallest prime factor of n, or None if n == 1
    """
    factors = factorize(n)
    return min(factors) if factors else None
