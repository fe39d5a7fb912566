"""
Continued fraction expansion of a real number

The expansion is computed in exact rational arithmetic: a float is taken
at its exact binary value (``Fraction(float)``), so the partial quotients
never drift because of rounding, and a rational input terminates as soon
as its expansion does.

Example
~~~~~~~

    >>> cf = ContinuedFraction(2 ** (1/12), limit=6)
    >>> cf.quotients
    [1, 16, 1, 4, 2, 7]
    >>> cf.convergents
    [(1, 1), (17, 16), (18, 17), (89, 84), (196, 185), (1461, 1379)]
"""
from __future__ import annotations
import math
from fractions import Fraction


class ContinuedFraction:
    """
    The first partial quotients and convergents of a non negative number

    Args:
        number: the number to expand (int, float, Fraction or anything
            with numerator/denominator, like a Ratio)
        limit: the max. number of partial quotients to compute

    Attributes:
        number: the number as an exact Fraction
        limit: the limit given
        quotients: the partial quotients [a0, a1, ...], at most limit
        convergents: the convergents as (numerator, denominator) pairs,
            one per quotient, ordered by increasing accuracy
    """

    def __init__(self, number, limit=10):
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValueError(f"limit must be a positive int, got {limit!r}")
        self.number = _asfraction(number)
        if self.number < 0:
            raise ValueError(f"Only non negative numbers can be expanded, got {number}")
        self.limit = limit
        self.quotients = _quotients(self.number, limit)
        self.convergents = _convergents(self.quotients)

    def convergents_as_fractions(self) -> list[Fraction]:
        return [Fraction(num, den) for num, den in self.convergents]

    def __len__(self) -> int:
        return len(self.quotients)

    def __repr__(self):
        if not self.quotients:
            return "ContinuedFraction([])"
        head, *tail = self.quotients
        return f"ContinuedFraction([{head}; {', '.join(map(str, tail))}])"


def _asfraction(number) -> Fraction:
    if isinstance(number, Fraction):
        return number
    if isinstance(number, float):
        if math.isnan(number) or math.isinf(number):
            raise ValueError(f"Cannot expand {number}")
        return Fraction(number)
    if hasattr(number, 'antecedent'):
        if number.consequent == 0:
            raise ValueError(f"Cannot expand an infinite ratio ({number!r})")
        return Fraction(number.antecedent, number.consequent)
    return Fraction(number)


def _quotients(x: Fraction, limit: int) -> list[int]:
    num, den = x.numerator, x.denominator
    out = []
    while den and len(out) < limit:
        q, r = divmod(num, den)
        out.append(q)
        num, den = den, r
    return out


def _convergents(quotients: list[int]) -> list[tuple[int, int]]:
    h0, h1 = 0, 1
    k0, k1 = 1, 0
    out = []
    for a in quotients:
        h0, h1 = h1, a * h1 + h0
        k0, k1 = k1, a * k1 + k0
        out.append((h1, k1))
    return out


def quotients(number, limit=10) -> list[int]:
    """ The first partial quotients of number """
    return ContinuedFraction(number, limit).quotients


def convergents(number, limit=10) -> list[tuple[int, int]]:
    """ The first convergents of number, as (numerator, denominator) pairs """
    return ContinuedFraction(number, limit).convergents
