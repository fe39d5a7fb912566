from fractions import Fraction

import pytest

from tonal import ContinuedFraction, Ratio
from tonal.continuedfraction import quotients, convergents


def test_semitone_expansion():
    cf = ContinuedFraction(2 ** (1/12), limit=12)
    assert cf.number == Fraction(4771397596969315, 4503599627370496)
    assert cf.quotients == [1, 16, 1, 4, 2, 7, 1, 1, 2, 2, 7, 4]
    assert cf.convergents[:10] == [(1, 1), (17, 16), (18, 17), (89, 84), (196, 185),
                                   (1461, 1379), (1657, 1564), (3118, 2943), (7893, 7450),
                                   (18904, 17843)]
    assert len(cf) == 12


def test_rational_terminates():
    cf = ContinuedFraction(Fraction(7, 4))
    assert cf.quotients == [1, 1, 3]
    assert cf.convergents == [(1, 1), (2, 1), (7, 4)]
    assert cf.convergents_as_fractions()[-1] == Fraction(7, 4)
    assert repr(cf) == 'ContinuedFraction([1; 1, 3])'


def test_integers():
    assert quotients(3) == [3]
    assert convergents(3) == [(3, 1)]
    assert convergents(0) == [(0, 1)]


def test_ratio_input():
    assert ContinuedFraction(Ratio(6, 4)).quotients == [1, 2]


def test_convergents_alternate_around_the_number():
    cf = ContinuedFraction(2 ** (6/19))
    x = cf.number
    for i, (num, den) in enumerate(cf.convergents[:-1]):
        if i % 2 == 0:
            assert Fraction(num, den) <= x
        else:
            assert Fraction(num, den) >= x


def test_invalid():
    with pytest.raises(ValueError):
        ContinuedFraction(-1)
    with pytest.raises(ValueError):
        ContinuedFraction(float('nan'))
    with pytest.raises(ValueError):
        ContinuedFraction(float('inf'))
    with pytest.raises(ValueError):
        ContinuedFraction(1.5, limit=0)
    with pytest.raises(ValueError):
        ContinuedFraction(Ratio(3, 0))
