import math
import random
from fractions import Fraction

import pytest

from tonal import Ratio, ReducedRatio, asratio
from tonal.ratio import superparticular, superpartient


def test_terms_are_kept_unreduced():
    r = Ratio(6, 4)
    assert repr(r) == '6/4'
    assert r == Ratio(3, 2)
    assert hash(r) == hash(Ratio(3, 2))
    assert len({Ratio(6, 4), Ratio(3, 2)}) == 1
    assert r.fraction == Fraction(3, 2)


def test_sign_is_discarded():
    assert repr(Ratio(-3, 2)) == '3/2'
    assert repr(Ratio(3, -2)) == '3/2'


def test_single_argument():
    assert repr(Ratio(1.5)) == '3/2'
    assert repr(Ratio("3/2")) == '3/2'
    assert repr(Ratio(Fraction(5, 4))) == '5/4'
    assert repr(Ratio(Ratio(6, 4))) == '6/4'
    assert repr(Ratio(3)) == '3/1'


def test_invalid_arguments():
    with pytest.raises(ValueError):
        Ratio("abc")
    with pytest.raises(TypeError):
        Ratio([1])
    with pytest.raises(TypeError):
        Ratio(None)
    with pytest.raises(TypeError):
        Ratio(3, "2")
    with pytest.raises(ValueError):
        Ratio(float('nan'))


def test_infinite_ratio():
    r = Ratio(3, 0)
    assert r.isinfinite
    assert float(r) == math.inf
    assert r > Ratio(1000, 1)
    assert r.to_cents() == math.inf
    with pytest.raises(ZeroDivisionError):
        r.fraction


def test_comparisons():
    assert Ratio(3, 2) == 1.5
    assert Ratio(3, 2) == Fraction(3, 2)
    assert Ratio(4, 3) < Ratio(3, 2) <= Ratio(6, 4)
    assert sorted([Ratio(3, 2), Ratio(5, 4), Ratio(9, 8)]) == [Ratio(9, 8), Ratio(5, 4), Ratio(3, 2)]


def test_cents():
    assert Ratio(3, 2).to_cents() == pytest.approx(701.955, abs=1e-3)
    assert repr(Ratio(3, 2).to_cents()) == '701.96'
    assert Ratio(2, 1).log(2) == 1.0


def test_reduced_ratio():
    assert repr(ReducedRatio(12, 2)) == '3/2'
    assert repr(ReducedRatio(1, 9)) == '16/9'
    assert ReducedRatio(2, 1) == 1
    assert repr(Ratio(1, 9).to_reduced_ratio()) == '16/9'
    assert repr(Ratio(48, 14).equave_reduce(3)) == '8/7'
    assert repr(ReducedRatio.identity()) == '1/1'


def test_reduced_ratio_arithmetic():
    r = ReducedRatio(3, 2) * Ratio(3, 2)
    assert isinstance(r, ReducedRatio)
    assert r == Fraction(9, 8)


def test_arithmetic():
    assert Ratio(3, 2) * Ratio(4, 3) == 2
    assert repr(Ratio(3, 2) * Ratio(4, 3)) == '12/6'
    assert Ratio(3, 2) / Ratio(5, 4) == Fraction(6, 5)
    assert repr(Ratio(3, 2) + Ratio(1, 3)) == '11/6'
    assert Ratio(3, 2) ** 2 == Fraction(9, 4)


def test_superparticular():
    assert repr(Ratio.superparticular(100)) == '101/100'
    assert repr(Ratio.superparticular(346, factor=Fraction(3, 2))) == '1041/692'
    assert repr(superparticular(346, factor=Fraction(3, 2), superpart='lower')) == '1038/694'
    assert repr(superpartient(23, summand=3)) == '26/23'
    assert repr(Ratio.superparticular(4, superpart='denominator')) == '4/5'
    with pytest.raises(ValueError):
        Ratio.superparticular(4, superpart='middle')


def test_ed():
    r = Ratio.ed(12, 1)
    assert repr(r) == '4771397596969315/4503599627370496'
    assert r.to_cents() == pytest.approx(100, abs=1e-9)
    assert str(r) == '1.06'


def test_random_ratio():
    a = Ratio.random_ratio(number_of_factors=3, rng=random.Random(42))
    b = Ratio.random_ratio(number_of_factors=3, rng=random.Random(42))
    assert a == b
    assert a.to_tuple() == b.to_tuple()
    assert a.within_prime(29)
    r = Ratio.random_ratio(within=7, reduced=True, rng=random.Random(1))
    assert isinstance(r, ReducedRatio)
    assert 1 <= r.fraction < 2
    assert r.within_prime(7)
    with pytest.raises(ValueError):
        Ratio.random_ratio(within=1)


def test_lattice_operations():
    r = Ratio(3, 2)
    assert repr(r.scale(32)) == '96/64'
    assert repr(r.scale(2, 3)) == '6/6'
    assert repr(r.translate(3, 3)) == '6/5'
    assert repr(r.shear(1, 3)) == '14/11'
    assert repr(r.mediant(Fraction(4, 3))) == '7/5'
    assert repr(r.invert()) == '2/3'
    assert repr(r.to_basic_ratio()) == '3/2'
    with pytest.raises(ValueError):
        r.scale(-1)


def test_primes():
    r = Ratio(31, 30)
    assert r.prime_divisions() == ([(31, 1)], [(2, 1), (3, 1), (5, 1)])
    assert r.max_prime() == 31
    assert r.min_prime() == 2
    assert Ratio(1, 1).max_prime() is None
    assert Ratio(3, 2).prime_vector() == [-1, 1]
    assert Ratio(7, 4).within_prime(None)
    assert not Ratio(7, 4).within_prime(5)
    assert Ratio(7, 4).within_prime(7)
    with pytest.raises(ValueError):
        Ratio(0, 1).prime_divisions()


def test_heights():
    assert ReducedRatio(3, 2).benedetti_height() == 6
    # heights are computed on the octave reduced terms
    assert Ratio(3, 1).benedetti_height() == 6
    assert ReducedRatio(3, 2).tenney_height() == pytest.approx(math.log2(6))
    assert ReducedRatio(3, 2).weil_height() == 3
    assert ReducedRatio(14, 9).wilson_height() == 13
    assert Ratio(1, 1).wilson_height() == 0


def test_measurements():
    assert Ratio(3, 2).step(12).step == 7
    assert ReducedRatio(3, 2).efficiency(12) == pytest.approx(-1.955, abs=1e-3)
    assert ReducedRatio(3, 2).cent_diff(Fraction(4, 3)) == pytest.approx(203.91, abs=1e-2)
    assert Ratio(5, 4).interval_with(Fraction(3, 2)).to_fraction() == Fraction(6, 5)


def test_label():
    r = Ratio(3, 2, label='fifth')
    assert str(r) == 'fifth'
    assert str(Ratio(3, 2)) == '3/2'


def test_approximate_is_cached():
    r = Ratio(3, 2)
    assert r.approximate is r.approximate
    assert r.approximate.ratio is r


def test_asratio():
    r = Ratio(3, 2)
    assert asratio(r) is r
    assert asratio("5/4") == Fraction(5, 4)
