"""
Exact musical ratios

A :class:`Ratio` is a pair antecedent/consequent of non-negative integers.
The pair is kept as given (``Ratio(6, 4)`` stays 6/4, which matters for
lattice operations like :meth:`Ratio.scale`), but equality, hashing and
ordering are by the reduced value, so ``Ratio(6, 4) == Ratio(3, 2)``.

A consequent of 0 represents an infinite ratio. The sign of the terms is
discarded at construction.

Example
~~~~~~~

    >>> from tonal.ratio import Ratio
    >>> r = Ratio(3, 2)
    >>> r.to_cents()
    701.96
    >>> r.approximate.by_superparticular(depth=2)
    3/2: [1044/694, 1041/692]
"""
from __future__ import annotations
import math
import numbers
import random
from fractions import Fraction

from . import numtheory
from .cents import Cents, ratio2cents, log2
from .config import config

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from typing import Union, Iterator
    from .approximation import Approximation
    from .interval import Interval
    from .step import Step
    ratio_t = Union['Ratio', int, float, Fraction, str]


__all__ = ("Ratio",
           "ReducedRatio",
           "asratio",
           "superparticular",
           "superpartient",
           "ed")


_SUPERPART_UPPER = {'upper', 'antecedent', 'numerator'}
_SUPERPART_LOWER = {'lower', 'consequent', 'denominator'}


def _isnumber(x) -> bool:
    return isinstance(x, numbers.Real) and not isinstance(x, bool)


def _asfraction(x) -> Fraction:
    if isinstance(x, Ratio):
        return x.fraction
    if isinstance(x, float):
        if math.isnan(x) or math.isinf(x):
            raise ValueError(f"Cannot convert {x} to a ratio")
    return Fraction(x)


def _parse_superpart(superpart: str) -> str:
    key = str(superpart).lower()
    if key in _SUPERPART_UPPER:
        return 'upper'
    if key in _SUPERPART_LOWER:
        return 'lower'
    raise ValueError(f"superpart should be one of {sorted(_SUPERPART_UPPER | _SUPERPART_LOWER)}, "
                     f"got {superpart!r}")


def _equave_reduce(num: int, den: int, equave: Fraction) -> tuple[int, int]:
    """
    Reduce num/den to the range [1, equave), returning the reduced terms
    """
    if den == 0:
        return num, 0
    if num == 0:
        return 0, den
    r = Fraction(num, den)
    if r == 1 or equave == 1:
        return r.numerator, r.denominator
    while r >= equave:
        r /= equave
    while r < 1:
        r *= equave
    return r.numerator, r.denominator


class Ratio:
    """
    An exact ratio antecedent/consequent

    Args:
        antecedent: the upper term. If consequent is not given this can be
            any number (int, Fraction, float), a str of the form "3/2" or
            another Ratio
        consequent: the lower term
        label: a label, used when showing the ratio
        equave: the interval of equivalence (default: the octave, 2/1)
    """

    __slots__ = ('antecedent', 'consequent', 'equave', '_label', '_approximation')

    def __init__(self, antecedent, consequent=None, label='', equave=2):
        if consequent is None:
            num, den = self._from_single(antecedent)
        else:
            if not (_isnumber(antecedent) or isinstance(antecedent, Ratio)):
                raise TypeError(f"Antecedent must be a number, got {antecedent!r}")
            if not (_isnumber(consequent) or isinstance(consequent, Ratio)):
                raise TypeError(f"Consequent must be a number or None, got {consequent!r}")
            if isinstance(antecedent, int) and isinstance(consequent, int):
                num, den = abs(antecedent), abs(consequent)
            elif _asfraction(consequent) == 0:
                num, den = abs(math.floor(_asfraction(antecedent))), 0
            else:
                f = abs(_asfraction(antecedent) / _asfraction(consequent))
                num, den = f.numerator, f.denominator
        self.antecedent: int = num
        self.consequent: int = den
        self.equave = _asfraction(equave)
        self._label = label
        self._approximation = None

    @staticmethod
    def _from_single(x) -> tuple[int, int]:
        if isinstance(x, Ratio):
            return x.antecedent, x.consequent
        if isinstance(x, str):
            try:
                f = Fraction(x.strip())
            except ValueError:
                raise ValueError(f"Could not parse {x!r} as a ratio")
        elif _isnumber(x):
            f = _asfraction(x)
        else:
            raise TypeError(f"Expected a number, a str or a Ratio, got {x!r}")
        f = abs(f)
        return f.numerator, f.denominator

    # ------------------------------------------------------
    # Constructors
    # ------------------------------------------------------

    @classmethod
    def superpartient(cls, n: int, summand: int, factor=1, superpart='upper') -> Ratio:
        """
        A ratio whose terms differ by summand, multiplied by factor

        The terms are not reduced, so the result keeps track of the
        superpartient it was built from

        Args:
            n: the inferior part
            summand: the difference between the superior and the inferior part
            factor: multiplied into the resulting ratio
            superpart: 'upper' if the superior part is the antecedent, 'lower'
                if it is the consequent

        Example::

            >>> Ratio.superpartient(23, summand=3)
            26/23
        """
        factor = _asfraction(factor)
        if _parse_superpart(superpart) == 'lower':
            return cls(n * factor.numerator, (n + summand) * factor.denominator)
        return cls((n + summand) * factor.numerator, n * factor.denominator)

    @classmethod
    def superparticular(cls, n: int, factor=1, superpart='upper') -> Ratio:
        """
        The ratio (n+1)/n (or n/(n+1) if superpart is 'lower') times factor

        Example::

            >>> Ratio.superparticular(100)
            101/100
            >>> Ratio.superparticular(346, factor=Fraction(3, 2))
            1041/692
        """
        return cls.superpartient(n, summand=1, factor=factor, superpart=superpart)

    @classmethod
    def ed(cls, modulo: int, step: float, equave=2) -> Ratio:
        """
        The ratio of step in an equal division of the equave

        Example::

            >>> Ratio.ed(12, 1)
            4771397596969315/4503599627370496
        """
        return cls(float(equave) ** (step / modulo), equave=equave)

    @classmethod
    def random_ratio(cls, number_of_factors=2, within=100, reduced=False,
                     rng: random.Random = None) -> Ratio:
        """
        A ratio built from random prime powers

        Each term is the product of number_of_factors powers p**e, with p
        one of the first ten primes up to within and e in 0..2

        Args:
            number_of_factors: the number of prime powers in each term
            within: the biggest prime allowed
            reduced: if True, return a ReducedRatio
            rng: the random generator to use (default: the random module)

        Example::

            >>> Ratio.random_ratio(within=7).within_prime(7)
            True
        """
        if within < 2:
            raise ValueError(f"within should be at least 2, got {within}")
        rng = rng or random
        primes = numtheory.primes_upto(within)[:10]
        num, den = 1, 1
        for _ in range(number_of_factors):
            num *= rng.choice(primes) ** rng.randint(0, 2)
            den *= rng.choice(primes) ** rng.randint(0, 2)
        outcls = ReducedRatio if reduced else cls
        return outcls(Fraction(num, den))

    # ------------------------------------------------------
    # Basic properties
    # ------------------------------------------------------

    @property
    def numerator(self) -> int:
        return self.antecedent

    @property
    def denominator(self) -> int:
        return self.consequent

    @property
    def isinfinite(self) -> bool:
        return self.consequent == 0

    @property
    def fraction(self) -> Fraction:
        """
        The exact value of this ratio. Raises ZeroDivisionError for an infinite ratio
        """
        if self.consequent == 0:
            raise ZeroDivisionError(f"The ratio {self} is infinite")
        return Fraction(self.antecedent, self.consequent)

    @property
    def label(self) -> str:
        """
        The label of this ratio if set. Otherwise "antecedent/consequent"
        or, for ratios with long terms, its float value
        """
        if self._label:
            return self._label
        if len(str(self.antecedent)) <= config['repr.maxRatioDigits']:
            return f"{self.antecedent}/{self.consequent}"
        return str(round(float(self), 2))

    @label.setter
    def label(self, value: str) -> None:
        self._label = value

    @property
    def approximate(self) -> Approximation:
        """
        The approximation engine bound to this ratio

        Example::

            >>> Ratio.ed(12, 1).approximate.by_quotient_walk(max_prime=89)
        """
        if self._approximation is None:
            from .approximation import Approximation
            self._approximation = Approximation(self)
        return self._approximation

    # ------------------------------------------------------
    # Conversions
    # ------------------------------------------------------

    def _value(self):
        if self.consequent == 0:
            return math.inf
        return Fraction(self.antecedent, self.consequent)

    def to_fraction(self) -> Fraction:
        return self.fraction

    def __float__(self) -> float:
        if self.consequent == 0:
            return math.inf
        return self.antecedent / self.consequent

    def __iter__(self) -> Iterator[int]:
        return iter((self.antecedent, self.consequent))

    def to_tuple(self) -> tuple[int, int]:
        return self.antecedent, self.consequent

    def to_cents(self) -> Cents:
        """
        The size of this ratio in cents

        Example::

            >>> Ratio(3, 2).to_cents()
            701.96
        """
        return Cents(ratio2cents(self))

    cents = to_cents

    def to_log2(self) -> float:
        return log2(self)

    def log(self, base=2) -> float:
        """ The logarithm of this ratio in the given base """
        return log2(self) / math.log2(base)

    def to_basic_ratio(self) -> Ratio:
        """ A plain Ratio with the same terms as self """
        return Ratio(self.antecedent, self.consequent, equave=self.equave)

    def fraction_reduce(self) -> Ratio:
        """
        A copy of self with its terms reduced

        Example::

            >>> Ratio(16, 14).fraction_reduce()
            8/7
        """
        if self.consequent == 0:
            return self.__class__(self.antecedent, 0, equave=self.equave)
        return self.__class__(self.fraction, equave=self.equave)

    def equave_reduce(self, equave=None) -> Ratio:
        """
        A copy of self reduced to lie within [1, equave)

        Example::

            >>> Ratio(48, 14).equave_reduce(3)
            8/7
        """
        equave = self.equave if equave is None else _asfraction(equave)
        num, den = _equave_reduce(self.antecedent, self.consequent, equave)
        return self.__class__(num, den, equave=self.equave)

    reduce = equave_reduce

    def to_reduced_ratio(self) -> ReducedRatio:
        """
        Example::

            >>> Ratio(1, 9).to_reduced_ratio()
            16/9
        """
        return ReducedRatio(self.antecedent, self.consequent, equave=self.equave)

    def step(self, modulo=12) -> Step:
        """
        The nearest step of self in the given equal division of the octave

        Example::

            >>> Ratio(3, 2).step(12)
            7\\12
        """
        from .step import Step
        return Step(modulo=modulo, ratio=self)

    def invert(self) -> Ratio:
        """ self with antecedent and consequent swapped """
        return self.__class__(self.consequent, self.antecedent, equave=self.equave)

    reflect = invert

    def mirror(self, axis=1) -> Ratio:
        """ The mirror of self around axis """
        axis = self.__class__(axis)
        return (axis ** 2) / self

    def negative(self) -> Ratio:
        """ The Ernst Levy negative of self """
        return self.__class__(Fraction(3, 2)) / self

    # ------------------------------------------------------
    # Ratio lattice. numerator is mapped on the x axis,
    # denominator on the y axis
    # ------------------------------------------------------

    def translate(self, x: int = 1, y: int = 0) -> Ratio:
        """
        self with antecedent and consequent translated by x and y

        Example::

            >>> Ratio(3, 2).translate(3, 3)
            6/5
        """
        if x < 0 or y < 0:
            raise ValueError(f"Arguments must be greater than zero, got {x}, {y}")
        return self.__class__(self.antecedent + x, self.consequent + y, equave=self.equave)

    def scale(self, a: int, b: int = None) -> Ratio:
        """
        self with antecedent scaled by a and consequent scaled by b

        The result is not reduced

        Example::

            >>> Ratio(3, 2).scale(2**5)
            96/64
        """
        if b is None:
            b = a
        if a < 0 or b < 0:
            raise ValueError(f"Arguments must be greater than zero, got {a}, {b}")
        return self.__class__(self.antecedent * a, self.consequent * b, equave=self.equave)

    def shear(self, a: int, b: int = None) -> Ratio:
        """
        self sheared by a (x axis) and b (y axis)

        Example::

            >>> Ratio(3, 2).shear(1, 3)
            14/11
        """
        if b is None:
            b = a
        if a < 0 or b < 0:
            raise ValueError(f"Arguments must be greater than zero, got {a}, {b}")
        x, y = self.antecedent, self.consequent
        # [[1, a], [0, 1]] * [[1, 0], [b, 1]] = [[1 + ab, a], [b, 1]]
        return self.__class__((1 + a*b)*x + a*y, b*x + y, equave=self.equave)

    def mediant(self, other) -> Ratio:
        """
        The mediant (Farey sum) of self and other

        Example::

            >>> Ratio(3, 2).mediant(Fraction(4, 3))
            7/5
        """
        other = asratio(other)
        return self.__class__(self.antecedent + other.antecedent,
                              self.consequent + other.consequent,
                              equave=self.equave)

    def planar_degrees(self) -> float:
        """ Angle of the point (antecedent, consequent) on the plane """
        return math.degrees(math.atan2(self.consequent, self.antecedent))

    def planar_radians(self) -> float:
        return math.atan2(self.consequent, self.antecedent)

    def period_degrees(self) -> float:
        """ Position of self within the equave, in degrees of a circle """
        return 360.0 * log2(self) / math.log2(self.equave)

    def period_radians(self) -> float:
        return 2 * math.pi * log2(self) / math.log2(self.equave)

    # ------------------------------------------------------
    # Primes and complexity
    # ------------------------------------------------------

    def prime_divisions(self) -> tuple[list[tuple[int, int]], list[tuple[int, int]]]:
        """
        The prime factorization of antecedent and consequent

        Example::

            >>> Ratio(31, 30).prime_divisions()
            ([(31, 1)], [(2, 1), (3, 1), (5, 1)])
        """
        if self.antecedent == 0 or self.consequent == 0:
            raise ValueError(f"Cannot factorize the terms of {self}")
        return (numtheory.prime_division(self.antecedent),
                numtheory.prime_division(self.consequent))

    def primes(self) -> list[int]:
        """ All primes in the factorization of self's terms, sorted """
        num, den = self.prime_divisions()
        return sorted({p for p, _ in num} | {p for p, _ in den})

    def prime_vector(self) -> list[int] | None:
        """
        Self as a vector of prime exponents (a monzo), or None for 1/1

        Example::

            >>> Ratio(3, 2).prime_vector()
            [-1, 1]
        """
        r = self.fraction
        num, den = Ratio(r).prime_divisions()
        if not num and not den:
            return None
        maxp = max(p for p, _ in num + den)
        primes = numtheory.primes_upto(maxp)
        vector = [0] * len(primes)
        for p, exp in num:
            vector[primes.index(p)] = exp
        for p, exp in den:
            vector[primes.index(p)] = -exp
        return vector

    monzo = prime_vector

    def max_prime(self) -> int | None:
        """
        The biggest prime factor of antecedent or consequent

        Returns None if both terms are 1

        Example::

            >>> Ratio(31, 30).max_prime()
            31
        """
        primes = self.primes()
        return primes[-1] if primes else None

    def min_prime(self) -> int | None:
        """
        The smallest prime factor of antecedent or consequent

        Example::

            >>> Ratio(31, 30).min_prime()
            2
        """
        primes = self.primes()
        return primes[0] if primes else None

    def within_prime(self, max_prime: int | None) -> bool:
        """
        True if no prime factor of self's terms is bigger than max_prime

        Args:
            max_prime: the upper bound. None means unbounded
        """
        if max_prime is None:
            return True
        maxp = self.max_prime()
        return maxp is None or maxp <= max_prime

    def _reduced_terms(self) -> tuple[int, int]:
        return _equave_reduce(self.antecedent, self.consequent, self.equave)

    def benedetti_height(self) -> int:
        """
        The product complexity of the equave reduced ratio

        Example::

            >>> ReducedRatio(3, 2).benedetti_height()
            6
        """
        num, den = self._reduced_terms()
        return num * den

    product_complexity = benedetti_height

    def tenney_height(self) -> float:
        """
        log2 of the Benedetti height

        Example::

            >>> round(ReducedRatio(3, 2).tenney_height(), 2)
            2.58
        """
        return math.log2(self.benedetti_height())

    log_product_complexity = tenney_height
    harmonic_distance = tenney_height

    def weil_height(self) -> int:
        """
        The biggest of the equave reduced terms

        Example::

            >>> ReducedRatio(3, 2).weil_height()
            3
        """
        return max(self._reduced_terms())

    def log_weil_height(self) -> float:
        return math.log2(self.weil_height())

    def wilson_height(self, prime_rejects=(2,)) -> int:
        """
        Sum of the prime factors of the Benedetti height times their exponents,
        leaving out the primes in prime_rejects

        Example::

            >>> ReducedRatio(14, 9).wilson_height()
            13
        """
        height = self.benedetti_height()
        if height == 1:
            return 0
        return sum(p * exp for p, exp in numtheory.prime_division(height)
                   if p not in prime_rejects)

    # ------------------------------------------------------
    # Measurements
    # ------------------------------------------------------

    def cent_diff(self, other) -> Cents:
        """
        Cents difference between self and other

        Example::

            >>> ReducedRatio(3, 2).cent_diff(Fraction(4, 3))
            203.91
        """
        return Cents(ratio2cents(self) - ratio2cents(asratio(other)))

    def efficiency(self, modulo: int) -> Cents:
        """
        Cents difference between self's nearest step in the given modulo and self

        Example::

            >>> ReducedRatio(3, 2).efficiency(12)
            -1.96
        """
        return Cents(-self.step(modulo).efficiency())

    def interval_with(self, upper, lower=None) -> Interval:
        """
        The Interval between self (lower) and the given ratio (upper)
        """
        from .interval import Interval
        upper = self.__class__(upper, lower, equave=self.equave) if lower is not None else asratio(upper)
        return Interval(upper, self)

    def cents_difference_with(self, upper, lower=None) -> Cents:
        return self.interval_with(upper, lower).to_cents()

    def div_times(self, other) -> tuple[Ratio, Ratio]:
        other = asratio(other)
        return self / other, self * other

    def plus_minus(self, other) -> tuple[Ratio, Ratio]:
        other = asratio(other)
        return self - other, self + other

    def difference(self) -> int:
        return self.antecedent - self.consequent

    def combination(self) -> int:
        return self.antecedent + self.consequent

    # ------------------------------------------------------
    # Dunder methods
    # ------------------------------------------------------

    def __repr__(self):
        return f"{self.antecedent}/{self.consequent}"

    def __str__(self):
        return self.label

    def __hash__(self):
        return hash(self._value())

    def _othervalue(self, other):
        if isinstance(other, Ratio):
            return other._value()
        if _isnumber(other):
            if isinstance(other, float):
                return other if math.isinf(other) or math.isnan(other) else Fraction(other)
            return Fraction(other)
        return NotImplemented

    def __eq__(self, other):
        value = self._othervalue(other)
        if value is NotImplemented:
            return NotImplemented
        return self._value() == value

    def __lt__(self, other):
        value = self._othervalue(other)
        if value is NotImplemented:
            return NotImplemented
        return self._value() < value

    def __le__(self, other):
        value = self._othervalue(other)
        if value is NotImplemented:
            return NotImplemented
        return self._value() <= value

    def __gt__(self, other):
        value = self._othervalue(other)
        if value is NotImplemented:
            return NotImplemented
        return self._value() > value

    def __ge__(self, other):
        value = self._othervalue(other)
        if value is NotImplemented:
            return NotImplemented
        return self._value() >= value

    def _resultclass(self, other) -> type:
        if isinstance(self, ReducedRatio) or isinstance(other, ReducedRatio):
            return ReducedRatio
        return Ratio

    def _operate(self, other, op: str) -> Ratio:
        if not isinstance(other, Ratio):
            if not _isnumber(other):
                return NotImplemented
            other = Ratio(other)
        cls = self._resultclass(other)
        a, b = self.antecedent, self.consequent
        c, d = other.antecedent, other.consequent
        if op == '*':
            return cls(a * c, b * d, equave=self.equave)
        elif op == '/':
            return cls(a * d, b * c, equave=self.equave)
        elif op == '+' or op == '-':
            lcm = math.lcm(b, d)
            left = a * (lcm // b)
            right = c * (lcm // d)
            result = left + right if op == '+' else left - right
            return cls(abs(result), lcm, equave=self.equave)
        raise ValueError(f"Unknown operation {op}")

    def __mul__(self, other):
        return self._operate(other, '*')

    def __rmul__(self, other):
        return self._operate(other, '*')

    def __truediv__(self, other):
        return self._operate(other, '/')

    def __rtruediv__(self, other):
        if not _isnumber(other):
            return NotImplemented
        return Ratio(other)._operate(self, '/')

    def __add__(self, other):
        return self._operate(other, '+')

    def __radd__(self, other):
        return self._operate(other, '+')

    def __sub__(self, other):
        return self._operate(other, '-')

    def __rsub__(self, other):
        if not _isnumber(other):
            return NotImplemented
        return Ratio(other)._operate(self, '-')

    def __pow__(self, exponent):
        exponent = _asfraction(exponent)
        if exponent.denominator == 1:
            return self.__class__(self.fraction ** int(exponent), equave=self.equave)
        return self.__class__(float(self.fraction) ** float(exponent), equave=self.equave)


class ReducedRatio(Ratio):
    """
    A Ratio reduced to lie within the equave (by default the octave)

    Example::

        >>> ReducedRatio(12, 2)
        3/2
        >>> ReducedRatio(1, 9)
        16/9
    """

    __slots__ = ()

    def __init__(self, antecedent, consequent=None, label='', equave=2):
        super().__init__(antecedent, consequent, label=label, equave=equave)
        self.antecedent, self.consequent = _equave_reduce(self.antecedent, self.consequent,
                                                          self.equave)

    @classmethod
    def identity(cls) -> ReducedRatio:
        return cls(1, 1)

    def interval_with(self, upper, lower=None) -> Interval:
        from .interval import Interval
        upper = asratio(upper) if lower is None else Ratio(upper, lower)
        if not isinstance(upper, ReducedRatio):
            upper = ReducedRatio(upper, equave=self.equave)
        return Interval(upper, self)


def asratio(x, equave=2) -> Ratio:
    """
    Convert x to a Ratio if it is not already one

    Accepts a Ratio, an int, a Fraction, a float or a str like "3/2".
    Anything else raises TypeError
    """
    if isinstance(x, Ratio):
        return x
    return Ratio(x, equave=equave)


def superparticular(n: int, factor=1, superpart='upper') -> Ratio:
    """ Shortcut for Ratio.superparticular """
    return Ratio.superparticular(n, factor=factor, superpart=superpart)


def superpartient(n: int, summand: int, factor=1, superpart='upper') -> Ratio:
    """ Shortcut for Ratio.superpartient """
    return Ratio.superpartient(n, summand=summand, factor=factor, superpart=superpart)


def ed(modulo: int, step: float, equave=2) -> Ratio:
    """ Shortcut for Ratio.ed """
    return Ratio.ed(modulo, step, equave=equave)
