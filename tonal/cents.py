"""
Conversions between ratios, log2 and cents

A cent is 1/1200 of an octave: ``cents(r) = 1200 * log2(r)``

Cents are always computed and compared at full precision. The precision
set in the config (``cents.precision``) only affects how they are shown.

Routines ending with suffix _np accept np arrays
"""
from __future__ import annotations
import math
import numbers
from fractions import Fraction

import numpy as np

from .config import config

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from typing import Union
    from .ratio import Ratio
    number_t = Union[int, float, Fraction]


CENT_SCALE = 1200.0


def _terms(ratio) -> tuple[int, int]:
    if hasattr(ratio, 'antecedent'):
        return ratio.antecedent, ratio.consequent
    if isinstance(ratio, float):
        if ratio < 0 or math.isnan(ratio):
            raise ValueError(f"Cannot convert {ratio} to cents")
        if math.isinf(ratio):
            return 1, 0
    f = Fraction(ratio)
    if f < 0:
        raise ValueError(f"Cannot convert a negative ratio to cents, got {ratio}")
    return f.numerator, f.denominator


def log2(ratio) -> float:
    """
    log2 of a ratio, computed on its integer terms

    Numerator and denominator are converted separately, so the result
    keeps its precision for ratios with huge terms. A zero numerator
    gives -inf, a zero denominator +inf
    """
    num, den = _terms(ratio)
    if num == 0:
        return -math.inf
    if den == 0:
        return math.inf
    return math.log2(num) - math.log2(den)


def ratio2cents(ratio) -> float:
    """
    Convert a ratio (a Ratio, Fraction, int or float) to cents

    Example::

        >>> ratio2cents(Fraction(3, 2))
        701.9550008653874
    """
    return log2(ratio) * CENT_SCALE


def cents2ratio(cents: float) -> float:
    """
    Convert cents to a (float) ratio

    Example::

        >>> cents2ratio(1200)
        2.0
    """
    return 2 ** (cents / CENT_SCALE)


def cents2log2(cents: float) -> float:
    return cents / CENT_SCALE


def log22cents(logarithm: float) -> float:
    return logarithm * CENT_SCALE


def within_cents(cents1: float, cents2: float, tolerance: float) -> bool:
    """
    True if two cents values are within the given tolerance

    The comparison uses the values as given, without rounding

    Example::

        >>> within_cents(100, 105, 2)
        False
        >>> within_cents(100, 101.5, 2)
        True
    """
    return abs(cents1 - cents2) <= tolerance


class Cents(float):
    """
    A value in cents

    A Cents is a float: it can be used wherever a number is expected
    and arithmetic on it returns plain floats. It is shown rounded to
    ``config['cents.precision']`` decimals

    Example
    ~~~~~~~

        >>> Cents(701.9550008653874)
        701.96
        >>> Cents.from_ratio(Fraction(3, 2)).nearest_hundredth()
        700.0
    """

    def __new__(cls, value: float = 0.):
        return super().__new__(cls, value)

    @classmethod
    def from_ratio(cls, ratio) -> Cents:
        return cls(ratio2cents(ratio))

    @classmethod
    def from_log2(cls, logarithm: float) -> Cents:
        return cls(log22cents(logarithm))

    @property
    def value(self) -> float:
        """ The full precision value """
        return float(self)

    def rounded(self, precision: int = None) -> float:
        if precision is None:
            precision = config['cents.precision']
        return round(float(self), precision)

    @property
    def log2(self) -> float:
        return cents2log2(float(self))

    @property
    def ratio(self) -> float:
        """ The ratio corresponding to this value, as float """
        return cents2ratio(float(self))

    def nearest_hundredth(self) -> Cents:
        """ The nearest multiple of 100 cents """
        return Cents(round(float(self), -2))

    def nearest_hundredth_difference(self) -> Cents:
        """ The distance to the nearest multiple of 100 cents """
        return Cents(float(self) - self.nearest_hundredth())

    def plus_minus(self, limit: float = None) -> tuple[Cents, Cents]:
        """ This value offset negatively and positively by limit """
        if limit is None:
            limit = config['cents.tolerance']
        return Cents(float(self) - limit), Cents(float(self) + limit)

    def __repr__(self):
        return repr(self.rounded())

    def __str__(self):
        return str(self.rounded())


def default_tolerance() -> Cents:
    """ The default cents tolerance, as set in the config """
    return Cents(config['cents.tolerance'])


def astolerance(tolerance) -> float:
    """
    Convert a tolerance (None, a number or a Cents) to a float

    None means the default tolerance
    """
    if tolerance is None:
        return float(config['cents.tolerance'])
    if isinstance(tolerance, bool) or not isinstance(tolerance, numbers.Real):
        raise TypeError(f"A cents tolerance must be a number, got {tolerance!r}")
    tolerance = float(tolerance)
    if math.isnan(tolerance) or tolerance < 0:
        raise ValueError(f"A cents tolerance must be a non negative number, got {tolerance}")
    return tolerance


def ratios2cents_np(numerators: np.ndarray, denominators: np.ndarray,
                    out: np.ndarray = None) -> np.ndarray:
    """
    vectorized version of ratio2cents

    numerators: an array of numerators
    denominators: an array of denominators (same shape as numerators)
    out: if given, put the result in out
    """
    nums = np.asarray(numerators, dtype=float)
    dens = np.asarray(denominators, dtype=float)
    with np.errstate(divide='ignore'):
        if out is None:
            out = np.log2(nums)
        else:
            np.log2(nums, out=out)
        out -= np.log2(dens)
    out *= CENT_SCALE
    return out


def cents2ratios_np(cents: np.ndarray, out: np.ndarray = None) -> np.ndarray:
    """
    Vectorized version of cents2ratio

    cents: an array of cents values
    out: if given, put the result here
    """
    if out is None:
        out = np.asarray(cents, dtype=float) / CENT_SCALE
    else:
        np.divide(cents, CENT_SCALE, out=out)
    out = np.power(2.0, out, out=out)
    return out
