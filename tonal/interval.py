from __future__ import annotations
import math
from fractions import Fraction

from .cents import Cents, ratio2cents


class Interval:
    """
    The interval between two ratios

    Args:
        upper: the upper ratio
        lower: the lower ratio

    Example::

        >>> i = Interval(Fraction(3, 2), Fraction(5, 4))
        >>> i
        6/5 (3/2 / 5/4)
        >>> i.normalize()
        [5/4, 6/4]
    """

    def __init__(self, upper, lower):
        from .ratio import asratio
        self.upper = asratio(upper)
        self.lower = asratio(lower)
        self.interval = self.upper / self.lower

    @property
    def antecedent(self) -> int:
        return self.interval.antecedent

    @property
    def consequent(self) -> int:
        return self.interval.consequent

    def to_fraction(self) -> Fraction:
        return self.interval.fraction

    def to_cents(self) -> Cents:
        return Cents(ratio2cents(self.interval))

    def to_list(self) -> list:
        return [self.lower, self.upper]

    def normalize(self) -> list:
        """
        Lower and upper ratio expressed over their common denominator
        """
        from .ratio import Ratio
        lower, upper = self.lower.fraction, self.upper.fraction
        lcm = math.lcm(lower.denominator, upper.denominator)
        return [Ratio(lcm // r.denominator * r.numerator, lcm) for r in (lower, upper)]

    def __repr__(self):
        return (f"{self.interval.fraction.numerator}/{self.interval.fraction.denominator} "
                f"({self.upper!r} / {self.lower!r})")

    def __eq__(self, other):
        if not isinstance(other, Interval):
            return NotImplemented
        return self.interval == other.interval

    def __hash__(self):
        return hash(self.interval)

    def __lt__(self, other: Interval):
        return self.interval < other.interval
