"""
Steps of an equal division of the octave
"""
from __future__ import annotations
import math
from fractions import Fraction

from .cents import Cents, log2, ratio2cents


class Step:
    """
    A ratio mapped to its nearest step in an equal division of the octave

    Exactly one of ratio, step or log must be given

    Args:
        modulo: the number of divisions of the octave
        ratio: the ratio to map (a Ratio or any number)
        step: the step itself
        log: the log2 of the interval

    Example
    ~~~~~~~

        >>> s = Step(modulo=31, ratio=Fraction(3, 2))
        >>> s
        18\\31
        >>> s.efficiency()
        5.18
        >>> s.convert(12)
        7\\12
    """

    def __init__(self, modulo: int, ratio=None, step: int = None, log: float = None):
        from .ratio import ReducedRatio, asratio
        if modulo is None or modulo <= 0:
            raise ValueError(f"modulo must be a positive number, got {modulo}")
        if sum(x is not None for x in (ratio, step, log)) != 1:
            raise ValueError("One of ratio, step or log must be given")
        self.modulo = round(modulo)
        if ratio is not None:
            self.ratio = ReducedRatio(ratio)
            self.log = log2(asratio(ratio))
        elif step is not None:
            self.log = step / self.modulo
            self.ratio = ReducedRatio(2.0 ** self.log)
        else:
            self.log = float(log)
            self.ratio = ReducedRatio(2.0 ** self.log)
        self.step: int = round(self.modulo * self.log)
        self.tempered: float = 2 ** (self.step / self.modulo)

    def __repr__(self):
        return f"{self.step}\\{self.modulo}"

    def convert(self, modulo: int) -> Step:
        """ A new Step with the same interval mapped to a different modulo """
        return Step(modulo=modulo, log=self.log)

    def step_to_fraction(self) -> Fraction:
        return Fraction(self.tempered)

    def step_to_cents(self) -> Cents:
        """ The size of the step, in cents """
        return Cents(1200 * self.step / self.modulo)

    to_cents = step_to_cents

    def ratio_to_cents(self) -> Cents:
        """ The size of the interval, in cents """
        return Cents(self.log * 1200) if math.isfinite(self.log) else Cents(ratio2cents(self.ratio))

    def efficiency(self) -> Cents:
        """ Difference in cents between the interval and its step """
        return Cents(self.ratio_to_cents() - self.step_to_cents())

    def __add__(self, other) -> Step:
        other = other.step if isinstance(other, Step) else other
        return Step(modulo=self.modulo, step=(self.step + other) % self.modulo)

    def __eq__(self, other):
        if not isinstance(other, Step):
            return NotImplemented
        return self.modulo == other.modulo and self.step == other.step

    def __hash__(self):
        return hash((self.modulo, self.step))

    def __lt__(self, other: Step):
        return self.step / self.modulo < other.step / other.modulo
