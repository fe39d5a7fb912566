"""
Extended ratios: chords as a series of partials

An extended ratio like 4:5:6 is a set of partials of a common fundamental
(harmonic domain). Its subharmonic counterpart expresses the same chord as
divisions of a common string length: 6:5:4 is 1/6, 1/5, 1/4.

Example
~~~~~~~

    >>> er = ExtendedRatio(partials=[4, 5, 6])
    >>> er.ratios()
    [1/1, 5/4, 3/2]
    >>> er.to_subharmonic_extended_ratio()
    15:12:10
"""
from __future__ import annotations
import math
from fractions import Fraction

from .interval import Interval
from .ratio import Ratio, ReducedRatio, _asfraction

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from typing import Iterable, Iterator


__all__ = ("ExtendedRatio",
           "SubharmonicExtendedRatio")


class _ExtendableRatio:
    """
    Base class of the harmonic and subharmonic extended ratios

    Exactly one of partials or ratios must be given

    Args:
        partials: the partials of the chord (ints or fractions, in any order)
        ratios: the ratios of each note to the first one
    """

    def __init__(self, partials: Iterable = None, ratios: Iterable = None):
        if partials is not None and ratios is not None:
            raise ValueError("Provide either partials or ratios, not both")
        if partials is None and ratios is None:
            raise ValueError("Provide either partials or ratios")
        if partials is not None:
            self.partials = self._initialize(list(partials))
        else:
            ratios = [_asfraction(r) for r in ratios]
            first = ratios[0]
            self.partials = self._initialize([r * first for r in ratios])

    def _initialize(self, values: list) -> list:
        raise NotImplementedError

    def _display(self) -> list:
        raise NotImplementedError

    def ratios(self, reduced=True) -> list[Ratio]:
        """
        The ratio of each partial to the first one

        Args:
            reduced: if True, the ratios are reduced to the octave
        """
        cls = ReducedRatio if reduced else Ratio
        first = self.partials[0]
        return [cls(n, first) for n in self.partials]

    def interval_between(self, index1: int, index2: int, reduced=True) -> Interval | None:
        """
        The interval between two partials, or None if an index is out of range

        Example::

            >>> ExtendedRatio(partials=[4, 5, 6]).interval_between(0, 2)
            3/2 (3/2 / 1/1)
        """
        try:
            p1, p2 = self.partials[index1], self.partials[index2]
        except IndexError:
            return None
        cls = ReducedRatio if reduced else Ratio
        first = self.partials[0]
        return Interval(cls(p2, first), cls(p1, first))

    def switch_domain(self, domain: str) -> _ExtendableRatio:
        """
        The same chord in the given domain, 'harmonic' or 'subharmonic'
        """
        if domain == 'harmonic':
            cls = ExtendedRatio
        elif domain == 'subharmonic':
            cls = SubharmonicExtendedRatio
        else:
            raise ValueError(f"Unknown domain: {domain!r}, expected 'harmonic' or 'subharmonic'")
        return cls(ratios=[r.fraction for r in self.ratios()])

    switch_to = switch_domain

    def __len__(self) -> int:
        return len(self.partials)

    def __iter__(self) -> Iterator:
        return iter(self.partials)

    def __getitem__(self, idx):
        return self.partials[idx]

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.partials == other.partials

    def __hash__(self):
        return hash((type(self).__name__, tuple(self.partials)))

    def __repr__(self):
        return ":".join(str(x) for x in self._display())


class ExtendedRatio(_ExtendableRatio):
    """
    A chord as partials of a common fundamental

    The partials are scaled to the smallest integers and sorted

    Example::

        >>> ExtendedRatio(ratios=[1, Fraction(5, 4), Fraction(3, 2)])
        4:5:6
        >>> ExtendedRatio(partials=[60, 70, 84, 105]).ratios()
        [1/1, 7/6, 7/5, 7/4]
    """

    def _initialize(self, values: list) -> list[int]:
        values = [_asfraction(v) for v in values]
        lcm = math.lcm(*(v.denominator for v in values))
        return sorted(int(v * lcm) for v in values)

    def _display(self) -> list:
        return self.partials

    def to_subharmonic_extended_ratio(self) -> SubharmonicExtendedRatio:
        """
        Example::

            >>> ExtendedRatio(partials=[4, 5, 6]).to_subharmonic_extended_ratio().partials
            [Fraction(1, 15), Fraction(1, 12), Fraction(1, 10)]
        """
        return self.switch_to('subharmonic')

    to_sefr = to_subharmonic_extended_ratio


class SubharmonicExtendedRatio(_ExtendableRatio):
    """
    A chord as divisions of a common length

    Integer partials n are taken as the subharmonics 1/n. The partials are
    kept as fractions, sorted

    Example::

        >>> SubharmonicExtendedRatio(partials=[4, 5, 6, 7]).ratios()
        [1/1, 7/6, 7/5, 7/4]
        >>> SubharmonicExtendedRatio(partials=[105, 84, 70, 60]).to_extended_ratio()
        4:5:6:7
    """

    def _initialize(self, values: list) -> list[Fraction]:
        fractions = [v if isinstance(v, int) else _asfraction(v) for v in values]
        lcm = math.lcm(*(v.numerator for v in fractions))
        out = [Fraction(1, v) if isinstance(v, int) else v / lcm for v in fractions]
        return sorted(out)

    def _display(self) -> list:
        out = []
        for partial in self.partials:
            r = 1 / partial
            out.append(r.numerator if r.denominator == 1 else round(float(r), 2))
        return out

    def to_extended_ratio(self) -> ExtendedRatio:
        return self.switch_to('harmonic')

    to_efr = to_extended_ratio
