"""
Rational approximations of a ratio

Given a target ratio (possibly the float value of an irrational interval,
like a step of an equal division of the octave) search for simple ratios
within a cents tolerance of it, optionally limited to a max. prime.

Five strategies are provided, all methods of :class:`Approximation`:

* by_continued_fraction: the convergents of the continued fraction
* by_quotient_walk: the fraction tree nodes visited following the
  continued fraction quotients
* by_tree_path: the fraction tree nodes on the path from the root
  to the target
* by_superparticular: superparticular ratios multiplied by the target
* by_neighborhood: points of the integer lattice around scaled copies
  of the target

Each returns an :class:`ApproximationSet`, which holds the accepted ratios
without duplicates (by value), ordered by value.

Example
~~~~~~~

    >>> from tonal.ratio import Ratio
    >>> semitone = Ratio.ed(12, 1)
    >>> semitone.approximate.by_quotient_walk(max_prime=89)
    4771397596969315/4503599627370496: [18/17, 196/185, 89/84, 71/67, 53/50, 35/33, 17/16]
    >>> Ratio(3, 2).approximate.by_neighborhood(max_prime=23, max_boundary=10, max_scale=60)
    3/2: [175/117, 176/117]
"""
from __future__ import annotations
import logging
import time

import numpy as np
import tabulate

from .cents import ratio2cents, ratios2cents_np, within_cents, astolerance
from .config import config
from .continuedfraction import ContinuedFraction
from .fractiontree import FractionTree
from . import numtheory
from .ratio import Ratio, ReducedRatio, _parse_superpart

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from typing import Callable, Iterable, Iterator, Any


logger = logging.getLogger("tonal.approximation")


__all__ = ("Approximation",
           "ApproximationSet",
           "neighbors",
           "NotFoundError",
           "SearchTimeout",
           "DEFAULT_DEPTH",
           "DEFAULT_SUPERPARTICULAR_DEPTH",
           "DEFAULT_MAX_GRID_SCALE",
           "DEFAULT_MAX_GRID_BOUNDARY")


DEFAULT_DEPTH = 10
DEFAULT_SUPERPARTICULAR_DEPTH = 20
DEFAULT_MAX_GRID_SCALE = 100
DEFAULT_MAX_GRID_BOUNDARY = 5


class NotFoundError(ValueError):
    pass


class SearchTimeout(TimeoutError):
    pass


def _checkint(name: str, value, optional=False, minimum=1) -> None:
    if value is None and optional:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} should be an int, got {value!r}")
    if value < minimum:
        raise ValueError(f"{name} should be >= {minimum}, got {value}")


def _within_prime(n: int, max_prime: int | None) -> bool:
    if max_prime is None or n == 1:
        return True
    return numtheory.max_prime_factor(n) <= max_prime


def neighbors(vicinity, away: int = 1) -> list[Ratio]:
    """
    The lattice points around vicinity

    A ratio a/b is seen as the point (a, b) of the integer lattice. The
    neighbors are the point itself plus the 8 points at a chebyshev
    distance of away, in this order::

        (a, b), (a+k, b), (a-k, b), (a, b+k), (a, b-k),
        (a+k, b+k), (a+k, b-k), (a-k, b+k), (a-k, b-k)

    The terms are not reduced and negative coordinates are folded back
    (a Ratio discards the sign of its terms), so points at the border
    can repeat each other

    Args:
        vicinity: a Ratio or a tuple (antecedent, consequent)
        away: the distance of the neighbors

    Returns:
        a list of 9 ratios, of the same class as vicinity

    Example::

        >>> neighbors(Ratio(3, 2), away=2)
        [3/2, 5/2, 1/2, 3/4, 3/0, 5/4, 5/0, 1/4, 1/0]
    """
    if isinstance(vicinity, tuple):
        vicinity = Ratio(*vicinity)
    elif not isinstance(vicinity, Ratio):
        raise TypeError(f"vicinity should be a Ratio or a tuple (antecedent, consequent), "
                        f"got {vicinity!r}")
    _checkint('away', away, minimum=0)
    cls = vicinity.__class__
    a, b = vicinity.antecedent, vicinity.consequent
    k = away
    return [vicinity,
            cls(a + k, b),
            cls(a - k, b),
            cls(a, b + k),
            cls(a, b - k),
            cls(a + k, b + k),
            cls(a + k, b - k),
            cls(a - k, b + k),
            cls(a - k, b - k)]


class ApproximationSet:
    """
    The ratios found approximating a target ratio

    The set holds each value only once: adding a ratio which is equal
    in value to one already present (6/4 after 3/2) does nothing, the
    first representation is kept. Entries are ordered by value, unless
    the set was created by :meth:`sort_by`

    Args:
        ratio: the target ratio
        key: if given, a function used to order the entries
    """

    def __init__(self, ratio: Ratio, key: Callable[[Ratio], Any] = None):
        self.ratio = ratio
        self.key = key
        self._ratios: dict[Ratio, Ratio] = {}
        self._entries: list[Ratio] | None = None

    def add(self, ratio: Ratio) -> bool:
        """
        Add a ratio to this set

        Returns:
            True if the ratio was added, False if a ratio with the same
            value was already present
        """
        if ratio in self._ratios:
            return False
        self._ratios[ratio] = ratio
        self._entries = None
        return True

    @property
    def entries(self) -> list[Ratio]:
        """ The ratios in this set, as a list (a copy) """
        if self._entries is None:
            entries = sorted(self._ratios.values())
            if self.key is not None:
                entries.sort(key=self.key)
            self._entries = entries
        return list(self._entries)

    approximations = entries

    def to_list(self) -> list[Ratio]:
        return self.entries

    def sort_by(self, key: Callable[[Ratio], Any]) -> ApproximationSet:
        """
        A new set with the same ratios, ordered by key

        Ratios for which key returns the same value keep their order by
        value. This set is not modified

        Example::

            >>> approxs = Ratio(2 ** (6/19)).approximate.by_continued_fraction(cents_tolerance=10)
            >>> approxs.sort_by(Ratio.benedetti_height).entries[:3]
            [5/4, 56/45, 61/49]
        """
        out = ApproximationSet(self.ratio, key=key)
        out._ratios = dict(self._ratios)
        return out

    def count(self) -> int:
        return len(self._ratios)

    def __len__(self) -> int:
        return len(self._ratios)

    def __iter__(self) -> Iterator[Ratio]:
        return iter(self.entries)

    def __contains__(self, ratio) -> bool:
        return ratio in self._ratios

    def __getitem__(self, idx):
        return self.entries[idx]

    def __eq__(self, other):
        if isinstance(other, ApproximationSet):
            return self.entries == other.entries
        return NotImplemented

    __hash__ = None

    def __bool__(self) -> bool:
        return bool(self._ratios)

    def index(self, ratio) -> int:
        """ The position of ratio within the entries """
        return self.entries.index(ratio)

    def min(self) -> Ratio | None:
        """ The smallest ratio in this set, or None if it is empty """
        return min(self._ratios.values()) if self._ratios else None

    def max(self) -> Ratio | None:
        """ The biggest ratio in this set, or None if it is empty """
        return max(self._ratios.values()) if self._ratios else None

    def max_primes(self) -> list[int | None]:
        """ The max. prime of each entry """
        return [r.max_prime() for r in self.entries]

    def min_primes(self) -> list[int | None]:
        """ The min. prime of each entry """
        return [r.min_prime() for r in self.entries]

    def cents(self) -> np.ndarray:
        """ The size of each entry in cents, as a numpy array """
        entries = self.entries
        if not entries:
            return np.zeros(0)
        nums = [r.antecedent for r in entries]
        dens = [r.consequent for r in entries]
        return ratios2cents_np(nums, dens)

    def cents_errors(self) -> np.ndarray:
        """ The distance in cents from each entry to the target """
        return self.cents() - ratio2cents(self.ratio)

    def table(self) -> str:
        """
        The entries as a table, with their cents, error and complexity
        """
        precision = config['cents.precision']
        rows = []
        for r, cents, error in zip(self.entries, self.cents(), self.cents_errors()):
            rows.append((repr(r), round(float(cents), precision), round(float(error), precision),
                         r.max_prime(), r.benedetti_height(), round(r.tenney_height(), precision)))
        return tabulate.tabulate(rows, headers=("ratio", "cents", "error", "max prime",
                                                "benedetti", "tenney"),
                                 disable_numparse=True)

    def __repr__(self):
        return f"{self.ratio!r}: [{', '.join(repr(r) for r in self.entries)}]"


class Approximation:
    """
    Search for rational approximations of a ratio

    Normally accessed via :attr:`Ratio.approximate`

    Common arguments of the search methods:

    * cents_tolerance: the max. distance in cents between a candidate and
      the target. None uses ``config['cents.tolerance']``
    * depth: the max. number of ratios returned. None means unbounded
    * max_prime: the max. prime allowed in the factorization of a candidate.
      None means unbounded

    Args:
        ratio: the target. It must be a Ratio

    Example
    ~~~~~~~

        >>> from tonal import Ratio
        >>> Ratio(3, 2).approximate.by_superparticular(depth=5)
        3/2: [1053/700, 1050/698, 1047/696, 1044/694, 1041/692]
    """

    def __init__(self, ratio: Ratio):
        if not isinstance(ratio, Ratio):
            raise TypeError(f"A Ratio is required, got {ratio!r}")
        self.ratio = ratio

    def __repr__(self):
        return f"Approximation({self.ratio!r})"

    neighbors = staticmethod(neighbors)

    def _target_cents(self) -> float:
        if self.ratio.antecedent == 0 or self.ratio.consequent == 0:
            raise ValueError(f"Cannot approximate the ratio {self.ratio!r}")
        return ratio2cents(self.ratio)

    def _checkparams(self, cents_tolerance, depth, max_prime, optional_depth=True
                     ) -> float:
        tolerance = astolerance(cents_tolerance)
        _checkint('depth', depth, optional=optional_depth)
        _checkint('max_prime', max_prime, optional=True)
        return tolerance

    def _accepts(self, candidate: Ratio, self_in_cents: float, tolerance: float,
                 max_prime: int | None, exclude_self=False) -> bool:
        # the cents test goes first: it rejects x/0 and 0/x, which cannot be factorized
        if not within_cents(self_in_cents, ratio2cents(candidate), tolerance):
            return False
        if exclude_self and candidate == self.ratio:
            return False
        return candidate.within_prime(max_prime)

    def _collect(self, candidates: Iterable[Ratio], self_in_cents: float, tolerance: float,
                 depth: int | None, max_prime: int | None) -> ApproximationSet:
        results = ApproximationSet(self.ratio)
        for candidate in candidates:
            if self._accepts(candidate, self_in_cents, tolerance, max_prime):
                results.add(candidate)
                if depth is not None and len(results) >= depth:
                    break
        return results

    def by_continued_fraction(self,
                              cents_tolerance: float = None,
                              depth: int = None,
                              max_prime: int = None,
                              conv_limit: int = None
                              ) -> ApproximationSet:
        """
        Approximations found among the convergents of the continued fraction

        The convergents are tested in the order they are generated (from
        the coarsest to the best fit), so when depth cuts the search
        short it is the best fitting convergents which are left out

        Args:
            cents_tolerance: the max. distance to the target, in cents
            depth: the max. number of ratios returned (default: unbounded)
            max_prime: the max. prime allowed (default: unbounded)
            conv_limit: the number of convergents to compute. If not given,
                ``config['approx.convergentLimit']`` is used

        Returns:
            an ApproximationSet

        Example::

            >>> Ratio.ed(12, 1).approximate.by_continued_fraction()
            4771397596969315/4503599627370496: [18/17, 196/185, 1657/1564, 7893/7450, 18904/17843, 3118/2943, 1461/1379, 89/84, 17/16]
        """
        tolerance = self._checkparams(cents_tolerance, depth, max_prime)
        if conv_limit is None:
            conv_limit = config['approx.convergentLimit']
        _checkint('conv_limit', conv_limit)
        self_in_cents = self._target_cents()
        logger.debug(f"by_continued_fraction({self.ratio!r}): tolerance={tolerance}, "
                     f"depth={depth}, max_prime={max_prime}, conv_limit={conv_limit}")
        cls = self.ratio.__class__
        convergents = ContinuedFraction(self.ratio, conv_limit).convergents
        candidates = (cls(num, den) for num, den in convergents)
        return self._collect(candidates, self_in_cents, tolerance, depth, max_prime)

    def by_quotient_walk(self,
                         cents_tolerance: float = None,
                         depth: int = DEFAULT_DEPTH,
                         max_prime: int = None,
                         conv_limit: int = None
                         ) -> ApproximationSet:
        """
        Approximations found walking the fraction tree by the continued
        fraction quotients of the target

        Args:
            cents_tolerance: the max. distance to the target, in cents
            depth: the max. number of ratios returned. None for unbounded
            max_prime: the max. prime allowed (default: unbounded)
            conv_limit: the number of quotients to follow. If not given,
                ``config['approx.convergentLimit']`` is used

        Returns:
            an ApproximationSet

        Example::

            >>> Ratio.ed(12, 1).approximate.by_quotient_walk(max_prime=89)
            4771397596969315/4503599627370496: [18/17, 196/185, 89/84, 71/67, 53/50, 35/33, 17/16]
        """
        tolerance = self._checkparams(cents_tolerance, depth, max_prime)
        if conv_limit is None:
            conv_limit = config['approx.convergentLimit']
        _checkint('conv_limit', conv_limit)
        self_in_cents = self._target_cents()
        logger.debug(f"by_quotient_walk({self.ratio!r}): tolerance={tolerance}, "
                     f"depth={depth}, max_prime={max_prime}, conv_limit={conv_limit}")
        cls = self.ratio.__class__
        nodes = FractionTree.quotient_walk(self.ratio, limit=conv_limit)
        candidates = (cls(node.numerator, node.denominator) for node in nodes)
        return self._collect(candidates, self_in_cents, tolerance, depth, max_prime)

    def by_tree_path(self,
                     cents_tolerance: float = None,
                     depth: int = DEFAULT_DEPTH,
                     max_prime: int = None
                     ) -> ApproximationSet:
        """
        Approximations found on the path from the root of the fraction
        tree to the target

        The path is walked lazily, up to ``config['tree.pathLimit']`` nodes

        Args:
            cents_tolerance: the max. distance to the target, in cents
            depth: the max. number of ratios returned. None for unbounded
            max_prime: the max. prime allowed (default: unbounded)

        Returns:
            an ApproximationSet

        Example::

            >>> Ratio.ed(12, 1).approximate.by_tree_path(max_prime=17)
            4771397596969315/4503599627370496: [18/17, 35/33, 17/16]
        """
        tolerance = self._checkparams(cents_tolerance, depth, max_prime)
        self_in_cents = self._target_cents()
        logger.debug(f"by_tree_path({self.ratio!r}): tolerance={tolerance}, "
                     f"depth={depth}, max_prime={max_prime}")
        cls = self.ratio.__class__
        candidates = (cls(node.numerator, node.denominator)
                      for node in FractionTree.path_to(self.ratio))
        return self._collect(candidates, self_in_cents, tolerance, depth, max_prime)

    def by_superparticular(self,
                           cents_tolerance: float = None,
                           depth: int = DEFAULT_SUPERPARTICULAR_DEPTH,
                           max_prime: int = None,
                           superpart='upper',
                           maxiter: int = None
                           ) -> ApproximationSet:
        """
        Approximations built by multiplying the target by superparticular ratios

        For n = 1, 2, 3, ... the candidate is (n+1)/n * target (or
        n/(n+1) * target if superpart is 'lower'), with its terms left
        unreduced. The target itself is never included. Since
        superparticulars shrink towards 1/1, the candidates eventually
        fall within any tolerance

        Args:
            cents_tolerance: the max. distance to the target, in cents
            depth: the number of ratios to find. It must be given
            max_prime: the max. prime allowed (default: unbounded)
            superpart: 'upper' if the superior part is the antecedent,
                'lower' if it is the consequent
            maxiter: max. number of candidates to test. If not given,
                ``config['approx.maxIterations']`` is used. A NotFoundError
                is raised if depth has not been reached by then

        Returns:
            an ApproximationSet

        Example::

            >>> Ratio(3, 2).approximate.by_superparticular(depth=5)
            3/2: [1053/700, 1050/698, 1047/696, 1044/694, 1041/692]
        """
        tolerance = self._checkparams(cents_tolerance, depth, max_prime, optional_depth=False)
        superpart = _parse_superpart(superpart)
        if maxiter is None:
            maxiter = config['approx.maxIterations']
        _checkint('maxiter', maxiter)
        self_in_cents = self._target_cents()
        logger.debug(f"by_superparticular({self.ratio!r}): tolerance={tolerance}, "
                     f"depth={depth}, max_prime={max_prime}, superpart={superpart}")
        cls = self.ratio.__class__
        factor = self.ratio.fraction
        # plain ratios keep their terms, so the primes of (n+1)*a / n*b are
        # those of n, n+1 and the target
        keeps_terms = not isinstance(self.ratio, ReducedRatio)
        if max_prime is not None and keeps_terms:
            factor_prime = Ratio(factor).max_prime()
            if factor_prime is not None and factor_prime > max_prime:
                raise NotFoundError(f"The target {self.ratio!r} has a prime factor "
                                    f"({factor_prime}) bigger than max_prime ({max_prime}), "
                                    f"no superparticular multiple of it is within that limit")
        results = ApproximationSet(self.ratio)
        n = 1
        while True:
            candidate = cls.superparticular(n, factor=factor, superpart=superpart)
            if keeps_terms:
                accepted = (self._accepts(candidate, self_in_cents, tolerance, None,
                                          exclude_self=True)
                            and _within_prime(n, max_prime)
                            and _within_prime(n + 1, max_prime))
            else:
                accepted = self._accepts(candidate, self_in_cents, tolerance, max_prime,
                                         exclude_self=True)
            if accepted:
                results.add(candidate)
                if len(results) >= depth:
                    break
            if n >= maxiter:
                logger.debug(f"by_superparticular: {maxiter} candidates tested, "
                             f"found {len(results)} of {depth}")
                raise NotFoundError(f"Only {len(results)} of {depth} approximations found after "
                                    f"testing {maxiter} superparticulars. Relax the tolerance or "
                                    f"the max. prime, or reduce the depth")
            n += 1
        return results

    def by_neighborhood(self,
                        cents_tolerance: float = None,
                        depth: int = DEFAULT_DEPTH,
                        max_prime: int = None,
                        max_boundary: int = DEFAULT_MAX_GRID_BOUNDARY,
                        max_scale: int = DEFAULT_MAX_GRID_SCALE,
                        timeout: float = None
                        ) -> ApproximationSet:
        """
        Approximations found in the lattice around scaled copies of the target

        For scale = 1 .. max_scale, the (unreduced) target a/b is scaled to
        the point (a*scale, b*scale) of the integer lattice, and its neighbors
        at a distance of 1 .. max_boundary are tested. The bigger the scale,
        the finer the grid around the target. The target itself is never
        included. The search stops as soon as depth ratios are found

        Args:
            cents_tolerance: the max. distance to the target, in cents
            depth: the max. number of ratios returned. None for unbounded
            max_prime: the max. prime allowed (default: unbounded)
            max_boundary: the max. distance of a neighbor to the scaled target
            max_scale: the max. scaling of the target
            timeout: if given, max. time in seconds for the search. A
                SearchTimeout is raised when exceeded

        Returns:
            an ApproximationSet

        Example::

            >>> Ratio(3, 2).approximate.by_neighborhood(max_prime=23, max_boundary=10, max_scale=60)
            3/2: [175/117, 176/117]
        """
        tolerance = self._checkparams(cents_tolerance, depth, max_prime)
        _checkint('max_boundary', max_boundary)
        _checkint('max_scale', max_scale)
        if timeout is not None and timeout <= 0:
            raise ValueError(f"timeout should be a positive number, got {timeout}")
        self_in_cents = self._target_cents()
        logger.debug(f"by_neighborhood({self.ratio!r}): tolerance={tolerance}, depth={depth}, "
                     f"max_prime={max_prime}, max_boundary={max_boundary}, max_scale={max_scale}")
        deadline = time.monotonic() + timeout if timeout is not None else None
        basic = self.ratio.to_basic_ratio()
        results = ApproximationSet(self.ratio)
        for scale in range(1, max_scale + 1):
            vicinity = basic.scale(scale)
            for boundary in range(1, max_boundary + 1):
                if deadline is not None and time.monotonic() > deadline:
                    raise SearchTimeout(f"by_neighborhood: timeout of {timeout} seconds reached "
                                        f"at scale {scale}, boundary {boundary}")
                for neighbor in neighbors(vicinity, boundary):
                    if self._accepts(neighbor, self_in_cents, tolerance, max_prime,
                                     exclude_self=True):
                        results.add(neighbor)
                        if depth is not None and len(results) >= depth:
                            return results
        return results

    def neighborhood(self, scale: int = 1, boundary: int = 1) -> list[Ratio]:
        """
        The lattice points around the target scaled by scale

        The union of the neighbors at distance 1 .. boundary, without
        duplicates (by value) and ordered by value. No filtering is done

        Args:
            scale: the scaling of the target's terms
            boundary: the max. distance of the neighbors

        Returns:
            a list of ratios

        Example::

            >>> Ratio(3, 2).approximate.neighborhood(scale=256)
            [767/513, 768/513, 767/512, 769/513, 768/512, 767/511, 769/512, 768/511, 769/511]
        """
        scale = round(scale)
        _checkint('scale', scale)
        _checkint('boundary', boundary)
        vicinity = self.ratio.to_basic_ratio().scale(scale)
        points: dict[Ratio, Ratio] = {}
        for away in range(1, boundary + 1):
            for point in neighbors(vicinity, away):
                points.setdefault(point, point)
        return sorted(points.values())
