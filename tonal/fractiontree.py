"""
The Stern-Brocot fraction tree

Every positive rational appears exactly once in the tree. Starting at
the root 1/1, bounded by 0/1 and 1/0, each node is the mediant of its two
bounds, so any target value can be approached by bisection: move left
if the node is above the target, right if it is below.

Two walks are provided:

* :meth:`FractionTree.path_to`: the root to target descent, node by node
* :meth:`FractionTree.quotient_walk`: the descent over a fixed number of
  continued fraction quotients of the target, starting from the integer
  segment around it
"""
from __future__ import annotations
import logging
import math
from fractions import Fraction

from .config import config
from .continuedfraction import ContinuedFraction, _asfraction

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from typing import Iterator


logger = logging.getLogger("tonal.fractiontree")


class Node:
    """
    A node of the fraction tree

    Args:
        numerator: the numerator of the node
        denominator: the denominator of the node. 0 for the infinite bound 1/0
    """
    __slots__ = ('numerator', 'denominator')

    def __init__(self, numerator: int, denominator: int):
        self.numerator = numerator
        self.denominator = denominator

    @property
    def weight(self) -> Fraction | float:
        """ The value of this node (inf for 1/0) """
        if self.denominator == 0:
            return math.inf
        return Fraction(self.numerator, self.denominator)

    def mediant(self, other: Node) -> Node:
        return Node(self.numerator + other.numerator, self.denominator + other.denominator)

    def _compare(self, x: Fraction) -> int:
        # sign of node - x, without building a Fraction
        diff = self.numerator * x.denominator - x.numerator * self.denominator
        return (diff > 0) - (diff < 0)

    def __eq__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return self.weight == other.weight

    def __hash__(self):
        return hash(self.weight)

    def __repr__(self):
        return f"({self.numerator}/{self.denominator})"


class FractionTree:
    """
    Walks on the Stern-Brocot tree

    Example
    ~~~~~~~

        >>> [node for node in FractionTree.path_to(Fraction(7, 4))]
        [(1/1), (2/1), (3/2), (5/3), (7/4)]
        >>> FractionTree.quotient_walk(Fraction(7, 4))
        [(1/1), (2/1), (3/2), (5/3), (7/4)]
    """

    LEFT = Node(0, 1)
    RIGHT = Node(1, 0)
    ROOT = Node(1, 1)

    @staticmethod
    def mediant_sum(a, b) -> Fraction:
        """
        The mediant of two fractions

        Example::

            >>> FractionTree.mediant_sum(Fraction(3, 2), Fraction(4, 3))
            Fraction(7, 5)
        """
        a, b = Fraction(a), Fraction(b)
        return Fraction(a.numerator + b.numerator, a.denominator + b.denominator)

    @classmethod
    def path_to(cls, number, limit: int = None) -> Iterator[Node]:
        """
        Descend the tree from its root towards number

        Nodes are generated lazily. The descent stops when a node equals
        number (which happens for every rational, after as many steps as
        the sum of its partial quotients) or after limit nodes

        Args:
            number: the target, a non negative number
            limit: max. number of nodes to generate. If not given,
                ``config['tree.pathLimit']`` is used

        Returns:
            an iterator of Nodes, starting at the root 1/1
        """
        x = _asfraction(number)
        if x < 0:
            raise ValueError(f"The fraction tree only holds non negative numbers, got {number}")
        if limit is None:
            limit = config['tree.pathLimit']
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValueError(f"limit must be a positive int, got {limit!r}")
        return cls._descend(x, limit)

    @classmethod
    def _descend(cls, x: Fraction, limit: int) -> Iterator[Node]:
        lower, upper = cls.LEFT, cls.RIGHT
        node = cls.ROOT
        count = 1
        yield node
        while count < limit:
            side = node._compare(x)
            if side == 0:
                return
            if side < 0:
                lower = node
            else:
                upper = node
            node = lower.mediant(upper)
            count += 1
            yield node
        logger.debug(f"path_to({x}): limit of {limit} nodes reached before the target")

    @classmethod
    def quotient_walk(cls, number, limit: int = 10) -> list[Node]:
        """
        Walk the tree towards number, guided by its continued fraction

        The walk starts with the integer segment around number,
        a0/1 and (a0+1)/1, and then takes one mediant step for each
        unit of the partial quotients a1, a2, ... up to the limit-th
        quotient. Each step replaces the bound on the same side of
        number as the new mediant. The walk ends early if a node hits
        number exactly, so an integer gives the single node a0/1

        Args:
            number: the target, a non negative number
            limit: the number of partial quotients (a0 included) to follow

        Returns:
            a list of Nodes

        Example::

            >>> FractionTree.quotient_walk(2 ** (1/12), limit=3)[-3:]
            [(17/16), (18/17), (35/33)]
        """
        cf = ContinuedFraction(number, limit)
        x = cf.number
        a0 = cf.quotients[0]
        lower, upper = Node(a0, 1), Node(a0 + 1, 1)
        if lower._compare(x) == 0:
            return [lower]
        nodes = [lower, upper]
        for quotient in cf.quotients[1:]:
            for _ in range(quotient):
                node = lower.mediant(upper)
                nodes.append(node)
                side = node._compare(x)
                if side == 0:
                    return nodes
                if side < 0:
                    lower = node
                else:
                    upper = node
        return nodes
