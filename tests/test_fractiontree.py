from fractions import Fraction

import pytest

from tonal import FractionTree
from tonal.fractiontree import Node


def terms(nodes):
    return [(n.numerator, n.denominator) for n in nodes]


def test_path_to_rational():
    path = FractionTree.path_to(Fraction(7, 4))
    assert terms(path) == [(1, 1), (2, 1), (3, 2), (5, 3), (7, 4)]


def test_path_to_is_lazy():
    path = FractionTree.path_to(2 ** (1/12))
    assert next(path) == Node(1, 1)
    assert next(path) == Node(2, 1)


def test_path_to_semitone():
    path = list(FractionTree.path_to(2 ** (1/12)))
    assert len(path) == 204
    assert path[-1].weight == Fraction(2 ** (1/12))
    assert len(list(FractionTree.path_to(2 ** (1/12), limit=5))) == 5


def test_path_nodes_approach_from_each_side():
    x = Fraction(2 ** (1/12))
    path = list(FractionTree.path_to(x, limit=100))
    above = [n.weight for n in path if n.weight > x]
    below = [n.weight for n in path if n.weight < x]
    assert above == sorted(above, reverse=True)
    assert below == sorted(below)


def test_path_to_invalid():
    with pytest.raises(ValueError):
        FractionTree.path_to(-1)
    with pytest.raises(ValueError):
        FractionTree.path_to(1.5, limit=0)


def test_quotient_walk():
    assert terms(FractionTree.quotient_walk(Fraction(7, 4))) == [(1, 1), (2, 1), (3, 2), (5, 3), (7, 4)]
    assert terms(FractionTree.quotient_walk(2)) == [(2, 1)]
    assert terms(FractionTree.quotient_walk(Fraction(5, 1), limit=4)) == [(5, 1)]
    nodes = FractionTree.quotient_walk(2 ** (1/12), limit=3)
    assert terms(nodes[-3:]) == [(17, 16), (18, 17), (35, 33)]
    assert len(FractionTree.quotient_walk(2 ** (1/12), limit=10)) == 38


def test_nodes():
    assert Node(2, 4) == Node(1, 2)
    assert Node(1, 0).weight == float('inf')
    assert repr(Node(3, 2).mediant(Node(4, 3))) == '(7/5)'
    assert FractionTree.mediant_sum(Fraction(3, 2), Fraction(4, 3)) == Fraction(7, 5)
