from fractions import Fraction

import pytest

from tonal import ExtendedRatio, SubharmonicExtendedRatio, Ratio


def test_extended_ratio_from_partials():
    er = ExtendedRatio(partials=[4, 5, 6])
    assert repr(er) == '4:5:6'
    assert er.partials == [4, 5, 6]
    assert er.ratios() == [Ratio(1, 1), Ratio(5, 4), Ratio(3, 2)]
    assert repr(ExtendedRatio(partials=range(4, 8))) == '4:5:6:7'


def test_extended_ratio_from_ratios():
    er = ExtendedRatio(ratios=[1, Fraction(5, 4), Fraction(3, 2)])
    assert repr(er) == '4:5:6'
    assert er == ExtendedRatio(partials=[4, 5, 6])


def test_extended_ratio_partials_are_sorted():
    er = ExtendedRatio(partials=[105, 60, 70, 84])
    assert er.partials == [60, 70, 84, 105]
    assert er.ratios() == [Ratio(1, 1), Ratio(7, 6), Ratio(7, 5), Ratio(7, 4)]


def test_extended_ratio_interval_between():
    er = ExtendedRatio(partials=[4, 5, 6])
    assert er.interval_between(0, 2).interval == Ratio(3, 2)
    assert er.interval_between(1, 2).interval == Ratio(6, 5)
    assert ExtendedRatio(partials=[4, 5]).interval_between(0, 2) is None


def test_unreduced_ratios():
    er = ExtendedRatio(partials=[2, 3, 5])
    assert er.ratios() == [Ratio(1, 1), Ratio(3, 2), Ratio(5, 4)]
    assert er.ratios(reduced=False) == [Ratio(1, 1), Ratio(3, 2), Ratio(5, 2)]


def test_to_subharmonic_extended_ratio():
    er = ExtendedRatio(partials=[4, 5, 6])
    ser = er.to_subharmonic_extended_ratio()
    assert isinstance(ser, SubharmonicExtendedRatio)
    assert ser.partials == [Fraction(1, 15), Fraction(1, 12), Fraction(1, 10)]
    assert repr(ser) == '15:12:10'
    assert ser.ratios() == er.ratios()
    assert er.to_sefr() == ser


def test_subharmonic_from_partials():
    ser = SubharmonicExtendedRatio(partials=[Fraction(1, 4), Fraction(1, 5), Fraction(1, 6)])
    assert repr(ser) == '6:5:4'
    ser = SubharmonicExtendedRatio(partials=[4, 5, 6, 7])
    assert ser.partials == [Fraction(1, 7), Fraction(1, 6), Fraction(1, 5), Fraction(1, 4)]
    assert ser.ratios() == [Ratio(1, 1), Ratio(7, 6), Ratio(7, 5), Ratio(7, 4)]


def test_subharmonic_from_ratios():
    ser = SubharmonicExtendedRatio(ratios=[1, Fraction(5, 4), Fraction(3, 2)])
    assert repr(ser) == '15:12:10'


def test_subharmonic_to_extended_ratio():
    ser = SubharmonicExtendedRatio(partials=[105, 84, 70, 60])
    assert ser.ratios() == [Ratio(1, 1), Ratio(5, 4), Ratio(3, 2), Ratio(7, 4)]
    assert ser.interval_between(0, 2).interval == Ratio(3, 2)
    er = ser.to_extended_ratio()
    assert er.partials == [4, 5, 6, 7]
    assert ser.to_efr() == er


def test_switch_domain():
    er = ExtendedRatio(partials=[4, 5, 6])
    assert er.switch_to('harmonic') == er
    assert er.switch_domain('subharmonic').switch_domain('harmonic') == er
    with pytest.raises(ValueError):
        er.switch_to('lydian')


def test_invalid_arguments():
    with pytest.raises(ValueError):
        ExtendedRatio()
    with pytest.raises(ValueError):
        ExtendedRatio(partials=[4, 5], ratios=[1, Fraction(5, 4)])


def test_sequence_protocol():
    er = ExtendedRatio(partials=[4, 5, 6])
    assert len(er) == 3
    assert list(er) == [4, 5, 6]
    assert er[-1] == 6
    assert len({er, ExtendedRatio(ratios=[1, Fraction(5, 4), Fraction(3, 2)])}) == 1
    assert er != SubharmonicExtendedRatio(partials=[4, 5, 6])
