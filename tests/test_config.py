import pytest

from tonal import config
from tonal.cents import astolerance
from tonal.conftools import CheckedDict


def test_defaults():
    assert config['cents.tolerance'] == 5.0
    assert config['approx.convergentLimit'] == 10
    assert config.diff() == {}


def test_set_and_reset():
    config['cents.tolerance'] = 3
    assert astolerance(None) == 3.0
    assert config.diff() == {'cents.tolerance': 3}
    config.reset()
    assert config['cents.tolerance'] == 5.0


def test_invalid_values():
    with pytest.raises(KeyError):
        config['foo'] = 1
    with pytest.raises(ValueError):
        config['cents.tolerance'] = -1
    with pytest.raises(ValueError):
        config['cents.precision'] = 1.5
    with pytest.raises(ValueError):
        config['tree.pathLimit'] = 0


def test_repr_shows_help():
    s = repr(config)
    assert 'cents.tolerance' in s
    assert 'Default tolerance' in s


def test_checkeddict_choices():
    d = CheckedDict(default={'mode': 'upper', 'size': 10},
                    validator={'mode::choices': ('upper', 'lower'),
                               'size::range': (1, 100)})
    d['mode'] = 'lower'
    assert d['mode'] == 'lower'
    assert d.getChoices('mode') == {'upper', 'lower'}
    with pytest.raises(ValueError):
        d['mode'] = 'middle'
    with pytest.raises(ValueError):
        d['size'] = 200


def test_checkeddict_invalid_default():
    with pytest.raises(ValueError):
        CheckedDict(default={'size': 1000}, validator={'size::range': (1, 100)})
