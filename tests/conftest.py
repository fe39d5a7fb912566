import pytest

from tonal import Ratio, config


@pytest.fixture(autouse=True)
def default_config():
    yield
    config.reset()


@pytest.fixture
def semitone():
    # the float 2 ** (1/12), as an exact ratio
    return Ratio.ed(12, 1)


@pytest.fixture
def fifth():
    return Ratio(3, 2)
