import pytest

from kmeanspp.random_source import RandomSource


class ScriptedRandomSource(RandomSource):
    """Replays a fixed list of unit draws, scaled into the requested range."""

    def __init__(self, units):
        self._units = iter(units)

    def uniform(self, low=0.0, high=1.0):
        return low + next(self._units) * (high - low)


@pytest.fixture
def scripted():
    return ScriptedRandomSource
