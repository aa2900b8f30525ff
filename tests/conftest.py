import pytest

from linkcell import config as lc_config
from linkcell.core.census import CENSUS


@pytest.fixture(autouse=True)
def _fresh_runtime_config():
    lc_config.reset_runtime_config_cache()
    yield
    lc_config.reset_runtime_config_cache()


@pytest.fixture
def census(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("LINKCELL_TRACK_NODES", "1")
    lc_config.reset_runtime_config_cache()
    CENSUS.reset()
    yield CENSUS
    CENSUS.reset()
