"""Shared pytest fixtures for QuickOpen tests."""

import pytest

from quickopen.config import ENV_OVERRIDES, Config, DisplayConfig, RankingConfig
from quickopen.services import DEMO_FILES, Ranker


@pytest.fixture
def demo_files():
    """The three demo file paths, in their original order."""
    return list(DEMO_FILES)


@pytest.fixture
def ranker(demo_files):
    """Ranker over the demo files."""
    return Ranker(demo_files)


@pytest.fixture
def sample_config():
    """Configuration tuned for tests: no debounce, grids on."""
    return Config(
        ranking=RankingConfig(max_results=30, workers=0, matcher="dp"),
        display=DisplayConfig(placeholder=".", show_grid=True, debounce_delay=0),
    )


@pytest.fixture
def config_toml_content():
    """Sample TOML configuration content."""
    return """
candidates_file = "files.txt"

[ranking]
max_results = 5
workers = 2
matcher = "recursive"

[display]
placeholder = "-"
show_grid = true
debounce_delay = 0.5
"""


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point QuickOpen at an empty config file and clear overrides."""
    config_path = tmp_path / "config.toml"
    config_path.write_text("")
    monkeypatch.setenv("QUICKOPEN_CONFIG", str(config_path))
    for key in ENV_OVERRIDES:
        monkeypatch.delenv(key, raising=False)
    return config_path
