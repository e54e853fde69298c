"""Tests for configuration loading."""

import pytest

from quickopen.config import Config, ConfigError, load_candidates, load_config


@pytest.fixture
def config_file(tmp_path, config_toml_content):
    """Config file written from the sample TOML."""
    path = tmp_path / "config.toml"
    path.write_text(config_toml_content)
    return path


class TestDefaults:
    """Defaults with no file and no environment."""

    def test_defaults(self, isolated_config):
        """An empty file leaves every default in place."""
        config = load_config(isolated_config, environ={})
        assert config == Config()
        assert config.ranking.max_results == 30
        assert config.ranking.matcher == "dp"
        assert config.display.placeholder == "."
        assert config.candidates_file is None


class TestTomlLoading:
    """Loading from a TOML file."""

    def test_values_loaded(self, config_file, tmp_path):
        """Sections map onto the config dataclasses."""
        config = load_config(config_file, environ={})
        assert config.ranking.max_results == 5
        assert config.ranking.workers == 2
        assert config.ranking.matcher == "recursive"
        assert config.display.placeholder == "-"
        assert config.display.show_grid is True
        assert config.display.debounce_delay == 0.5

    def test_relative_candidates_file(self, config_file, tmp_path):
        """candidates_file is resolved next to the config file."""
        config = load_config(config_file, environ={})
        assert config.candidates_file == tmp_path / "files.txt"

    def test_unknown_keys_ignored(self, tmp_path):
        """Keys the config does not know about are skipped."""
        path = tmp_path / "config.toml"
        path.write_text("[ranking]\nmax_results = 7\ncolor = 'blue'\n\n[other]\nx = 1\n")
        assert load_config(path, environ={}).ranking.max_results == 7

    def test_config_from_environment_variable(self, config_file):
        """QUICKOPEN_CONFIG points at the file when no path is given."""
        config = load_config(environ={"QUICKOPEN_CONFIG": str(config_file)})
        assert config.ranking.max_results == 5

    def test_missing_explicit_file(self, tmp_path):
        """An explicit path that does not exist is an error."""
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "missing.toml", environ={})

    def test_missing_env_file(self, tmp_path):
        """A QUICKOPEN_CONFIG path that does not exist is an error."""
        with pytest.raises(ConfigError, match="QUICKOPEN_CONFIG"):
            load_config(environ={"QUICKOPEN_CONFIG": str(tmp_path / "nope.toml")})

    def test_invalid_toml(self, tmp_path):
        """Unparsable TOML raises ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text("[ranking\n")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(path, environ={})

    @pytest.mark.parametrize(
        "content,message",
        [
            ("[ranking]\nmax_results = 0\n", "max_results"),
            ("[ranking]\nmax_results = 'ten'\n", "integer"),
            ("[ranking]\nworkers = -1\n", "workers"),
            ("[ranking]\nmatcher = 'regex'\n", "matcher"),
            ("[display]\nplaceholder = '..'\n", "placeholder"),
            ("[display]\nshow_grid = 3\n", "boolean"),
            ("[display]\ndebounce_delay = -1\n", "debounce_delay"),
            ("ranking = 5\n", "table"),
        ],
    )
    def test_invalid_values(self, tmp_path, content, message):
        """Bad values raise ConfigError naming the problem."""
        path = tmp_path / "config.toml"
        path.write_text(content)
        with pytest.raises(ConfigError, match=message):
            load_config(path, environ={})


class TestEnvironmentOverrides:
    """QUICKOPEN_* variables override the file."""

    def test_overrides_win(self, config_file):
        """Environment values replace file values."""
        config = load_config(
            config_file,
            environ={
                "QUICKOPEN_MAX_RESULTS": "12",
                "QUICKOPEN_WORKERS": "0",
                "QUICKOPEN_MATCHER": "dp",
                "QUICKOPEN_PLACEHOLDER": "_",
            },
        )
        assert config.ranking.max_results == 12
        assert config.ranking.workers == 0
        assert config.ranking.matcher == "dp"
        assert config.display.placeholder == "_"

    def test_bad_override(self, isolated_config):
        """Non-numeric override values are rejected."""
        with pytest.raises(ConfigError, match="integer"):
            load_config(isolated_config, environ={"QUICKOPEN_MAX_RESULTS": "lots"})


class TestLoadCandidates:
    """Reading candidate files."""

    def test_reads_lines_skipping_blanks(self, tmp_path):
        """One candidate per line; blank lines dropped."""
        path = tmp_path / "files.txt"
        path.write_text("a/b.py\n\nc/d.py\n   \ne.py\n")
        assert load_candidates(path) == ["a/b.py", "c/d.py", "e.py"]

    def test_missing_file(self, tmp_path):
        """Unreadable files raise ConfigError."""
        with pytest.raises(ConfigError):
            load_candidates(tmp_path / "missing.txt")
