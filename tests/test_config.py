"""Tests for YAML configuration loading."""

from pathlib import Path

import pytest

from svg_textdraw.config import CONFIG_ENV_VAR, Config, Options
from svg_textdraw.exceptions import ConfigError


@pytest.fixture
def isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run with no config in cwd, home or the environment."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestConfigLoad:
    """Tests for Config.load lookup order."""

    def test_defaults_when_no_file(self, isolated: Path) -> None:
        """With no file anywhere, load returns the defaults."""
        config = Config.load()
        assert config == Config()
        assert config.source is None

    def test_explicit_path(self, isolated: Path) -> None:
        """An explicit path is read and recorded as the source."""
        path = isolated / "custom.yaml"
        path.write_text("background: black\nlog_level: debug\n", encoding="utf-8")
        config = Config.load(path)
        assert config.background == "black"
        assert config.log_level == "DEBUG"
        assert config.source == path

    def test_explicit_missing_path_raises(self, isolated: Path) -> None:
        """A missing explicit path is an error, not a fallback."""
        with pytest.raises(ConfigError, match="not found"):
            Config.load(isolated / "nope.yaml")

    def test_env_var_wins_over_cwd(self, isolated: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """$SVG_TEXTDRAW_CONFIG is consulted before ./svg-textdraw.yaml."""
        (isolated / "svg-textdraw.yaml").write_text("default_family: serif\n", encoding="utf-8")
        env_file = isolated / "env.yaml"
        env_file.write_text("default_family: monospace\n", encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(env_file))
        assert Config.load().default_family == "monospace"

    def test_cwd_file(self, isolated: Path) -> None:
        """./svg-textdraw.yaml is picked up."""
        (isolated / "svg-textdraw.yaml").write_text("background: white\n", encoding="utf-8")
        assert Config.load().background == "white"

    def test_home_file(self, isolated: Path) -> None:
        """~/.config/svg-textdraw/config.yaml is the last fallback."""
        config_dir = isolated / "home" / ".config" / "svg-textdraw"
        config_dir.mkdir(parents=True)
        (config_dir / "config.yaml").write_text("log_level: error\n", encoding="utf-8")
        assert Config.load().log_level == "ERROR"

    def test_empty_file_gives_defaults(self, isolated: Path) -> None:
        """An empty YAML file yields the defaults."""
        path = isolated / "empty.yaml"
        path.write_text("", encoding="utf-8")
        config = Config.load(path)
        assert config.default_family == "sans-serif"
        assert config.log_level == "WARNING"

    def test_invalid_yaml_raises(self, isolated: Path) -> None:
        """Unparsable YAML raises ConfigError."""
        path = isolated / "bad.yaml"
        path.write_text("font_dirs: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            Config.load(path)


class TestConfigValidation:
    """Tests for Config.from_dict validation."""

    def test_paths_expanded(self, isolated: Path) -> None:
        """Font paths have ~ expanded."""
        config = Config.from_dict(
            {"font_dirs": ["~/fonts"], "font_overrides": {"Brand": "~/fonts/Brand.ttf"}}
        )
        assert config.font_dirs == [isolated / "home" / "fonts"]
        assert config.font_overrides == {"Brand": isolated / "home" / "fonts" / "Brand.ttf"}

    @pytest.mark.parametrize(
        "data",
        [
            ["not", "a", "mapping"],
            {"colour": "red"},
            {"font_dirs": "/fonts"},
            {"font_overrides": {"Brand": 3}},
            {"default_family": "  "},
            {"background": 12},
            {"log_level": "verbose"},
        ],
    )
    def test_invalid_values_raise(self, data: object) -> None:
        """Wrong shapes, wrong types and unknown keys are rejected."""
        with pytest.raises(ConfigError):
            Config.from_dict(data)

    def test_dpi_is_not_a_config_key(self) -> None:
        """Resolution is fixed at 96 px per inch, so dpi is an unknown key."""
        with pytest.raises(ConfigError, match="Unknown config keys: dpi"):
            Config.from_dict({"dpi": 144})

    def test_options(self) -> None:
        """options() carries the render-time settings and the given scale."""
        config = Config(background="#fff", default_family="serif")
        assert config.options(scale=2.0) == Options(scale=2.0, background="#fff", default_family="serif")

    def test_font_dir_paths_are_path_objects(self) -> None:
        """font_dirs entries become Path objects."""
        config = Config.from_dict({"font_dirs": ["/opt/fonts"]})
        assert config.font_dirs == [Path("/opt/fonts")]
