"""Tests for the svg-textdraw command-line interface."""

from pathlib import Path

import pytest
from click.testing import CliRunner
from PIL import Image

from svg_textdraw import __version__
from svg_textdraw.cli.commands.blocks import describe_decoration
from svg_textdraw.cli.main import cli
from svg_textdraw.config import CONFIG_ENV_VAR
from svg_textdraw.text.model import TextDecoration, TextDecorationStyle


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def no_user_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep configuration files outside the test directory out of reach."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def config_file(tmp_path: Path, test_font: Path) -> Path:
    """Config mapping "Test Sans" to the generated test font."""
    path = tmp_path / "config.yaml"
    path.write_text(
        f"font_dirs:\n  - {test_font.parent}\n"
        f"font_overrides:\n  Test Sans: {test_font}\n"
        "default_family: Test Sans\n"
        "background: white\n",
        encoding="utf-8",
    )
    return path


def flat(output: str) -> str:
    return output.replace("\n", "")


class TestCliGroup:
    """Tests for the top-level command group."""

    def test_version(self, runner: CliRunner) -> None:
        """--version prints the package version."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        """--help lists every subcommand."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("render", "blocks", "fonts"):
            assert command in result.output

    def test_invalid_config_exits(self, runner: CliRunner, tmp_path: Path, temp_svg: Path) -> None:
        """An invalid config file exits with status 1."""
        bad = tmp_path / "bad.yaml"
        bad.write_text("colour: red\n", encoding="utf-8")
        result = runner.invoke(cli, ["--config", str(bad), "blocks", str(temp_svg)])
        assert result.exit_code == 1
        assert "Config error" in result.output

    def test_removed_dpi_key_is_a_config_error(self, runner: CliRunner, tmp_path: Path, temp_svg: Path) -> None:
        """A config still carrying dpi is reported as an unknown key."""
        old = tmp_path / "old.yaml"
        old.write_text("dpi: 144\n", encoding="utf-8")
        result = runner.invoke(cli, ["--config", str(old), "blocks", str(temp_svg)])
        assert result.exit_code == 1
        assert "dpi" in flat(result.output)

    def test_invalid_log_level_rejected(self, runner: CliRunner, temp_svg: Path) -> None:
        """An unknown --log-level is a usage error."""
        result = runner.invoke(cli, ["--log-level", "chatty", "blocks", str(temp_svg)])
        assert result.exit_code == 2


class TestRenderCommand:
    """Tests for the render command."""

    def test_render_svg(self, runner: CliRunner, config_file: Path, temp_svg: Path, tmp_path: Path) -> None:
        """Rendering to .svg picks the svg backend and creates parent dirs."""
        out = tmp_path / "out" / "result.svg"
        result = runner.invoke(cli, ["--config", str(config_file), "render", str(temp_svg), "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert out.exists()
        assert "AB BA" in out.read_text(encoding="utf-8")
        assert "(svg)" in result.output

    def test_render_png_with_scale(
        self, runner: CliRunner, config_file: Path, temp_svg: Path, tmp_path: Path
    ) -> None:
        """Rendering to .png uses the raster backend at the given scale."""
        out = tmp_path / "result.png"
        result = runner.invoke(
            cli, ["--config", str(config_file), "render", str(temp_svg), "-o", str(out), "--scale", "2"]
        )
        assert result.exit_code == 0, result.output
        with Image.open(out) as img:
            assert img.size == (400, 200)
        assert "(raster)" in result.output

    def test_backend_option_overrides_suffix(
        self, runner: CliRunner, config_file: Path, temp_svg: Path, tmp_path: Path
    ) -> None:
        """-b selects the backend regardless of the output suffix."""
        out = tmp_path / "result.out"
        result = runner.invoke(
            cli, ["--config", str(config_file), "render", str(temp_svg), "-o", str(out), "-b", "svg"]
        )
        assert result.exit_code == 0, result.output
        assert out.read_text(encoding="utf-8").startswith("<?xml")

    def test_missing_font_fails(self, runner: CliRunner, tmp_path: Path) -> None:
        """An unresolvable font exits with status 1 and names the problem."""
        config = tmp_path / "nofonts.yaml"
        config.write_text("default_family: Missing Default Face\n", encoding="utf-8")
        svg = tmp_path / "in.svg"
        svg.write_text(
            '<svg xmlns="http://www.w3.org/2000/svg" width="10" height="10">'
            '<text font-family="No Such Face">x</text></svg>',
            encoding="utf-8",
        )
        result = runner.invoke(cli, ["--config", str(config), "render", str(svg), "-o", str(tmp_path / "o.svg")])
        assert result.exit_code == 1
        assert "Font not found" in flat(result.output)

    def test_malformed_input_fails(self, runner: CliRunner, tmp_path: Path, malformed_svg_content: str) -> None:
        """Malformed input exits with status 1."""
        svg = tmp_path / "bad.svg"
        svg.write_text(malformed_svg_content, encoding="utf-8")
        result = runner.invoke(cli, ["render", str(svg), "-o", str(tmp_path / "o.png")])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_non_positive_scale_rejected(self, runner: CliRunner, temp_svg: Path, tmp_path: Path) -> None:
        """--scale 0 is a usage error."""
        result = runner.invoke(cli, ["render", str(temp_svg), "-o", str(tmp_path / "o.svg"), "-s", "0"])
        assert result.exit_code == 2


class TestBlocksCommand:
    """Tests for the blocks command."""

    def test_lists_blocks(self, runner: CliRunner, tmp_path: Path, decorated_svg_content: str) -> None:
        """Every block of every node is listed with a total."""
        svg = tmp_path / "deco.svg"
        svg.write_text(decorated_svg_content, encoding="utf-8")
        result = runner.invoke(cli, ["blocks", str(svg)])
        assert result.exit_code == 0, result.output
        assert "Total: 4 blocks in 2 text nodes" in flat(result.output)

    def test_describe_decoration(self) -> None:
        """describe_decoration names the active lines, or a dash."""
        style = TextDecorationStyle()
        assert describe_decoration(TextDecoration()) == "-"
        assert describe_decoration(TextDecoration(underline=style, line_through=style)) == "underline line-through"

    def test_measure_with_fonts(self, runner: CliRunner, config_file: Path, temp_svg: Path) -> None:
        """--fonts measures blocks with the resolved font files."""
        result = runner.invoke(cli, ["--config", str(config_file), "blocks", str(temp_svg), "--fonts"])
        assert result.exit_code == 0, result.output
        assert "Total: 1 blocks in 1 text nodes" in flat(result.output)


class TestFontsCommand:
    """Tests for the fonts command group."""

    def test_find(self, runner: CliRunner, config_file: Path) -> None:
        """fonts find prints the resolved file."""
        result = runner.invoke(cli, ["--config", str(config_file), "fonts", "find", "Test Sans"])
        assert result.exit_code == 0, result.output
        assert "Found:" in result.output
        assert "TestSans-Regular.ttf" in flat(result.output)

    def test_find_invalid_weight(self, runner: CliRunner, config_file: Path) -> None:
        """An invalid --weight exits with status 1."""
        result = runner.invoke(
            cli, ["--config", str(config_file), "fonts", "find", "Test Sans", "--weight", "heavy"]
        )
        assert result.exit_code == 1
        assert "Not found" in result.output

    def test_find_unknown_family(self, runner: CliRunner, tmp_path: Path) -> None:
        """An unknown family with no usable default exits with status 1."""
        config = tmp_path / "c.yaml"
        config.write_text("default_family: Missing Default Face\n", encoding="utf-8")
        result = runner.invoke(cli, ["--config", str(config), "fonts", "find", "No Such Face"])
        assert result.exit_code == 1
        assert "Not found" in result.output

    def test_list(self, runner: CliRunner, config_file: Path) -> None:
        """fonts list filters by family and prints a total."""
        result = runner.invoke(cli, ["--config", str(config_file), "fonts", "list", "--family", "test sans"])
        assert result.exit_code == 0, result.output
        assert "Test Sans" in result.output
        assert "Total: 1 fonts" in flat(result.output)
