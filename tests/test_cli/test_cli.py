"""Tests for the pressroom command line."""

import pytest
from click.testing import CliRunner

from pressroom import __version__
from pressroom.cli import convert as convert_commands
from pressroom.cli.main import cli
from pressroom.config import CONVERSION_MARKER
from pressroom.errors import StagingError

THEME_CSS = "#wemd { --bg: #ffffff; } #wemd p { background: var(--bg); }"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def theme_file(tmp_path):
    path = tmp_path / "theme.css"
    path.write_text(THEME_CSS, encoding="utf-8")
    return path


class TestGroup:
    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert f"pressroom, version {__version__}" in result.output

    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("expand", "dark", "resolve", "lint"):
            assert name in result.output

    def test_verbose_configures_debug_logging(self, runner, theme_file, monkeypatch):
        calls = []
        monkeypatch.setattr("logging.basicConfig", lambda **kwargs: calls.append(kwargs))
        result = runner.invoke(cli, ["-v", "expand", str(theme_file)])
        assert result.exit_code == 0
        assert calls and calls[0]["level"] == 10


class TestExpand:
    def test_stdout(self, runner, theme_file):
        result = runner.invoke(cli, ["expand", str(theme_file)])
        assert result.exit_code == 0
        assert result.output == " #wemd p { background: #ffffff; }"

    def test_output_file(self, runner, theme_file, tmp_path):
        out = tmp_path / "flat.css"
        result = runner.invoke(cli, ["expand", str(theme_file), "-o", str(out)])
        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8") == " #wemd p { background: #ffffff; }"
        assert f"Wrote {out}" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["expand", str(tmp_path / "nope.css")])
        assert result.exit_code == 2


class TestDark:
    def test_expands_then_converts(self, runner, theme_file):
        result = runner.invoke(cli, ["dark", str(theme_file)])
        assert result.exit_code == 0
        assert result.output == f"{CONVERSION_MARKER}\n#wemd p{{background: #1f1f1f}}"

    def test_no_expand_leaves_var(self, runner, tmp_path):
        path = tmp_path / "vars.css"
        path.write_text("p { color: var(--c, #333333); }", encoding="utf-8")
        result = runner.invoke(cli, ["dark", "--no-expand", str(path)])
        assert result.exit_code == 0
        assert result.output == f"{CONVERSION_MARKER}\np{{color: var(--c, #333333)}}"

    def test_already_converted_passes_through(self, runner, tmp_path):
        css = f"{CONVERSION_MARKER}\np{{color: #717171}}"
        path = tmp_path / "dark.css"
        path.write_text(css, encoding="utf-8")
        result = runner.invoke(cli, ["dark", str(path)])
        assert result.output == css


class TestResolve:
    def test_resolves_inline_styles(self, runner, tmp_path):
        path = tmp_path / "post.html"
        path.write_text(
            '<section style="--c: #111111"><p style="color: var(--c)">x</p></section>',
            encoding="utf-8",
        )
        result = runner.invoke(cli, ["resolve", str(path)])
        assert result.exit_code == 0
        assert result.output == '<section><p style="color: #111111;">x</p></section>'

    def test_staging_error_reported(self, runner, tmp_path, monkeypatch):
        def fail(markup):
            raise StagingError("Cannot stage markup: broken")

        monkeypatch.setattr(convert_commands, "resolve_inline_style_variables", fail)
        path = tmp_path / "post.html"
        path.write_text('<p style="color: var(--c)">x</p>', encoding="utf-8")
        result = runner.invoke(cli, ["resolve", str(path)])
        assert result.exit_code == 1
        assert "Cannot stage markup: broken" in result.output


class TestLint:
    def test_clean_file(self, runner, tmp_path):
        path = tmp_path / "clean.css"
        path.write_text("p { color: #333; }", encoding="utf-8")
        result = runner.invoke(cli, ["lint", str(path)])
        assert result.exit_code == 0
        assert "OK: clean.css is clean (0 diagnostics)" in result.output

    def test_warnings_only(self, runner, theme_file):
        result = runner.invoke(cli, ["lint", str(theme_file)])
        assert result.exit_code == 0
        assert "WARNING [line=1]" in result.output
        assert "Summary: 0 error(s), 2 warning(s), 0 info" in result.output

    def test_ignore_option(self, runner, theme_file):
        result = runner.invoke(
            cli,
            ["lint", "--ignore", "check_unresolved_var", "--ignore", "check_custom_property_declarations", str(theme_file)],
        )
        assert result.exit_code == 0
        assert "OK: theme.css is clean (0 diagnostics)" in result.output

    def test_errors_exit_nonzero(self, runner, tmp_path):
        path = tmp_path / "broken.css"
        path.write_text("p { color: red;", encoding="utf-8")
        result = runner.invoke(cli, ["lint", str(path)])
        assert result.exit_code == 1
        assert "ERROR [line=1]" in result.output
