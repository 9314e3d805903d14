"""CLI smoke tests."""

from click.testing import CliRunner
from openapi_builder.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "generate-config" in result.output
    assert "render" in result.output
    assert "--log-level" in result.output


def test_render_help_lists_overrides() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["render", "--help"])

    assert result.exit_code == 0
    assert "--config" in result.output
    assert "--output" in result.output
    assert "--format" in result.output
