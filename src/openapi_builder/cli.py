"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from openapi_builder.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from openapi_builder.document_rendering import (
    RenderExecutionError,
    RenderRequest,
    execute_document_render,
)

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="openapi-doc-builder")
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging level for diagnostics written to stderr",
)
def cli(log_level: str) -> None:
    """Build OpenAPI documents from typed Python declarations."""
    logging.basicConfig(
        level=log_level.upper(),
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML build configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML build configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="render")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON build configuration file",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path of the rendered document; overrides output.path from the configuration",
)
@click.option(
    "--format",
    "output_format",
    required=False,
    type=click.Choice(("yaml", "json"), case_sensitive=False),
    help="Rendered document format; overrides output.format from the configuration",
)
def render(config_path: str, output_path: str | None, output_format: str | None) -> None:
    """Build the configured document and render it as YAML or JSON."""
    try:
        outcome = execute_document_render(
            RenderRequest(
                config_path=config_path,
                output_path=output_path,
                output_format=output_format,
            )
        )
    except RenderExecutionError as exc:
        raise CliError(str(exc)) from exc
    if outcome.output_path is None:
        click.echo(outcome.text, nl=False)
    else:
        click.echo(str(outcome.output_path))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
