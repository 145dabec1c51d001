"""Codeloom CLI interface.

Commands:
- render: Compile a template with string arguments and print the result
- check: List a template's placeholders and report missing/unused arguments
- palette: Preview the provenance colour palette

Global options:
- --config: Path to configuration file
- --verbose: Enable verbose output with timestamps
- --quiet: Suppress info messages
- --ci: JSON log output
- --version: Show version and exit

The CLI never writes files; generated text goes to stdout, logs to stderr.
"""

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
import yaml

from codeloom import __version__
from codeloom.compiler import compile_template, find_placeholders
from codeloom.config import CodeloomConfig, load_config
from codeloom.exceptions import CodeloomError
from codeloom.palette import PALETTE, palette_color, palette_style
from codeloom.provenance import get_registry
from codeloom.renderers import render, render_debug
from codeloom.utils.logging import configure_from_cli, get_logger

app = typer.Typer(
    name="codeloom",
    help="Compose and render indentation-aware code templates",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config: CodeloomConfig | None = None
_logger = get_logger("codeloom.cli")

STDIN_MARKER = "-"


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"codeloom {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output with timestamps",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress info messages (warnings and errors only)",
        ),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option(
            "--ci",
            help="Enable CI mode with JSON log output",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Codeloom - compose and render code generation templates."""
    global _config

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)

    try:
        _config = load_config(config_path=config)
        if _config.config_path:
            _logger.debug(f"Loaded config from: {_config.config_path}")
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except (CodeloomError, yaml.YAMLError) as e:
        _logger.error(f"Failed to load config: {e}")
        raise typer.Exit(1)


def _read_template(source: str) -> tuple[str, str]:
    """Read template text from a path or stdin.

    Returns:
        Tuple of (display name, template text)
    """
    if source == STDIN_MARKER:
        return "<stdin>", sys.stdin.read()

    path = Path(source)
    if not path.is_file():
        _logger.error(f"Template not found: {source}")
        raise typer.Exit(1)
    return str(path), path.read_text(encoding="utf-8")


def _parse_assignments(assignments: list[str]) -> list[tuple[str, str]]:
    """Parse NAME=VALUE options into (name, value) pairs."""
    pairs: list[tuple[str, str]] = []
    for assignment in assignments:
        name, sep, value = assignment.partition("=")
        if not sep or not name:
            _logger.error(f"Invalid argument {assignment!r}, expected NAME=VALUE")
            raise typer.Exit(1)
        pairs.append((name, value))
    return pairs


# =============================================================================
# render command
# =============================================================================


@app.command(name="render")
def render_command(
    template: Annotated[
        str,
        typer.Argument(help="Template file, or - to read from stdin"),
    ],
    arg: Annotated[
        list[str] | None,
        typer.Option(
            "--arg",
            "-a",
            help="Substitution as NAME=VALUE (repeatable)",
        ),
    ] = None,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug",
            help="Colour output by template source and append a legend",
        ),
    ] = False,
) -> None:
    """Render a template with string arguments.

    Exit codes:
        0: Rendered successfully
        1: Unresolved placeholder, malformed argument, or unreadable template
    """
    name, text = _read_template(template)
    arguments = _parse_assignments(arg or [])
    config = _config or CodeloomConfig()

    provenance = get_registry().register(name, 1, 1)
    try:
        document = compile_template(text, provenance, arguments)
        if debug:
            output = render_debug(document, config.render, config.debug)
        else:
            output = render(document, config.render)
    except CodeloomError as e:
        _logger.error(str(e))
        raise typer.Exit(1)

    _logger.debug(f"Rendered {name} ({len(document)} operations)")
    typer.echo(output, nl=not output.endswith("\n"), color=debug or None)


# =============================================================================
# check command
# =============================================================================


@app.command()
def check(
    template: Annotated[
        str,
        typer.Argument(help="Template file, or - to read from stdin"),
    ],
    arg: Annotated[
        list[str] | None,
        typer.Option(
            "--arg",
            "-a",
            help="Name of an argument that will be supplied (repeatable)",
        ),
    ] = None,
) -> None:
    """List a template's placeholders.

    With --arg names given, reports placeholders that would be unresolved
    and arguments the template never uses.

    Exit codes:
        0: Every placeholder is covered (or no --arg given)
        1: At least one placeholder has no argument
    """
    name, text = _read_template(template)
    placeholders = find_placeholders(text)

    typer.echo(f"{name}: {len(placeholders)} placeholder(s)")
    for placeholder in placeholders:
        typer.echo(f"  ${placeholder}")

    if arg is None:
        raise typer.Exit(0)

    supplied = set(arg)
    missing = [p for p in placeholders if p not in supplied]
    unused = sorted(supplied - set(placeholders))

    for unused_name in unused:
        _logger.warning(f"Argument never referenced: {unused_name}")

    if missing:
        for missing_name in missing:
            typer.echo(f"  missing: ${missing_name}")
        _logger.structured(logging.ERROR, "Unresolved placeholders", template=name, missing=missing)
        raise typer.Exit(1)

    typer.echo("All placeholders resolved")
    raise typer.Exit(0)


# =============================================================================
# palette command
# =============================================================================


@app.command()
def palette(
    count: Annotated[
        int,
        typer.Option(
            "--count",
            "-n",
            min=1,
            help="Number of palette entries to show",
        ),
    ] = len(PALETTE),
) -> None:
    """Preview the provenance colour palette."""
    color_system = (_config or CodeloomConfig()).debug.rich_color_system
    for index in range(count):
        label = f" {index:3d}  colour {palette_color(index):3d} "
        typer.echo(palette_style(index).render(label, color_system=color_system), color=True)


if __name__ == "__main__":
    app()
