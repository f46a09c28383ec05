"""CLI interface for extlibs.

Command-line tool for inspecting and serving external library assets.
"""

import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from extlibs.config import Config
from extlibs.core.library import AssetLibrary, build_libraries
from extlibs.errors import NotAttachableError
from extlibs.local.locator import LocatorFactory

CONFIG_OPTION_HELP = "Path to configuration file (default: auto-discover extlibs.toml)"


@click.group()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (debug logging)",
)
def cli(verbose: bool) -> None:
    """extlibs - serve external library assets locally or remotely."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_libraries(config_path: Path | None) -> dict[str, AssetLibrary]:
    config = Config.load(config_path)
    locator_factory = LocatorFactory(config.app.root, config.schemes)
    return build_libraries(config, locator_factory)


def _fail(message: str) -> NoReturn:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)


@cli.command("list")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help=CONFIG_OPTION_HELP,
)
def list_libraries(config_path: Path | None) -> None:
    """List configured libraries and where they are served from."""
    try:
        libraries = _load_libraries(config_path)
    except ValueError as e:
        _fail(str(e))

    if not libraries:
        click.echo("No libraries configured")
        return

    for library in libraries.values():
        if not library.can_be_attached():
            source = click.style("unavailable", fg="red")
        elif library.serves_locally():
            source = click.style("local", fg="green")
        else:
            source = click.style("remote", fg="yellow")
        click.echo(f"{library.id}: {source}")


@cli.command()
@click.argument("library_id")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help=CONFIG_OPTION_HELP,
)
def resolve(library_id: str, config_path: Path | None) -> None:
    """Print the resolved assets of a library as JSON."""
    try:
        libraries = _load_libraries(config_path)
    except ValueError as e:
        _fail(str(e))

    library = libraries.get(library_id)
    if library is None:
        _fail(f"Unknown library: {library_id}")

    try:
        library.get_path_prefix()
    except NotAttachableError as e:
        _fail(str(e))

    click.echo(json.dumps(library.to_dict(), indent=2))


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help=CONFIG_OPTION_HELP,
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--app-root",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Application root containing library directories (overrides config)",
)
def serve(
    config_path: Path | None,
    host: str | None,
    port: int | None,
    app_root: Path | None,
) -> None:
    """Start the assets API server."""
    from extlibs.server import run_server

    try:
        config = Config.load(config_path).with_overrides(
            host=host,
            port=port,
            app_root=app_root,
        )
    except ValueError as e:
        _fail(str(e))

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Application root: {config.app.root}")
    click.echo(f"Libraries: {len(config.libraries)}")

    run_server(config)


if __name__ == "__main__":
    cli()
