"""Lattice CLI - Main Entry Point.

Commands:
    routes    - Show the route table built from a wiring
    providers - Show container registrations and property dependencies
    version   - Show version information
"""

import logging
from typing import Optional

import click

from . import __cli_name__
from .. import __version__
from ..config import ConfigError, ConfigLoader
from ..di.diagnostics import ConsoleDiagnosticListener
from ..errors import LatticeError


def _setup(ctx: click.Context, target: Optional[str]):
    """Resolve the target, configure logging and load the wiring."""
    from .commands.inspect import load_wiring

    settings = ctx.obj['settings']
    target = target or settings.target
    if not target:
        raise click.UsageError("TARGET is required (or set 'target' in lattice.yaml)")

    try:
        wiring = load_wiring(target)
    except LatticeError as e:
        raise click.ClickException(str(e)) from e

    if settings.diagnostics:
        wiring.container.diagnostics.add_listener(
            ConsoleDiagnosticListener(log_level=logging.INFO)
        )
    return wiring


@click.group()
@click.version_option(version=__version__, prog_name=__cli_name__)
@click.option('--config', 'config_path', type=click.Path(dir_okay=False), help='YAML config file')
@click.option('--env-file', type=click.Path(dir_okay=False), help='.env file with LATTICE_* entries')
@click.option('--verbose', '-v', is_flag=True, help='Log at DEBUG level')
@click.pass_context
def cli(ctx, config_path: Optional[str], env_file: Optional[str], verbose: bool):
    """Inspect metadata-driven wiring: providers, dependencies and routes.

    \b
    Quick start:
      lattice routes myapp.wiring:build
      lattice providers myapp.wiring:build --json
    """
    ctx.ensure_object(dict)
    try:
        settings = ConfigLoader.load(path=config_path, env_file=env_file).settings()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        settings.log_level = "DEBUG"

    logging.basicConfig(
        level=settings.log_level_value,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
    ctx.obj['settings'] = settings


@cli.command('routes')
@click.argument('target', required=False)
@click.option('--json', 'as_json', is_flag=True, help='Output as JSON')
@click.option('--check', is_flag=True, help='Fail if two handlers claim the same method and path')
@click.pass_context
def routes_cmd(ctx, target: Optional[str], as_json: bool, check: bool):
    """
    Show the route table of every bootstrapped controller.

    TARGET is 'module:attribute' naming a Wiring or a callable returning one.

    Examples:
      lattice routes myapp.wiring:build
      lattice routes myapp.wiring:build --check
    """
    from .commands.inspect import inspect_routes

    wiring = _setup(ctx, target)
    ctx.exit(inspect_routes(wiring, as_json=as_json, check=check))


@cli.command('providers')
@click.argument('target', required=False)
@click.option('--json', 'as_json', is_flag=True, help='Output as JSON')
@click.pass_context
def providers_cmd(ctx, target: Optional[str], as_json: bool):
    """
    Show registered keys and property dependencies.

    Examples:
      lattice providers myapp.wiring:build
    """
    from .commands.inspect import inspect_providers

    wiring = _setup(ctx, target)
    inspect_providers(wiring, as_json=as_json)


@cli.command('version')
def version():
    """Show version information."""
    click.echo(f"{__cli_name__} {__version__}")


def main():
    """Entry point for `lattice` command."""
    cli(obj={})


if __name__ == '__main__':
    main()
