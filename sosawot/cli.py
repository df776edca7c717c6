import asyncio
import json
import logging
import sys

import click

from sosawot import __version__
from sosawot import configuration
from sosawot import set_logging_level
from sosawot.application import expose_file
from sosawot.errors import InternalInvariantError, MalformedInputError, NoObservationError
from sosawot.runtime import Servient
from sosawot.stores.rdffilestore import guess_format

logger = logging.getLogger("sosawot")


def _load(filename, fmt) -> Servient:
    """Exposes the features of `filename` on a new servient. Exits if the file is malformed."""
    cfg = configuration.get_config()
    if fmt is None:
        try:
            fmt = guess_format(filename)
        except ValueError:
            fmt = cfg.input_format
    servient = Servient()
    try:
        asyncio.run(expose_file(servient, filename, format=fmt, identifier_length=cfg.identifier_length))
    except MalformedInputError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    return servient


@click.group(invoke_without_command=True)
@click.option('-V', '--version', is_flag=True, help='Show version')
@click.option('--log-level', help='Set the log level')
@click.option('--profile', help='Select the configuration profile')
@click.pass_context
def cli(ctx, version, log_level, profile):
    cfg = configuration.get_config()
    if profile:
        cfg.select_profile(profile, persist=False)
    set_logging_level(cfg.logging_level)
    if log_level:
        logger.debug(f"Setting log level to {log_level}...")
        set_logging_level(log_level.upper())
        logger.debug(f"Log level set to {logger.level}")
    if version:
        click.echo(f'sosawot version {__version__}')
        return
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command(help="Serve the features of interest of an RDF (Turtle) file as Things over HTTP.")
@click.argument('filename', type=click.Path(exists=True, dir_okay=False))
@click.option('--format', 'fmt', default=None, help='RDF serialization of FILENAME. Guessed from the suffix by default')
@click.option('--host', default=None, help='Host to bind to')
@click.option('--port', default=None, type=int, help='Port to bind to')
def serve(filename, fmt, host, port):
    import uvicorn
    from sosawot.web import create_app

    cfg = configuration.get_config()
    servient = _load(filename, fmt)
    host = host or cfg.http_host
    port = port or cfg.http_port
    click.echo(f"Serving {len(servient.things)} things on http://{host}:{port}")
    uvicorn.run(create_app(servient, base_url=cfg.base_url), host=host, port=port)


@cli.command(help="List the Things and their observed properties found in an RDF file.")
@click.argument('filename', type=click.Path(exists=True, dir_okay=False))
@click.option('--format', 'fmt', default=None, help='RDF serialization of FILENAME. Guessed from the suffix by default')
def things(filename, fmt):
    servient = _load(filename, fmt)
    for name, thing in servient.things.items():
        click.echo(f"{name}: {thing.title} ({thing.feature})")
        for property_name, property_node in thing.observable_properties.items():
            click.echo(f" > {property_name}: {property_node}")


@cli.command(help="Read the latest value of a property of a Thing.")
@click.argument('filename', type=click.Path(exists=True, dir_okay=False))
@click.argument('thing')
@click.argument('property_name')
@click.option('--format', 'fmt', default=None, help='RDF serialization of FILENAME. Guessed from the suffix by default')
def read(filename, thing, property_name, fmt):
    servient = _load(filename, fmt)
    try:
        exposed_thing = servient.get_thing(thing)
        value = asyncio.run(exposed_thing.read_property(property_name))
    except (KeyError, NoObservationError, InternalInvariantError) as e:
        click.echo(f"Error: {e.args[0]}", err=True)
        sys.exit(1)
    click.echo(json.dumps(value, indent=2))


@cli.command()
def info():
    cfg = configuration.get_config()
    click.echo(f"Configuration file: {cfg.filename}")
    click.echo(str(cfg))


if __name__ == '__main__':
    cli()
