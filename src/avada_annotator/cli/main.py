"""Main CLI entry point for avada-annotator.

Provides command group with global options and subcommands for annotation.
"""

import logging
from pathlib import Path

import click

from avada_annotator import __version__
from avada_annotator.config.loader import load_config
from avada_annotator.cli.annotate_cmd import annotate
from avada_annotator.evidence.models import HEADER_INFO


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@click.group()
@click.option(
    '--config',
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help='Path to annotator configuration YAML file'
)
@click.option(
    '--verbose',
    is_flag=True,
    help='Enable verbose logging (DEBUG level)'
)
@click.version_option(__version__, prog_name='avada-annotator')
@click.pass_context
def cli(ctx, config, verbose):
    """AVADA annotator: literature evidence for variants from the AVADA database.

    Matches variants to AVADA records by overlap and, optionally, by gene
    symbol, Ensembl gene ID, RefSeq transcript ID or RefSeq protein ID.
    """
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config
    ctx.obj['verbose'] = verbose

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.debug("Verbose logging enabled")


@cli.command()
@click.pass_context
def info(ctx):
    """Display annotator information and configuration summary."""
    config_path = ctx.obj['config_path']

    click.echo(f"AVADA Annotator v{__version__}")
    if config_path is None:
        click.echo("Config: none (pass --config to inspect one)")
        return

    click.echo(f"Config: {config_path}")
    click.echo()

    try:
        config = load_config(config_path)

        config_hash = config.config_hash()
        click.echo(f"Config Hash: {config_hash[:16]}...")
        click.echo()

        click.echo(click.style("AVADA:", bold=True))
        click.echo(f"  File: {config.file}")
        click.echo(f"  Match By: {config.feature_match_by.value}")
        click.echo()

        click.echo(click.style("Host Mode:", bold=True))
        click.echo(f"  Database: {config.database}")
        click.echo(f"  RefSeq: {config.refseq}")
        click.echo(f"  Use Given Ref: {config.use_given_ref}")

    except Exception as e:
        click.echo(click.style(f"Error loading config: {e}", fg='red'), err=True)
        ctx.exit(1)


@cli.command()
def header():
    """Print the output columns added by the annotator."""
    for column, description in HEADER_INFO.items():
        click.echo(f"{column}\t{description}")


# Register commands
cli.add_command(annotate)


if __name__ == '__main__':
    cli()
