"""Annotate command: add AVADA evidence columns to a variant table."""

import logging
import sys
from pathlib import Path

import click

from avada_annotator.config.loader import load_config_with_overrides
from avada_annotator.evidence import (
    AvadaMatcher,
    MatchKey,
    PMID_COLUMN,
    TabixRangeLookup,
    annotate_variants,
    read_variant_table,
)
from avada_annotator.output import write_annotation_output

logger = logging.getLogger(__name__)


@click.command('annotate')
@click.option(
    '--input', 'input_path',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help='Tab-separated variant table (chrom, start, end, consequence, ...)'
)
@click.option(
    '--output', 'output_path',
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help='Annotated TSV to write'
)
@click.option(
    '--file', 'avada_file',
    type=click.Path(path_type=Path),
    default=None,
    help='Tabix-indexed AVADA file (overrides config)'
)
@click.option(
    '--feature-match-by',
    type=click.Choice([key.value for key in MatchKey]),
    default=None,
    help='Identifier to match transcripts on (overrides config, default: unset)'
)
@click.pass_context
def annotate(ctx, input_path, output_path, avada_file, feature_match_by):
    """Annotate variants with AVADA feature IDs and PubMed IDs.

    Adds AVADA_FEATURE_ID and AVADA_PMID columns. Upstream and downstream
    gene variants are never annotated.

    Examples:

        # Match by overlap only
        avada-annotator annotate --file avada_v1.00_2016.vcf.gz \\
            --input variants.tsv --output annotated.tsv

        # Match by RefSeq protein ID using a config file
        avada-annotator --config avada.yaml annotate \\
            --feature-match-by refseq_protein_id \\
            --input variants.tsv --output annotated.tsv
    """
    config_path = ctx.obj['config_path']

    click.echo(click.style("=== AVADA Annotation ===", bold=True))
    click.echo()

    lookup = None
    try:
        click.echo("Loading configuration...")
        config = load_config_with_overrides(config_path, {
            'file': avada_file,
            'feature_match_by': feature_match_by,
        })
        click.echo(click.style(f"  AVADA file: {config.file}", fg='green'))
        click.echo(f"  Match by: {config.feature_match_by.value}")
        click.echo()

        click.echo("Opening AVADA index...")
        lookup = TabixRangeLookup(config.file)
        matcher = AvadaMatcher.from_config(config, lookup=lookup)
        click.echo()

        click.echo("Reading variants...")
        df = read_variant_table(input_path)
        click.echo(f"  Variants: {len(df)}")
        click.echo()

        click.echo("Annotating...")
        df = annotate_variants(df, matcher)
        paths = write_annotation_output(df, output_path, config=config)

        with_pmid = df.filter(df[PMID_COLUMN].is_not_null()).height
        click.echo()
        click.echo(click.style("=== Summary ===", bold=True))
        click.echo(f"Total Variants: {len(df)}")
        click.echo(f"  With AVADA evidence: {with_pmid}")
        click.echo(f"Output: {paths['tsv']}")
        click.echo(f"Provenance: {paths['provenance']}")
        click.echo()
        click.echo(click.style("Annotation complete!", fg='green', bold=True))

    except Exception as e:
        click.echo(click.style(f"Annotate command failed: {e}", fg='red'), err=True)
        logger.exception("Annotate command failed")
        sys.exit(1)
    finally:
        if lookup is not None:
            lookup.close()
