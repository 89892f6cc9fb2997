"""Batch annotation of a variant consequence table with AVADA evidence."""

import re
from pathlib import Path

import polars as pl
import structlog

from avada_annotator.evidence.matcher import AvadaMatcher
from avada_annotator.evidence.models import (
    FEATURE_ID_COLUMN,
    PMID_COLUMN,
    TranscriptContext,
    VariantContext,
)

logger = structlog.get_logger()


REQUIRED_COLUMNS = ["chrom", "start", "end", "consequence"]

# Input column -> TranscriptContext field
TRANSCRIPT_COLUMNS = {
    "transcript_id": "stable_id",
    "gene_symbol": "gene_symbol",
    "gene_id": "gene_stable_id",
    "protein_id": "translation_stable_id",
}

# Consequence terms are "&"-joined in VEP output; commas are accepted too
CONSEQUENCE_SEPARATOR = re.compile(r"[&,]")


def read_variant_table(path: Path | str) -> pl.DataFrame:
    """Read a tab-separated table of variant/transcript consequences.

    Required columns: chrom, start, end, consequence. Optional columns:
    transcript_id, gene_symbol, gene_id, protein_id. "." and "-" are read
    as null.

    Raises:
        FileNotFoundError: If the table doesn't exist
        ValueError: If a required column is missing
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Variant table not found: {path}")

    df = pl.read_csv(
        path,
        separator="\t",
        null_values=[".", "-", ""],
        infer_schema_length=0,
    )

    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"Variant table missing required columns: {missing}")

    df = df.with_columns([
        pl.col("start").cast(pl.Int64),
        pl.col("end").cast(pl.Int64),
    ])

    logger.info("avada_variant_table_read", path=str(path), row_count=len(df))
    return df


def _row_to_context(row: dict) -> VariantContext:
    consequence = row.get("consequence") or ""
    terms = [term for term in CONSEQUENCE_SEPARATOR.split(consequence) if term]

    transcript_values = {
        field: row[column]
        for column, field in TRANSCRIPT_COLUMNS.items()
        if row.get(column) is not None
    }
    transcript = TranscriptContext(**transcript_values) if transcript_values else None

    return VariantContext(
        chrom=str(row["chrom"]),
        start=row["start"],
        end=row["end"],
        consequence_terms=terms,
        transcript=transcript,
    )


def annotate_variants(df: pl.DataFrame, matcher: AvadaMatcher) -> pl.DataFrame:
    """Append AVADA_FEATURE_ID and AVADA_PMID columns to a variant table.

    Rows are annotated one at a time in input order. Rows without evidence
    get nulls in both columns.

    Args:
        df: DataFrame as returned by read_variant_table
        matcher: Configured AvadaMatcher

    Returns:
        Input DataFrame with the two AVADA columns added
    """
    logger.info(
        "avada_annotate_start",
        row_count=len(df),
        match_key=matcher.match_key.value,
    )

    feature_ids = []
    pmid_lists = []
    for row in df.iter_rows(named=True):
        result = matcher.annotate(_row_to_context(row))
        feature_ids.append(result.feature_id)
        pmid_lists.append(result.pmid_list)

    df = df.with_columns([
        pl.Series(FEATURE_ID_COLUMN, feature_ids, dtype=pl.Utf8),
        pl.Series(PMID_COLUMN, pmid_lists, dtype=pl.Utf8),
    ])

    with_evidence = df.filter(pl.col(PMID_COLUMN).is_not_null()).height
    logger.info(
        "avada_annotate_complete",
        row_count=len(df),
        with_evidence=with_evidence,
    )

    return df
