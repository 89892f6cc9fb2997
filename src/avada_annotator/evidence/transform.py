"""Parse AVADA database lines and select evidence for a transcript."""

from typing import Optional

import structlog

from avada_annotator.evidence.models import (
    ANNOTATION_KEYS,
    JOIN_FIELDS,
    MIN_FIELD_COUNT,
    REFSEQ_PROTEIN_DB_PREFIX,
    EvidenceRecord,
    MatchKey,
    TranscriptContext,
)

logger = structlog.get_logger()


def parse_annotation_field(field: str) -> dict[str, str]:
    """Split a ``KEY=VALUE;KEY=VALUE`` blob into a mapping.

    Tokens without ``=`` are dropped. Values keep any further ``=`` characters.
    A repeated key keeps its last value.
    """
    annotations = {}
    for token in field.split(";"):
        key, sep, value = token.partition("=")
        if not sep:
            continue
        annotations[key.strip()] = value
    return annotations


def parse_avada_line(line: str) -> EvidenceRecord:
    """Parse one tab-separated AVADA row into an EvidenceRecord.

    Columns: chrom, position, ID, ref, alt, two unused columns, and the
    annotation blob. Only PMID, ENSEMBL_ID, GENE_SYMBOL, REFSEQ_ID and
    ORIGINAL_VARIANT_STRING are kept from the blob.

    Args:
        line: Raw line as returned by the range lookup

    Returns:
        EvidenceRecord with absent annotation keys left as None

    Raises:
        ValueError: If the line has fewer than 8 tab-separated fields
    """
    fields = line.rstrip("\r\n").split("\t")
    if len(fields) < MIN_FIELD_COUNT:
        raise ValueError(
            f"Expected at least {MIN_FIELD_COUNT} tab-separated fields, got {len(fields)}"
        )

    annotations = parse_annotation_field(fields[7])
    values = {
        attr: annotations[key]
        for key, attr in ANNOTATION_KEYS.items()
        if key in annotations
    }

    try:
        position = int(fields[1])
    except ValueError:
        position = None

    return EvidenceRecord(
        chrom=fields[0],
        position=position,
        variant_id=fields[2],
        ref=fields[3],
        alt=fields[4],
        **values,
    )


def resolve_join_value(
    match_key: MatchKey,
    transcript: Optional[TranscriptContext],
    database: bool = False,
) -> Optional[str]:
    """Return the transcript identifier compared against records for match_key.

    RefSeq protein IDs served from a database carry a ``cds-`` prefix that
    the AVADA file does not, so it is removed in database mode.
    """
    if transcript is None or match_key == MatchKey.UNSET:
        return None

    if match_key == MatchKey.GENE_SYMBOL:
        return transcript.gene_symbol
    if match_key == MatchKey.ENSEMBL_GENE_ID:
        return transcript.gene_stable_id
    if match_key == MatchKey.REFSEQ_TRANSCRIPT_ID:
        return transcript.stable_id
    if match_key == MatchKey.REFSEQ_PROTEIN_ID:
        protein_id = transcript.translation_stable_id
        if protein_id is not None and database:
            protein_id = protein_id.removeprefix(REFSEQ_PROTEIN_DB_PREFIX)
        return protein_id

    raise ValueError(f"Unsupported match key: {match_key!r}")


def filter_records(
    records: list[EvidenceRecord],
    match_key: MatchKey,
    value: Optional[str],
) -> list[EvidenceRecord]:
    """Keep records whose join field for match_key equals value.

    A missing value matches nothing, and neither does a record without the
    join field.
    """
    if value is None:
        return []
    join_field = JOIN_FIELDS[match_key]
    matched = [
        record for record in records
        if getattr(record, join_field) is not None
        and getattr(record, join_field) == value
    ]
    logger.debug(
        "avada_records_filtered",
        match_key=match_key.value,
        value=value,
        kept=len(matched),
        total=len(records),
    )
    return matched


def unique_pmids(records: list[EvidenceRecord]) -> list[str]:
    """PMIDs of records in first-seen order, each listed once.

    Deduplication is keyed on PMID alone: a later record sharing a PMID with
    an earlier one is dropped even if its other fields differ. Records with
    a missing or empty PMID contribute nothing.
    """
    seen = set()
    pmids = []
    for record in records:
        if not record.pmid or record.pmid in seen:
            continue
        seen.add(record.pmid)
        pmids.append(record.pmid)
    return pmids
