"""AVADA evidence layer: literature-mined variant evidence from a tabix-indexed file.

Looks up AVADA rows overlapping a variant, optionally keeps only rows matching
the variant's transcript on a configured identifier, and reports a feature ID
with the de-duplicated PubMed IDs supporting it.

Key exports:
- fetch: RangeLookup, TabixRangeLookup, fetch_evidence_records
- transform: parse_avada_line, parse_annotation_field, resolve_join_value,
  filter_records, unique_pmids
- matcher: AvadaMatcher
- load: read_variant_table, annotate_variants
- models: EvidenceRecord, MatchKey, TranscriptContext, VariantContext,
  AnnotationResult, HEADER_INFO
"""

from avada_annotator.evidence.models import (
    AnnotationResult,
    EvidenceRecord,
    FEATURE_ID_COLUMN,
    HEADER_INFO,
    MatchKey,
    PMID_COLUMN,
    TranscriptContext,
    UNSUPPORTED_CONSEQUENCES,
    VariantContext,
)
from avada_annotator.evidence.transform import (
    filter_records,
    parse_annotation_field,
    parse_avada_line,
    resolve_join_value,
    unique_pmids,
)
from avada_annotator.evidence.fetch import (
    RangeLookup,
    TabixRangeLookup,
    fetch_evidence_records,
)
from avada_annotator.evidence.matcher import AvadaMatcher
from avada_annotator.evidence.load import (
    annotate_variants,
    read_variant_table,
)

__all__ = [
    # Models
    "AnnotationResult",
    "EvidenceRecord",
    "FEATURE_ID_COLUMN",
    "HEADER_INFO",
    "MatchKey",
    "PMID_COLUMN",
    "TranscriptContext",
    "UNSUPPORTED_CONSEQUENCES",
    "VariantContext",
    # Transform
    "filter_records",
    "parse_annotation_field",
    "parse_avada_line",
    "resolve_join_value",
    "unique_pmids",
    # Fetch
    "RangeLookup",
    "TabixRangeLookup",
    "fetch_evidence_records",
    # Matcher
    "AvadaMatcher",
    # Load
    "annotate_variants",
    "read_variant_table",
]
