"""Match variants to AVADA evidence and collect supporting PMIDs."""

from typing import TYPE_CHECKING, Iterable, Optional

import structlog

from avada_annotator.evidence.fetch import RangeLookup, TabixRangeLookup, fetch_evidence_records
from avada_annotator.evidence.models import (
    JOIN_FIELDS,
    UNSUPPORTED_CONSEQUENCES,
    AnnotationResult,
    MatchKey,
    TranscriptContext,
    VariantContext,
)
from avada_annotator.evidence.transform import (
    filter_records,
    resolve_join_value,
    unique_pmids,
)

if TYPE_CHECKING:
    from avada_annotator.config.schema import AvadaConfig

logger = structlog.get_logger()


class AvadaMatcher:
    """Annotates variants with AVADA feature IDs and PMIDs.

    The match key is fixed at construction and applies to every variant
    annotated by this instance.
    """

    def __init__(
        self,
        lookup: RangeLookup,
        match_key: MatchKey | str = MatchKey.UNSET,
        database: bool = False,
    ):
        """Initialize matcher.

        Args:
            lookup: Range lookup returning raw AVADA lines
            match_key: Identifier type to filter records by (default: unset)
            database: Host reads transcripts from a database rather than a
                      cache; affects RefSeq protein ID normalization

        Raises:
            ValueError: If match_key is not a known MatchKey value
        """
        if match_key is None:
            match_key = MatchKey.UNSET
        self.lookup = lookup
        self.match_key = MatchKey(match_key)
        self.database = database
        logger.info(
            "avada_matcher_init",
            match_key=self.match_key.value,
            database=database,
        )

    @classmethod
    def from_config(
        cls,
        config: "AvadaConfig",
        lookup: Optional[RangeLookup] = None,
    ) -> "AvadaMatcher":
        """Create a matcher from AvadaConfig, opening config.file if needed."""
        if lookup is None:
            lookup = TabixRangeLookup(config.file)
        return cls(
            lookup=lookup,
            match_key=config.feature_match_by,
            database=config.database,
        )

    def annotate(self, variant: VariantContext) -> AnnotationResult:
        """Find AVADA evidence for one variant/transcript pair.

        Returns an empty AnnotationResult when the variant is upstream or
        downstream of the gene, nothing overlaps it, or no overlapping record
        matches the transcript on the configured identifier.
        """
        if UNSUPPORTED_CONSEQUENCES.intersection(variant.consequence_terms):
            return AnnotationResult()

        records = fetch_evidence_records(
            self.lookup, variant.chrom, variant.start, variant.end
        )

        if self.match_key == MatchKey.UNSET:
            if not records:
                return AnnotationResult()
            return AnnotationResult(
                feature_id=records[0].gene_symbol,
                pmids=unique_pmids(records),
            )

        value = resolve_join_value(self.match_key, variant.transcript, self.database)
        matched = filter_records(records, self.match_key, value)
        if not matched:
            return AnnotationResult()

        return AnnotationResult(
            feature_id=getattr(matched[0], JOIN_FIELDS[self.match_key]),
            pmids=unique_pmids(matched),
        )

    def annotate_region(
        self,
        chrom: str,
        start: int,
        end: int,
        consequence_terms: Iterable[str] = (),
        transcript: Optional[TranscriptContext] = None,
    ) -> AnnotationResult:
        """Convenience wrapper around annotate() taking plain arguments."""
        return self.annotate(VariantContext(
            chrom=chrom,
            start=start,
            end=end,
            consequence_terms=list(consequence_terms),
            transcript=transcript,
        ))
