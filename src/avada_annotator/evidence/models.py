"""Data models for AVADA evidence records and annotation results."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# Output columns attached to each annotated variant
FEATURE_ID_COLUMN = "AVADA_FEATURE_ID"
PMID_COLUMN = "AVADA_PMID"

HEADER_INFO = {
    FEATURE_ID_COLUMN: "Feature ID associated with variant as reported by AVADA",
    PMID_COLUMN: "PubMed ID evidence for the variant as reported by AVADA",
}

# Consequence classes AVADA evidence is never reported for
UNSUPPORTED_CONSEQUENCES = frozenset({
    "downstream_gene_variant",
    "upstream_gene_variant",
})

# Column 8 KEY=VALUE annotations mapped to EvidenceRecord fields
ANNOTATION_KEYS = {
    "PMID": "pmid",
    "ENSEMBL_ID": "ensembl_gene_id",
    "GENE_SYMBOL": "gene_symbol",
    "REFSEQ_ID": "refseq_id",
    "ORIGINAL_VARIANT_STRING": "variant_string",
}

MIN_FIELD_COUNT = 8

# Source-specific prefix on RefSeq protein IDs served from the database
REFSEQ_PROTEIN_DB_PREFIX = "cds-"


class MatchKey(str, Enum):
    """Identifier type used to join transcript context to evidence records."""

    UNSET = "unset"
    GENE_SYMBOL = "gene_symbol"
    ENSEMBL_GENE_ID = "ensembl_gene_id"
    REFSEQ_TRANSCRIPT_ID = "refseq_transcript_id"
    REFSEQ_PROTEIN_ID = "refseq_protein_id"


# Record field compared for each match key
JOIN_FIELDS = {
    MatchKey.GENE_SYMBOL: "gene_symbol",
    MatchKey.ENSEMBL_GENE_ID: "ensembl_gene_id",
    MatchKey.REFSEQ_TRANSCRIPT_ID: "refseq_id",
    MatchKey.REFSEQ_PROTEIN_ID: "refseq_id",
}


class EvidenceRecord(BaseModel):
    """One AVADA row: a literature-derived link between a variant and a gene.

    CRITICAL: annotation keys missing from the source line are None, not "".
    Filtering relies on telling an absent identifier apart from an empty one.
    """

    chrom: Optional[str] = None
    position: Optional[int] = None
    variant_id: Optional[str] = None
    ref: Optional[str] = None
    alt: Optional[str] = None

    pmid: Optional[str] = Field(None, description="PubMed ID of the supporting publication")
    ensembl_gene_id: Optional[str] = Field(None, description="Ensembl gene ID (e.g., ENSG00000012048)")
    gene_symbol: Optional[str] = Field(None, description="HGNC gene symbol (e.g., BRCA1)")
    refseq_id: Optional[str] = Field(
        None,
        description="RefSeq transcript (NM_) or protein (NP_) ID, depending on the source row",
    )
    variant_string: Optional[str] = Field(
        None,
        description="Variant as written in the publication, informational only",
    )


class TranscriptContext(BaseModel):
    """Identifiers of the transcript a variant consequence was predicted on."""

    stable_id: Optional[str] = None
    gene_symbol: Optional[str] = None
    gene_stable_id: Optional[str] = None
    translation_stable_id: Optional[str] = None


class VariantContext(BaseModel):
    """Variant position and consequences as supplied by the host.

    Coordinates are 1-based and inclusive.
    """

    chrom: str
    start: int
    end: int
    consequence_terms: list[str] = Field(default_factory=list)
    transcript: Optional[TranscriptContext] = None


class AnnotationResult(BaseModel):
    """Feature ID and unique PMIDs (first-seen order) found for one variant."""

    feature_id: Optional[str] = None
    pmids: list[str] = Field(default_factory=list)

    @property
    def pmid_list(self) -> Optional[str]:
        """Comma-joined PMIDs, or None when there are none."""
        return ",".join(self.pmids) if self.pmids else None

    @property
    def is_empty(self) -> bool:
        return self.feature_id is None and not self.pmids

    def to_output(self) -> dict[str, str]:
        """Host-facing mapping; fields without evidence are omitted."""
        output = {}
        if self.feature_id is not None:
            output[FEATURE_ID_COLUMN] = self.feature_id
        if self.pmids:
            output[PMID_COLUMN] = self.pmid_list
        return output
