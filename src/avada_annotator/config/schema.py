"""Pydantic models for annotator configuration."""

import hashlib
import json
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

from avada_annotator.evidence.models import MatchKey


class AvadaConfig(BaseModel):
    """AVADA annotation settings plus the host mode flags they depend on."""

    file: Path = Field(
        ...,
        description="Path to the bgzip-compressed, tabix-indexed AVADA file",
    )
    feature_match_by: MatchKey = Field(
        default=MatchKey.UNSET,
        description="Identifier used to match transcripts to AVADA records",
    )
    database: bool = Field(
        default=False,
        description="Host reads transcripts from a database instead of a cache",
    )
    refseq: bool = Field(
        default=False,
        description="Host annotates against RefSeq transcripts",
    )
    use_given_ref: bool = Field(
        default=False,
        description="Host uses the reference allele given in the input",
    )

    @field_validator("feature_match_by", mode="before")
    @classmethod
    def default_match_key(cls, v):
        """Treat an empty or missing value as unset."""
        if v is None or v == "":
            return MatchKey.UNSET
        return v

    @model_validator(mode="after")
    def check_refseq_mode(self) -> "AvadaConfig":
        """
        Apply host requirements for RefSeq transcript matching.

        Outside database mode RefSeq transcripts are switched on. In database
        mode they cannot be, so the host must already run with RefSeq enabled.

        Raises:
            ValueError: If matching by RefSeq transcript in database mode
                        without RefSeq enabled
        """
        if self.feature_match_by != MatchKey.REFSEQ_TRANSCRIPT_ID:
            return self

        if not self.database:
            self.refseq = True
        self.use_given_ref = True

        if self.database and not self.refseq:
            raise ValueError(
                "Matching by RefSeq transcript ID requires refseq when using the database"
            )
        return self

    def config_hash(self) -> str:
        """
        Compute SHA-256 hash of the configuration.

        Deterministic over all config values; recorded in output provenance.
        """
        config_dict = self.model_dump(mode="python")
        config_json = json.dumps(
            config_dict,
            sort_keys=True,
            default=str,
        )
        return hashlib.sha256(config_json.encode()).hexdigest()
