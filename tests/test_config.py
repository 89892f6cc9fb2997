"""Tests for configuration loading and validation."""

import pytest
from pydantic import ValidationError

from avada_annotator.config import AvadaConfig, load_config, load_config_with_overrides
from avada_annotator.evidence import MatchKey


def write_config(tmp_path, body: str):
    config_path = tmp_path / "avada.yaml"
    config_path.write_text(body)
    return config_path


def test_load_valid_config(tmp_path):
    """Test loading a minimal configuration with defaults."""
    config_path = write_config(tmp_path, f"file: {tmp_path / 'avada.vcf.gz'}\n")

    config = load_config(config_path)

    assert isinstance(config, AvadaConfig)
    assert config.file == tmp_path / "avada.vcf.gz"
    assert config.feature_match_by == MatchKey.UNSET
    assert config.database is False
    assert config.refseq is False


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_missing_file_is_fatal(tmp_path):
    """The AVADA file path is required."""
    config_path = write_config(tmp_path, "feature_match_by: gene_symbol\n")

    with pytest.raises(ValidationError) as exc_info:
        load_config(config_path)

    assert "file" in str(exc_info.value)


def test_invalid_match_key_is_fatal(tmp_path):
    config_path = write_config(tmp_path, """
file: avada.vcf.gz
feature_match_by: hgnc_id
""")

    with pytest.raises(ValidationError) as exc_info:
        load_config(config_path)

    assert "feature_match_by" in str(exc_info.value)


def test_null_match_key_defaults_to_unset():
    config = AvadaConfig(file="avada.vcf.gz", feature_match_by=None)

    assert config.feature_match_by == MatchKey.UNSET


def test_refseq_transcript_enables_refseq_outside_database():
    config = AvadaConfig(file="avada.vcf.gz", feature_match_by="refseq_transcript_id")

    assert config.refseq is True
    assert config.use_given_ref is True


def test_refseq_transcript_in_database_requires_refseq():
    """Database mode can't switch RefSeq on, so it must already be set."""
    with pytest.raises(ValidationError) as exc_info:
        AvadaConfig(
            file="avada.vcf.gz",
            feature_match_by="refseq_transcript_id",
            database=True,
        )

    assert "requires refseq" in str(exc_info.value)


def test_refseq_transcript_in_database_with_refseq():
    config = AvadaConfig(
        file="avada.vcf.gz",
        feature_match_by="refseq_transcript_id",
        database=True,
        refseq=True,
    )

    assert config.use_given_ref is True


def test_other_match_keys_leave_host_flags(tmp_path):
    config = AvadaConfig(file="avada.vcf.gz", feature_match_by="refseq_protein_id", database=True)

    assert config.refseq is False
    assert config.use_given_ref is False


def test_overrides_applied(tmp_path):
    config_path = write_config(tmp_path, """
file: avada.vcf.gz
feature_match_by: gene_symbol
""")

    config = load_config_with_overrides(config_path, {
        "feature_match_by": "ensembl_gene_id",
        "file": None,
    })

    assert config.feature_match_by == MatchKey.ENSEMBL_GENE_ID
    assert str(config.file) == "avada.vcf.gz"


def test_overrides_without_config_file():
    config = load_config_with_overrides(None, {"file": "avada.vcf.gz"})

    assert config.feature_match_by == MatchKey.UNSET


def test_config_hash_deterministic():
    """Test that config hash is deterministic and changes with config."""
    config1 = AvadaConfig(file="avada.vcf.gz")
    config2 = AvadaConfig(file="avada.vcf.gz")
    config3 = AvadaConfig(file="avada.vcf.gz", feature_match_by="gene_symbol")

    assert config1.config_hash() == config2.config_hash()
    assert len(config1.config_hash()) == 64
    assert config3.config_hash() != config1.config_hash()


def test_overrides_complete_partial_config(tmp_path):
    """A file lacking required fields is valid once overrides supply them."""
    config_path = write_config(tmp_path, "feature_match_by: gene_symbol\n")

    config = load_config_with_overrides(config_path, {"file": "avada.vcf.gz"})

    assert config.feature_match_by == MatchKey.GENE_SYMBOL
    assert str(config.file) == "avada.vcf.gz"


def test_override_match_key_drops_refseq_flags(tmp_path):
    """RefSeq flags forced by the file's match key don't survive an override."""
    config_path = write_config(tmp_path, """
file: avada.vcf.gz
feature_match_by: refseq_transcript_id
""")

    config = load_config_with_overrides(config_path, {"feature_match_by": "gene_symbol"})

    assert config.feature_match_by == MatchKey.GENE_SYMBOL
    assert config.refseq is False
    assert config.use_given_ref is False
    assert config.config_hash() == AvadaConfig(
        file="avada.vcf.gz", feature_match_by="gene_symbol"
    ).config_hash()


def test_overrides_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config_with_overrides(tmp_path / "missing.yaml", {"file": "avada.vcf.gz"})
