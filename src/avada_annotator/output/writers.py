"""TSV writer with YAML provenance sidecar."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import polars as pl
import yaml

from avada_annotator import __version__
from avada_annotator.config.schema import AvadaConfig
from avada_annotator.evidence.models import FEATURE_ID_COLUMN, PMID_COLUMN


def write_annotation_output(
    df: pl.DataFrame | pl.LazyFrame,
    output_path: Path,
    config: Optional[AvadaConfig] = None,
) -> dict:
    """
    Write annotated variants to TSV with a provenance sidecar.

    Args:
        df: Polars DataFrame or LazyFrame with AVADA_FEATURE_ID and
            AVADA_PMID columns
        output_path: TSV path (parent directory created if needed)
        config: Config used for the run; its hash and match key are recorded

    Returns:
        Dictionary with output file paths:
        {
            "tsv": Path to TSV file,
            "provenance": Path to YAML provenance sidecar
        }

    Notes:
        - Row order is kept as annotated
        - Sidecar is written next to the TSV as {stem}.provenance.yaml
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if isinstance(df, pl.LazyFrame):
        df = df.collect()

    provenance_path = output_path.with_suffix(".provenance.yaml")

    df.write_csv(output_path, separator="\t", include_header=True)

    with_pmid = 0
    with_feature = 0
    if PMID_COLUMN in df.columns:
        with_pmid = df.filter(pl.col(PMID_COLUMN).is_not_null()).height
    if FEATURE_ID_COLUMN in df.columns:
        with_feature = df.filter(pl.col(FEATURE_ID_COLUMN).is_not_null()).height

    provenance = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "annotator_version": __version__,
        "output_files": [output_path.name],
        "statistics": {
            "total_variants": df.height,
            "with_feature_id": with_feature,
            "with_pmid": with_pmid,
        },
        "column_count": len(df.columns),
        "column_names": df.columns,
    }
    if config is not None:
        provenance["config_hash"] = config.config_hash()
        provenance["avada_file"] = str(config.file)
        provenance["feature_match_by"] = config.feature_match_by.value

    with open(provenance_path, "w") as f:
        yaml.dump(provenance, f, default_flow_style=False, sort_keys=False)

    return {
        "tsv": output_path,
        "provenance": provenance_path,
    }
