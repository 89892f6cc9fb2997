"""Output generation: annotated variant TSV with provenance sidecar."""

from avada_annotator.output.writers import write_annotation_output

__all__ = [
    "write_annotation_output",
]
