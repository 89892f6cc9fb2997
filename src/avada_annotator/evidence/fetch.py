"""Retrieve AVADA rows overlapping a genomic interval from a tabix index."""

from pathlib import Path
from typing import Protocol

import pysam
import structlog

from avada_annotator.evidence.models import EvidenceRecord
from avada_annotator.evidence.transform import parse_avada_line

logger = structlog.get_logger()


class RangeLookup(Protocol):
    """Source of raw database lines overlapping a 1-based inclusive interval."""

    def query(self, chrom: str, start: int, end: int) -> list[str]:
        ...


class TabixRangeLookup:
    """RangeLookup over a bgzip-compressed, tabix-indexed AVADA file.

    The index itself is built outside this package (bgzip + tabix).
    """

    def __init__(self, path: Path | str):
        """Open the indexed file.

        Args:
            path: Path to the bgzip-compressed AVADA file (.tbi next to it)

        Raises:
            FileNotFoundError: If the file does not exist
        """
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(f"AVADA file not found: {self.path}")

        self.tabix = pysam.TabixFile(str(self.path))
        self.contigs = set(self.tabix.contigs)
        logger.info(
            "avada_tabix_opened",
            path=str(self.path),
            contig_count=len(self.contigs),
        )

    def _resolve_contig(self, chrom: str) -> str | None:
        # AVADA and the host may disagree on the "chr" prefix
        if chrom in self.contigs:
            return chrom
        alternate = chrom[3:] if chrom.startswith("chr") else f"chr{chrom}"
        if alternate in self.contigs:
            return alternate
        return None

    def query(self, chrom: str, start: int, end: int) -> list[str]:
        """Return raw lines overlapping chrom:start-end (1-based, inclusive).

        Insertions arrive with start = end + 1 and are queried as end..start.
        Contigs absent from the index return an empty list.
        """
        if start > end:
            start, end = end, start

        contig = self._resolve_contig(chrom)
        if contig is None:
            logger.debug("avada_contig_missing", chrom=chrom)
            return []

        # Insertions before the first base arrive as 1..0
        return list(self.tabix.fetch(contig, max(start - 1, 0), end))

    def close(self) -> None:
        self.tabix.close()

    def __enter__(self) -> "TabixRangeLookup":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def fetch_evidence_records(
    lookup: RangeLookup,
    chrom: str,
    start: int,
    end: int,
) -> list[EvidenceRecord]:
    """Parse every row overlapping the interval, in lookup order.

    Malformed rows are logged and skipped so one bad line does not end
    the run.
    """
    records = []
    for line in lookup.query(chrom, start, end):
        try:
            records.append(parse_avada_line(line))
        except ValueError as e:
            logger.warning(
                "avada_malformed_line",
                chrom=chrom,
                start=start,
                end=end,
                error=str(e),
            )
    return records
