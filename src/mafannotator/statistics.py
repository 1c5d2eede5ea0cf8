"""Per-run annotation counters, timings and the failure report."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .models import AnnotationOutcome, MutationRecord

logger = logging.getLogger("mafannotator.statistics")

ERROR_REPORT_HEADER: tuple[str, ...] = (
    "SAMPLE_ID",
    "CHR",
    "START",
    "END",
    "REF",
    "ALT",
    "VARIANT_CLASSIFICATION",
    "FAILURE_REASON",
    "URL",
)


@dataclass(frozen=True)
class FailureDiagnostic:
    """One row of the error report."""

    sample_id: str
    chromosome: str
    start: str
    end: str
    reference_allele: str
    tumor_seq_allele1: str
    tumor_seq_allele2: str
    variant_classification: str
    reason: str
    url: str

    @classmethod
    def for_record(
        cls, record: MutationRecord, variant_classification: str, reason: str, url: str
    ) -> "FailureDiagnostic":
        return cls(
            sample_id=record.tumor_sample_barcode,
            chromosome=record.chromosome,
            start=record.start_position,
            end=record.end_position,
            reference_allele=record.reference_allele,
            tumor_seq_allele1=record.tumor_seq_allele1,
            tumor_seq_allele2=record.tumor_seq_allele2,
            variant_classification=variant_classification,
            reason=reason,
            url=url,
        )

    def to_line(self) -> str:
        return "\t".join(
            (
                self.sample_id,
                self.chromosome,
                self.start,
                self.end,
                self.reference_allele,
                self.tumor_seq_allele1,
                self.tumor_seq_allele2,
                self.variant_classification,
                self.reason,
                self.url,
            )
        )


class AnnotationSummaryStatistics:
    """Accumulates outcome counts, failure diagnostics and response times.

    Duration samples are milliseconds per remote call. The formatted values
    returned by :meth:`average_response_time`, :meth:`total_response_time` and
    :meth:`total_run_time` feed the printed summary unchanged.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._started = clock()
        self.durations: list[float] = []
        self.diagnostics: list[FailureDiagnostic] = []
        self.records_seen = 0
        self.total_failed = 0
        self.ambiguous_allele = 0
        self.null_classification = 0
        self.other_failed = 0

    def add_duration(self, milliseconds: float) -> None:
        self.durations.append(milliseconds)

    def average_response_time(self) -> str:
        if not self.durations:
            return "0.000"
        return f"{sum(self.durations) / len(self.durations):.3f}"

    def total_response_time(self) -> str:
        return str(int(sum(self.durations)))

    def total_run_time(self) -> str:
        """Whole seconds elapsed since the statistics object was created."""

        return str(int(self._clock() - self._started))

    def record_failure(self, outcome: AnnotationOutcome, diagnostic: FailureDiagnostic) -> None:
        if outcome is AnnotationOutcome.AMBIGUOUS_ALLELE:
            self.ambiguous_allele += 1
        elif outcome is AnnotationOutcome.NULL_HGVS_CLASSIFICATION:
            self.null_classification += 1
        elif outcome is AnnotationOutcome.OTHER:
            self.other_failed += 1
        else:
            raise ValueError(f"Not a failure outcome: {outcome}")
        self.diagnostics.append(diagnostic)

    def count_record(self, *, failed: bool) -> None:
        self.records_seen += 1
        if failed:
            self.total_failed += 1

    def summary_report(self) -> str:
        parts = [
            "\nAnnotation Summary:",
            f"\n\tRecords with ambiguous SNP and INDEL allele changes:  {self.ambiguous_allele}",
        ]
        if self.total_failed > 0:
            parts.extend(
                [
                    f"\n\n\tFailed annotations summary:  {self.total_failed} total failed annotations",
                    f"\n\t\tRecords with HGVSp null variant classification:  {self.null_classification}",
                    f"\n\t\tRecords that failed due to other unknown reason: {self.other_failed}",
                ]
            )
        else:
            parts.append("\n\tAll variants annotated successfully without failures!")
        parts.extend(
            [
                f"\n\n\tAverage response time:  {self.average_response_time()} ms",
                f"\n\tTotal response time:  {self.total_response_time()} ms",
                f"\n\tTotal run time:  {self.total_run_time()} s",
                "\n\n",
            ]
        )
        return "".join(parts)

    def save_error_report(self, path: str | Path) -> Path | None:
        """Write the tab-separated failure report; skipped when nothing failed."""

        if not self.diagnostics:
            logger.info("No errors to write - error report will not be generated.")
            return None

        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        lines = ["\t".join(ERROR_REPORT_HEADER)]
        lines.extend(diagnostic.to_line() for diagnostic in self.diagnostics)
        target.write_text("\n".join(lines) + "\n")
        return target.resolve()
