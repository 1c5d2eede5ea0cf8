"""Label annotated records and collect diagnostics for the ones that failed."""

from __future__ import annotations

import logging

from .config import HGVSP_NULL_CLASSIFICATIONS
from .genomic_location import derive_variant_allele
from .models import AnnotatedRecord, AnnotationOutcome, MutationRecord
from .statistics import AnnotationSummaryStatistics, FailureDiagnostic

logger = logging.getLogger("mafannotator.outcomes")

AMBIGUOUS_ALLELE_MESSAGE = "Record contains ambiguous SNP and INDEL allele change - SNP allele will be used"
NULL_CLASSIFICATION_MESSAGE = "Record contains null HGVSp variant classification"
UNKNOWN_FAILURE_MESSAGE = "Failed to annotate variant"
SERVER_FAILURE_MESSAGE = "Annotation failed due to server error"


def is_hgvsp_null_classification(variant_classification: str) -> bool:
    return variant_classification in HGVSP_NULL_CLASSIFICATIONS


class AnnotationOutcomeClassifier:
    """Tag each annotated record and feed failures into the run statistics.

    An ambiguous allele is counted on its own and does not stop the record from
    also landing in the null-classification or other bucket. The tag on the
    record is the ambiguous flag when set, otherwise the HGVS outcome.
    Classification never raises.
    """

    def __init__(self, statistics: AnnotationSummaryStatistics) -> None:
        self.statistics = statistics

    def classify(self, record: MutationRecord, annotated: AnnotatedRecord, url: str) -> AnnotatedRecord:
        ambiguous = derive_variant_allele(
            record.reference_allele, record.tumor_seq_allele1, record.tumor_seq_allele2
        ).ambiguous
        if ambiguous:
            self.statistics.record_failure(
                AnnotationOutcome.AMBIGUOUS_ALLELE,
                FailureDiagnostic.for_record(
                    record, annotated.variant_classification, AMBIGUOUS_ALLELE_MESSAGE, url
                ),
            )

        outcome = AnnotationOutcome.SUCCESS
        if not annotated.hgvsc and not annotated.hgvsp:
            if is_hgvsp_null_classification(annotated.variant_classification):
                outcome = AnnotationOutcome.OTHER
                diagnostic = FailureDiagnostic.for_record(
                    record, record.variant_classification, UNKNOWN_FAILURE_MESSAGE, url
                )
            else:
                outcome = AnnotationOutcome.NULL_HGVS_CLASSIFICATION
                diagnostic = FailureDiagnostic.for_record(
                    record, annotated.variant_classification, NULL_CLASSIFICATION_MESSAGE, url
                )
            self.statistics.record_failure(outcome, diagnostic)

        self.statistics.count_record(failed=ambiguous or outcome is not AnnotationOutcome.SUCCESS)
        return annotated.with_outcome(AnnotationOutcome.AMBIGUOUS_ALLELE if ambiguous else outcome)

    def classify_call_failure(
        self, record: MutationRecord, url: str, reason: str = SERVER_FAILURE_MESSAGE
    ) -> AnnotatedRecord:
        """Pass ``record`` through unannotated after a failed or empty remote call."""

        logger.debug(
            "Annotation failed for %s:%s-%s (%s): %s",
            record.chromosome,
            record.start_position,
            record.end_position,
            record.tumor_sample_barcode,
            reason,
        )
        self.statistics.record_failure(
            AnnotationOutcome.OTHER,
            FailureDiagnostic.for_record(record, record.variant_classification, reason, url),
        )
        self.statistics.count_record(failed=True)
        return AnnotatedRecord.passthrough(record).with_outcome(AnnotationOutcome.OTHER)
