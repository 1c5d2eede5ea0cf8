"""Annotation pipeline: read records, query the service, resolve, classify, write."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from .config import AnnotatorSettings
from .errors import AnnotationCallFailed
from .genomic_location import GenomicLocation, location_for
from .maf.reader import MafReader
from .maf.writer import AnnotatedMafWriter, output_columns
from .models import AnnotatedRecord, AnnotationOutcome, MutationRecord
from .outcomes import AnnotationOutcomeClassifier, is_hgvsp_null_classification
from .resolver import FieldResolver
from .response import AnnotationResponse
from .statistics import AnnotationSummaryStatistics
from .transcripts import TranscriptSelector, selector_from_settings

logger = logging.getLogger("mafannotator.pipeline")

PROGRESS_INTERVAL = 2000


class AnnotationClient(Protocol):
    def url_for(self, location: GenomicLocation) -> str: ...

    def annotate(self, location: GenomicLocation) -> AnnotationResponse: ...

    def annotate_batch(self, locations: Sequence[GenomicLocation]) -> list[AnnotationResponse]: ...


@dataclass
class RunContext:
    """State owned by a single annotation run."""

    comments: list[str] = field(default_factory=list)
    header: list[str] = field(default_factory=list)
    statistics: AnnotationSummaryStatistics = field(default_factory=AnnotationSummaryStatistics)
    total_records: int = 0
    processed: int = 0

    def advance(self) -> None:
        self.processed += 1
        if self.processed % PROGRESS_INTERVAL == 0 and self.total_records:
            logger.info(
                "\t%d%% complete (%d/%d records)",
                100 * self.processed // self.total_records,
                self.processed,
                self.total_records,
            )


@dataclass
class AnnotationRunReport:
    """Execution summary for an annotation run."""

    output_path: Path
    records: int
    failed: int
    error_report_path: Path | None
    summary: str


class AnnotationPipeline:
    """Drive one MAF file through the annotation service."""

    def __init__(
        self,
        settings: AnnotatorSettings,
        client: AnnotationClient,
        *,
        selector: TranscriptSelector | None = None,
    ) -> None:
        self.settings = settings
        self.client = client
        self.resolver = FieldResolver(
            selector or selector_from_settings(settings),
            replace_symbol_entrez=settings.replace_symbol_entrez,
        )

    def annotation_needed(self, record: MutationRecord) -> bool:
        """False for records that already carry a usable ``HGVSp_Short`` and may be kept."""

        if self.settings.reannotate or "HGVSp_Short" not in record.extensions:
            return True
        if record.extensions.get("HGVSp_Short"):
            return False
        return not is_hgvsp_null_classification(record.variant_classification)

    def annotate_records(
        self, records: Iterable[MutationRecord], context: RunContext
    ) -> Iterator[AnnotatedRecord]:
        classifier = AnnotationOutcomeClassifier(context.statistics)
        if self.settings.batched:
            yield from self._annotate_batched(records, context, classifier)
            return
        for record in records:
            yield self._annotate_one(record, context, classifier)
            context.advance()

    def run(
        self,
        input_path: str | Path,
        output_path: str | Path,
        *,
        error_report_path: str | Path | None = None,
        strict: bool = False,
    ) -> AnnotationRunReport:
        reader = MafReader(input_path, strict=strict)
        context = RunContext(
            comments=list(reader.comments),
            header=list(reader.header),
            total_records=reader.count_records(),
        )
        logger.info("Annotating %d records from %s", context.total_records, input_path)

        columns = output_columns(
            self.settings.output_format, context.header, self.settings.output_columns
        )
        with AnnotatedMafWriter(output_path, columns, context.comments) as writer:
            writer.write_all(self.annotate_records(reader.records(), context))

        statistics = context.statistics
        report_path = None
        if error_report_path is not None:
            report_path = statistics.save_error_report(error_report_path)
        return AnnotationRunReport(
            output_path=Path(output_path).resolve(),
            records=statistics.records_seen,
            failed=statistics.total_failed,
            error_report_path=report_path,
            summary=statistics.summary_report(),
        )

    def _passthrough(self, record: MutationRecord, context: RunContext) -> AnnotatedRecord:
        context.statistics.count_record(failed=False)
        return AnnotatedRecord.passthrough(record).with_outcome(AnnotationOutcome.SUCCESS)

    def _resolve(
        self,
        record: MutationRecord,
        response: AnnotationResponse | None,
        url: str,
        classifier: AnnotationOutcomeClassifier,
    ) -> AnnotatedRecord:
        if response is None or response.is_empty:
            return classifier.classify_call_failure(record, url)
        return classifier.classify(record, self.resolver.resolve(record, response), url)

    def _annotate_one(
        self, record: MutationRecord, context: RunContext, classifier: AnnotationOutcomeClassifier
    ) -> AnnotatedRecord:
        if not self.annotation_needed(record):
            return self._passthrough(record, context)

        location, _ = location_for(record)
        url = self.client.url_for(location)
        started = time.perf_counter()
        try:
            response = self.client.annotate(location)
        except AnnotationCallFailed as exc:
            logger.warning("Remote call failed for %s: %s", location.encode(), exc)
            response = None
        finally:
            context.statistics.add_duration((time.perf_counter() - started) * 1000)
        return self._resolve(record, response, url, classifier)

    def _annotate_batched(
        self,
        records: Iterable[MutationRecord],
        context: RunContext,
        classifier: AnnotationOutcomeClassifier,
    ) -> Iterator[AnnotatedRecord]:
        chunk: list[MutationRecord] = []
        for record in records:
            chunk.append(record)
            if len(chunk) == self.settings.post_interval_size:
                yield from self._annotate_chunk(chunk, context, classifier)
                chunk = []
        if chunk:
            yield from self._annotate_chunk(chunk, context, classifier)

    def _annotate_chunk(
        self,
        chunk: Sequence[MutationRecord],
        context: RunContext,
        classifier: AnnotationOutcomeClassifier,
    ) -> Iterator[AnnotatedRecord]:
        pending = [
            (record, location_for(record)[0]) for record in chunk if self.annotation_needed(record)
        ]
        responses: dict[str, AnnotationResponse] = {}
        if pending:
            started = time.perf_counter()
            try:
                for response in self.client.annotate_batch([location for _, location in pending]):
                    key = response.location_key()
                    if key is not None and response.successfully_annotated:
                        responses[key] = response
            except AnnotationCallFailed as exc:
                logger.warning("Batch of %d locations failed: %s", len(pending), exc)
            finally:
                context.statistics.add_duration((time.perf_counter() - started) * 1000)

        locations = {id(record): location for record, location in pending}
        for record in chunk:
            location = locations.get(id(record))
            if location is None:
                yield self._passthrough(record, context)
            else:
                url = self.client.url_for(location)
                yield self._resolve(record, responses.get(location.encode()), url, classifier)
            context.advance()
