"""Write annotated MAF files."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TextIO

from ..config import OutputFormat
from ..models import AnnotatedRecord, MutationRecord

logger = logging.getLogger("mafannotator.maf.writer")


def output_columns(
    output_format: OutputFormat,
    input_header: Sequence[str],
    custom_columns: Sequence[str] = (),
) -> list[str]:
    """Header of the annotated output for an input file with ``input_header``."""

    if output_format is OutputFormat.CUSTOM:
        return list(custom_columns)

    extended = output_format is OutputFormat.EXTENDED
    annotation = AnnotatedRecord.annotation_column_names(extended=extended)
    if output_format is OutputFormat.MINIMAL:
        present = set(input_header)
        return list(input_header) + [column for column in annotation if column not in present]

    canonical = MutationRecord.column_names() + annotation
    reserved = {column.name for column in AnnotatedRecord.COLUMNS}
    extensions = sorted({column for column in input_header if column not in reserved})
    return canonical + extensions


class AnnotatedMafWriter:
    """Stream annotated records to a MAF file.

    Comment lines are written first, verbatim, followed by the header and one
    line per record. Columns a record lacks are written as "".
    """

    def __init__(self, path: str | Path, columns: Sequence[str], comments: Iterable[str] = ()) -> None:
        self.path = Path(path)
        self.columns = list(columns)
        self.comments = list(comments)
        self.records_written = 0
        self._handle: TextIO | None = None

    def __enter__(self) -> "AnnotatedMafWriter":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = self.path.open("w", encoding="utf-8")
        for comment in self.comments:
            self._handle.write(comment + "\n")
        self._handle.write("\t".join(self.columns) + "\n")

    def write(self, record: MutationRecord) -> None:
        if self._handle is None:
            raise RuntimeError("Writer is not open")
        self._handle.write(record.to_line(self.columns) + "\n")
        self.records_written += 1

    def write_all(self, records: Iterable[MutationRecord]) -> int:
        for record in records:
            self.write(record)
        return self.records_written

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
            logger.info("Wrote %d records to %s", self.records_written, self.path)
