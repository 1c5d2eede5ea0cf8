"""Read MAF files: leading comments, one header line, then data lines."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

from ..config import REQUIRED_MAF_COLUMNS
from ..errors import MalformedRowError, ValidationFailed
from ..models import MutationRecord


def missing_required_columns(
    columns: Iterable[str], required: Iterable[str] = REQUIRED_MAF_COLUMNS
) -> tuple[str, ...]:
    present = set(columns)
    return tuple(column for column in required if column not in present)


class MafReader:
    """Sequential reader over one MAF file.

    The header and comment block are read when the reader is created, so a
    strict reader fails before any record is produced.
    """

    def __init__(self, path: str | Path, *, strict: bool = False) -> None:
        self.path = Path(path)
        self.comments: list[str] = []
        self.header: list[str] = []
        self._header_line = 0
        self._scan_header()
        if strict:
            missing = missing_required_columns(self.header)
            if missing:
                raise ValidationFailed(
                    f"{self.path} is missing required columns: {', '.join(missing)}",
                    missing=missing,
                )

    def _scan_header(self) -> None:
        with self.path.open("r", encoding="utf-8") as handle:
            for line_number, line in enumerate(handle, start=1):
                text = line.rstrip("\r\n")
                if text.startswith("#"):
                    self.comments.append(text)
                    continue
                self.header = text.split("\t")
                self._header_line = line_number
                return
        raise ValidationFailed(f"{self.path} has no header line")

    def rows(self) -> Iterator[list[str]]:
        """Yield tab-split data lines, checking each against the header width."""

        with self.path.open("r", encoding="utf-8") as handle:
            for line_number, line in enumerate(handle, start=1):
                if line_number <= self._header_line:
                    continue
                text = line.rstrip("\r\n")
                if not text.strip() or text.startswith("#"):
                    continue
                cells = text.split("\t")
                if len(cells) != len(self.header):
                    raise MalformedRowError(str(self.path), line_number, len(self.header), len(cells))
                yield cells

    def records(self) -> Iterator[MutationRecord]:
        for cells in self.rows():
            yield MutationRecord.from_row(self.header, cells)

    def count_records(self) -> int:
        return sum(1 for _ in self.rows())
