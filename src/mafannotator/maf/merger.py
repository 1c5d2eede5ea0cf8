"""Union several MAF files into one rectangular table."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

import pandas as pd

from ..config import FORCED_LEADING_COLUMNS
from ..errors import MergeFailed, ValidationFailed
from .reader import MafReader

logger = logging.getLogger("mafannotator.maf.merger")


class MafMerger:
    """Merge MAF files whose headers may differ in order and content.

    The merged header starts with ``Hugo_Symbol`` and ``Entrez_Gene_Id`` and
    then lists every other column in first-seen order across the inputs. Rows
    keep file order; a column a file does not have is filled with "".
    """

    def __init__(self, *, strict: bool = False) -> None:
        self.strict = strict

    def merge_headers(self, files: Iterable[str | Path]) -> tuple[list[str], list[Path]]:
        """Return the ordered header union and the files that passed validation."""

        union: dict[str, None] = dict.fromkeys(FORCED_LEADING_COLUMNS)
        valid: list[Path] = []
        for path in files:
            path = Path(path)
            try:
                header = MafReader(path, strict=self.strict).header
            except ValidationFailed as exc:
                logger.warning("Skipping %s: %s", path, exc)
                continue
            for column in header:
                union.setdefault(column, None)
            valid.append(path)

        if len(valid) < 2:
            raise MergeFailed("There is nothing to merge!")
        return list(union), valid

    def merge_data(self, headers: Sequence[str], files: Sequence[Path]) -> pd.DataFrame:
        """Align every data row of ``files`` to ``headers``."""

        frames = []
        for path in files:
            reader = MafReader(path)
            frame = pd.DataFrame(list(reader.rows()), columns=reader.header, dtype=str)
            frame = frame.loc[:, ~frame.columns.duplicated()]
            frames.append(frame.reindex(columns=list(headers), fill_value=""))
            logger.info("Merged %d rows from %s", len(frame), path)
        return pd.concat(frames, ignore_index=True)

    @staticmethod
    def dump_to(headers: Sequence[str], table: pd.DataFrame, path: str | Path) -> Path:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("w", encoding="utf-8") as handle:
            handle.write("\t".join(headers) + "\n")
            for row in table.loc[:, list(headers)].itertuples(index=False, name=None):
                handle.write("\t".join(row) + "\n")
        return target.resolve()

    def merge(self, files: Iterable[str | Path], output: str | Path) -> Path:
        headers, valid = self.merge_headers(files)
        table = self.merge_data(headers, valid)
        return self.dump_to(headers, table, output)


def collect_input_files(
    files: Sequence[str | Path] = (), directory: str | Path | None = None
) -> list[Path]:
    """Input files from an explicit list or from every regular file in ``directory``."""

    if directory is not None:
        if not Path(directory).is_dir():
            raise MergeFailed("Supplied input mafs directory is not a directory or it does not exist!")
        return sorted(path for path in Path(directory).iterdir() if path.is_file())
    return [Path(path) for path in files]


def merge_input_mafs(
    output: str | Path,
    files: Sequence[str | Path] = (),
    directory: str | Path | None = None,
    *,
    strict: bool = False,
) -> Path:
    """Merge a file list or a directory of MAFs into ``output``."""

    inputs = collect_input_files(files, directory)
    if len(inputs) < 2:
        raise MergeFailed(f"There is nothing to merge! Count of input files: {len(inputs)}")
    logger.info("Merging %d MAF files into %s", len(inputs), output)
    try:
        return MafMerger(strict=strict).merge(inputs, output)
    except OSError as exc:
        raise MergeFailed(f"Unable to merge input MAFs: {exc}") from exc
