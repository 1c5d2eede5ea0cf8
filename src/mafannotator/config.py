"""Configuration contracts for annotation and merge runs."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

from jsonschema import FormatChecker
from jsonschema import exceptions as jsex
from jsonschema.validators import validator_for


REQUIRED_MAF_COLUMNS: tuple[str, ...] = (
    "Chromosome",
    "Start_Position",
    "End_Position",
    "Reference_Allele",
    "Tumor_Seq_Allele1",
)

FORCED_LEADING_COLUMNS: tuple[str, ...] = ("Hugo_Symbol", "Entrez_Gene_Id")

# Classifications for which an empty HGVSc/HGVSp is expected.
HGVSP_NULL_CLASSIFICATIONS: frozenset[str] = frozenset(
    {"3'UTR", "5'UTR", "3'Flank", "5'Flank", "IGR", "Intron", "RNA"}
)

ISOFORM_OVERRIDE_SOURCES: tuple[str, ...] = ("mskcc", "uniprot")

DEFAULT_SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "settings.schema.json"


class TranscriptSelectorName(str, Enum):
    """Which canonical transcript strategy a run uses."""

    FIRST = "first"
    ISOFORM_OVERRIDE = "isoform_override"


class OutputFormat(str, Enum):
    """Column layout of the annotated output file."""

    DEFAULT = "default"
    EXTENDED = "extended"
    MINIMAL = "minimal"
    CUSTOM = "custom"


@dataclass(frozen=True)
class AnnotatorSettings:
    """Runtime settings for the annotation service client and pipeline."""

    base_url: str = "https://www.genomenexus.org/"
    isoform_query_parameter: str = "isoformOverrideSource"
    enrichment_fields: tuple[str, ...] = ("annotation_summary",)
    isoform_override_source: str | None = None
    replace_symbol_entrez: bool = True
    reannotate: bool = True
    post_interval_size: int = 100
    timeout_seconds: float = 30.0
    transcript_selector: TranscriptSelectorName = TranscriptSelectorName.FIRST
    isoform_overrides: tuple[str, ...] = ()
    output_format: OutputFormat = OutputFormat.DEFAULT
    output_columns: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if (
            self.isoform_override_source is not None
            and self.isoform_override_source not in ISOFORM_OVERRIDE_SOURCES
        ):
            raise ValueError(
                "Isoform override not valid. Options: "
                + " or ".join(f"'{name}'" for name in ISOFORM_OVERRIDE_SOURCES)
                + "."
            )
        if self.post_interval_size < 0:
            raise ValueError("post_interval_size must be >= 0")
        if self.output_format is OutputFormat.CUSTOM and not self.output_columns:
            raise ValueError("A custom output format needs at least one column")

    @property
    def batched(self) -> bool:
        """True when records are sent to the service in POST batches."""

        return self.post_interval_size > 1

    def with_overrides(self, **overrides: Any) -> "AnnotatorSettings":
        """Return a copy with ``None``-valued overrides ignored."""

        return replace(self, **{key: value for key, value in overrides.items() if value is not None})


def parse_output_format(value: str | None) -> tuple[OutputFormat, tuple[str, ...]]:
    """Resolve an ``--output-format`` value into a format and optional column list.

    ``value`` is ``extended``, ``minimal``, ``default``, a comma-separated list of
    columns, or the path of a file whose first line is such a list.
    """

    if value is None or value == OutputFormat.DEFAULT.value:
        return OutputFormat.DEFAULT, ()
    if value == OutputFormat.EXTENDED.value:
        return OutputFormat.EXTENDED, ()
    if value == OutputFormat.MINIMAL.value:
        return OutputFormat.MINIMAL, ()

    path = Path(value)
    if path.is_file():
        first_line = path.read_text().splitlines()[:1]
        text = first_line[0].strip() if first_line else ""
        if "," not in text:
            raise ValueError(f"Unexpected formatting found inside of {value}")
    elif "," in value:
        text = value
    else:
        raise ValueError(
            "Either file does not exist or output format is not 'minimal' or 'extended'. "
            f"Supplied output format value: {value}"
        )

    columns = tuple(column.strip() for column in text.split(",") if column.strip())
    return OutputFormat.CUSTOM, columns


class SettingsLoader:
    """Load :class:`AnnotatorSettings` from a JSON file validated by JSON Schema."""

    def __init__(self, schema_path: str | Path | None = None) -> None:
        self.schema_path = Path(schema_path) if schema_path is not None else DEFAULT_SCHEMA_PATH
        schema = json.loads(self.schema_path.read_text())
        validator_cls = validator_for(schema)
        validator_cls.check_schema(schema)
        self._validator = validator_cls(schema, format_checker=FormatChecker())

    def load(self, path: str | Path | None = None) -> AnnotatorSettings:
        """Load settings from ``path``; built-in defaults when ``path`` is None."""

        if path is None:
            return AnnotatorSettings()

        payload = json.loads(Path(path).read_text())
        return self.parse(payload)

    def errors(self, payload: Mapping[str, Any]) -> list[str]:
        """Return all schema violations as ``/path: message`` strings."""

        messages = []
        for err in sorted(self._validator.iter_errors(payload), key=lambda e: list(e.path)):
            messages.append(self._format_error(err))
        return messages

    def parse(self, payload: Mapping[str, Any]) -> AnnotatorSettings:
        problems = self.errors(payload)
        if problems:
            raise ValueError("Invalid annotator settings: " + "; ".join(problems))

        output_format, output_columns = parse_output_format(payload.get("output_format"))
        enrichment = payload.get("enrichment_fields", ["annotation_summary"])
        if isinstance(enrichment, str):
            enrichment = enrichment.split(",")

        return AnnotatorSettings(
            base_url=self._normalize_base_url(payload.get("base_url", AnnotatorSettings.base_url)),
            isoform_query_parameter=str(
                payload.get("isoform_query_parameter", AnnotatorSettings.isoform_query_parameter)
            ),
            enrichment_fields=tuple(str(item).strip() for item in enrichment if str(item).strip()),
            isoform_override_source=payload.get("isoform_override_source"),
            replace_symbol_entrez=bool(payload.get("replace_symbol_entrez", True)),
            reannotate=bool(payload.get("reannotate", True)),
            post_interval_size=int(payload.get("post_interval_size", 100)),
            timeout_seconds=float(payload.get("timeout_seconds", 30.0)),
            transcript_selector=TranscriptSelectorName(payload.get("transcript_selector", "first")),
            isoform_overrides=tuple(payload.get("isoform_overrides", ())),
            output_format=output_format,
            output_columns=output_columns,
        )

    @staticmethod
    def _normalize_base_url(value: str) -> str:
        cleaned = str(value).strip()
        return cleaned if cleaned.endswith("/") else cleaned + "/"

    @staticmethod
    def _format_error(err: jsex.ValidationError) -> str:
        return "/" + "/".join(str(part) for part in err.path) + ": " + err.message
