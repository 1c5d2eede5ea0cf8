"""MAF variant annotation and multi-file merge toolkit.

This package resolves annotated MAF records from a variant annotation service
response and merges heterogeneous MAF files into one table.
"""

from .client import GenomeNexusClient
from .colocated import match_colocated_variant
from .config import (
    FORCED_LEADING_COLUMNS,
    HGVSP_NULL_CLASSIFICATIONS,
    REQUIRED_MAF_COLUMNS,
    AnnotatorSettings,
    OutputFormat,
    SettingsLoader,
    TranscriptSelectorName,
)
from .errors import (
    AnnotationCallFailed,
    MafAnnotatorError,
    MalformedRowError,
    MergeFailed,
    ValidationFailed,
)
from .genomic_location import GenomicLocation, derive_variant_allele
from .maf import AnnotatedMafWriter, MafMerger, MafReader, merge_input_mafs
from .models import AnnotatedRecord, AnnotationOutcome, ExtensionMap, MutationRecord
from .outcomes import AnnotationOutcomeClassifier
from .pipeline import AnnotationPipeline, AnnotationRunReport, RunContext
from .resolver import FieldResolver
from .response import AnnotationResponse, ColocatedVariant, TranscriptConsequence
from .statistics import AnnotationSummaryStatistics, FailureDiagnostic
from .transcripts import (
    FirstTranscriptSelector,
    IsoformOverrideSelector,
    TranscriptSelector,
    selector_from_settings,
)

__all__ = [
    "FORCED_LEADING_COLUMNS",
    "HGVSP_NULL_CLASSIFICATIONS",
    "REQUIRED_MAF_COLUMNS",
    "AnnotatedMafWriter",
    "AnnotatedRecord",
    "AnnotationCallFailed",
    "AnnotationOutcome",
    "AnnotationOutcomeClassifier",
    "AnnotationPipeline",
    "AnnotationResponse",
    "AnnotationRunReport",
    "AnnotationSummaryStatistics",
    "AnnotatorSettings",
    "ColocatedVariant",
    "ExtensionMap",
    "FailureDiagnostic",
    "FieldResolver",
    "FirstTranscriptSelector",
    "GenomeNexusClient",
    "GenomicLocation",
    "IsoformOverrideSelector",
    "MafAnnotatorError",
    "MafMerger",
    "MafReader",
    "MalformedRowError",
    "MergeFailed",
    "MutationRecord",
    "OutputFormat",
    "RunContext",
    "SettingsLoader",
    "TranscriptConsequence",
    "TranscriptSelector",
    "TranscriptSelectorName",
    "ValidationFailed",
    "derive_variant_allele",
    "match_colocated_variant",
    "merge_input_mafs",
    "selector_from_settings",
]
