"""Tab-delimited MAF file access."""

from .merger import MafMerger, merge_input_mafs
from .reader import MafReader, missing_required_columns
from .writer import AnnotatedMafWriter, output_columns

__all__ = [
    "AnnotatedMafWriter",
    "MafMerger",
    "MafReader",
    "merge_input_mafs",
    "missing_required_columns",
    "output_columns",
]
