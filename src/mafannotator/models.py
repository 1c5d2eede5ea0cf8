"""Canonical in-memory data models for MAF records."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import ClassVar


@dataclass(frozen=True)
class ColumnSpec:
    """One statically declared column: its MAF header name and record attribute."""

    name: str
    attribute: str


MAF_COLUMNS: tuple[ColumnSpec, ...] = (
    ColumnSpec("Hugo_Symbol", "hugo_symbol"),
    ColumnSpec("Entrez_Gene_Id", "entrez_gene_id"),
    ColumnSpec("Center", "center"),
    ColumnSpec("NCBI_Build", "ncbi_build"),
    ColumnSpec("Chromosome", "chromosome"),
    ColumnSpec("Start_Position", "start_position"),
    ColumnSpec("End_Position", "end_position"),
    ColumnSpec("Strand", "strand"),
    ColumnSpec("Variant_Classification", "variant_classification"),
    ColumnSpec("Variant_Type", "variant_type"),
    ColumnSpec("Reference_Allele", "reference_allele"),
    ColumnSpec("Tumor_Seq_Allele1", "tumor_seq_allele1"),
    ColumnSpec("Tumor_Seq_Allele2", "tumor_seq_allele2"),
    ColumnSpec("dbSNP_RS", "dbsnp_rs"),
    ColumnSpec("dbSNP_Val_Status", "dbsnp_val_status"),
    ColumnSpec("Tumor_Sample_Barcode", "tumor_sample_barcode"),
    ColumnSpec("Matched_Norm_Sample_Barcode", "matched_norm_sample_barcode"),
    ColumnSpec("Match_Norm_Seq_Allele1", "match_norm_seq_allele1"),
    ColumnSpec("Match_Norm_Seq_Allele2", "match_norm_seq_allele2"),
    ColumnSpec("Tumor_Validation_Allele1", "tumor_validation_allele1"),
    ColumnSpec("Tumor_Validation_Allele2", "tumor_validation_allele2"),
    ColumnSpec("Match_Norm_Validation_Allele1", "match_norm_validation_allele1"),
    ColumnSpec("Match_Norm_Validation_Allele2", "match_norm_validation_allele2"),
    ColumnSpec("Verification_Status", "verification_status"),
    ColumnSpec("Validation_Status", "validation_status"),
    ColumnSpec("Mutation_Status", "mutation_status"),
    ColumnSpec("Sequencing_Phase", "sequencing_phase"),
    ColumnSpec("Sequence_Source", "sequence_source"),
    ColumnSpec("Validation_Method", "validation_method"),
    ColumnSpec("Score", "score"),
    ColumnSpec("BAM_File", "bam_file"),
    ColumnSpec("Sequencer", "sequencer"),
    ColumnSpec("Tumor_Sample_UUID", "tumor_sample_uuid"),
    ColumnSpec("Matched_Norm_Sample_UUID", "matched_norm_sample_uuid"),
    ColumnSpec("t_ref_count", "t_ref_count"),
    ColumnSpec("t_alt_count", "t_alt_count"),
    ColumnSpec("n_ref_count", "n_ref_count"),
    ColumnSpec("n_alt_count", "n_alt_count"),
)

ANNOTATION_COLUMNS: tuple[ColumnSpec, ...] = (
    ColumnSpec("HGVSc", "hgvsc"),
    ColumnSpec("HGVSp", "hgvsp"),
    ColumnSpec("HGVSp_Short", "hgvsp_short"),
    ColumnSpec("Transcript_ID", "transcript_id"),
    ColumnSpec("RefSeq", "refseq"),
    ColumnSpec("Protein_Start_Position", "protein_position_start"),
    ColumnSpec("Protein_End_Position", "protein_position_end"),
    ColumnSpec("Protein_position", "protein_position"),
    ColumnSpec("Codons", "codon_change"),
    ColumnSpec("Hotspot", "hotspot"),
    ColumnSpec("Consequence", "consequence"),
    ColumnSpec("gnomAD_AFR_AF", "gnomad_afr_af"),
    ColumnSpec("gnomAD_EAS_AF", "gnomad_eas_af"),
    ColumnSpec("gnomAD_NFE_AF", "gnomad_nfe_af"),
    ColumnSpec("Colocated_dbSNP_RS", "colocated_dbsnp_rs"),
)

MUTATION_ASSESSOR_COLUMNS: tuple[ColumnSpec, ...] = (
    ColumnSpec("MA:FImpact", "ma_functional_impact"),
    ColumnSpec("MA:FIS", "ma_functional_impact_score"),
    ColumnSpec("MA:link.MSA", "ma_link_msa"),
    ColumnSpec("MA:link.PDB", "ma_link_pdb"),
)

MAF_COLUMN_NAMES: frozenset[str] = frozenset(column.name for column in MAF_COLUMNS)


class AnnotationOutcome(str, Enum):
    """Label attached to every annotated record."""

    SUCCESS = "SUCCESS"
    AMBIGUOUS_ALLELE = "AMBIGUOUS_ALLELE"
    NULL_HGVS_CLASSIFICATION = "NULL_HGVS_CLASSIFICATION"
    OTHER = "OTHER"


class ExtensionMap:
    """Insertion-ordered map of non-canonical columns.

    Keys that collide with a reserved (canonical) column are refused, so a record
    never carries two values for the same header.
    """

    def __init__(
        self,
        items: Iterable[tuple[str, str]] = (),
        *,
        reserved: frozenset[str] = MAF_COLUMN_NAMES,
    ) -> None:
        self._reserved = reserved
        self._values: dict[str, str] = {}
        for name, value in items:
            self.add(name, value)

    def add(self, name: str, value: str) -> bool:
        """Store ``value`` under ``name``; returns False for reserved names."""

        if name in self._reserved:
            return False
        self._values[name] = value
        return True

    def get(self, name: str, default: str = "") -> str:
        return self._values.get(name, default)

    def names(self) -> list[str]:
        """Names in first-seen order."""

        return list(self._values)

    def sorted_names(self, exclude: Iterable[str] = ()) -> list[str]:
        """Names in serialization order, skipping ``exclude``."""

        excluded = set(exclude)
        return sorted(name for name in self._values if name not in excluded)

    def items(self) -> list[tuple[str, str]]:
        return list(self._values.items())

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExtensionMap):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"ExtensionMap({self._values!r})"


@dataclass(frozen=True)
class MutationRecord:
    """Single MAF data line.

    Known columns land in typed attributes through :data:`MAF_COLUMNS`; every
    other column lands in :attr:`extensions`. ``header`` keeps the declared
    column order of the source file so the line can be reproduced verbatim.
    """

    COLUMNS: ClassVar[tuple[ColumnSpec, ...]] = MAF_COLUMNS
    ATTRIBUTES: ClassVar[dict[str, str]] = {column.name: column.attribute for column in MAF_COLUMNS}

    hugo_symbol: str = ""
    entrez_gene_id: str = ""
    center: str = ""
    ncbi_build: str = ""
    chromosome: str = ""
    start_position: str = ""
    end_position: str = ""
    strand: str = ""
    variant_classification: str = ""
    variant_type: str = ""
    reference_allele: str = ""
    tumor_seq_allele1: str = ""
    tumor_seq_allele2: str = ""
    dbsnp_rs: str = ""
    dbsnp_val_status: str = ""
    tumor_sample_barcode: str = ""
    matched_norm_sample_barcode: str = ""
    match_norm_seq_allele1: str = ""
    match_norm_seq_allele2: str = ""
    tumor_validation_allele1: str = ""
    tumor_validation_allele2: str = ""
    match_norm_validation_allele1: str = ""
    match_norm_validation_allele2: str = ""
    verification_status: str = ""
    validation_status: str = ""
    mutation_status: str = ""
    sequencing_phase: str = ""
    sequence_source: str = ""
    validation_method: str = ""
    score: str = ""
    bam_file: str = ""
    sequencer: str = ""
    tumor_sample_uuid: str = ""
    matched_norm_sample_uuid: str = ""
    t_ref_count: str = ""
    t_alt_count: str = ""
    n_ref_count: str = ""
    n_alt_count: str = ""
    extensions: ExtensionMap = field(default_factory=ExtensionMap)
    header: tuple[str, ...] = ()

    @classmethod
    def from_row(cls, header: Sequence[str], values: Sequence[str]) -> "MutationRecord":
        """Build a record from one tab-split line and its file header."""

        attributes = MutationRecord.ATTRIBUTES
        kwargs: dict[str, str] = {}
        extensions = ExtensionMap()
        for name, value in zip(header, values):
            attribute = attributes.get(name)
            if attribute is None:
                extensions.add(name, value)
            else:
                kwargs[attribute] = value
        return cls(**kwargs, extensions=extensions, header=tuple(header))

    @classmethod
    def column_names(cls) -> list[str]:
        return [column.name for column in cls.COLUMNS]

    def get(self, name: str) -> str:
        """Value for a header name, canonical or extension; "" when absent."""

        attribute = self.ATTRIBUTES.get(name)
        if attribute is not None:
            return getattr(self, attribute)
        return self.extensions.get(name, "")

    def to_line(self, columns: Sequence[str]) -> str:
        return "\t".join(self.get(name) for name in columns)


@dataclass(frozen=True)
class AnnotatedRecord(MutationRecord):
    """A :class:`MutationRecord` plus the fields derived from the annotation service."""

    COLUMNS: ClassVar[tuple[ColumnSpec, ...]] = (
        MAF_COLUMNS + ANNOTATION_COLUMNS + MUTATION_ASSESSOR_COLUMNS
    )
    ATTRIBUTES: ClassVar[dict[str, str]] = {column.name: column.attribute for column in COLUMNS}

    hgvsc: str = ""
    hgvsp: str = ""
    hgvsp_short: str = ""
    transcript_id: str = ""
    refseq: str = ""
    protein_position_start: str = ""
    protein_position_end: str = ""
    protein_position: str = ""
    codon_change: str = ""
    hotspot: str = "0"
    consequence: str = ""
    gnomad_afr_af: str = ""
    gnomad_eas_af: str = ""
    gnomad_nfe_af: str = ""
    colocated_dbsnp_rs: str = ""
    ma_functional_impact: str = ""
    ma_functional_impact_score: str = ""
    ma_link_msa: str = ""
    ma_link_pdb: str = ""
    outcome: AnnotationOutcome | None = None

    @classmethod
    def passthrough(cls, record: MutationRecord) -> "AnnotatedRecord":
        """Copy a record unchanged, lifting annotation columns it already carries."""

        copied = {
            item.name: getattr(record, item.name)
            for item in fields(MutationRecord)
        }
        for column in ANNOTATION_COLUMNS + MUTATION_ASSESSOR_COLUMNS:
            if column.name in record.extensions:
                copied[column.attribute] = record.extensions.get(column.name)
        return cls(**copied)

    @classmethod
    def annotation_column_names(cls, *, extended: bool = False) -> list[str]:
        columns = ANNOTATION_COLUMNS + (MUTATION_ASSESSOR_COLUMNS if extended else ())
        return [column.name for column in columns]

    def with_outcome(self, outcome: AnnotationOutcome) -> "AnnotatedRecord":
        return replace(self, outcome=outcome)

    def output_header(self, *, extended: bool = False) -> list[str]:
        """Canonical annotated columns followed by extension columns sorted by name."""

        canonical = MutationRecord.column_names() + self.annotation_column_names(extended=extended)
        reserved = {column.name for column in self.COLUMNS}
        return canonical + self.extensions.sorted_names(exclude=reserved)
