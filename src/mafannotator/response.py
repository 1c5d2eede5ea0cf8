"""Read-only views over annotation service payloads.

The service answers in camelCase JSON; snake_case spellings are accepted as
well so recorded fixtures and older payloads parse the same way.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence


def _pick(payload: Mapping[str, Any] | None, *candidates: str) -> Any:
    if not payload:
        return None
    for candidate in candidates:
        value = payload.get(candidate)
        if value is not None:
            return value
    return None


def _text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def _terms(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(term.strip() for term in value.split(",") if term.strip())
    return tuple(str(term) for term in value)


@dataclass(frozen=True)
class SummaryLocation:
    chromosome: str | None = None
    start: str | None = None
    end: str | None = None
    reference_allele: str | None = None
    variant_allele: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None) -> "SummaryLocation":
        return cls(
            chromosome=_text(_pick(payload, "chromosome", "chr")),
            start=_text(_pick(payload, "start")),
            end=_text(_pick(payload, "end")),
            reference_allele=_text(_pick(payload, "referenceAllele", "reference_allele")),
            variant_allele=_text(_pick(payload, "variantAllele", "variant_allele")),
        )


@dataclass(frozen=True)
class TranscriptConsequence:
    transcript_id: str | None = None
    hugo_gene_symbol: str | None = None
    entrez_gene_id: str | None = None
    variant_classification: str | None = None
    hgvsc: str | None = None
    hgvsp: str | None = None
    hgvsp_short: str | None = None
    protein_position_start: str | None = None
    protein_position_end: str | None = None
    codon_change: str | None = None
    refseq: str | None = None
    consequence_terms: tuple[str, ...] = ()
    canonical: bool = False

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "TranscriptConsequence":
        position = _pick(payload, "proteinPosition", "protein_position") or {}
        canonical = _pick(payload, "canonical", "isCanonical")
        return cls(
            transcript_id=_text(_pick(payload, "transcriptId", "transcript_id")),
            hugo_gene_symbol=_text(_pick(payload, "hugoGeneSymbol", "hugo_gene_symbol", "gene_symbol")),
            entrez_gene_id=_text(_pick(payload, "entrezGeneId", "entrez_gene_id")),
            variant_classification=_text(
                _pick(payload, "variantClassification", "variant_classification")
            ),
            hgvsc=_text(_pick(payload, "hgvsc")),
            hgvsp=_text(_pick(payload, "hgvsp")),
            hgvsp_short=_text(_pick(payload, "hgvspShort", "hgvsp_short")),
            protein_position_start=_text(_pick(position, "start")),
            protein_position_end=_text(_pick(position, "end")),
            codon_change=_text(_pick(payload, "codonChange", "codon_change")),
            refseq=_text(_pick(payload, "refSeq", "refseq")),
            consequence_terms=_terms(_pick(payload, "consequenceTerms", "consequence_terms")),
            canonical=str(canonical).lower() in {"1", "true"},
        )


@dataclass(frozen=True)
class ColocatedVariant:
    dbsnp_id: str | None = None
    gnomad_afr_allele: str | None = None
    gnomad_afr_maf: str | None = None
    gnomad_eas_allele: str | None = None
    gnomad_eas_maf: str | None = None
    gnomad_nfe_allele: str | None = None
    gnomad_nfe_maf: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ColocatedVariant":
        return cls(
            dbsnp_id=_text(_pick(payload, "dbSnpId", "dbsnp_id")),
            gnomad_afr_allele=_text(_pick(payload, "gnomad_afr_allele", "gnomadAfrAllele")),
            gnomad_afr_maf=_text(_pick(payload, "gnomad_afr_maf", "gnomadAfrMaf")),
            gnomad_eas_allele=_text(_pick(payload, "gnomad_eas_allele", "gnomadEasAllele")),
            gnomad_eas_maf=_text(_pick(payload, "gnomad_eas_maf", "gnomadEasMaf")),
            gnomad_nfe_allele=_text(_pick(payload, "gnomad_nfe_allele", "gnomadNfeAllele")),
            gnomad_nfe_maf=_text(_pick(payload, "gnomad_nfe_maf", "gnomadNfeMaf")),
        )

    def gnomad_alleles(self) -> list[str]:
        """Population alleles that are present, in afr/eas/nfe order."""

        return [
            allele
            for allele in (self.gnomad_afr_allele, self.gnomad_eas_allele, self.gnomad_nfe_allele)
            if allele is not None
        ]


@dataclass(frozen=True)
class MutationAssessor:
    functional_impact: str | None = None
    functional_impact_score: str | None = None
    msa_link: str | None = None
    pdb_link: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None) -> "MutationAssessor":
        annotation = _pick(payload, "annotation") or payload or {}
        return cls(
            functional_impact=_text(_pick(annotation, "functionalImpact", "functional_impact")),
            functional_impact_score=_text(
                _pick(annotation, "functionalImpactScore", "functional_impact_score")
            ),
            msa_link=_text(_pick(annotation, "msaLink", "msa_link")),
            pdb_link=_text(_pick(annotation, "pdbLink", "pdb_link")),
        )


@dataclass(frozen=True)
class AnnotationResponse:
    """One annotated variant as returned by the service."""

    variant: str | None = None
    assembly_name: str | None = None
    successfully_annotated: bool = True
    most_severe_consequence: str | None = None
    location: SummaryLocation | None = None
    strand_sign: str | None = None
    variant_type: str | None = None
    transcript_consequences: tuple[TranscriptConsequence, ...] = ()
    colocated_variants: tuple[ColocatedVariant, ...] = ()
    mutation_assessor: MutationAssessor | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "AnnotationResponse":
        summary = _pick(payload, "annotation_summary", "annotationSummary")
        location = None
        strand_sign = None
        variant_type = None
        transcripts: Sequence[Mapping[str, Any]] = ()
        if summary:
            location = SummaryLocation.from_payload(
                _pick(summary, "genomicLocation", "genomic_location")
            )
            strand_sign = _text(_pick(summary, "strandSign", "strand_sign"))
            variant_type = _text(_pick(summary, "variantType", "variant_type"))
            transcripts = _pick(summary, "transcriptConsequences", "transcript_consequences") or ()

        assessor_payload = _pick(payload, "mutation_assessor", "mutationAssessor")
        successfully_annotated = _pick(payload, "successfully_annotated", "successfullyAnnotated")
        return cls(
            variant=_text(_pick(payload, "variant", "originalVariantQuery")),
            assembly_name=_text(_pick(payload, "assembly_name", "assemblyName")),
            successfully_annotated=True if successfully_annotated is None else bool(successfully_annotated),
            most_severe_consequence=_text(
                _pick(payload, "most_severe_consequence", "mostSevereConsequence")
            ),
            location=location,
            strand_sign=strand_sign,
            variant_type=variant_type,
            transcript_consequences=tuple(TranscriptConsequence.from_payload(item) for item in transcripts),
            colocated_variants=tuple(
                ColocatedVariant.from_payload(item)
                for item in _pick(payload, "colocatedVariants", "colocated_variants") or ()
            ),
            mutation_assessor=(
                MutationAssessor.from_payload(assessor_payload) if assessor_payload else None
            ),
        )

    @property
    def is_empty(self) -> bool:
        """True when the service returned nothing usable for this variant."""

        return not self.successfully_annotated or (
            self.location is None and not self.transcript_consequences and self.assembly_name is None
        )

    def location_key(self) -> str | None:
        """Request-key form of the response's own genomic location."""

        if self.location is None:
            return None
        parts = (
            self.location.chromosome,
            self.location.start,
            self.location.end,
            self.location.reference_allele,
            self.location.variant_allele,
        )
        if any(part is None for part in parts):
            return None
        return ",".join(parts)
