"""Combine a MAF record and an annotation response into an annotated record."""

from __future__ import annotations

import re
from dataclasses import fields

from .colocated import match_colocated_variant
from .genomic_location import derive_variant_allele
from .models import AnnotatedRecord, MutationRecord
from .response import AnnotationResponse, ColocatedVariant, TranscriptConsequence
from .transcripts import FirstTranscriptSelector, TranscriptSelector

PROTEIN_POSITION_PATTERN = re.compile(r"p\.[A-Za-z](\d*)")


def _prefer(fresh: str | None, original: str) -> str:
    return fresh if fresh is not None else original


def _or_blank(value: str | None) -> str:
    return value if value is not None else ""


def protein_position_from_hgvsp_short(hgvsp_short: str) -> str:
    """Leading digit run after the first amino acid letter, e.g. ``p.V600E`` -> ``600``."""

    match = PROTEIN_POSITION_PATTERN.search(hgvsp_short)
    return match.group(1) if match else ""


class FieldResolver:
    """Apply the per-column fallback rules for one record.

    Fresh values from the response and canonical transcript win; most columns
    then fall back to the original record. Transcript-only columns
    (HGVS notation, transcript ids, codons, consequence) and the variant type
    never fall back and resolve to "" instead.
    """

    def __init__(
        self,
        selector: TranscriptSelector | None = None,
        *,
        replace_symbol_entrez: bool = True,
    ) -> None:
        self.selector = selector or FirstTranscriptSelector()
        self.replace_symbol_entrez = replace_symbol_entrez

    def canonical_transcript(self, response: AnnotationResponse) -> TranscriptConsequence | None:
        return self.selector.select(response.transcript_consequences, response.most_severe_consequence)

    def resolve(self, record: MutationRecord, response: AnnotationResponse) -> AnnotatedRecord:
        transcript = self.canonical_transcript(response)
        colocated = match_colocated_variant(response.colocated_variants, record.tumor_seq_allele1)
        location = response.location

        base = {item.name: getattr(record, item.name) for item in fields(MutationRecord)}
        base.update(
            hugo_symbol=self._gene_field(transcript, "hugo_gene_symbol", record.hugo_symbol),
            entrez_gene_id=self._gene_field(transcript, "entrez_gene_id", record.entrez_gene_id),
            ncbi_build=_prefer(response.assembly_name, record.ncbi_build),
            chromosome=_prefer(location and location.chromosome, record.chromosome),
            start_position=_prefer(location and location.start, record.start_position),
            end_position=_prefer(location and location.end, record.end_position),
            strand=_prefer(response.strand_sign, record.strand),
            variant_classification=_prefer(
                transcript and transcript.variant_classification, record.variant_classification
            ),
            variant_type=_or_blank(response.variant_type),
            reference_allele=_prefer(location and location.reference_allele, record.reference_allele),
            tumor_seq_allele2=self._variant_allele(record, response),
        )

        hgvsp_short = _or_blank(transcript and transcript.hgvsp_short)
        protein_start = _or_blank(transcript and transcript.protein_position_start)
        annotation = dict(
            hgvsc=_or_blank(transcript and transcript.hgvsc),
            hgvsp=_or_blank(transcript and transcript.hgvsp),
            hgvsp_short=hgvsp_short,
            transcript_id=_or_blank(transcript and transcript.transcript_id),
            refseq=_or_blank(transcript and transcript.refseq),
            protein_position_start=protein_start,
            protein_position_end=_or_blank(transcript and transcript.protein_position_end),
            protein_position=self._protein_position(protein_start, hgvsp_short, record),
            codon_change=_or_blank(transcript and transcript.codon_change),
            hotspot="0",
            consequence=",".join(transcript.consequence_terms) if transcript else "",
        )
        annotation.update(self._colocated_fields(colocated))
        annotation.update(self._mutation_assessor_fields(response))
        return AnnotatedRecord(**base, **annotation)

    def _gene_field(self, transcript: TranscriptConsequence | None, attribute: str, original: str) -> str:
        if self.replace_symbol_entrez and transcript is not None:
            value = getattr(transcript, attribute)
            if value:
                return value
        return original

    @staticmethod
    def _variant_allele(record: MutationRecord, response: AnnotationResponse) -> str:
        if response.location is not None and response.location.variant_allele is not None:
            return response.location.variant_allele
        return derive_variant_allele(
            record.reference_allele, record.tumor_seq_allele1, record.tumor_seq_allele2
        ).allele

    @staticmethod
    def _protein_position(protein_start: str, hgvsp_short: str, record: MutationRecord) -> str:
        if protein_start:
            return protein_start
        extracted = protein_position_from_hgvsp_short(hgvsp_short)
        if extracted:
            return extracted
        return record.extensions.get("Protein_position", "")

    @staticmethod
    def _colocated_fields(colocated: ColocatedVariant | None) -> dict[str, str]:
        if colocated is None:
            return dict(gnomad_afr_af="", gnomad_eas_af="", gnomad_nfe_af="", colocated_dbsnp_rs="")
        return dict(
            gnomad_afr_af=_or_blank(colocated.gnomad_afr_maf),
            gnomad_eas_af=_or_blank(colocated.gnomad_eas_maf),
            gnomad_nfe_af=_or_blank(colocated.gnomad_nfe_maf),
            colocated_dbsnp_rs=_or_blank(colocated.dbsnp_id),
        )

    @staticmethod
    def _mutation_assessor_fields(response: AnnotationResponse) -> dict[str, str]:
        assessor = response.mutation_assessor
        if assessor is None:
            return {}
        return dict(
            ma_functional_impact=_or_blank(assessor.functional_impact),
            ma_functional_impact_score=_or_blank(assessor.functional_impact_score),
            ma_link_msa=_or_blank(assessor.msa_link),
            ma_link_pdb=_or_blank(assessor.pdb_link),
        )
