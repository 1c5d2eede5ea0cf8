import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from mafannotator.models import MutationRecord  # noqa: E402
from mafannotator.resolver import FieldResolver, protein_position_from_hgvsp_short  # noqa: E402
from mafannotator.response import AnnotationResponse  # noqa: E402


BRAF_TRANSCRIPT = {
    "transcriptId": "ENST00000288602",
    "hugoGeneSymbol": "BRAF",
    "entrezGeneId": "673",
    "variantClassification": "Missense_Mutation",
    "hgvsc": "ENST00000288602.6:c.1799T>A",
    "hgvsp": "p.Val600Glu",
    "hgvspShort": "p.V600E",
    "proteinPosition": {"start": 600, "end": 600},
    "codonChange": "gTg/gAg",
    "refSeq": "NM_004333.4",
    "consequenceTerms": "missense_variant",
}


def _record(**overrides: str) -> MutationRecord:
    values = dict(
        hugo_symbol="OLD",
        entrez_gene_id="1",
        ncbi_build="GRCh37",
        chromosome="7",
        start_position="140453136",
        end_position="140453136",
        strand="+",
        variant_classification="Silent",
        variant_type="SNP",
        reference_allele="A",
        tumor_seq_allele1="A",
        tumor_seq_allele2="T",
        tumor_sample_barcode="S1",
    )
    values.update(overrides)
    return MutationRecord(**values)


def _response(transcripts: list[dict] | None = None, **extra: object) -> AnnotationResponse:
    payload = {
        "variant": "7:g.140453136A>T",
        "assembly_name": "GRCh38",
        "annotation_summary": {
            "genomicLocation": {
                "chromosome": "7",
                "start": 140753336,
                "end": 140753336,
                "referenceAllele": "A",
                "variantAllele": "T",
            },
            "strandSign": "-",
            "variantType": "SNP",
            "transcriptConsequences": [BRAF_TRANSCRIPT] if transcripts is None else transcripts,
        },
    }
    payload.update(extra)
    return AnnotationResponse.from_payload(payload)


def test_protein_position_pattern() -> None:
    assert protein_position_from_hgvsp_short("p.V600E") == "600"
    assert protein_position_from_hgvsp_short("ENSP00000288602.6:p.V600E") == "600"
    assert protein_position_from_hgvsp_short("p.*757Lext*?") == ""
    assert protein_position_from_hgvsp_short("") == ""


def test_resolves_fields_from_response_and_canonical_transcript() -> None:
    annotated = FieldResolver().resolve(_record(), _response())

    assert annotated.hugo_symbol == "BRAF"
    assert annotated.entrez_gene_id == "673"
    assert annotated.ncbi_build == "GRCh38"
    assert annotated.start_position == "140753336"
    assert annotated.strand == "-"
    assert annotated.variant_classification == "Missense_Mutation"
    assert annotated.tumor_seq_allele2 == "T"
    assert annotated.hgvsp_short == "p.V600E"
    assert annotated.protein_position_start == "600"
    assert annotated.protein_position == "600"
    assert annotated.codon_change == "gTg/gAg"
    assert annotated.refseq == "NM_004333.4"
    assert annotated.consequence == "missense_variant"
    assert annotated.hotspot == "0"
    assert annotated.tumor_sample_barcode == "S1"


def test_replace_flag_off_keeps_original_gene() -> None:
    annotated = FieldResolver(replace_symbol_entrez=False).resolve(_record(), _response())

    assert annotated.hugo_symbol == "OLD"
    assert annotated.entrez_gene_id == "1"


def test_empty_transcript_list_blanks_annotation_only_fields() -> None:
    annotated = FieldResolver().resolve(_record(), _response(transcripts=[]))

    assert annotated.hgvsc == ""
    assert annotated.hgvsp == ""
    assert annotated.hgvsp_short == ""
    assert annotated.transcript_id == ""
    assert annotated.consequence == ""
    assert annotated.codon_change == ""
    assert annotated.variant_classification == "Silent"
    assert annotated.hugo_symbol == "OLD"


def test_variant_type_never_falls_back_to_original() -> None:
    response = AnnotationResponse.from_payload({"annotation_summary": {"transcriptConsequences": []}})

    annotated = FieldResolver().resolve(_record(), response)

    assert annotated.variant_type == ""
    assert annotated.chromosome == "7"
    assert annotated.ncbi_build == "GRCh37"
    assert annotated.strand == "+"


def test_variant_allele_is_derived_without_summary() -> None:
    response = AnnotationResponse.from_payload({"assembly_name": "GRCh37"})

    annotated = FieldResolver().resolve(_record(tumor_seq_allele2="A", tumor_seq_allele1="G"), response)

    assert annotated.tumor_seq_allele2 == "G"


def test_protein_position_extracted_from_hgvsp_short() -> None:
    transcript = dict(BRAF_TRANSCRIPT)
    transcript.pop("proteinPosition")

    annotated = FieldResolver().resolve(_record(), _response(transcripts=[transcript]))

    assert annotated.protein_position_start == ""
    assert annotated.protein_position == "600"


def test_protein_position_falls_back_to_original_extension() -> None:
    record = MutationRecord.from_row(
        ["Chromosome", "Reference_Allele", "Tumor_Seq_Allele2", "Protein_position"],
        ["7", "A", "T", "42"],
    )

    annotated = FieldResolver().resolve(record, _response(transcripts=[]))

    assert annotated.protein_position == "42"


def test_colocated_frequencies_and_mutation_assessor() -> None:
    response = _response(
        colocatedVariants=[
            {
                "dbSnpId": "rs113488022",
                "gnomad_nfe_allele": "T",
                "gnomad_nfe_maf": "0.0001",
                "gnomad_afr_allele": "T",
                "gnomad_afr_maf": "0.0002",
            }
        ],
        mutation_assessor={
            "annotation": {
                "functionalImpact": "high",
                "functionalImpactScore": 3.2,
                "msaLink": "msa",
                "pdbLink": "pdb",
            }
        },
    )

    annotated = FieldResolver().resolve(_record(tumor_seq_allele1="T"), response)

    assert annotated.colocated_dbsnp_rs == "rs113488022"
    assert annotated.gnomad_nfe_af == "0.0001"
    assert annotated.gnomad_afr_af == "0.0002"
    assert annotated.gnomad_eas_af == ""
    assert annotated.ma_functional_impact == "high"
    assert annotated.ma_functional_impact_score == "3.2"


def test_colocated_mismatch_blanks_all_frequency_fields() -> None:
    response = _response(colocatedVariants=[{"dbSnpId": "rs1", "gnomad_afr_allele": "C", "gnomad_afr_maf": "0.5"}])

    annotated = FieldResolver().resolve(_record(tumor_seq_allele1="T"), response)

    assert (annotated.gnomad_afr_af, annotated.colocated_dbsnp_rs) == ("", "")


def test_extension_columns_pass_through() -> None:
    record = MutationRecord.from_row(["Chromosome", "Reference_Allele", "Custom"], ["7", "A", "kept"])

    annotated = FieldResolver().resolve(record, _response())

    assert annotated.get("Custom") == "kept"
