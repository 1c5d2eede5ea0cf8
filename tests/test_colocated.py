import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from mafannotator.colocated import match_colocated_variant  # noqa: E402
from mafannotator.response import ColocatedVariant  # noqa: E402


def test_only_first_rs_variant_is_considered() -> None:
    variants = [
        ColocatedVariant(dbsnp_id="COSM476", gnomad_afr_allele="T", gnomad_afr_maf="0.9"),
        ColocatedVariant(dbsnp_id="rs113488022", gnomad_afr_allele="T", gnomad_afr_maf="0.001"),
        ColocatedVariant(dbsnp_id="rs999", gnomad_afr_allele="T", gnomad_afr_maf="0.5"),
    ]

    matched = match_colocated_variant(variants, "T")

    assert matched is not None
    assert matched.dbsnp_id == "rs113488022"


def test_single_allele_mismatch_rejects_the_match() -> None:
    variants = [
        ColocatedVariant(dbsnp_id="rs1", gnomad_afr_allele="T", gnomad_eas_allele="G", gnomad_nfe_allele="T"),
        ColocatedVariant(dbsnp_id="rs2", gnomad_afr_allele="T"),
    ]

    assert match_colocated_variant(variants, "T") is None


def test_absent_gnomad_alleles_do_not_reject() -> None:
    variants = [ColocatedVariant(dbsnp_id="rs1", gnomad_nfe_allele="A", gnomad_nfe_maf="0.2")]

    assert match_colocated_variant(variants, "A") is variants[0]


def test_blank_tumor_allele_skips_allele_check() -> None:
    variants = [ColocatedVariant(dbsnp_id="rs1", gnomad_afr_allele="C")]

    assert match_colocated_variant(variants, "") is variants[0]
    assert match_colocated_variant([], "A") is None
