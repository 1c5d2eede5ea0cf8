"""Population frequency lookup among colocated variants."""

from __future__ import annotations

from collections.abc import Sequence

from .response import ColocatedVariant


def match_colocated_variant(
    colocated_variants: Sequence[ColocatedVariant],
    tumor_seq_allele1: str,
) -> ColocatedVariant | None:
    """Return the colocated variant whose frequencies apply to the record.

    Only the first variant with an ``rs`` dbSNP id is considered. It is rejected
    when ``tumor_seq_allele1`` is set and disagrees with any gnomAD allele the
    variant carries.
    """

    candidate = next(
        (
            variant
            for variant in colocated_variants
            if variant.dbsnp_id is not None and variant.dbsnp_id.startswith("rs")
        ),
        None,
    )
    if candidate is None:
        return None

    if tumor_seq_allele1:
        for allele in candidate.gnomad_alleles():
            if allele != tumor_seq_allele1:
                return None
    return candidate
