"""Genomic location keys used to query the annotation service."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import NamedTuple

from .models import MutationRecord

logger = logging.getLogger("mafannotator.genomic_location")


class DerivedAllele(NamedTuple):
    """Effective variant allele and whether both tumor alleles equalled the reference."""

    allele: str
    ambiguous: bool


def derive_variant_allele(reference: str, tumor_seq_allele1: str, tumor_seq_allele2: str) -> DerivedAllele:
    """Pick the tumor allele that differs from ``reference``.

    ``tumor_seq_allele2`` wins over ``tumor_seq_allele1``. When both equal the
    reference the result is ambiguous and the reference itself is returned.
    """

    if tumor_seq_allele2 != reference:
        return DerivedAllele(tumor_seq_allele2, False)
    if tumor_seq_allele1 != reference:
        return DerivedAllele(tumor_seq_allele1, False)
    return DerivedAllele(reference, True)


@dataclass(frozen=True)
class GenomicLocation:
    chromosome: str
    start: str
    end: str
    reference_allele: str
    variant_allele: str

    def encode(self) -> str:
        """Request key ``chr,start,end,ref,var``."""

        return ",".join(
            (self.chromosome, self.start, self.end, self.reference_allele, self.variant_allele)
        )

    @classmethod
    def decode(cls, key: str) -> "GenomicLocation":
        parts = key.split(",")
        if len(parts) != 5:
            raise ValueError(f"Genomic location key must have 5 comma-separated parts: {key!r}")
        return cls(*parts)


def location_for(record: MutationRecord) -> tuple[GenomicLocation, bool]:
    """Build the request location for ``record``; the flag marks an ambiguous allele."""

    derived = derive_variant_allele(
        record.reference_allele, record.tumor_seq_allele1, record.tumor_seq_allele2
    )
    if derived.allele == record.reference_allele:
        logger.warning(
            "Reference allele extracted from %s:%s-%s matches alt allele. Sample: %s",
            record.chromosome,
            record.start_position,
            record.end_position,
            record.tumor_sample_barcode,
        )
    location = GenomicLocation(
        chromosome=record.chromosome,
        start=record.start_position,
        end=record.end_position,
        reference_allele=record.reference_allele,
        variant_allele=derived.allele,
    )
    return location, derived.ambiguous
