#!/usr/bin/env python3
"""Merge several MAF files into one, filling absent columns with blanks."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from mafannotator import MafAnnotatorError, merge_input_mafs  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Merge MAF files with differing headers")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--input-mafs-list", help="Comma-separated list of MAF files")
    source.add_argument("--input-mafs-directory", help="Directory whose files are all merged")
    parser.add_argument("--output-maf", required=True, help="Merged MAF to write")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Skip files lacking Chromosome/Start_Position/End_Position/Reference_Allele/Tumor_Seq_Allele1",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    logger = logging.getLogger("mafannotator.merge")

    files = []
    if args.input_mafs_list:
        files = [item.strip() for item in args.input_mafs_list.split(",") if item.strip()]

    try:
        output = merge_input_mafs(
            args.output_maf,
            files,
            args.input_mafs_directory,
            strict=args.strict,
        )
    except MafAnnotatorError as exc:
        logger.error("%s", exc)
        return 1

    logger.info("Merged MAF written to %s", output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
