#!/usr/bin/env python3
"""Annotate a MAF file with the Genome Nexus annotation service."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from mafannotator import (  # noqa: E402
    AnnotationPipeline,
    GenomeNexusClient,
    MafAnnotatorError,
    MafReader,
    SettingsLoader,
)
from mafannotator.config import parse_output_format  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Annotate a MAF file via Genome Nexus")
    parser.add_argument("--filename", required=True, help="Input MAF file")
    parser.add_argument("--output-filename", required=True, help="Annotated MAF to write")
    parser.add_argument("--settings", help="JSON settings file (see schemas/settings.schema.json)")
    parser.add_argument("--base-url", help="Annotation service base URL")
    parser.add_argument(
        "--isoform-override",
        choices=("mskcc", "uniprot"),
        help="Isoform override source passed to the annotation service",
    )
    parser.add_argument("--error-report-location", help="Where to save the failed-record report")
    parser.add_argument(
        "--replace-symbol-entrez",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Replace Hugo_Symbol/Entrez_Gene_Id with the canonical transcript gene",
    )
    parser.add_argument(
        "--reannotate",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Annotate records that already carry HGVSp_Short",
    )
    parser.add_argument(
        "--post-interval-size",
        type=int,
        help="Records per POST request; 0 or 1 sends one GET per record",
    )
    parser.add_argument(
        "--output-format",
        help="'extended', 'minimal', a comma-separated column list or a file holding one",
    )
    parser.add_argument(
        "--strict-maf-checks",
        action="store_true",
        help="Fail when the input lacks the required MAF columns",
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
    logger = logging.getLogger("mafannotator.annotate")

    try:
        settings = SettingsLoader().load(args.settings)
        overrides = {}
        if args.output_format is not None:
            output_format, output_columns = parse_output_format(args.output_format)
            overrides.update(output_format=output_format, output_columns=output_columns)
        if args.base_url is not None:
            overrides["base_url"] = args.base_url if args.base_url.endswith("/") else args.base_url + "/"
        settings = settings.with_overrides(
            isoform_override_source=args.isoform_override,
            replace_symbol_entrez=args.replace_symbol_entrez,
            reannotate=args.reannotate,
            post_interval_size=args.post_interval_size,
            **overrides,
        )
    except (OSError, ValueError) as exc:
        logger.error("%s", exc)
        return 1

    try:
        MafReader(args.filename, strict=args.strict_maf_checks)
    except (MafAnnotatorError, OSError) as exc:
        logger.error("%s", exc)
        return 1

    client = GenomeNexusClient(settings)
    logger.info("Annotation service: %s (version %s)", settings.base_url, client.fetch_version())

    try:
        report = AnnotationPipeline(settings, client).run(
            args.filename,
            args.output_filename,
            error_report_path=args.error_report_location,
            strict=args.strict_maf_checks,
        )
    except (MafAnnotatorError, OSError) as exc:
        logger.error("%s", exc)
        return 1

    print(report.summary, end="")
    logger.info("Annotated MAF written to %s", report.output_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
