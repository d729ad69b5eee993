#!/usr/bin/env python3
"""
Invoice PDF renaming - CLI entry point.

Usage:
  python run.py --table tabela.png --input ./pdfs --marketplace Shopee
  python run.py -t tabela.png -i ./pdfs -o ./renamed -m "Mercado Livre" -u "Ninja SC"
  python run.py -t tabela.png -i ./pdfs -m Magalu --dry-run   # Report only, copy nothing

Reads the summary table image, matches every PDF in the input folder against
its rows and copies matched PDFs to the output folder under their new names.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from src.invoice_renamer.config import get_settings
from src.invoice_renamer.errors import RenameError
from src.invoice_renamer.log_sink import logging_sink, setup_logging
from src.invoice_renamer.models import Variant
from src.invoice_renamer.pipeline import export_renamed, process_documents, summarize


def main() -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Rename marketplace invoice PDFs to match a summary table image."
    )
    parser.add_argument(
        "--table",
        "-t",
        type=str,
        required=True,
        help="Image of the marketplace summary table",
    )
    parser.add_argument(
        "--input",
        "-i",
        type=str,
        default="./input",
        help="Input directory containing invoice PDFs (default: ./input)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default="./output",
        help="Output directory for renamed copies (default: ./output)",
    )
    parser.add_argument(
        "--marketplace",
        "-m",
        choices=[v.value for v in Variant],
        default=Variant.SHOPEE.value,
        help="Marketplace that issued the table (default: Shopee)",
    )
    parser.add_argument(
        "--unit",
        "-u",
        type=str,
        default=settings.default_unit,
        help=f"Unit label used in the new names (default: {settings.default_unit})",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only report matches; do not write renamed copies",
    )
    args = parser.parse_args()

    setup_logging(settings.log_level)
    log = logging_sink()

    input_path = Path(args.input)
    if not input_path.exists():
        input_path.mkdir(parents=True, exist_ok=True)
        print(f"Created input directory: {input_path.absolute()}. Add PDFs and run again.")
        return 0

    pdfs = sorted(input_path.glob("*.pdf"))
    if not pdfs:
        print(f"No PDFs found in {input_path.absolute()}")
        return 0

    try:
        results = process_documents(
            args.table,
            pdfs,
            Variant(args.marketplace),
            args.unit,
            log,
            settings=settings,
            on_progress=lambda done, total, pct: print(f"[{pct:3d}%] {done}/{total}"),
        )
    except RenameError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for r in results:
        mark = "OK " if r.matched else "-- "
        print(f"  {mark}{r.original_name} -> {r.new_name}")

    counts = summarize(results)
    print(f"Matched {counts['matched']} of {counts['total']} file(s); {counts['unmatched']} unmatched.")

    if not args.dry_run and counts["matched"]:
        try:
            written = export_renamed(results, args.output, log)
        except RenameError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(f"Wrote {len(written)} file(s) to {Path(args.output).absolute()}")
        if len(written) < counts["matched"]:
            print(f"{counts['matched'] - len(written)} matched file(s) could not be written; see the log.")
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
