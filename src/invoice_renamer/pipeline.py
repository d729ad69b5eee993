"""
End-to-end run: table image -> OCR -> records -> per-PDF extract/match -> new names.

The table is parsed once up front; zero records aborts the run before any PDF
is touched. PDFs are then processed one at a time, in the order given.
"""
from __future__ import annotations

import shutil
import threading
from pathlib import Path
from typing import Callable, Optional, Sequence

from .config import Settings, get_settings
from .errors import EmptyRecordSetError, ExportError, TableExtractionError
from .extract import extract_pdf_text, extract_table_text
from .log_sink import LogSink, null_sink
from .matcher import find_matching_record
from .models import ProcessingResult, Record, Variant
from .naming import build_new_filename, safe_filename
from .parsers import parse_table_text

TableExtractor = Callable[[Path, Settings, LogSink], str]
PdfExtractor = Callable[[Path, Variant, Settings, LogSink], str]
ProgressCallback = Callable[[int, int, int], None]


def load_records(table_text: str, variant: Variant | str, log: LogSink = null_sink) -> list[Record]:
    """
    Parse table text; raise EmptyRecordSetError when nothing usable comes out,
    including when the marketplace is unknown.
    """
    records = parse_table_text(table_text, variant, log)
    if not records:
        label = variant.value if isinstance(variant, Variant) else str(variant)
        error = EmptyRecordSetError(label)
        log(str(error), "error")
        raise error
    log(f"Total table rows: {len(records)}", "success")
    return records


def rename_pdf(
    pdf_text: str,
    records: Sequence[Record],
    file_name: str,
    variant: Variant | str,
    unit: str,
    log: LogSink = null_sink,
    source_path: Optional[Path] = None,
) -> ProcessingResult:
    """Match one PDF's text and derive its new name (or keep the old one)."""
    variant = Variant(variant)
    record = find_matching_record(pdf_text, records, file_name, variant, log)
    if record is None:
        log(f"No match for: {file_name}", "error")
        return ProcessingResult(
            original_name=file_name,
            new_name=file_name,
            matched=False,
            source_path=source_path,
        )

    new_name = build_new_filename(record, variant.value, unit)
    log(f"Match found: {new_name}", "success")
    return ProcessingResult(
        original_name=file_name,
        new_name=new_name,
        matched=True,
        record=record,
        source_path=source_path,
    )


def process_documents(
    table_image: str | Path,
    pdf_paths: Sequence[str | Path],
    variant: Variant | str,
    unit: str,
    log: LogSink = null_sink,
    *,
    settings: Optional[Settings] = None,
    extract_table: TableExtractor = extract_table_text,
    extract_pdf: PdfExtractor = extract_pdf_text,
    on_progress: Optional[ProgressCallback] = None,
    cancel: Optional[threading.Event] = None,
) -> list[ProcessingResult]:
    """
    Run one rename pass over pdf_paths.

    Raises TableExtractionError / EmptyRecordSetError before any PDF is read.
    When ``cancel`` is set mid-run, no further PDFs are started and the
    results produced so far are returned.
    """
    settings = settings or get_settings()
    log("Starting processing...", "info")

    try:
        table_text = extract_table(Path(table_image), settings, log)
    except TableExtractionError:
        raise
    except Exception as e:
        log(f"Fatal error: {e}", "error")
        raise TableExtractionError(Path(table_image).name, str(e)) from e

    records = load_records(table_text, variant, log)
    variant = Variant(variant)

    results: list[ProcessingResult] = []
    total = len(pdf_paths)
    for i, pdf_path in enumerate(pdf_paths):
        if cancel is not None and cancel.is_set():
            log(f"Run cancelled after {len(results)} of {total} file(s)", "info")
            break

        path = Path(pdf_path)
        log(f"Processing: {path.name}...", "info")
        try:
            pdf_text = extract_pdf(path, variant, settings, log)
        except Exception as e:
            log(f"Error reading PDF {path.name}: {e}", "error")
            pdf_text = ""
        results.append(rename_pdf(pdf_text, records, path.name, variant, unit, log, source_path=path))

        if on_progress is not None:
            on_progress(i + 1, total, round((i + 1) / total * 100))

    return results


def summarize(results: Sequence[ProcessingResult]) -> dict:
    matched = sum(1 for r in results if r.matched)
    return {"total": len(results), "matched": matched, "unmatched": len(results) - matched}


def export_renamed(
    results: Sequence[ProcessingResult],
    output_dir: str | Path,
    log: LogSink = null_sink,
) -> list[Path]:
    """
    Copy matched PDFs into output_dir under their new names.

    Names already taken get a " (2)", " (3)"... suffix. A file that cannot be
    copied is logged and skipped; the returned list holds only what was
    written. Raises ExportError when output_dir itself cannot be created.
    """
    output_path = Path(output_dir)
    try:
        output_path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        log(f"Cannot create output folder {output_path}: {e}", "error")
        raise ExportError(str(output_path), str(e)) from e

    written: list[Path] = []
    for result in results:
        if not result.matched or result.source_path is None:
            continue
        target = _free_target(output_path, safe_filename(result.new_name), written)
        try:
            shutil.copyfile(result.source_path, target)
        except OSError as e:
            log(f"Could not write {target.name} from {result.original_name}: {e}", "error")
            continue
        if target.name != safe_filename(result.new_name):
            log(f"Name already used, saved {result.original_name} as {target.name}", "info")
        written.append(target)

    log(f"{len(written)} renamed file(s) written to {output_path}", "success")
    return written


def _free_target(output_path: Path, name: str, taken: Sequence[Path]) -> Path:
    target = output_path / name
    n = 2
    while target in taken or target.exists():
        target = output_path / f"{Path(name).stem} ({n}){Path(name).suffix}"
        n += 1
    return target
