"""
Command-line entry point.
Run with: python -m app.runner PATH [PATH ...] [--output report.xlsx]
"""

import argparse
import asyncio
import sys
from pathlib import Path

import structlog

from app.config import settings
from app.export.spreadsheet import export_filename, export_xlsx_bytes
from app.observability.logging import setup_logging
from app.pipeline.natural_sort import natural_key
from app.pipeline.orchestrator import DocumentInput, DocumentPipeline
from app.review.summary import summarize

logger = structlog.get_logger(__name__)


def collect_pdfs(paths: list[str]) -> list[Path]:
    """Expand directories to the PDFs they contain; other files are ignored."""
    found: list[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            found.extend(p for p in path.iterdir() if p.is_file() and p.suffix.lower() == ".pdf")
        elif path.is_file() and path.suffix.lower() == ".pdf":
            found.append(path)
        else:
            logger.warning("path_skipped", path=raw)
    return sorted(found, key=lambda p: natural_key(p.name))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract DARF withholding codes and amounts into a spreadsheet.",
    )
    parser.add_argument("paths", nargs="+", help="PDF files or directories of PDFs")
    parser.add_argument(
        "-o", "--output",
        help="Spreadsheet path (default: Relatorio_DARFs_<date>.xlsx in the current directory)",
    )
    parser.add_argument(
        "-b", "--batch-size",
        type=int, default=settings.BATCH_SIZE, metavar="N",
        help=f"Documents processed concurrently (default: {settings.BATCH_SIZE})",
    )
    parser.add_argument(
        "--codes",
        help="Comma separated target codes (default: TARGET_CODES setting)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)
    setup_logging(level="DEBUG" if args.verbose else None, console=True)

    pdfs = collect_pdfs(args.paths)
    if not pdfs:
        print("No PDF files found.", file=sys.stderr)
        return 1

    codes = [c.strip() for c in args.codes.split(",") if c.strip()] if args.codes else None
    pipeline = DocumentPipeline(target_codes=codes)
    documents = [DocumentInput(filename=p.name, data=p.read_bytes()) for p in pdfs]

    def report(stats, _records):
        logger.info("progress", processed=stats.processed, total=stats.total)

    results = asyncio.run(pipeline.process_batches(documents, args.batch_size, on_progress=report))

    output = Path(args.output) if args.output else Path(export_filename())
    output.write_bytes(export_xlsx_bytes(results))

    summary = summarize(results)
    logger.info(
        "report_written",
        path=str(output),
        records=summary.total_records,
        success=summary.success_count,
        attention=summary.attention_count,
        total_value=summary.total_value,
    )
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
