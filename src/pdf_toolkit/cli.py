"""
Command-line shell for the conversion jobs.

Sub-commands:
    images IMG...         Images → images.pdf (one page per image, in order)
    range PDF FROM TO     Pages FROM..TO → split_FROM-TO.pdf
    split PDF             Every page → page_N.pdf
    text FILE             Plain text → FILE.pdf
    word-to-pdf DOCX      Word paragraph text → DOCX.pdf
    pdf-to-word PDF       Page structure report → PDF.docx

Exit codes: 0 success, 1 decode/encode/save failure, 2 invalid input.
"""

from __future__ import annotations

import argparse
import logging
from contextlib import ExitStack
from pathlib import Path
from typing import List, Optional, Sequence

from .common.errors import ConversionError, ValidationError
from .config import ToolkitConfig
from .controller import (
    DirectorySaver,
    JobResult,
    JobRunner,
    LoggingNotifier,
    Notifier,
    extract_page_range,
    images_to_pdf,
    pdf_to_word,
    split_pages,
    text_to_pdf,
    word_to_pdf,
)
from .intake import (
    TaggedBuffer,
    accept_docx,
    accept_images,
    accept_pdf,
    accept_text,
    guess_media_type,
)
from .layout.config import PAGE_SIZES
from .splitting import PageRange
from .units import OrderedUnitSet

logger = logging.getLogger(__name__)

# Job name reported in events, per sub-command
JOB_NAMES = {
    "images": "images-to-pdf",
    "range": "split-range",
    "split": "split-all",
    "text": "text-to-pdf",
    "word-to-pdf": "word-to-pdf",
    "pdf-to-word": "pdf-to-word",
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdf_toolkit",
        description="Convert images, text and Word files to PDF; split PDFs.",
    )
    parser.add_argument("--out", "-o", type=Path, default=Path("."), help="Output directory (default: current directory)")
    parser.add_argument("--page-size", default="A4", choices=sorted(PAGE_SIZES), help="Page size (default: A4)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    images = sub.add_parser("images", help="Combine images into one PDF")
    images.add_argument("files", nargs="+", type=Path, help="Image files, in page order")
    images.add_argument("--margin", type=float, default=0.0, help="Page margin in points (default: 0)")
    images.add_argument("--skip-invalid", action="store_true", help="Skip files that are not images instead of failing")

    rng = sub.add_parser("range", help="Extract a page range into one PDF")
    rng.add_argument("file", type=Path, help="Source PDF")
    rng.add_argument("first", type=int, help="First page (1-indexed)")
    rng.add_argument("last", type=int, help="Last page (inclusive)")

    split = sub.add_parser("split", help="Split every page into its own PDF")
    split.add_argument("file", type=Path, help="Source PDF")

    text = sub.add_parser("text", help="Paginate a plain text file into a PDF")
    text.add_argument("file", type=Path, help="Text file")
    text.add_argument("--font-size", type=float, default=None, help="Font size (default: 12)")

    w2p = sub.add_parser("word-to-pdf", help="Paginate a Word document's text into a PDF")
    w2p.add_argument("file", type=Path, help="DOCX file")

    p2w = sub.add_parser("pdf-to-word", help="Describe a PDF's pages in a Word document")
    p2w.add_argument("file", type=Path, help="Source PDF")

    return parser


def _build_config(args: argparse.Namespace) -> ToolkitConfig:
    options = {"page_size": args.page_size}
    if getattr(args, "margin", None) is not None:
        options["image_margin"] = args.margin
    if getattr(args, "font_size", None) is not None:
        options["font_size"] = args.font_size
    return ToolkitConfig(**options)


def _read_inputs(args: argparse.Namespace) -> List[TaggedBuffer]:
    """Read every input file as a (data, media_type, name) tuple."""
    paths = args.files if args.command == "images" else [args.file]
    return [(p.read_bytes(), guess_media_type(p), p.name) for p in paths]


def _execute(
    args: argparse.Namespace,
    inputs: List[TaggedBuffer],
    config: ToolkitConfig,
    stack: ExitStack,
) -> JobResult:
    """
    Check the inputs and run the conversion for one sub-command.

    Runs inside JobRunner.run, so rejected input is reported as the
    job's failure event. Anything opened here is closed when stack exits.
    """
    if args.command == "images":
        units = stack.enter_context(
            OrderedUnitSet(accept_images(inputs, skip_invalid=args.skip_invalid))
        )
        return images_to_pdf(units, config)

    data, media_type, name = inputs[0]
    if args.command == "text":
        return text_to_pdf(accept_text(data, media_type, name), name, config)
    if args.command == "word-to-pdf":
        return word_to_pdf(accept_docx(data, media_type, name), name, config)

    source = stack.enter_context(accept_pdf(data, media_type, name))
    if args.command == "range":
        return extract_page_range(source, PageRange(args.first, args.last))
    if args.command == "split":
        return split_pages(source)
    return pdf_to_word(source)


def _exit_code(error: ConversionError) -> int:
    return 2 if isinstance(error, ValidationError) else 1


def main(argv: Optional[Sequence[str]] = None, notifier: Optional[Notifier] = None) -> int:
    """
    Entry point; returns the process exit code.

    Args:
        argv: Arguments (defaults to sys.argv)
        notifier: Receives the job's outcome (defaults to logging it)
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        config = _build_config(args)
    except ValueError as e:
        parser.error(str(e))

    try:
        inputs = _read_inputs(args)
    except OSError as e:
        logger.error(f"Cannot read input: {e}")
        return 1

    runner = JobRunner(DirectorySaver(args.out), notifier or LoggingNotifier(), config)
    # Errors below are already reported by the runner's notifier
    with ExitStack() as stack:
        try:
            runner.run(JOB_NAMES[args.command], _execute, args, inputs, config, stack)
        except ConversionError as e:
            return _exit_code(e)
        except OSError:
            return 1
    return 0
