"""
Module: controller

Purpose:
    Orchestrate conversion jobs and hand their results to the
    persistence and notification collaborators.
    Intake → Layout/Extract → Encode → Save → Notify

Key Functions:
    - images_to_pdf(): Compose an ordered unit set into one PDF
    - extract_page_range(): One PDF for a page range
    - split_pages(): One PDF per page
    - text_to_pdf(): Paginate a text buffer
    - word_to_pdf(): Paginate a Word document's paragraph text
    - pdf_to_word(): Structure-only Word report for a PDF

Key Classes:
    - JobRunner: Runs one job at a time, saves outputs, emits one event
    - JobResult / OutputFile / JobEvent: Job outcomes
    - DirectorySaver / MemorySaver: Persistence collaborators (with rollback)
    - LoggingNotifier / CollectingNotifier: Notification collaborators

Dependencies:
    - layout, splitting, output: Core operations
    - intake: DOCX text reading

Used By:
    - cli: Command-line shell
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Protocol, runtime_checkable

from .common.errors import ConversionError, ErrorKind, JobInProgressError
from .common.path_utils import output_stem
from .config import ToolkitConfig
from .intake import read_docx_text
from .layout import iter_compose, paginate_text
from .output import build_structure_docx, render_to_pdf
from .splitting import PageRange, SourceDocument, extract_range, split_all
from .units import Unit

logger = logging.getLogger(__name__)

IMAGES_FILENAME = "images.pdf"


@dataclass(frozen=True)
class OutputFile:
    """Finished byte buffer and its suggested filename."""
    filename: str
    data: bytes


@dataclass(frozen=True)
class JobResult:
    """
    Complete job result (immutable).

    Attributes:
        job: Job name, e.g. "images-to-pdf"
        outputs: Files to save, in order (empty for a no-op job)
        page_count: Total pages across outputs
        message: Human-readable outcome
        warnings: Warnings raised during the job

    Example:
        >>> result = images_to_pdf(units, ToolkitConfig())
        >>> [o.filename for o in result.outputs]
        ['images.pdf']
    """
    job: str
    outputs: tuple[OutputFile, ...]
    page_count: int
    message: str
    warnings: tuple[str, ...] = ()

    @property
    def filenames(self) -> tuple[str, ...]:
        """Filenames of every output."""
        return tuple(o.filename for o in self.outputs)


@dataclass(frozen=True)
class JobEvent:
    """
    The single outcome notification of a job.

    Attributes:
        job: Job name
        succeeded: True on success
        message: Human-readable outcome
        error_kind: Error kind on failure (None for success or
            failures outside the conversion core, e.g. saving)
        filenames: Saved filenames (success only)
    """
    job: str
    succeeded: bool
    message: str
    error_kind: Optional[ErrorKind] = None
    filenames: tuple[str, ...] = ()


class Saver(Protocol):
    """Persistence collaborator."""

    def save(self, data: bytes, filename: str) -> None:
        ...


@runtime_checkable
class RollbackSaver(Saver, Protocol):
    """Saver that can undo its most recent saves."""

    def rollback(self, count: int) -> None:
        ...


class Notifier(Protocol):
    """Notification collaborator."""

    def notify(self, event: JobEvent) -> None:
        ...


class DirectorySaver:
    """
    Save outputs into a directory.

    Existing files are never overwritten: a clash gets a counter
    suffix, e.g. page_1(1).pdf.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)
        self.saved: List[Path] = []

    def save(self, data: bytes, filename: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / filename
        if path.exists():
            stem, suffix = path.stem, path.suffix
            counter = 1
            while (self.directory / f"{stem}({counter}){suffix}").exists():
                counter += 1
            path = self.directory / f"{stem}({counter}){suffix}"
        path.write_bytes(data)
        self.saved.append(path)
        logger.info(f"Saved {path}")

    def rollback(self, count: int) -> None:
        """Delete the last count files written by this saver."""
        if count <= 0:
            return
        for path in self.saved[-count:]:
            try:
                path.unlink()
                logger.info(f"Removed {path}")
            except FileNotFoundError:
                logger.warning(f"Already gone: {path}")
        del self.saved[-count:]


class MemorySaver:
    """Keep outputs in memory, keyed by filename (in save order)."""

    def __init__(self) -> None:
        self.files: Dict[str, bytes] = {}

    def save(self, data: bytes, filename: str) -> None:
        self.files[filename] = data

    def rollback(self, count: int) -> None:
        """Forget the last count files."""
        for filename in list(self.files)[-count:] if count > 0 else []:
            del self.files[filename]


class LoggingNotifier:
    """Report job outcomes to the log."""

    def notify(self, event: JobEvent) -> None:
        if event.succeeded:
            logger.info(event.message)
        else:
            kind = event.error_kind.value if event.error_kind else "Error"
            logger.error(f"{kind}: {event.message}")


class CollectingNotifier:
    """Record job outcomes in order."""

    def __init__(self) -> None:
        self.events: List[JobEvent] = []

    def notify(self, event: JobEvent) -> None:
        self.events.append(event)


# =============================================================================
# Jobs
# =============================================================================

def images_to_pdf(units: Iterable[Unit], config: ToolkitConfig) -> JobResult:
    """
    Compose units into one PDF, one page per unit, in order.
    
    Pages stream from layout to renderer: unit i+1 is not read until
    page i has been drawn, and each image is decoded only while its
    page is drawn. The units' cached images are left untouched.
    
    Raises:
        DecodeFailure: If any unit cannot be decoded
        EncodeFailure: If the PDF cannot be written
    """
    units = list(units)
    if not units:
        logger.warning("No units to compose, nothing to convert")
        return JobResult("images-to-pdf", (), 0, "No images to convert")
    
    data = render_to_pdf(iter_compose(units, config.image_geometry), title=IMAGES_FILENAME)
    return JobResult(
        job="images-to-pdf",
        outputs=(OutputFile(IMAGES_FILENAME, data),),
        page_count=len(units),
        message="PDF created successfully!",
    )


def extract_page_range(source: SourceDocument, page_range: PageRange) -> JobResult:
    """
    Extract a page range into one PDF named split_{from}-{to}.pdf.

    Raises:
        InvalidRange: If the range does not fit the source
        EncodeFailure: If the PDF cannot be written
    """
    document = extract_range(source, page_range)
    return JobResult(
        job="split-range",
        outputs=(OutputFile(document.filename, document.data),),
        page_count=document.page_count,
        message="PDF split successfully!",
    )


def split_pages(source: SourceDocument) -> JobResult:
    """
    Split a PDF into one file per page (page_1.pdf, page_2.pdf, ...).

    Raises:
        EncodeFailure: If any page cannot be written
    """
    documents = split_all(source)
    return JobResult(
        job="split-all",
        outputs=tuple(OutputFile(d.filename, d.data) for d in documents),
        page_count=len(documents),
        message=f"Extracted {len(documents)} pages!",
    )


def text_to_pdf(data: bytes, name: str, config: ToolkitConfig) -> JobResult:
    """Paginate a text buffer into {stem}.pdf."""
    return _paginate_job("text-to-pdf", data, name, config)


def word_to_pdf(data: bytes, name: str, config: ToolkitConfig) -> JobResult:
    """
    Paginate a Word document's paragraph text into {stem}.pdf.

    Formatting is not carried over.

    Raises:
        DecodeFailure: If the bytes are not a readable DOCX
    """
    text = read_docx_text(data, name)
    return _paginate_job("word-to-pdf", text, name, config)


def pdf_to_word(source: SourceDocument) -> JobResult:
    """
    Describe a PDF's pages in {stem}.docx (structure only, no text).

    Raises:
        EncodeFailure: If the DOCX cannot be written
    """
    data = build_structure_docx(source)
    return JobResult(
        job="pdf-to-word",
        outputs=(OutputFile(f"{output_stem(source.name)}.docx", data),),
        page_count=source.page_count,
        message="Word document created!",
    )


def _paginate_job(job: str, text, name: str, config: ToolkitConfig) -> JobResult:
    layout = paginate_text(
        text,
        config.text_geometry,
        config.line_height,
        config.effective_line_width,
        config.measure(),
    )
    if layout.is_empty:
        return JobResult(job, (), 0, "No text to convert", tuple(layout.warnings))

    filename = f"{output_stem(name)}.pdf"
    data = render_to_pdf(
        layout,
        title=filename,
        font_name=config.font_name,
        font_size=config.font_size,
    )
    return JobResult(
        job=job,
        outputs=(OutputFile(filename, data),),
        page_count=layout.page_count,
        message="PDF created successfully!",
        warnings=tuple(layout.warnings),
    )


# =============================================================================
# Runner
# =============================================================================

class JobRunner:
    """
    Run conversion jobs one at a time.

    Every output of a job is produced before anything is saved, so a
    failing job saves nothing. If saving itself fails part-way, savers
    with rollback() (DirectorySaver, MemorySaver) have their earlier
    saves from that job undone. Each job emits exactly one JobEvent.

    Example:
        >>> runner = JobRunner(DirectorySaver(Path("out")), LoggingNotifier())
        >>> with open_source(data, "report.pdf") as source:
        ...     runner.extract_range(source, PageRange(3, 5))
    """

    def __init__(
        self,
        saver: Saver,
        notifier: Optional[Notifier] = None,
        config: Optional[ToolkitConfig] = None,
    ) -> None:
        self.saver = saver
        self.notifier = notifier or LoggingNotifier()
        self.config = config or ToolkitConfig()
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        """True while a job is running."""
        return self._lock.locked()

    def run(self, job: str, fn: Callable[..., JobResult], *args, **kwargs) -> JobResult:
        """
        Run one job, save its outputs and notify once.

        Args:
            job: Job name used in the failure event
            fn: Job function returning a JobResult

        Returns:
            The job result

        Raises:
            JobInProgressError: If another job is running (no event emitted;
                the running job still reports its own outcome)
            ConversionError: Whatever the job raised, after notifying
            OSError: If saving fails, after rolling back and notifying
        """
        if not self._lock.acquire(blocking=False):
            raise JobInProgressError(f"Cannot start {job}: another job is running")
        try:
            start_time = time.perf_counter()
            logger.info(f"Starting {job}")
            try:
                result = fn(*args, **kwargs)
                self._save_all(result.outputs)
            except ConversionError as e:
                self.notifier.notify(JobEvent(job, False, str(e), e.kind))
                raise
            except OSError as e:
                self.notifier.notify(JobEvent(job, False, f"Failed to save output: {e}"))
                raise

            elapsed = time.perf_counter() - start_time
            logger.info(f"{job} completed in {elapsed:.2f}s ({result.page_count} pages)")
            self.notifier.notify(JobEvent(job, True, result.message, filenames=result.filenames))
            return result
        finally:
            self._lock.release()

    def _save_all(self, outputs: Iterable[OutputFile]) -> None:
        """
        Save every output, or none of them.

        A failure part-way undoes the earlier saves when the saver
        supports rollback. Other savers keep what was written before
        the failure.
        """
        saved = 0
        try:
            for output in outputs:
                self.saver.save(output.data, output.filename)
                saved += 1
        except OSError:
            if saved and isinstance(self.saver, RollbackSaver):
                logger.warning(f"Save failed, rolling back {saved} saved outputs")
                self.saver.rollback(saved)
            raise

    def convert_images(self, units: Iterable[Unit]) -> JobResult:
        """Images → one PDF."""
        return self.run("images-to-pdf", images_to_pdf, units, self.config)

    def extract_range(self, source: SourceDocument, page_range: PageRange) -> JobResult:
        """PDF page range → one PDF."""
        return self.run("split-range", extract_page_range, source, page_range)

    def split_all(self, source: SourceDocument) -> JobResult:
        """PDF → one PDF per page."""
        return self.run("split-all", split_pages, source)

    def convert_text(self, data: bytes, name: str) -> JobResult:
        """Text → PDF."""
        return self.run("text-to-pdf", text_to_pdf, data, name, self.config)

    def convert_word(self, data: bytes, name: str) -> JobResult:
        """Word → PDF."""
        return self.run("word-to-pdf", word_to_pdf, data, name, self.config)

    def convert_pdf_to_word(self, source: SourceDocument) -> JobResult:
        """PDF → structure-only Word document."""
        return self.run("pdf-to-word", pdf_to_word, source)
