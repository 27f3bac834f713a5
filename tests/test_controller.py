"""
Unit tests for job orchestration: outputs, saving and notification.
"""

import io
import threading
from unittest.mock import Mock

import fitz
import pytest
from pypdf import PdfReader

from pdf_toolkit.common.errors import (
    DecodeFailure,
    ErrorKind,
    InvalidRange,
    JobInProgressError,
)
from pdf_toolkit.config import ToolkitConfig
from pdf_toolkit.controller import (
    CollectingNotifier,
    DirectorySaver,
    JobResult,
    JobRunner,
    MemorySaver,
    OutputFile,
    images_to_pdf,
)
from pdf_toolkit.splitting import PageRange, open_source
from pdf_toolkit.units import OrderedUnitSet, Unit


@pytest.fixture
def saver():
    return MemorySaver()


@pytest.fixture
def notifier():
    return CollectingNotifier()


@pytest.fixture
def runner(saver, notifier):
    return JobRunner(saver, notifier, ToolkitConfig())


def _page_count(data: bytes) -> int:
    return len(PdfReader(io.BytesIO(data)).pages)


class TestImagesToPdf:

    def test_images_combined_into_one_pdf(self, runner, saver, notifier, make_png):
        # Arrange
        units = OrderedUnitSet([
            Unit(make_png(2000, 1000), "a.png"),
            Unit(make_png(500, 500), "b.png"),
            Unit(make_png(100, 400), "c.png"),
        ])

        # Act
        result = runner.convert_images(units)

        # Assert
        assert list(saver.files) == ["images.pdf"]
        assert _page_count(saver.files["images.pdf"]) == 3
        assert result.page_count == 3
        assert len(notifier.events) == 1
        event = notifier.events[0]
        assert event.succeeded
        assert event.message == "PDF created successfully!"
        assert event.filenames == ("images.pdf",)

    def test_empty_set_saves_nothing_but_notifies(self, runner, saver, notifier):
        result = runner.convert_images(OrderedUnitSet())

        assert saver.files == {}
        assert result.outputs == ()
        assert len(notifier.events) == 1
        assert notifier.events[0].succeeded

    def test_decode_failure_saves_nothing(self, runner, saver, notifier, make_png):
        units = OrderedUnitSet([Unit(make_png(), "ok.png"), Unit(b"junk", "bad.png")])

        with pytest.raises(DecodeFailure):
            runner.convert_images(units)

        assert saver.files == {}
        assert len(notifier.events) == 1
        event = notifier.events[0]
        assert not event.succeeded
        assert event.error_kind is ErrorKind.DECODE_FAILURE
        assert "bad.png" in event.message

    def test_job_function_usable_without_runner(self, make_png):
        result = images_to_pdf([Unit(make_png(), "a.png")], ToolkitConfig())
        assert result.filenames == ("images.pdf",)

    def test_units_left_undecoded_after_job(self, runner, saver, make_png):
        units = OrderedUnitSet([Unit(make_png(300 + i, 200), f"{i}.png") for i in range(5)])

        runner.convert_images(units)

        assert _page_count(saver.files["images.pdf"]) == 5
        assert not any(unit.is_decoded for unit in units)


class TestSplitJobs:

    def test_extract_range(self, runner, saver, notifier, make_pdf):
        with open_source(make_pdf(10), "report.pdf") as source:
            runner.extract_range(source, PageRange(3, 5))

        assert list(saver.files) == ["split_3-5.pdf"]
        assert _page_count(saver.files["split_3-5.pdf"]) == 3
        assert notifier.events[0].message == "PDF split successfully!"

    def test_reversed_range_fails_without_output(self, runner, saver, notifier, make_pdf):
        with open_source(make_pdf(10), "report.pdf") as source:
            with pytest.raises(InvalidRange):
                runner.extract_range(source, PageRange(5, 3))

        assert saver.files == {}
        assert len(notifier.events) == 1
        assert notifier.events[0].error_kind is ErrorKind.INVALID_RANGE

    def test_split_all(self, runner, saver, notifier, make_pdf):
        with open_source(make_pdf(4), "report.pdf") as source:
            result = runner.split_all(source)

        assert list(saver.files) == ["page_1.pdf", "page_2.pdf", "page_3.pdf", "page_4.pdf"]
        assert all(_page_count(data) == 1 for data in saver.files.values())
        assert result.message == "Extracted 4 pages!"
        assert notifier.events[0].filenames == tuple(saver.files)

    def test_compose_then_split_round_trip(self, runner, saver, make_png):
        # Arrange: wide, square and tall images composed into one PDF
        sizes = [(2000, 1000), (500, 500), (100, 400)]
        units = OrderedUnitSet([Unit(make_png(w, h), f"{i}.png") for i, (w, h) in enumerate(sizes)])
        runner.convert_images(units)

        # Act
        with open_source(saver.files["images.pdf"], "images.pdf") as source:
            result = runner.split_all(source)

        # Assert: one A4 page per unit, image aspect ratios in unit order
        geometry = runner.config.image_geometry
        assert result.filenames == ("page_1.pdf", "page_2.pdf", "page_3.pdf")
        for filename, (width, height) in zip(result.filenames, sizes):
            doc = fitz.open(stream=saver.files[filename], filetype="pdf")
            page = doc[0]
            assert doc.page_count == 1
            assert (page.rect.width, page.rect.height) == pytest.approx(geometry.size, abs=0.01)
            x0, y0, x1, y1 = page.get_image_info()[0]["bbox"]
            assert (x1 - x0) / (y1 - y0) == pytest.approx(width / height, rel=1e-3)
            doc.close()


class TestDocumentJobs:

    def test_text_to_pdf(self, runner, saver, notifier):
        text = "\n".join(f"line {i}" for i in range(150)).encode("utf-8")

        result = runner.convert_text(text, "notes.txt")

        assert list(saver.files) == ["notes.pdf"]
        assert result.page_count == _page_count(saver.files["notes.pdf"])
        assert any("dropped" in w for w in result.warnings)
        assert notifier.events[0].succeeded

    def test_blank_text_saves_nothing(self, runner, saver, notifier):
        result = runner.convert_text(b"\n\n", "blank.txt")

        assert saver.files == {}
        assert result.message == "No text to convert"
        assert notifier.events[0].succeeded

    def test_word_to_pdf(self, runner, saver, make_docx):
        runner.convert_word(make_docx(["Dear reader,", "Regards"]), "letter.docx")

        data = saver.files["letter.pdf"]
        text = PdfReader(io.BytesIO(data)).pages[0].extract_text()
        assert "Dear reader," in text
        assert "Regards" in text

    def test_word_to_pdf_when_corrupt_then_decode_failure(self, runner, saver, notifier):
        with pytest.raises(DecodeFailure):
            runner.convert_word(b"not a docx", "letter.docx")

        assert saver.files == {}
        assert notifier.events[0].error_kind is ErrorKind.DECODE_FAILURE

    def test_pdf_to_word(self, runner, saver, notifier, make_pdf):
        with open_source(make_pdf(2), "report.pdf") as source:
            runner.convert_pdf_to_word(source)

        assert list(saver.files) == ["report.docx"]
        assert notifier.events[0].message == "Word document created!"


class TestJobRunner:

    def test_second_job_rejected_while_running(self, runner, notifier):
        # Arrange: a job that blocks until released
        started = threading.Event()
        release = threading.Event()

        def slow_job():
            started.set()
            release.wait(timeout=5)
            return JobResult("slow", (), 0, "done")

        worker = threading.Thread(target=runner.run, args=("slow", slow_job))
        worker.start()
        assert started.wait(timeout=5)

        # Act / Assert
        assert runner.busy
        with pytest.raises(JobInProgressError):
            runner.run("other", slow_job)

        release.set()
        worker.join(timeout=5)
        assert not runner.busy
        assert [e.job for e in notifier.events] == ["slow"]

    def test_save_failure_notified_once(self, notifier):
        saver = Mock()
        saver.save.side_effect = OSError("disk full")
        runner = JobRunner(saver, notifier)

        def job():
            return JobResult("job", (OutputFile("a.pdf", b"x"),), 1, "ok")

        with pytest.raises(OSError):
            runner.run("job", job)

        assert len(notifier.events) == 1
        assert not notifier.events[0].succeeded
        assert notifier.events[0].error_kind is None
        assert "disk full" in notifier.events[0].message

    def test_runner_free_after_failure(self, runner):
        def failing():
            raise DecodeFailure("nope")

        with pytest.raises(DecodeFailure):
            runner.run("fail", failing)

        assert not runner.busy

    def test_partial_save_rolled_back(self, tmp_path, notifier, make_pdf):
        # Arrange: the third page fails to save
        class FailingSaver(DirectorySaver):
            def save(self, data, filename):
                if len(self.saved) == 2:
                    raise OSError("disk full")
                super().save(data, filename)

        saver = FailingSaver(tmp_path)
        runner = JobRunner(saver, notifier)

        # Act
        with open_source(make_pdf(4), "report.pdf") as source:
            with pytest.raises(OSError, match="disk full"):
                runner.split_all(source)

        # Assert: nothing from the failed job is left behind
        assert list(tmp_path.iterdir()) == []
        assert saver.saved == []
        assert len(notifier.events) == 1
        assert not notifier.events[0].succeeded

    def test_partial_save_rolled_back_in_memory(self, notifier):
        class FailingSaver(MemorySaver):
            def save(self, data, filename):
                if filename == "b.pdf":
                    raise OSError("disk full")
                super().save(data, filename)

        saver = FailingSaver()
        saver.save(b"keep", "earlier.pdf")
        runner = JobRunner(saver, notifier)
        outputs = (OutputFile("a.pdf", b"a"), OutputFile("b.pdf", b"b"))

        with pytest.raises(OSError):
            runner.run("job", lambda: JobResult("job", outputs, 2, "ok"))

        assert saver.files == {"earlier.pdf": b"keep"}


class TestDirectorySaver:

    def test_saves_into_directory(self, tmp_path):
        saver = DirectorySaver(tmp_path / "out")
        saver.save(b"data", "page_1.pdf")
        assert (tmp_path / "out" / "page_1.pdf").read_bytes() == b"data"

    def test_existing_file_not_overwritten(self, tmp_path):
        (tmp_path / "page_1.pdf").write_bytes(b"old")
        saver = DirectorySaver(tmp_path)

        saver.save(b"new", "page_1.pdf")
        saver.save(b"newer", "page_1.pdf")

        assert (tmp_path / "page_1.pdf").read_bytes() == b"old"
        assert (tmp_path / "page_1(1).pdf").read_bytes() == b"new"
        assert (tmp_path / "page_1(2).pdf").read_bytes() == b"newer"
        assert [p.name for p in saver.saved] == ["page_1(1).pdf", "page_1(2).pdf"]
