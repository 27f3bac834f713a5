import io
import sys
from pathlib import Path

import fitz
import pytest
from docx import Document as DocxDocument
from PIL import Image

# Add src to sys.path so we can import pdf_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


# Common test fixtures
@pytest.fixture
def make_png():
    """Factory returning encoded PNG bytes of the given size."""
    def _create(width: int = 200, height: int = 100, mode: str = "RGB", color="white") -> bytes:
        img = Image.new(mode, (width, height), color=color)
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()
    return _create


@pytest.fixture
def make_pdf():
    """Factory returning PDF bytes whose page i carries the text "Page i"."""
    def _create(page_count: int = 10, width: float = 595, height: float = 842) -> bytes:
        doc = fitz.open()
        for number in range(1, page_count + 1):
            page = doc.new_page(width=width, height=height)
            page.insert_text((72, 72), f"Page {number}")
        data = doc.tobytes()
        doc.close()
        return data
    return _create


@pytest.fixture
def make_docx():
    """Factory returning DOCX bytes with one paragraph per string."""
    def _create(paragraphs) -> bytes:
        doc = DocxDocument()
        for text in paragraphs:
            doc.add_paragraph(text)
        buf = io.BytesIO()
        doc.save(buf)
        return buf.getvalue()
    return _create


@pytest.fixture
def sample_image(tmp_path: Path, make_png):
    """Create a simple test image file."""
    img_path = tmp_path / "sample.png"
    img_path.write_bytes(make_png(200, 100))
    return img_path


@pytest.fixture
def char_measure():
    """Width function: every character is 10 points wide."""
    return lambda fragment: len(fragment) * 10.0
