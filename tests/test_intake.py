"""
Unit tests for the intake gate.
"""

import pytest

from pdf_toolkit.common.errors import DecodeFailure, InvalidInputType
from pdf_toolkit.intake import (
    DOCX_MEDIA_TYPE,
    accept_docx,
    accept_image,
    accept_images,
    accept_pdf,
    accept_text,
    guess_media_type,
    is_image_type,
    read_docx_text,
)


class TestMediaTypes:

    @pytest.mark.parametrize("name, expected", [
        ("scan.png", "image/png"),
        ("photo.JPG", "image/jpeg"),
        ("anim.webp", "image/webp"),
        ("report.pdf", "application/pdf"),
        ("notes.txt", "text/plain"),
        ("letter.docx", DOCX_MEDIA_TYPE),
        ("README", "application/octet-stream"),
    ])
    def test_guess_media_type(self, name, expected):
        assert guess_media_type(name) == expected

    @pytest.mark.parametrize("media_type, expected", [
        ("image/png", True),
        ("IMAGE/JPEG", True),
        ("application/pdf", False),
        ("", False),
        (None, False),
    ])
    def test_is_image_type(self, media_type, expected):
        assert is_image_type(media_type) is expected


class TestAcceptImages:

    def test_accept_image(self, make_png):
        unit = accept_image(make_png(), "image/png", "a.png")
        assert unit.name == "a.png"
        assert unit.media_type == "image/png"

    def test_accept_image_rejects_pdf(self, make_pdf):
        with pytest.raises(InvalidInputType, match="report.pdf"):
            accept_image(make_pdf(1), "application/pdf", "report.pdf")

    def test_accept_images_all_or_nothing(self, make_png):
        items = [
            (make_png(), "image/png", "a.png"),
            (b"text", "text/plain", "notes.txt"),
        ]

        with pytest.raises(InvalidInputType):
            accept_images(items)

    def test_accept_images_skip_invalid(self, make_png):
        items = [
            (make_png(), "image/png", "a.png"),
            (b"text", "text/plain", "notes.txt"),
            (make_png(), "image/jpeg", "b.jpg"),
        ]

        units = accept_images(items, skip_invalid=True)

        assert [u.name for u in units] == ["a.png", "b.jpg"]


class TestAcceptDocuments:

    def test_accept_pdf(self, make_pdf):
        with accept_pdf(make_pdf(2), "application/pdf", "report.pdf") as source:
            assert source.page_count == 2

    def test_accept_pdf_rejects_image(self, make_png):
        with pytest.raises(InvalidInputType, match="Please select a PDF file"):
            accept_pdf(make_png(), "image/png", "a.png")

    def test_accept_pdf_when_corrupt_then_decode_failure(self):
        with pytest.raises(DecodeFailure):
            accept_pdf(b"not a pdf at all", "application/pdf", "bad.pdf")

    def test_accept_text(self):
        assert accept_text(b"hello", "text/plain", "a.txt") == b"hello"
        assert accept_text(b"# hi", "text/markdown", "a.md") == b"# hi"

    def test_accept_text_rejects_pdf(self):
        with pytest.raises(InvalidInputType):
            accept_text(b"%PDF", "application/pdf", "a.pdf")

    def test_accept_docx(self, make_docx):
        data = make_docx(["hello"])
        assert accept_docx(data, DOCX_MEDIA_TYPE, "letter.docx") == data

    def test_accept_docx_rejects_text(self):
        with pytest.raises(InvalidInputType):
            accept_docx(b"hello", "text/plain", "a.txt")


class TestReadDocxText:

    def test_paragraphs_joined_by_newlines(self, make_docx):
        data = make_docx(["Dear reader,", "", "Regards"])
        assert read_docx_text(data) == "Dear reader,\n\nRegards"

    def test_corrupt_docx_raises_decode_failure(self):
        with pytest.raises(DecodeFailure, match="letter.docx"):
            read_docx_text(b"not a zip archive", "letter.docx")
