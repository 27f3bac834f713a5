"""
Module: intake

Purpose:
    Gate between raw tagged buffers and the conversion core. Buffers
    tagged with the wrong media type are rejected before any core data
    structure is touched.

Key Functions:
    - guess_media_type(): Media type from a filename
    - accept_image() / accept_images(): Image buffers to Units
    - accept_pdf(): PDF buffer to SourceDocument
    - accept_text(): Plain text buffer
    - accept_docx(): Word buffer
    - read_docx_text(): Word paragraph text as plain text

Dependencies:
    - python-docx: DOCX reading
    - units, splitting

Used By:
    - controller: Job entry points
    - cli: File loading
"""

from __future__ import annotations

import io
import logging
import mimetypes
import zipfile
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from docx import Document as DocxDocument
from docx.opc.exceptions import PackageNotFoundError

from pdf_toolkit.common.errors import DecodeFailure, InvalidInputType
from pdf_toolkit.splitting import SourceDocument, open_source
from pdf_toolkit.units import Unit

logger = logging.getLogger(__name__)

IMAGE_MEDIA_PREFIX = "image/"
PDF_MEDIA_TYPE = "application/pdf"
TEXT_MEDIA_PREFIX = "text/"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DEFAULT_MEDIA_TYPE = "application/octet-stream"

# Not registered on every platform
mimetypes.add_type("image/webp", ".webp")
mimetypes.add_type(DOCX_MEDIA_TYPE, ".docx")

TaggedBuffer = Tuple[bytes, str, str]  # (data, media_type, name)


def guess_media_type(path: str | Path) -> str:
    """
    Guess a media type from a filename extension.
    
    Example:
        >>> guess_media_type("scan.JPG")
        'image/jpeg'
        >>> guess_media_type("notes")
        'application/octet-stream'
    """
    media_type, _ = mimetypes.guess_type(str(path).lower())
    return media_type or DEFAULT_MEDIA_TYPE


def is_image_type(media_type: Optional[str]) -> bool:
    """True for image/* media types."""
    return bool(media_type) and media_type.lower().startswith(IMAGE_MEDIA_PREFIX)


def accept_image(data: bytes, media_type: str, name: str) -> Unit:
    """
    Wrap an image buffer in a Unit.
    
    Raises:
        InvalidInputType: If media_type is not image/*
    """
    if not is_image_type(media_type):
        raise InvalidInputType(f"{name!r} is not an image ({media_type})")
    return Unit(data, name, media_type)


def accept_images(items: Iterable[TaggedBuffer], *, skip_invalid: bool = False) -> List[Unit]:
    """
    Wrap several image buffers, validating all before creating any Unit.
    
    Args:
        items: (data, media_type, name) tuples
        skip_invalid: Drop non-image buffers with a warning instead of raising
        
    Returns:
        Units in input order
        
    Raises:
        InvalidInputType: If any buffer is not an image and skip_invalid is False
    """
    items = list(items)
    accepted: List[TaggedBuffer] = []
    for data, media_type, name in items:
        if is_image_type(media_type):
            accepted.append((data, media_type, name))
        elif skip_invalid:
            logger.warning(f"Skipping {name}: not an image ({media_type})")
        else:
            raise InvalidInputType(f"{name!r} is not an image ({media_type})")
    return [Unit(data, name, media_type) for data, media_type, name in accepted]


def accept_pdf(data: bytes, media_type: str, name: str) -> SourceDocument:
    """
    Parse a PDF buffer.
    
    Raises:
        InvalidInputType: If media_type is not application/pdf
        DecodeFailure: If the bytes are not a readable PDF
    """
    if (media_type or "").lower() != PDF_MEDIA_TYPE:
        raise InvalidInputType(f"Please select a PDF file: {name!r} is {media_type}")
    return open_source(data, name)


def accept_text(data: bytes, media_type: str, name: str) -> bytes:
    """
    Check a plain text buffer.
    
    Raises:
        InvalidInputType: If media_type is not text/*
    """
    if not (media_type or "").lower().startswith(TEXT_MEDIA_PREFIX):
        raise InvalidInputType(f"{name!r} is not a text file ({media_type})")
    return bytes(data)


def accept_docx(data: bytes, media_type: str, name: str) -> bytes:
    """
    Check a Word document buffer (decoded later by read_docx_text()).
    
    Raises:
        InvalidInputType: If media_type is not the DOCX media type
    """
    if (media_type or "").lower() != DOCX_MEDIA_TYPE:
        raise InvalidInputType(f"{name!r} is not a Word document ({media_type})")
    return bytes(data)


def read_docx_text(data: bytes, name: str = "document.docx") -> str:
    """
    Concatenate the text of every body paragraph, one per line.
    
    Formatting, tables and images are ignored.
    
    Raises:
        DecodeFailure: If the bytes are not a readable DOCX
    """
    try:
        document = DocxDocument(io.BytesIO(data))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as e:
        raise DecodeFailure(f"Failed to read Word document {name!r}: {e}") from e
    
    paragraphs = [para.text for para in document.paragraphs]
    logger.debug(f"Read {len(paragraphs)} paragraphs from {name}")
    return "\n".join(paragraphs)
