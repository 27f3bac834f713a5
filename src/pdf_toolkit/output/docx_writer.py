"""
Module: output.docx_writer

Purpose:
    Produce a Word document describing the structure of a PDF: a title,
    a page-count line and one block per page with its dimensions.
    No text is extracted from page content.

Key Functions:
    - build_structure_docx(): Main entry point

Dependencies:
    - python-docx: DOCX generation
    - splitting.source: SourceDocument

Used By:
    - controller: PDF-to-Word jobs
"""

from __future__ import annotations

import io
import logging
from typing import Optional

from docx import Document as DocxDocument
from docx.shared import Pt, RGBColor

from pdf_toolkit.common.errors import EncodeFailure
from pdf_toolkit.splitting.source import SourceDocument

logger = logging.getLogger(__name__)

EXTRACTION_NOTE = (
    "Note: Full text extraction from PDF requires server-side processing. "
    "This conversion extracts document structure."
)


def build_structure_docx(source: SourceDocument, name: Optional[str] = None) -> bytes:
    """
    Build a DOCX summarising the pages of a PDF.
    
    Layout:
        Converted from: <name>        (bold, 14pt)
        Total pages: <n>              (11pt, grey)
        — Page i —                    (bold, 12pt)   } once per page
        Dimensions: W × H pts         (10pt, italic) }
        Note ...                      (9pt, italic)
    
    Args:
        source: PDF to describe
        name: Name shown in the title (defaults to source.name)
        
    Returns:
        Encoded DOCX bytes
        
    Raises:
        EncodeFailure: If the DOCX cannot be written
    """
    name = name or source.name
    d = DocxDocument()
    
    _add_line(d, f"Converted from: {name}", size=14, bold=True, space_after=20)
    _add_line(d, f"Total pages: {source.page_count}", size=11, color="666666", space_after=20)
    
    for index in range(source.page_count):
        width, height = source.page_size(index)
        _add_line(d, f"— Page {index + 1} —", size=12, bold=True, space_before=20, space_after=10)
        _add_line(
            d,
            f"Dimensions: {round(width)} × {round(height)} pts",
            size=10,
            color="999999",
            italic=True,
            space_after=10,
        )
    
    _add_line(d, EXTRACTION_NOTE, size=9, color="888888", italic=True, space_before=30)
    
    buf = io.BytesIO()
    try:
        d.save(buf)
    except (OSError, ValueError) as e:
        raise EncodeFailure(f"Failed to write DOCX: {e}") from e
    
    logger.info(f"Built structure DOCX for {name} ({source.page_count} pages)")
    return buf.getvalue()


def _add_line(
    d,
    text: str,
    *,
    size: float,
    bold: bool = False,
    italic: bool = False,
    color: Optional[str] = None,
    space_before: Optional[float] = None,
    space_after: Optional[float] = None,
) -> None:
    """Append a single-run paragraph with the given formatting."""
    p = d.add_paragraph()
    run = p.add_run(text)
    run.bold = bold
    run.italic = italic
    run.font.size = Pt(size)
    if color:
        run.font.color.rgb = RGBColor.from_string(color)
    if space_before is not None:
        p.paragraph_format.space_before = Pt(space_before)
    if space_after is not None:
        p.paragraph_format.space_after = Pt(space_after)
