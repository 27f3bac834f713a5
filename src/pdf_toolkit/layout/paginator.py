"""
Module: layout.paginator

Purpose:
    Paginate a linear text stream: split into lines, wrap each line to a
    maximum width, and flow wrapped lines onto pages with a fixed line
    height and page margins.

Key Functions:
    - decode_text(): Bytes to text, never failing
    - read_lines(): Non-blank physical lines, capped at the ingestion limit
    - wrap_line(): Greedy wrap of one line
    - paginate_text(): Main pagination function
    - make_measure(): Width function for a ReportLab font

Algorithm:
    1. Split on newlines, drop blank lines
    2. Keep the first INGESTION_LINE_LIMIT lines
    3. Greedy wrap each line so every piece measures <= max width
    4. Place lines from y = margin, advancing by line_height; when the
       next line would cross the bottom margin, start a new page first

Dependencies:
    - reportlab.pdfbase.pdfmetrics: Font metrics for measuring
    - layout.config: PageGeometry

Used By:
    - controller: Text-to-PDF and Word-to-PDF jobs
"""

from __future__ import annotations

import logging
import re
from typing import Callable, List, Tuple, Union

from reportlab.pdfbase.pdfmetrics import stringWidth

from .config import INGESTION_LINE_LIMIT, PageGeometry
from .models import LayoutResult, TextLine, TextPagePlan

logger = logging.getLogger(__name__)

MeasureFn = Callable[[str], float]

_NEWLINE_RE = re.compile(r"\r\n|\r|\n")
_REPLACEMENT_CHAR = "�"


def make_measure(font_name: str, font_size: float) -> MeasureFn:
    """
    Build a width function for a ReportLab font.
    
    Example:
        >>> measure = make_measure("Helvetica", 12)
        >>> measure("abc") > 0
        True
    """
    def measure(fragment: str) -> float:
        return stringWidth(fragment, font_name, font_size)
    return measure


def decode_text(data: Union[bytes, str]) -> str:
    """
    Decode a text buffer as UTF-8, replacing undecodable bytes.
    
    Malformed input becomes garbled text instead of an error. A leading
    byte order mark is dropped.
    """
    if isinstance(data, str):
        return data
    text = data.decode("utf-8-sig", errors="replace")
    if _REPLACEMENT_CHAR in text:
        logger.warning("Text buffer is not valid UTF-8; undecodable bytes were replaced")
    return text


def read_lines(text: str, limit: int = INGESTION_LINE_LIMIT) -> Tuple[List[str], int]:
    """
    Split text into non-blank physical lines, keeping at most limit.
    
    Whitespace runs inside a line collapse to single spaces.
    Blank lines do not count toward the limit.
    
    Args:
        text: Decoded text
        limit: Maximum number of lines to keep
        
    Returns:
        Tuple of (kept lines, number of non-blank lines dropped)
        
    Example:
        >>> read_lines("a\\n\\n  b  c\\n", limit=1)
        (['a'], 1)
    """
    lines = [" ".join(raw.split()) for raw in _NEWLINE_RE.split(text)]
    lines = [line for line in lines if line]
    kept = lines[:limit]
    return kept, len(lines) - len(kept)


def wrap_line(line: str, max_width: float, measure: MeasureFn) -> List[str]:
    """
    Greedily wrap one line so each piece measures <= max_width.
    
    Breaks at spaces. A word wider than max_width is split between
    characters; a single character wider than max_width is emitted on
    its own line (it cannot be split further).
    
    Args:
        line: Text without newlines
        max_width: Maximum rendered width
        measure: Width function
        
    Returns:
        Wrapped pieces (empty list for an empty line)
        
    Raises:
        ValueError: If max_width <= 0
    """
    if max_width <= 0:
        raise ValueError(f"max_width must be positive: {max_width}")
    
    pieces: List[str] = []
    current = ""
    for word in line.split():
        candidate = f"{current} {word}" if current else word
        if measure(candidate) <= max_width:
            current = candidate
            continue
        if current:
            pieces.append(current)
            current = ""
        if measure(word) <= max_width:
            current = word
            continue
        chunks = _split_word(word, max_width, measure)
        pieces.extend(chunks[:-1])
        current = chunks[-1]
    if current:
        pieces.append(current)
    return pieces


def _split_word(word: str, max_width: float, measure: MeasureFn) -> List[str]:
    """Split an over-long word into chunks of whole characters."""
    chunks: List[str] = []
    current = ""
    for char in word:
        if current and measure(current + char) > max_width:
            chunks.append(current)
            current = char
        else:
            current += char
    chunks.append(current)
    return chunks


def paginate_text(
    text: Union[bytes, str],
    geometry: PageGeometry,
    line_height: float,
    max_line_width: float,
    measure: MeasureFn,
    *,
    line_limit: int = INGESTION_LINE_LIMIT,
) -> LayoutResult:
    """
    Flow text onto pages.
    
    The overflow check runs before a line is placed: when
    y + line_height > page_height - margin the line opens a new page.
    
    Args:
        text: Raw text buffer (bytes are decoded leniently)
        geometry: Page size and margin
        line_height: Vertical advance per rendered line
        max_line_width: Wrap width
        measure: Width function (see make_measure())
        line_limit: Ingestion cap on physical lines
        
    Returns:
        LayoutResult of TextPagePlans (empty when there is no text)
        
    Raises:
        ValueError: If line_height or max_line_width is not positive
        
    Example:
        >>> layout = paginate_text(b"hello\\nworld", PageGeometry(595, 842, 56),
        ...                        19.8, 480, make_measure("Helvetica", 12))
        >>> layout.page_count
        1
    """
    if line_height <= 0:
        raise ValueError(f"line_height must be positive: {line_height}")
    
    warnings: List[str] = []
    lines, dropped = read_lines(decode_text(text), line_limit)
    if dropped:
        msg = f"Ingestion limit of {line_limit} lines reached; {dropped} lines dropped"
        logger.warning(msg)
        warnings.append(msg)
    
    page_bottom = geometry.height - geometry.margin
    if geometry.margin + line_height > page_bottom:
        msg = f"Line height {line_height} exceeds page content height"
        logger.warning(msg)
        warnings.append(msg)
    
    pages: List[TextPagePlan] = []
    current: List[TextLine] = []
    y = geometry.margin
    
    def close_page() -> None:
        pages.append(TextPagePlan(
            index=len(pages),
            lines=tuple(current),
            page_width=geometry.width,
            page_height=geometry.height,
            margin=geometry.margin,
            line_height=line_height,
        ))
    
    for line in lines:
        for piece in wrap_line(line, max_line_width, measure):
            if y + line_height > page_bottom and current:
                close_page()
                current = []
                y = geometry.margin
            current.append(TextLine(text=piece, top=y, width=measure(piece)))
            y += line_height
    
    if current:
        close_page()
    
    rendered = sum(p.line_count for p in pages)
    logger.info(f"Paginated {len(lines)} lines ({rendered} rendered) onto {len(pages)} pages")
    
    return LayoutResult(pages=tuple(pages), warnings=warnings)
