"""
Module: splitting.models

Purpose:
    Data models for page extraction.

Key Classes:
    - PageRange: Inclusive, 1-indexed page range
    - ExtractedDocument: Encoded output of an extraction

Used By:
    - splitting.extractor: extract_range(), split_all()
    - controller: Range and split jobs
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from pdf_toolkit.common.errors import InvalidRange

_RANGE_RE = re.compile(r"^\s*(\d+)\s*(?:-\s*(\d+)\s*)?$")


@dataclass(frozen=True)
class PageRange:
    """
    Inclusive page range, 1-indexed (immutable).
    
    Out-of-bounds ranges are rejected by validate(), never clamped.
    
    Attributes:
        first: First page number (from)
        last: Last page number (to)
        
    Example:
        >>> PageRange(3, 5).indices()
        [2, 3, 4]
        >>> PageRange.parse("7")
        PageRange(first=7, last=7)
    """
    
    first: int
    last: int
    
    @classmethod
    def parse(cls, text: str) -> "PageRange":
        """
        Parse "N" or "N-M".
        
        Raises:
            InvalidRange: If the text is not a range
        """
        match = _RANGE_RE.match(text or "")
        if match is None:
            raise InvalidRange(f"Not a page range: {text!r}")
        first = int(match.group(1))
        last = int(match.group(2)) if match.group(2) else first
        return cls(first, last)
    
    @property
    def page_count(self) -> int:
        """Number of pages covered (last - first + 1)."""
        return self.last - self.first + 1
    
    def validate(self, page_count: int) -> None:
        """
        Check 1 <= first <= last <= page_count.
        
        Raises:
            InvalidRange: If the range does not fit the document
        """
        if self.first < 1:
            raise InvalidRange(f"Range start must be >= 1: {self.first}")
        if self.first > self.last:
            raise InvalidRange(
                f"'From' page must be less than or equal to 'To' page: {self.first} > {self.last}"
            )
        if self.last > page_count:
            raise InvalidRange(
                f"Range end {self.last} exceeds page count {page_count}"
            )
    
    def indices(self) -> list[int]:
        """0-indexed page indices, ascending."""
        return list(range(self.first - 1, self.last))


@dataclass(frozen=True)
class ExtractedDocument:
    """
    A newly built PDF holding copied source pages.
    
    Attributes:
        data: Encoded PDF bytes
        page_count: Number of pages in data
        source_pages: 0-indexed source page of each output page
        filename: Suggested filename for saving
    """
    
    data: bytes
    page_count: int
    source_pages: tuple[int, ...]
    filename: str
