"""
Module: splitting.source

Purpose:
    Read-only handle over an existing PDF.

Key Classes:
    - SourceDocument: Page count and page sizes of a parsed PDF

Key Functions:
    - open_source(): Parse PDF bytes into a SourceDocument

Dependencies:
    - fitz (PyMuPDF): PDF parsing

Used By:
    - splitting.extractor: Page copying
    - output.docx_writer: Structure report
"""

from __future__ import annotations

import logging
from typing import Tuple

import fitz

from pdf_toolkit.common.errors import DecodeFailure, InvalidRange

logger = logging.getLogger(__name__)


class SourceDocument:
    """
    Parsed PDF that extraction reads from and never modifies.
    
    Example:
        >>> with open_source(pdf_bytes, "report.pdf") as source:
        ...     source.page_count
        10
    """
    
    def __init__(self, document: fitz.Document, name: str = "document.pdf") -> None:
        self._doc = document
        self.name = name
    
    def __repr__(self) -> str:
        return f"SourceDocument(name={self.name!r}, pages={self.page_count})"
    
    def __enter__(self) -> "SourceDocument":
        """Context manager entry."""
        return self
    
    def __exit__(self, *args) -> None:
        """Context manager exit - close the parsed document."""
        self.close()
    
    @property
    def document(self) -> fitz.Document:
        """Underlying PyMuPDF document (read-only use)."""
        return self._doc
    
    @property
    def page_count(self) -> int:
        """Number of pages."""
        return self._doc.page_count
    
    def page_size(self, index: int) -> Tuple[float, float]:
        """
        (width, height) of a page in points.
        
        Args:
            index: 0-indexed page number
            
        Raises:
            InvalidRange: If index is not a page of this document
        """
        if not 0 <= index < self.page_count:
            raise InvalidRange(f"Page index {index} out of range for {self.page_count} pages")
        rect = self._doc[index].rect
        return (rect.width, rect.height)
    
    def close(self) -> None:
        """Close the parsed document and free resources."""
        if not self._doc.is_closed:
            self._doc.close()


def open_source(data: bytes, name: str = "document.pdf") -> SourceDocument:
    """
    Parse PDF bytes.
    
    Args:
        data: Raw PDF bytes
        name: Display name, used for output naming
        
    Returns:
        SourceDocument (caller closes it)
        
    Raises:
        DecodeFailure: If the bytes are not a readable PDF or are encrypted
    """
    try:
        document = fitz.open(stream=bytes(data), filetype="pdf")
    except (RuntimeError, ValueError) as e:
        raise DecodeFailure(f"Failed to load PDF {name!r}: {e}") from e
    
    if document.needs_pass:
        document.close()
        raise DecodeFailure(f"PDF {name!r} is password protected")
    
    logger.info(f"Loaded {name}: {document.page_count} pages")
    return SourceDocument(document, name)
