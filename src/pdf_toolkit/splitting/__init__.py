"""
Module: splitting

Purpose:
    Page range extraction and per-page splitting of existing PDFs.

Key Functions:
    - open_source(): Parse PDF bytes
    - copy_page_subset(), extract_range(), split_all()

Key Classes:
    - SourceDocument, PageRange, ExtractedDocument

Dependencies:
    - fitz (PyMuPDF): PDF parsing and page copying

Used By:
    - controller: Range and split jobs
"""

from .models import PageRange, ExtractedDocument
from .source import SourceDocument, open_source
from .extractor import copy_page_subset, extract_range, split_all

__all__ = [
    "PageRange",
    "ExtractedDocument",
    "SourceDocument",
    "open_source",
    "copy_page_subset",
    "extract_range",
    "split_all",
]
