"""
Module: splitting.extractor

Purpose:
    Copy pages of an existing PDF into new documents: a contiguous
    range as one document, or every page as its own document.

Key Functions:
    - copy_page_subset(): Shared primitive, copies pages in given order
    - extract_range(): One document for a PageRange
    - split_all(): One single-page document per source page

Dependencies:
    - fitz (PyMuPDF): Page copying (insert_pdf deep-copies page content
      and resources into the target document)

Used By:
    - controller: Range and split jobs
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import fitz

from pdf_toolkit.common.errors import EncodeFailure, InvalidRange
from pdf_toolkit.common.path_utils import page_filename, range_filename

from .models import ExtractedDocument, PageRange
from .source import SourceDocument

logger = logging.getLogger(__name__)


def copy_page_subset(
    source: SourceDocument,
    indices: Sequence[int],
    *,
    filename: Optional[str] = None,
) -> ExtractedDocument:
    """
    Copy the named source pages, in the given order, into a new PDF.
    
    The new document owns independent copies of page content and
    resources; the source is left untouched and stays usable.
    
    Args:
        source: Document to copy from
        indices: Distinct 0-indexed page numbers, in output order
        filename: Suggested filename for the result
        
    Returns:
        ExtractedDocument with the encoded PDF
        
    Raises:
        InvalidRange: If indices are empty, repeated or out of range
        EncodeFailure: If the new PDF cannot be written
    """
    indices = list(indices)
    if not indices:
        raise InvalidRange("No pages selected")
    if len(set(indices)) != len(indices):
        raise InvalidRange(f"Page indices must be distinct: {indices}")
    for index in indices:
        if not 0 <= index < source.page_count:
            raise InvalidRange(
                f"Page index {index} out of range for {source.page_count} pages"
            )
    
    target = fitz.open()
    try:
        for index in indices:
            target.insert_pdf(source.document, from_page=index, to_page=index)
        data = target.tobytes(garbage=3, deflate=True)
    except (RuntimeError, ValueError) as e:
        raise EncodeFailure(f"Failed to write extracted pages: {e}") from e
    finally:
        target.close()
    
    return ExtractedDocument(
        data=data,
        page_count=len(indices),
        source_pages=tuple(indices),
        filename=filename or "extracted.pdf",
    )


def extract_range(source: SourceDocument, page_range: PageRange) -> ExtractedDocument:
    """
    Extract a contiguous page range as one document.
    
    Args:
        source: Document to copy from
        page_range: 1-indexed inclusive range
        
    Returns:
        ExtractedDocument with page_range.page_count pages
        
    Raises:
        InvalidRange: If not 1 <= first <= last <= page_count
        
    Example:
        >>> doc = extract_range(source, PageRange(3, 5))
        >>> doc.filename, doc.source_pages
        ('split_3-5.pdf', (2, 3, 4))
    """
    page_range.validate(source.page_count)
    result = copy_page_subset(
        source,
        page_range.indices(),
        filename=range_filename(page_range.first, page_range.last),
    )
    logger.info(f"Extracted pages {page_range.first}-{page_range.last} of {source.name}")
    return result


def split_all(source: SourceDocument) -> List[ExtractedDocument]:
    """
    Split every page into its own single-page document.
    
    Output order equals source page order; filenames are page_1.pdf,
    page_2.pdf, ... A document without pages yields an empty list.
    """
    documents = [
        copy_page_subset(source, [index], filename=page_filename(index + 1))
        for index in range(source.page_count)
    ]
    logger.info(f"Split {source.name} into {len(documents)} documents")
    return documents
