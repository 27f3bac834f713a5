"""Path and filename utilities.

Suggested output filenames handed to the persistence collaborator.
"""

from __future__ import annotations

import re
from pathlib import Path

DEFAULT_STEM = "document"


def output_stem(filename: str | Path) -> str:
    """Derive a base output name from a source filename.
    
    Drops any directory part and the final extension, and collapses
    characters that are unsafe in filenames to underscores.
    
    Args:
        filename: Source filename or Path object.
        
    Returns:
        Stem suitable for building output filenames; "document" when
        nothing usable remains.
        
    Examples:
        >>> output_stem("report.final.pdf")
        'report.final'
        >>> output_stem(Path("/data/notes.txt"))
        'notes'
        >>> output_stem("")
        'document'
    """
    if isinstance(filename, Path):
        filename = filename.name
    # Browser-style names may carry either separator
    filename = re.split(r"[\\/]", filename)[-1]
    stem = Path(filename).stem if filename else ""
    stem = re.sub(r'[<>:"|?*\x00-\x1f]+', "_", stem).strip(" .")
    return stem or DEFAULT_STEM


def range_filename(first: int, last: int) -> str:
    """Filename for a range extraction, e.g. ``split_3-5.pdf``."""
    return f"split_{first}-{last}.pdf"


def page_filename(number: int) -> str:
    """Filename for one page of a split, 1-indexed, e.g. ``page_1.pdf``."""
    return f"page_{number}.pdf"
