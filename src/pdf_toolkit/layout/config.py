"""
Module: layout.config

Purpose:
    Page geometry and layout constants.
    All lengths are PDF points (1/72 inch).

Key Classes:
    - PageGeometry: Immutable page width, height and margin

Dependencies:
    - reportlab.lib.pagesizes: Named page sizes
    - dataclasses (std)

Used By:
    - layout.fitter: Image fitting
    - layout.paginator: Text pagination
    - output.renderer: Page sizes
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from reportlab.lib.pagesizes import A4, LEGAL, LETTER
from reportlab.lib.units import mm

PAGE_SIZES: Dict[str, Tuple[float, float]] = {
    "A4": A4,
    "LETTER": LETTER,
    "LEGAL": LEGAL,
}
DEFAULT_PAGE_SIZE = "A4"

# Image pages use the full page
DEFAULT_IMAGE_MARGIN = 0.0

# Text pages
DEFAULT_TEXT_MARGIN = 20 * mm
DEFAULT_LINE_HEIGHT = 7 * mm
DEFAULT_FONT_NAME = "Helvetica"
DEFAULT_FONT_SIZE = 12

# Physical lines read by the basic text paginator; the rest are dropped
INGESTION_LINE_LIMIT = 100


@dataclass(frozen=True)
class PageGeometry:
    """
    Target page geometry (immutable).
    
    Attributes:
        width: Page width in points
        height: Page height in points
        margin: Margin applied to every edge, in points
        
    Example:
        >>> geometry = PageGeometry(595, 842, margin=10)
        >>> geometry.content_width
        575
    """
    
    width: float
    height: float
    margin: float = 0.0
    
    def __post_init__(self) -> None:
        """Validate geometry on construction."""
        if self.width <= 0:
            raise ValueError(f"width must be positive: {self.width}")
        if self.height <= 0:
            raise ValueError(f"height must be positive: {self.height}")
        if self.margin < 0:
            raise ValueError(f"margin must be non-negative: {self.margin}")
        if self.content_width <= 0:
            raise ValueError("Margins exceed page width")
        if self.content_height <= 0:
            raise ValueError("Margins exceed page height")
    
    @classmethod
    def named(cls, page_size: str = DEFAULT_PAGE_SIZE, margin: float = 0.0) -> "PageGeometry":
        """
        Build geometry for a named page size ("A4", "LETTER", "LEGAL").
        
        Raises:
            ValueError: If the name is unknown
        """
        try:
            width, height = PAGE_SIZES[page_size.upper()]
        except KeyError:
            raise ValueError(
                f"Unknown page size {page_size!r}; expected one of {sorted(PAGE_SIZES)}"
            ) from None
        return cls(width=width, height=height, margin=margin)
    
    @property
    def content_width(self) -> float:
        """Width available for content (excluding margins)."""
        return self.width - 2 * self.margin
    
    @property
    def content_height(self) -> float:
        """Height available for content (excluding margins)."""
        return self.height - 2 * self.margin
    
    @property
    def size(self) -> Tuple[float, float]:
        """(width, height) tuple."""
        return (self.width, self.height)
