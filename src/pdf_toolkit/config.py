"""
Module: config

Purpose:
    Configuration dataclass for conversion jobs. Immutable
    configuration with validation on construction.

Key Classes:
    - ToolkitConfig: Page size, margins and text settings

Dependencies:
    - reportlab.pdfbase.pdfmetrics: Font lookup
    - layout.config: Defaults and PageGeometry

Used By:
    - controller: Job functions
    - cli: Built from command-line options
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from reportlab.pdfbase.pdfmetrics import FontNotFoundError, getFont

from pdf_toolkit.layout.config import (
    DEFAULT_FONT_NAME,
    DEFAULT_FONT_SIZE,
    DEFAULT_IMAGE_MARGIN,
    DEFAULT_LINE_HEIGHT,
    DEFAULT_PAGE_SIZE,
    DEFAULT_TEXT_MARGIN,
    PAGE_SIZES,
    PageGeometry,
)
from pdf_toolkit.layout.paginator import MeasureFn, make_measure


@dataclass(frozen=True)
class ToolkitConfig:
    """
    Configuration for conversion jobs (immutable).
    
    Lengths are PDF points.
    
    Attributes:
        page_size: Named page size ("A4", "LETTER", "LEGAL")
        image_margin: Margin around image pages
        text_margin: Margin around text pages
        line_height: Vertical advance per text line
        font_name: ReportLab font for text pages
        font_size: Font size for text pages
        max_line_width: Wrap width (defaults to the text content width)
    
    Example:
        >>> config = ToolkitConfig(page_size="LETTER", font_size=10)
        >>> config.text_geometry.width
        612.0
    """
    
    # Page
    page_size: str = DEFAULT_PAGE_SIZE
    image_margin: float = DEFAULT_IMAGE_MARGIN
    
    # Text
    text_margin: float = DEFAULT_TEXT_MARGIN
    line_height: float = DEFAULT_LINE_HEIGHT
    font_name: str = DEFAULT_FONT_NAME
    font_size: float = DEFAULT_FONT_SIZE
    max_line_width: Optional[float] = None
    
    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_size.upper() not in PAGE_SIZES:
            raise ValueError(
                f"page_size must be one of {sorted(PAGE_SIZES)}: {self.page_size!r}"
            )
        if self.line_height <= 0:
            raise ValueError(f"line_height must be positive: {self.line_height}")
        if self.font_size <= 0:
            raise ValueError(f"font_size must be positive: {self.font_size}")
        if self.max_line_width is not None and self.max_line_width <= 0:
            raise ValueError(f"max_line_width must be positive: {self.max_line_width}")
        try:
            getFont(self.font_name)
        except (KeyError, FontNotFoundError):
            raise ValueError(f"Unknown font: {self.font_name!r}") from None
        # Geometry validates margins against the page
        self.image_geometry
        self.text_geometry
    
    @property
    def image_geometry(self) -> PageGeometry:
        """Geometry for image pages."""
        return PageGeometry.named(self.page_size, self.image_margin)
    
    @property
    def text_geometry(self) -> PageGeometry:
        """Geometry for text pages."""
        return PageGeometry.named(self.page_size, self.text_margin)
    
    @property
    def effective_line_width(self) -> float:
        """Wrap width: max_line_width or the text content width."""
        if self.max_line_width is not None:
            return self.max_line_width
        return self.text_geometry.content_width
    
    def measure(self) -> MeasureFn:
        """Width function for the configured font."""
        return make_measure(self.font_name, self.font_size)
