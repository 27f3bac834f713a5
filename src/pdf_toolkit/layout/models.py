"""
Module: layout.models

Purpose:
    Data models for page layout.
    Immutable dataclasses for placed rectangles, page plans and the
    layout result handed to the renderer.

Key Classes:
    - PlacedRect: Scaled, centred rectangle on a page
    - ImagePagePlan: One page holding one image
    - TextLine / TextPagePlan: Rendered text lines on a page
    - LayoutResult: Ordered pages plus diagnostics

Dependencies:
    - units: Unit referenced by image pages
    - dataclasses (std)

Used By:
    - layout.composer: Creates ImagePagePlans
    - layout.paginator: Creates TextPagePlans
    - output.renderer: Encodes LayoutResults
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from pdf_toolkit.units import Unit


@dataclass(frozen=True)
class PlacedRect:
    """
    Rectangle occupied by scaled content on a page.
    
    Coordinates are top-down: y is measured from the top edge.
    
    Attributes:
        width: Scaled width in points
        height: Scaled height in points
        x: Offset from the left edge
        y: Offset from the top edge
        
    Example:
        >>> rect = PlacedRect(width=595, height=297.5, x=0, y=272.25)
        >>> rect.aspect_ratio
        2.0
    """
    
    width: float
    height: float
    x: float
    y: float
    
    @property
    def aspect_ratio(self) -> float:
        """width / height."""
        return self.width / self.height
    
    @property
    def right(self) -> float:
        """Right edge (x + width)."""
        return self.x + self.width
    
    @property
    def bottom(self) -> float:
        """Bottom edge from the top (y + height)."""
        return self.y + self.height


@dataclass(frozen=True)
class ImagePagePlan:
    """
    Layout plan for a page holding a single image.
    
    Attributes:
        index: Page number (0-indexed)
        name: Display name of the source unit
        unit: Source unit; the renderer decodes it only while drawing
        natural_size: Source (width, height) in pixels
        rect: Where the image is drawn
        page_width: Page width in points
        page_height: Page height in points
    """
    
    index: int
    name: str
    unit: Unit
    natural_size: tuple[int, int]
    rect: PlacedRect
    page_width: float
    page_height: float


@dataclass(frozen=True)
class TextLine:
    """
    One rendered (wrapped) line of text.
    
    Attributes:
        text: Line content
        top: Y offset of the line slot from the page top
        width: Measured width in points
    """
    
    text: str
    top: float
    width: float


@dataclass(frozen=True)
class TextPagePlan:
    """Layout plan for a page of text lines."""
    
    index: int
    lines: tuple[TextLine, ...]
    page_width: float
    page_height: float
    margin: float
    line_height: float
    
    @property
    def line_count(self) -> int:
        """Number of lines on this page."""
        return len(self.lines)


PagePlan = Union[ImagePagePlan, TextPagePlan]


@dataclass(frozen=True)
class LayoutResult:
    """
    Final layout output with diagnostics.
    
    Attributes:
        pages: Tuple of page plans in output order
        warnings: Warning messages collected during layout
        
    Example:
        >>> result = LayoutResult(pages=(page1, page2))
        >>> result.page_count
        2
    """
    
    pages: tuple[PagePlan, ...]
    warnings: list[str] = field(default_factory=list)
    
    @property
    def page_count(self) -> int:
        """Number of pages in layout."""
        return len(self.pages)
    
    @property
    def is_empty(self) -> bool:
        """True when there are no pages."""
        return not self.pages
