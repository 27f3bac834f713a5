"""
Module: layout.fitter

Purpose:
    Fit content of known natural size onto a page, preserving aspect
    ratio and centring the result.

Key Functions:
    - fit(): Compute the PlacedRect for one unit

Used By:
    - layout.composer: One call per image page
"""

from __future__ import annotations

from typing import Optional

from pdf_toolkit.common.errors import InvalidDimensions

from .config import PageGeometry
from .models import PlacedRect


def fit(
    natural_width: Optional[float],
    natural_height: Optional[float],
    geometry: PageGeometry,
) -> PlacedRect:
    """
    Scale content to fit the page content area and centre it on the page.
    
    scale = min(content_width / w, content_height / h); content is
    scaled up as well as down.
    
    Args:
        natural_width: Source width (pixels or any unit)
        natural_height: Source height
        geometry: Target page geometry
        
    Returns:
        PlacedRect no larger than the content area
        
    Raises:
        InvalidDimensions: If either dimension is missing or <= 0
        
    Example:
        >>> fit(2000, 1000, PageGeometry(595, 842))
        PlacedRect(width=595.0, height=297.5, x=0.0, y=272.25)
    """
    if natural_width is None or natural_height is None:
        raise InvalidDimensions("Natural dimensions are unavailable")
    if natural_width <= 0 or natural_height <= 0:
        raise InvalidDimensions(
            f"Natural dimensions must be positive: {natural_width}x{natural_height}"
        )
    
    scale = min(
        geometry.content_width / natural_width,
        geometry.content_height / natural_height,
    )
    # Clamp float drift so the bound holds exactly
    width = min(natural_width * scale, geometry.content_width)
    height = min(natural_height * scale, geometry.content_height)
    
    return PlacedRect(
        width=width,
        height=height,
        x=(geometry.width - width) / 2,
        y=(geometry.height - height) / 2,
    )
