"""
Module: layout.composer

Purpose:
    Compose image pages from an ordered sequence of units.
    One page per unit, in sequence order.

Key Functions:
    - iter_compose(): Lazily yield one ImagePagePlan per unit
    - compose(): Build a LayoutResult from units

Algorithm:
    For each unit in order:
    1. Resolve its natural size (the only blocking step; strictly sequential)
    2. Fit its natural size onto the page
    3. Emit one ImagePagePlan
    Any decode failure aborts the whole composition.

    iter_compose() is a generator: the next unit is not touched until
    the consumer asks for the next page, so a renderer pulling from it
    finishes page i before unit i+1 is read.

Dependencies:
    - units: Unit
    - layout.fitter: fit()

Used By:
    - controller: Image-to-PDF jobs
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from pdf_toolkit.units import Unit

from .config import PageGeometry
from .fitter import fit
from .models import ImagePagePlan, LayoutResult

logger = logging.getLogger(__name__)


def iter_compose(units: Iterable[Unit], geometry: PageGeometry) -> Iterator[ImagePagePlan]:
    """
    Yield one image page per unit, preserving order.
    
    Page i+1 holds unit i. No decoded image outlives the size lookup;
    the plans reference their units and the renderer decodes each one
    only while drawing its page.
    
    Args:
        units: Units in composition order (typically an OrderedUnitSet)
        geometry: Target page geometry
        
    Yields:
        ImagePagePlan per unit
        
    Raises:
        DecodeFailure: If a unit cannot be decoded
        InvalidDimensions: If an image reports a zero dimension
    """
    for index, unit in enumerate(units):
        width, height = unit.read_size()
        rect = fit(width, height, geometry)
        logger.debug(
            f"Page {index + 1}: {unit.name} {width}x{height}px -> "
            f"{rect.width:.1f}x{rect.height:.1f}pt at ({rect.x:.1f}, {rect.y:.1f})"
        )
        yield ImagePagePlan(
            index=index,
            name=unit.name,
            unit=unit,
            natural_size=(width, height),
            rect=rect,
            page_width=geometry.width,
            page_height=geometry.height,
        )


def compose(units: Iterable[Unit], geometry: PageGeometry) -> LayoutResult:
    """
    Create every image page up front.
    
    Args:
        units: Units in composition order
        geometry: Target page geometry
        
    Returns:
        LayoutResult with one ImagePagePlan per unit (empty for no units)
        
    Raises:
        DecodeFailure: If any unit cannot be decoded
        InvalidDimensions: If an image reports a zero dimension
        
    Example:
        >>> layout = compose(unit_set, PageGeometry.named("A4"))
        >>> layout.page_count == len(unit_set)
        True
    """
    pages = tuple(iter_compose(units, geometry))
    
    if not pages:
        logger.warning("No units to compose, layout is empty")
        return LayoutResult(pages=())
    
    logger.info(f"Composed {len(pages)} image pages")
    return LayoutResult(pages=pages)
