"""
Module: layout

Purpose:
    Page geometry, image fitting and composition, text pagination.
    Converts units or text into positioned page plans.

Key Functions:
    - fit(): Aspect-preserving, centred fit of one unit
    - compose(), iter_compose(): One image page per unit
    - paginate_text(): Wrapped text flowed onto pages

Key Classes:
    - PageGeometry: Page size and margin
    - PlacedRect, ImagePagePlan, TextPagePlan, LayoutResult

Dependencies:
    - units: Unit
    - reportlab: Page sizes and font metrics

Used By:
    - output.renderer: Encodes LayoutResults
    - controller: Job orchestration
"""

from .config import (
    PageGeometry,
    PAGE_SIZES,
    INGESTION_LINE_LIMIT,
)
from .models import (
    PlacedRect,
    ImagePagePlan,
    TextLine,
    TextPagePlan,
    LayoutResult,
)
from .fitter import fit
from .composer import compose, iter_compose
from .paginator import (
    decode_text,
    read_lines,
    wrap_line,
    paginate_text,
    make_measure,
)

__all__ = [
    # Config
    "PageGeometry",
    "PAGE_SIZES",
    "INGESTION_LINE_LIMIT",
    # Models
    "PlacedRect",
    "ImagePagePlan",
    "TextLine",
    "TextPagePlan",
    "LayoutResult",
    # Functions
    "fit",
    "compose",
    "iter_compose",
    "decode_text",
    "read_lines",
    "wrap_line",
    "paginate_text",
    "make_measure",
]
