"""
Module: output.renderer

Purpose:
    Encode page plans as PDF bytes using ReportLab.
    Each page plan becomes one PDF page: image plans draw their unit's
    image at the placed rectangle, text plans draw their lines.

    Pages are drawn as they are pulled from the input, so a lazy
    iterator (layout.iter_compose) is consumed one page at a time. An
    image is decoded only while its page is drawn and is closed once
    the page is finished.

Key Functions:
    - render_to_pdf(): Main rendering function

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling
    - layout.models: LayoutResult, ImagePagePlan, TextPagePlan

Used By:
    - controller: Image, text and Word jobs
"""


from __future__ import annotations

import io
import logging
from typing import Iterable, Optional, Union

from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase.pdfmetrics import getAscent
from reportlab.pdfgen import canvas

from pdf_toolkit.common.errors import ConversionError, EncodeFailure
from pdf_toolkit.layout.config import DEFAULT_FONT_NAME, DEFAULT_FONT_SIZE
from pdf_toolkit.layout.models import ImagePagePlan, LayoutResult, PagePlan, TextPagePlan

logger = logging.getLogger(__name__)

# Modes PNG stores without conversion
_PNG_MODES = {"1", "L", "RGB", "RGBA"}


def _get_creator() -> str:
    """Creator string with the current version number."""
    try:
        from pdf_toolkit import __version__
        version = __version__
    except ImportError:
        version = "unknown"
    return f"pdf_toolkit v{version}"


def render_to_pdf(
    layout: Union[LayoutResult, Iterable[PagePlan]],
    *,
    title: Optional[str] = None,
    font_name: str = DEFAULT_FONT_NAME,
    font_size: float = DEFAULT_FONT_SIZE,
) -> bytes:
    """
    Render page plans to PDF bytes.
    
    Args:
        layout: LayoutResult from compose() or paginate_text(), or any
            iterable of page plans (drawn as they are produced)
        title: Optional document title metadata
        font_name: Font for text pages
        font_size: Font size for text pages
        
    Returns:
        Encoded PDF
        
    Raises:
        DecodeFailure: If an image page's unit cannot be decoded
        EncodeFailure: If any page cannot be drawn or the PDF cannot be written
        
    Example:
        >>> data = render_to_pdf(iter_compose(units, PageGeometry.named("A4")))
        >>> data[:5]
        b'%PDF-'
    """
    pages = layout.pages if isinstance(layout, LayoutResult) else layout
    page_count = 0
    
    buf = io.BytesIO()
    try:
        c = canvas.Canvas(buf)
        c.setCreator(_get_creator())
        if title:
            c.setTitle(title)
        
        for page in pages:
            if not isinstance(page, (ImagePagePlan, TextPagePlan)):
                raise TypeError(f"Unknown page plan: {type(page).__name__}")
            c.setPageSize((page.page_width, page.page_height))
            if isinstance(page, ImagePagePlan):
                with page.unit.open_image() as image:
                    _draw_image_page(c, page, image)
                    c.showPage()
            else:
                _draw_text_page(c, page, font_name, font_size)
                c.showPage()
            page_count += 1
        
        if not page_count:
            logger.warning("Empty layout, creating empty PDF")
        c.save()
    except ConversionError:
        raise
    except (OSError, ValueError, KeyError, TypeError) as e:
        raise EncodeFailure(f"Failed to render PDF: {e}") from e
    
    logger.info(f"Rendered {page_count} pages")
    return buf.getvalue()


def _draw_image_page(c: canvas.Canvas, page: ImagePagePlan, image: Image.Image) -> None:
    """
    Draw one image at its placed rectangle.
    
    JPEG data is embedded as-is; other formats go through PNG.
    
    Args:
        c: ReportLab canvas
        page: Image page plan
        image: The unit's image, open for the duration of the page
    """
    rect = page.rect
    y_pt = _transform_y(page.page_height, rect.y, rect.height)
    
    if image.format == "JPEG":
        reader = ImageReader(io.BytesIO(page.unit.data))
    else:
        reader = _pil_to_reader(image)
    
    c.drawImage(
        reader,
        rect.x,
        y_pt,
        width=rect.width,
        height=rect.height,
        mask="auto",
    )


def _draw_text_page(
    c: canvas.Canvas,
    page: TextPagePlan,
    font_name: str,
    font_size: float,
) -> None:
    """
    Draw wrapped text lines, left-aligned at the page margin.
    
    Each line's baseline sits one font ascent below its slot top.
    """
    ascent = getAscent(font_name, font_size)
    
    c.saveState()
    c.setFont(font_name, font_size)
    c.setFillColorRGB(0, 0, 0)
    for line in page.lines:
        baseline = page.page_height - (line.top + ascent)
        c.drawString(page.margin, baseline, line.text)
    c.restoreState()


def _pil_to_reader(img: Image.Image) -> ImageReader:
    """
    Convert PIL image to ReportLab ImageReader.
    
    Modes PNG cannot hold (CMYK, P, LA, I;16...) are converted first.
    
    Args:
        img: PIL Image object
        
    Returns:
        ImageReader for use with ReportLab
    """
    if img.mode not in _PNG_MODES:
        has_alpha = "A" in img.mode or "transparency" in img.info
        img = img.convert("RGBA" if has_alpha else "RGB")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return ImageReader(buf)


def _transform_y(page_height_pt: float, y_top_pt: float, height_pt: float) -> float:
    """
    Convert top-down Y coordinate to bottom-up PDF Y.
    
    Args:
        page_height_pt: Page height in points
        y_top_pt: Y position of the element's top edge from the page top
        height_pt: Height of element
        
    Returns:
        Y position of the element's bottom edge from the page bottom
    """
    return page_height_pt - y_top_pt - height_pt
