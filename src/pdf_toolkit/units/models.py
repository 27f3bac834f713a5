"""
Module: units.models

Purpose:
    A single input image awaiting composition. Owns its raw bytes and
    the decoded Pillow image acquired from them.

Key Classes:
    - Unit: Raw image buffer with a cached decoded representation and
      short-lived scoped decodes for page drawing

Dependencies:
    - PIL: Image decoding

Used By:
    - units.unit_set: OrderedUnitSet
    - layout.composer: Reads natural sizes in sequence order
    - output.renderer: Scoped decode per drawn page
"""

from __future__ import annotations

import io
import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple

from PIL import Image

from pdf_toolkit.common.errors import DecodeFailure

logger = logging.getLogger(__name__)


class Unit:
    """
    One image awaiting composition into a page.
    
    The decoded image is a resource: it is acquired on the first call to
    decode() and released by release(). Only the OrderedUnitSet holding
    the unit calls release().
    
    Attributes:
        data: Raw encoded image bytes (owned by this unit)
        name: Stable display name, e.g. the source filename
        media_type: Tagged media type, e.g. "image/png"
        key: Insertion key assigned by the owning set (None until added)
        
    Example:
        >>> unit = Unit(png_bytes, "scan.png", "image/png")
        >>> unit.decode().size
        (2000, 1000)
        >>> unit.natural_size
        (2000, 1000)
    """
    
    def __init__(self, data: bytes, name: str, media_type: str = "image/png") -> None:
        self.data = bytes(data)
        self.name = name
        self.media_type = media_type
        self.key: Optional[int] = None
        self._image: Optional[Image.Image] = None
        self._owner: Optional[object] = None
    
    def __repr__(self) -> str:
        return f"Unit(name={self.name!r}, key={self.key}, bytes={len(self.data)})"
    
    @property
    def is_decoded(self) -> bool:
        """True while the decoded image is held."""
        return self._image is not None
    
    @property
    def natural_size(self) -> Optional[Tuple[int, int]]:
        """(width, height) in pixels, or None before decode."""
        if self._image is None:
            return None
        return self._image.size
    
    @contextmanager
    def open_image(self, load: bool = True) -> Iterator[Image.Image]:
        """
        Open a short-lived decoded image, closed when the block exits.
        
        Independent of the cached image held by decode(); jobs use this
        so only the page being drawn keeps a bitmap in memory.
        
        Args:
            load: Decode every pixel (False reads the header only)
            
        Raises:
            DecodeFailure: If the bytes are not a readable image
            
        Example:
            >>> with unit.open_image() as image:
            ...     image.size
            (2000, 1000)
        """
        image = self._open(load)
        try:
            yield image
        finally:
            image.close()
    
    def read_size(self) -> Tuple[int, int]:
        """
        Natural (width, height) in pixels, read from the image header.
        
        Raises:
            DecodeFailure: If the header cannot be read
        """
        with self.open_image(load=False) as image:
            return image.size
    
    def decode(self) -> Image.Image:
        """
        Decode the raw bytes into a Pillow image (cached).
        
        The cached image is owned by this unit until release(); only
        the OrderedUnitSet holding the unit releases it.
        
        Returns:
            Decoded PIL Image
            
        Raises:
            DecodeFailure: If the bytes are not a readable image
        """
        if self._image is None:
            image = self._open(load=True)
            self._image = image
            logger.debug(f"Decoded {self.name}: {image.size[0]}x{image.size[1]} {image.mode}")
        return self._image
    
    def _open(self, load: bool) -> Image.Image:
        try:
            image = Image.open(io.BytesIO(self.data))
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
            raise DecodeFailure(f"Cannot decode image {self.name!r}: {e}") from e
        if load:
            # Truncated files fail here rather than mid-render
            try:
                image.load()
            except (OSError, SyntaxError, ValueError) as e:
                image.close()
                raise DecodeFailure(f"Cannot decode image {self.name!r}: {e}") from e
        return image
    
    def release(self) -> None:
        """Close the decoded image and free resources. Safe to repeat."""
        if self._image is not None:
            self._image.close()
            self._image = None
            logger.debug(f"Released {self.name}")
