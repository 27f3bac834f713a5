"""
Module: units

Purpose:
    Input units for image composition and the ordered set that owns them.

Key Classes:
    - Unit: Raw image bytes with a lazily decoded image
    - OrderedUnitSet: Ordered collection with add/remove/move/clear

Dependencies:
    - PIL: Image decoding

Used By:
    - layout.composer: Page composition
    - controller: Image-to-PDF jobs
"""

from .models import Unit
from .unit_set import OrderedUnitSet

__all__ = [
    "Unit",
    "OrderedUnitSet",
]
