"""
Module: units.unit_set

Purpose:
    Ordered collection of units with add/remove/reorder and deterministic
    release of each unit's decoded image. Sequence order is exactly the
    page order used by composition.

Key Classes:
    - OrderedUnitSet: Index-addressed unit sequence

Used By:
    - layout.composer: iter_compose() iterates a set in order
    - controller: Image-to-PDF jobs
"""

from __future__ import annotations

import itertools
import logging
from typing import Iterable, Iterator, List

from pdf_toolkit.common.errors import IndexOutOfRange

from .models import Unit

logger = logging.getLogger(__name__)


class OrderedUnitSet:
    """
    Ordered, owning collection of Units.
    
    Positions are 0-indexed; negative positions are out of range.
    Every failing operation validates before mutating, so a failure
    leaves the set unchanged.
    
    Example:
        >>> with OrderedUnitSet() as units:
        ...     units.append(Unit(a, "a.png"))
        ...     units.append(Unit(b, "b.png"))
        ...     units.move_to(1, 0)
        ...     units.names()
        ['b.png', 'a.png']
    """
    
    def __init__(self, units: Iterable[Unit] = ()) -> None:
        self._units: List[Unit] = []
        self._keys = itertools.count()
        self.extend(units)
    
    def __len__(self) -> int:
        return len(self._units)
    
    def __iter__(self) -> Iterator[Unit]:
        return iter(list(self._units))
    
    def __getitem__(self, position: int) -> Unit:
        self._check_position(position)
        return self._units[position]
    
    def __enter__(self) -> "OrderedUnitSet":
        """Context manager entry."""
        return self
    
    def __exit__(self, *args) -> None:
        """Context manager exit - release every unit."""
        self.clear()
    
    @property
    def units(self) -> tuple[Unit, ...]:
        """Snapshot of the current sequence."""
        return tuple(self._units)
    
    def names(self) -> list[str]:
        """Display names in sequence order."""
        return [u.name for u in self._units]
    
    def append(self, unit: Unit) -> None:
        """
        Append a unit at the end and assign its insertion key.
        
        Raises:
            ValueError: If the unit already belongs to this or another set
        """
        if unit._owner is not None:
            raise ValueError(f"Unit {unit.name!r} already belongs to a set")
        unit.key = next(self._keys)
        unit._owner = self
        self._units.append(unit)
        logger.debug(f"Added {unit.name} at position {len(self._units) - 1}")
    
    def extend(self, units: Iterable[Unit]) -> None:
        """Append several units in order."""
        for unit in units:
            self.append(unit)
    
    def remove_at(self, position: int) -> Unit:
        """
        Remove the unit at position, releasing its decoded image first.
        
        Subsequent positions shift down by one.
        
        Returns:
            The removed (released) unit
            
        Raises:
            IndexOutOfRange: If position not in [0, len)
        """
        self._check_position(position)
        unit = self._units[position]
        unit.release()
        del self._units[position]
        unit._owner = None
        logger.debug(f"Removed {unit.name} from position {position}")
        return unit
    
    def move_to(self, source: int, dest: int) -> None:
        """
        Move a unit from source to dest.
        
        dest is interpreted against the sequence with the source unit
        already removed ("drag to slot N"). Moving a unit onto its own
        position does nothing.
        
        Raises:
            IndexOutOfRange: If either position not in [0, len)
        """
        self._check_position(source)
        self._check_position(dest)
        if source == dest:
            return
        unit = self._units.pop(source)
        self._units.insert(dest, unit)
        logger.debug(f"Moved {unit.name} from {source} to {dest}")
    
    def sort_by_insertion(self) -> None:
        """Restore default order (ascending insertion key)."""
        self._units.sort(key=lambda u: u.key)
    
    def clear(self) -> None:
        """Release every unit, then empty the set."""
        for unit in self._units:
            unit.release()
            unit._owner = None
        count = len(self._units)
        self._units.clear()
        if count:
            logger.debug(f"Cleared {count} units")
    
    def _check_position(self, position: int) -> None:
        if isinstance(position, bool) or not isinstance(position, int):
            raise IndexOutOfRange(f"Position must be an integer: {position!r}")
        if not 0 <= position < len(self._units):
            raise IndexOutOfRange(
                f"Position {position} out of range for {len(self._units)} units"
            )
