# MIT License (see LICENSE)
"""
The set of fixed point charges.

ChargeRegistry is an arena of Charge records keyed by stable integer id.
Lookups and edits go through the id, so a deleted charge can never be
reached through a stale reference.
"""
from __future__ import annotations
import logging
from dataclasses import replace
from typing import Iterator

from .errors import ChargeNotFoundError
from .types import Charge, Vector2D
from .util import as_real

logger = logging.getLogger(__name__)


class ChargeRegistry:
    """
    Owns every Charge in the simulation.

    Iteration order is insertion order. Coincident charges are allowed.

    Example:
        registry = ChargeRegistry()
        cid = registry.add((100, 100), 1e-9)
        registry.set_value(cid, -2e-9)
        registry.find_at((104, 100), radius=12)  # -> cid
    """

    def __init__(self) -> None:
        self._charges: dict[int, Charge] = {}
        self._next_id = 1

    def add(self, position, value) -> int:
        """
        Register a new charge.

        Args:
            position: (x, y) location.
            value: Charge in Coulombs; numeric strings are accepted.

        Returns:
            The new charge id.

        Raises:
            ValidationError: If position or value is not a finite number.
        """
        pos = Vector2D.of(position)
        q = as_real("charge value", value)
        cid = self._next_id
        self._next_id += 1
        self._charges[cid] = Charge(id=cid, position=pos, value=q)
        logger.debug("Added charge %d: %.3g C at (%.1f, %.1f)", cid, q, pos.x, pos.y)
        return cid

    def remove(self, charge_id: int) -> Charge:
        """Remove a charge and return its last record."""
        charge = self.get(charge_id)
        del self._charges[charge_id]
        logger.debug("Removed charge %d", charge_id)
        return charge

    def set_value(self, charge_id: int, value) -> Charge:
        """Replace the charge's value. A bad value leaves the registry untouched."""
        q = as_real("charge value", value)
        charge = replace(self.get(charge_id), value=q)
        self._charges[charge_id] = charge
        logger.debug("Charge %d value set to %.3g C", charge_id, q)
        return charge

    def set_position(self, charge_id: int, position) -> Charge:
        pos = Vector2D.of(position)
        charge = replace(self.get(charge_id), position=pos)
        self._charges[charge_id] = charge
        logger.debug("Charge %d moved to (%.1f, %.1f)", charge_id, pos.x, pos.y)
        return charge

    def get(self, charge_id: int) -> Charge:
        try:
            return self._charges[charge_id]
        except KeyError:
            raise ChargeNotFoundError(charge_id) from None

    def find_at(self, point, radius: float) -> int | None:
        """
        Id of the first charge (in insertion order) whose centre is within
        `radius` of `point`, or None.
        """
        p = Vector2D.of(point)
        for charge in self._charges.values():
            if charge.position.distance_to(p) <= radius:
                return charge.id
        return None

    def all(self) -> tuple[Charge, ...]:
        """Snapshot of all charges. Later edits do not affect the returned tuple."""
        return tuple(self._charges.values())

    def clear(self) -> None:
        n = len(self._charges)
        self._charges.clear()
        logger.info("Cleared %d charges", n)

    def __len__(self) -> int:
        return len(self._charges)

    def __iter__(self) -> Iterator[Charge]:
        return iter(self.all())

    def __contains__(self, charge_id: object) -> bool:
        return charge_id in self._charges
