# musecontrol/control/controller.py

import logging
from collections.abc import Iterable

from .base import PlayerHelper


class PlayerController:
    """Holds one helper per supported player, keyed by bundle identifier."""

    def __init__(self, helpers: Iterable[PlayerHelper] = (), preferred: str | None = None):
        self._helpers: dict[str, PlayerHelper] = {}
        self._preferred = preferred
        for helper in helpers:
            self.register(helper)

    def register(self, helper: PlayerHelper) -> None:
        identifier = helper.bundle_identifier
        if identifier in self._helpers:
            raise ValueError(f"A helper for {identifier} is already registered.")
        self._helpers[identifier] = helper
        logging.debug(f"Controller: Registered {helper.name} ({identifier}).")

    def get(self, identifier: str) -> PlayerHelper:
        return self._helpers[identifier]

    @property
    def identifiers(self) -> list[str]:
        return list(self._helpers)

    def available(self) -> list[PlayerHelper]:
        return [helper for helper in self._helpers.values() if helper.is_available]

    def active(self) -> PlayerHelper | None:
        """Returns the preferred helper if its player runs, else the first available one."""
        if self._preferred is not None:
            preferred = self._helpers.get(self._preferred)
            if preferred is None:
                logging.warning(f"Controller: Preferred player '{self._preferred}' is not registered.")
            elif preferred.is_available:
                return preferred
        available = self.available()
        return available[0] if available else None
