"""Strategy registry — portal id to portal strategy.

The registry holds one ``PortalStrategy`` per portal id. Registering a
strategy for an id that is already present replaces the earlier one.
"""

from __future__ import annotations

import logging
from typing import Iterable

from jobfill.matching.options import OptionMatcher
from jobfill.portals.detector import PortalId
from jobfill.portals.models import PortalTemplate
from jobfill.portals.strategy import PortalStrategy
from jobfill.portals.templates import BUILTIN_TEMPLATES

logger = logging.getLogger(__name__)


class StrategyRegistry:
    """Lookup table of portal strategies keyed by ``PortalId``."""

    def __init__(self, strategies: Iterable[PortalStrategy] = ()) -> None:
        self._strategies: dict[PortalId, PortalStrategy] = {}
        for strategy in strategies:
            self.register(strategy)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, strategy: PortalStrategy) -> None:
        """Add (or replace) the strategy for its template's portal."""
        portal = strategy.template.portal_id
        if portal is PortalId.UNKNOWN:
            raise ValueError("The unknown portal is served by the generic strategy")
        if portal in self._strategies:
            logger.info("Replacing strategy for portal %s", portal.value)
        self._strategies[portal] = strategy

    def remove(self, portal: PortalId) -> bool:
        """Remove a portal's strategy. Returns ``True`` if one was registered."""
        return self._strategies.pop(portal, None) is not None

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, portal: PortalId | str | None) -> PortalStrategy | None:
        """Return the strategy for *portal*, or ``None``."""
        if portal is None:
            return None
        try:
            return self._strategies.get(PortalId(portal))
        except ValueError:
            return None

    @property
    def portals(self) -> list[PortalId]:
        """Registered portal ids, in registration order."""
        return list(self._strategies)

    @property
    def count(self) -> int:
        return len(self._strategies)


def build_default_registry(
    matcher: OptionMatcher,
    templates: Iterable[PortalTemplate] = BUILTIN_TEMPLATES,
) -> StrategyRegistry:
    """Registry with one strategy per built-in template, sharing *matcher*."""
    return StrategyRegistry(PortalStrategy(template, matcher) for template in templates)
