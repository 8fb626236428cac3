"""Portal detection and template-driven portal strategies.

``detect_portal`` maps a hostname to a ``PortalId``; ``StrategyRegistry``
maps that id to the ``PortalStrategy`` built from the portal's template
(see ``templates`` for the Greenhouse, Workday, Lever and Taleo tables).
"""

from __future__ import annotations

from jobfill.portals.detector import PortalId, detect_portal
from jobfill.portals.models import PortalTemplate
from jobfill.portals.registry import StrategyRegistry, build_default_registry
from jobfill.portals.strategy import FieldMapping, PortalStrategy

__all__ = [
    "FieldMapping",
    "PortalId",
    "PortalStrategy",
    "PortalTemplate",
    "StrategyRegistry",
    "build_default_registry",
    "detect_portal",
]
