"""Portal detection — hostname to portal family.

Rules are plain substring tests against the hostname exactly as given
(no case folding), checked in order; the first hit wins. A hostname
matching no rule is ``PortalId.UNKNOWN`` and is handled by the generic
strategy.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jobfill.dom.document import FormDocument

logger = logging.getLogger(__name__)


class PortalId(str, Enum):
    """Known job-application portal families."""

    GREENHOUSE = "greenhouse"
    WORKDAY = "workday"
    LEVER = "lever"
    TALEO = "taleo"
    UNKNOWN = "unknown"


DETECTION_RULES: tuple[tuple[PortalId, tuple[str, ...]], ...] = (
    (PortalId.GREENHOUSE, ("greenhouse.io", "greenhouse")),
    (PortalId.WORKDAY, ("workday", "myworkdayjobs")),
    (PortalId.LEVER, ("lever.co", "jobs.lever")),
    (PortalId.TALEO, ("taleo.net", "taleo")),
)


def detect_portal(hostname: str, document: FormDocument | None = None) -> PortalId:
    """Identify the portal serving *hostname*.

    Args:
        hostname: The page hostname, compared case-sensitively.
        document: Accepted for DOM-based rules; the current rules ignore it.

    Returns:
        The matching ``PortalId``, or ``PortalId.UNKNOWN``.
    """
    for portal, needles in DETECTION_RULES:
        if any(needle in hostname for needle in needles):
            logger.debug("Hostname %s detected as %s", hostname, portal.value)
            return portal
    return PortalId.UNKNOWN
