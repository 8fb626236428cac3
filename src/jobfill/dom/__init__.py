"""HTML form document model (BeautifulSoup-backed).

Provides ``FormDocument`` (queries, label resolution, event log) and
``Control`` (value / checked / option catalog of one form element).
"""

from __future__ import annotations

from jobfill.dom.document import CONTROL_SELECTOR, Control, DomEvent, FormDocument, Option

__all__ = ["CONTROL_SELECTOR", "Control", "DomEvent", "FormDocument", "Option"]
