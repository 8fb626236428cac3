"""Dropdown option matching (exact, mapping-table and partial tiers)."""

from __future__ import annotations

from jobfill.matching.options import NO_MATCH, OptionMatcher, SelectKind, normalize
from jobfill.matching.tables import BOOLEAN_MAPPINGS, COUNTRY_MAPPINGS, PHONE_TYPE_MAPPINGS

__all__ = [
    "BOOLEAN_MAPPINGS",
    "COUNTRY_MAPPINGS",
    "NO_MATCH",
    "OptionMatcher",
    "PHONE_TYPE_MAPPINGS",
    "SelectKind",
    "normalize",
]
