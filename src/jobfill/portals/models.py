"""Portal template model — declarative selector tables for known portals.

A template lists, for each semantic field, the CSS selectors to try in
order. The quirk flags capture the few behavioural differences between
portals so one strategy class can serve all of them.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from jobfill.models.profile import FIELD_NAMES
from jobfill.portals.detector import PortalId


class PortalTemplate(BaseModel):
    """Selector table plus behaviour flags for one portal family."""

    portal_id: PortalId
    description: str = ""
    selectors: dict[str, list[str]] = Field(
        ...,
        description="Semantic field name -> CSS selectors, tried in order.",
    )

    blur_required: bool = Field(
        default=True,
        description="Dispatch blur after input/change so client-side validators run.",
    )
    radio_booleans: bool = Field(
        default=False,
        description="Boolean fields may be bound to radio buttons as well as selects.",
    )
    synthesize_full_name: bool = Field(
        default=False,
        description="Build the full name from first + last when none is stored.",
    )
    synthesize_address: bool = Field(
        default=False,
        description="Fill address_line1 with a combined location when line1 is missing.",
    )

    @field_validator("selectors")
    @classmethod
    def validate_selectors(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        """Reject unknown field names and empty selector lists."""
        unknown = sorted(set(v) - set(FIELD_NAMES))
        if unknown:
            raise ValueError(f"Unknown field names: {', '.join(unknown)}")
        empty = sorted(name for name, attempts in v.items() if not attempts)
        if empty:
            raise ValueError(f"Fields without selectors: {', '.join(empty)}")
        return v

    @property
    def fill_events(self) -> tuple[str, ...]:
        """Events dispatched after writing a text value."""
        if self.blur_required:
            return ("input", "change", "blur")
        return ("input", "change")
