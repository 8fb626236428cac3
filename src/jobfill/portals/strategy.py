"""Portal strategy — locate form controls from a template and fill them.

One ``PortalStrategy`` class serves every known portal; the differences
live in its ``PortalTemplate`` (selector table and quirk flags).

``locate`` resolves each semantic field to the first control matched by
its selector list. ``apply`` writes profile values into the located
controls, skipping any field whose control or value is absent. Calling
``apply`` twice with the same inputs leaves the page in the same state.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Sequence

from jobfill.matching.options import OptionMatcher, SelectKind
from jobfill.models.profile import FIELD_NAMES, Address, Profile
from jobfill.portals.models import PortalTemplate

if TYPE_CHECKING:
    from jobfill.dom.document import Control, FormDocument

logger = logging.getLogger(__name__)

FieldMapping = dict[str, "Control | None"]

BOOLEAN_FIELDS = frozenset({"work_authorized", "needs_sponsorship"})

# Fields whose dropdown controls get a typed match.
SELECT_KINDS: dict[str, SelectKind] = {
    "state": SelectKind.STATE,
    "country": SelectKind.COUNTRY,
}


def combined_location(address: Address) -> str | None:
    """Free-text location for single-field address inputs.

    ``line1`` when present, otherwise ``"City, ST 12345"`` assembled from
    whichever of city, state and postal code exist.
    """
    if address.line1:
        return address.line1
    region = " ".join(part for part in (address.state, address.postal_code) if part)
    location = ", ".join(part for part in (address.city, region) if part)
    return location or None


class PortalStrategy:
    """Template-driven locate + apply for one portal family.

    Args:
        template: The portal's selector table and quirk flags.
        matcher: Option matcher used for every dropdown.
    """

    def __init__(self, template: PortalTemplate, matcher: OptionMatcher) -> None:
        self.template = template
        self.matcher = matcher

    def __repr__(self) -> str:
        return f"<PortalStrategy {self.name}>"

    @property
    def name(self) -> str:
        return self.template.portal_id.value

    # ------------------------------------------------------------------
    # locate
    # ------------------------------------------------------------------

    def locate(self, document: FormDocument) -> FieldMapping:
        """Resolve every semantic field to a control (or ``None``)."""
        mapping: FieldMapping = {}
        for field in FIELD_NAMES:
            mapping[field] = self._first_match(document, self.template.selectors.get(field, ()))
        found = sum(1 for control in mapping.values() if control is not None)
        logger.debug("%s located %d/%d fields", self.name, found, len(FIELD_NAMES))
        return mapping

    @staticmethod
    def _first_match(document: FormDocument, selectors: Sequence[str]) -> Control | None:
        for selector in selectors:
            control = document.query(selector)
            if control is not None:
                return control
        return None

    # ------------------------------------------------------------------
    # apply
    # ------------------------------------------------------------------

    def apply(self, document: FormDocument, profile: Profile, mapping: FieldMapping) -> list[str]:
        """Fill the located controls from *profile*.

        Structured values are written first, then the legacy flat keys
        overwrite their fields.

        Returns:
            Names of the fields that were written, in fill order.
        """
        values = profile.field_values(derive_full_name=self.template.synthesize_full_name)
        if self.template.synthesize_address:
            values["address_line1"] = combined_location(profile.address)

        filled: list[str] = []
        for field in FIELD_NAMES:
            if self._fill(field, mapping.get(field), values[field]):
                filled.append(field)

        for field, value in profile.legacy_overlay().items():
            if self._fill(field, mapping.get(field), value) and field not in filled:
                filled.append(field)

        return filled

    def _fill(self, field: str, control: Control | None, value: Any) -> bool:
        if control is None or value is None:
            return False
        if field in BOOLEAN_FIELDS:
            return self._fill_boolean(control, value)
        if control.is_select:
            return self.matcher.smart_fill_select(control, value, SELECT_KINDS.get(field))
        control.value = value
        control.dispatch(*self.template.fill_events)
        return True

    def _fill_boolean(self, control: Control, value: bool) -> bool:
        if control.is_select:
            return self.matcher.smart_fill_select(control, value, SelectKind.BOOLEAN)
        if self.template.radio_booleans and control.input_type == "radio":
            choice = self.matcher.match_boolean_radio(control, value)
            if choice is None:
                return False
            choice.checked = True
            choice.dispatch("change")
            return True
        if self.template.radio_booleans and control.input_type == "checkbox":
            control.checked = bool(value)
            control.dispatch("change")
            return True
        logger.debug("%s: boolean control %r is not a dropdown; skipped", self.name, control)
        return False
