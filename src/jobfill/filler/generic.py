"""Generic fill strategy for pages with no known portal template.

Every ``input``, ``select`` and ``textarea`` is classified once from the
lower-cased concatenation of its name, id, placeholder and label text.
Classification is a priority cascade: the first rule that holds decides
the control's field, even when the profile has no value for it.

A second, independent pass runs for profiles carrying the legacy flat
``full_name`` / ``email`` / ``phone`` keys and overwrites matching
controls with those values.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from jobfill.matching.options import OptionMatcher, SelectKind
from jobfill.models.profile import Profile

if TYPE_CHECKING:
    from jobfill.dom.document import Control, FormDocument

logger = logging.getLogger(__name__)

FILL_EVENTS = ("input", "change", "blur")

# Input types that never receive a text value.
_UNFILLABLE_TYPES = frozenset({"hidden", "submit", "button", "reset", "image", "file"})


@dataclass(frozen=True)
class FieldRule:
    """One step of the classification cascade.

    ``all_of`` tokens must all appear, at least one ``any_of`` token must
    appear (when given), and no ``none_of`` token may appear.
    """

    field: str
    any_of: tuple[str, ...] = ()
    all_of: tuple[str, ...] = ()
    none_of: tuple[str, ...] = ()
    select_only: bool = False
    needs_education: bool = False

    def matches(self, text: str, control: Control, has_education: bool) -> bool:
        if self.needs_education and not has_education:
            return False
        if self.select_only and not control.is_select:
            return False
        if self.all_of and not all(token in text for token in self.all_of):
            return False
        if self.any_of and not any(token in text for token in self.any_of):
            return False
        return not any(token in text for token in self.none_of)


FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule("first_name", all_of=("first", "name"), none_of=("last",)),
    FieldRule("last_name", all_of=("last", "name"), none_of=("first",)),
    FieldRule("full_name", any_of=("name",), none_of=("first", "last", "user", "file")),
    FieldRule("email", any_of=("email", "e-mail")),
    FieldRule("phone", any_of=("phone", "mobile", "tel")),
    FieldRule("linkedin", any_of=("linkedin", "linked-in")),
    FieldRule("github", any_of=("github", "git hub")),
    FieldRule("address_line1", any_of=("address",), none_of=("2", "line2", "apt", "suite")),
    FieldRule("address_line2", any_of=("address2", "line2", "apt", "suite")),
    FieldRule("city", any_of=("city",)),
    FieldRule("state", any_of=("state", "province", "region")),
    FieldRule("postal_code", any_of=("zip", "postal")),
    FieldRule("country", any_of=("country",)),
    FieldRule("work_authorized", any_of=("authorized", "work authorization", "legal"), select_only=True),
    FieldRule("needs_sponsorship", any_of=("sponsorship", "visa", "require sponsorship")),
    FieldRule("degree", any_of=("degree",), needs_education=True),
    FieldRule("major", any_of=("major", "field of study", "study"), needs_education=True),
    FieldRule("institution", any_of=("school", "university", "college", "institution"), needs_education=True),
    FieldRule("graduation_date", any_of=("graduation", "grad date", "completion"), needs_education=True),
)

_BOOLEAN_FIELDS = frozenset({"work_authorized", "needs_sponsorship"})
_SELECT_KINDS = {"state": SelectKind.STATE, "country": SelectKind.COUNTRY}


class GenericStrategy:
    """Heuristic scanner that fills any form without a portal template.

    Args:
        matcher: Option matcher used for dropdowns.
    """

    name = "generic"

    def __init__(self, matcher: OptionMatcher) -> None:
        self.matcher = matcher

    def classify(self, document: FormDocument, control: Control, *, has_education: bool = True) -> str | None:
        """Return the semantic field a control is taken for, or ``None``."""
        if control.input_type == "email":
            return "email"
        if control.input_type == "tel":
            return "phone"
        text = self.control_text(document, control)
        for rule in FIELD_RULES:
            if rule.matches(text, control, has_education):
                return rule.field
        return None

    @staticmethod
    def control_text(document: FormDocument, control: Control) -> str:
        """Name, id, placeholder and label text, lower-cased."""
        return f"{control.name} {control.id} {control.placeholder} {document.label_text(control)}".lower()

    def fill(self, document: FormDocument, profile: Profile) -> list[str]:
        """Fill every recognizable control on the page.

        Returns:
            Distinct field names written, in first-written order.
        """
        values = profile.field_values(derive_full_name=True)
        has_education = profile.most_recent_education() is not None
        controls = document.controls()

        filled: list[str] = []
        for control in controls:
            field = self.classify(document, control, has_education=has_education)
            if field is None:
                continue
            if self._fill(field, control, values[field]) and field not in filled:
                filled.append(field)

        if profile.has_legacy_fields():
            for field in self._legacy_pass(controls, profile):
                if field not in filled:
                    filled.append(field)

        logger.debug("Generic strategy wrote %d field(s)", len(filled))
        return filled

    def _legacy_pass(self, controls: list[Control], profile: Profile) -> list[str]:
        written: list[str] = []
        full_name = profile.full_name if profile.full_name is not None else profile.name
        for control in controls:
            text = f"{control.name} {control.id} {control.placeholder}".lower()
            if control.input_type == "email" or "email" in text:
                field, value = "email", profile.email
            elif control.input_type == "tel" or "phone" in text:
                field, value = "phone", profile.phone
            elif "name" in text and "user" not in text and "file" not in text:
                field, value = "full_name", full_name
            else:
                continue
            if self._write_text(control, value):
                written.append(field)
        return written

    # ------------------------------------------------------------------
    # Writers
    # ------------------------------------------------------------------

    def _fill(self, field: str, control: Control, value: Any) -> bool:
        if value is None:
            return False
        if field in _BOOLEAN_FIELDS:
            return self._write_boolean(control, value)
        if control.is_select:
            return self.matcher.smart_fill_select(control, value, _SELECT_KINDS.get(field))
        return self._write_text(control, value)

    def _write_text(self, control: Control, value: Any) -> bool:
        if value is None or control.input_type in _UNFILLABLE_TYPES:
            return False
        if control.is_select:
            return self.matcher.smart_fill_select(control, value)
        control.value = value
        control.dispatch(*FILL_EVENTS)
        return True

    def _write_boolean(self, control: Control, value: bool) -> bool:
        if control.is_select:
            return self.matcher.smart_fill_select(control, value, SelectKind.BOOLEAN)
        if control.input_type == "radio":
            # Every radio of the group classifies alike; only the answering one is written.
            if self.matcher.match_boolean_radio(control, value) != control:
                return False
            control.checked = True
            control.dispatch("change")
            return True
        if control.input_type == "checkbox":
            control.checked = bool(value)
            control.dispatch("change")
            return True
        return False


def generic_fill(document: FormDocument, profile: Profile, matcher: OptionMatcher | None = None) -> list[str]:
    """Run the generic strategy once with a default (or given) matcher."""
    return GenericStrategy(matcher or OptionMatcher()).fill(document, profile)
