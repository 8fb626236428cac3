"""Dropdown option matching.

``OptionMatcher`` resolves a profile value against the option catalog of
one ``<select>``. Resolution runs in tiers and the first tier that yields
an option wins:

1. **exact** — normalized option value or text equals the normalized target
2. **mapping** — target and option share a variant set in a mapping table
3. **partial** — normalized option value or text contains the target, or
   the reverse

The matcher only ever returns a ``value`` already present in the catalog,
or ``NO_MATCH`` (``None``). It never mutates the target or the catalog.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Sequence

from jobfill.dom.document import Option
from jobfill.matching.tables import BOOLEAN_MAPPINGS, COUNTRY_MAPPINGS, PHONE_TYPE_MAPPINGS, MappingTable

if TYPE_CHECKING:
    from jobfill.dom.document import Control
    from jobfill.settings.config import Settings

logger = logging.getLogger(__name__)

NO_MATCH = None

_NON_ALNUM = re.compile(r"[^a-z0-9]")


class SelectKind(str, Enum):
    """Type hints accepted by ``OptionMatcher.smart_fill_select``."""

    COUNTRY = "country"
    PHONE_TYPE = "phoneType"
    BOOLEAN = "boolean"
    STATE = "state"


def normalize(text: object) -> str:
    """Lower-case, trim, and drop every character outside ``[a-z0-9]``."""
    return _NON_ALNUM.sub("", str(text).lower().strip())


class OptionMatcher:
    """Tiered fuzzy matching of values against dropdown option catalogs.

    Args:
        partial_min_length: Shortest normalized string (target or option)
            that may take part in the partial tier. The default of 1 keeps
            single-character containment matches; raise it to make the
            partial tier stricter. 0 also lets empty option values such as
            ``<option value="">`` contain every target.
        default_phone_type: Phone type used when none is supplied.
    """

    def __init__(self, *, partial_min_length: int = 1, default_phone_type: str = "mobile") -> None:
        self.partial_min_length = max(0, partial_min_length)
        self.default_phone_type = default_phone_type

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> OptionMatcher:
        """Build a matcher from the ``matcher`` settings section."""
        if settings is None:
            from jobfill.settings import get_settings

            settings = get_settings()
        return cls(
            partial_min_length=settings.matcher.partial_min_length,
            default_phone_type=settings.matcher.default_phone_type,
        )

    # ------------------------------------------------------------------
    # Tiers
    # ------------------------------------------------------------------

    @staticmethod
    def _exact(catalog: Sequence[Option], target: str) -> Option | None:
        for option in catalog:
            if normalize(option.value) == target or normalize(option.text) == target:
                return option
        return NO_MATCH

    @staticmethod
    def _mapped(catalog: Sequence[Option], target: str, mappings: MappingTable) -> Option | None:
        for variants in mappings.values():
            normalized_variants = {normalize(v) for v in variants}
            if target not in normalized_variants:
                continue
            for option in catalog:
                if normalize(option.value) in normalized_variants or normalize(option.text) in normalized_variants:
                    return option
        return NO_MATCH

    def _contains(self, candidate: str, target: str) -> bool:
        if len(candidate) < self.partial_min_length:
            return False
        return candidate in target or target in candidate

    def _partial(self, catalog: Sequence[Option], target: str, *, text_only: bool = False) -> Option | None:
        if len(target) < self.partial_min_length:
            return NO_MATCH
        for option in catalog:
            candidates: Iterable[str] = (
                (normalize(option.text),) if text_only else (normalize(option.value), normalize(option.text))
            )
            if any(self._contains(candidate, target) for candidate in candidates):
                return option
        return NO_MATCH

    def _find(self, catalog: Sequence[Option], target: object, mappings: MappingTable | None) -> Option | None:
        if target is None or target == "":
            return NO_MATCH
        normalized = normalize(target)
        if not normalized:
            return NO_MATCH

        match = self._exact(catalog, normalized)
        if match is None and mappings:
            match = self._mapped(catalog, normalized, mappings)
        if match is None:
            match = self._partial(catalog, normalized)
        return match

    # ------------------------------------------------------------------
    # Public matching API
    # ------------------------------------------------------------------

    def resolve(
        self,
        catalog: Sequence[Option],
        target: object,
        mappings: MappingTable | None = None,
    ) -> str | None:
        """Resolve *target* to an option value via the exact, mapping and partial tiers.

        Args:
            catalog: The dropdown's options, in page order.
            target: The value to find.
            mappings: Optional categorical table enabling the mapping tier.

        Returns:
            The ``value`` of the first matching option, or ``NO_MATCH``.
        """
        match = self._find(catalog, target, mappings)
        return None if match is None else match.value

    def match_country(self, catalog: Sequence[Option], country: str | None) -> str | None:
        """Match a country name or code.

        Runs a full direct pass first and only then a second pass with the
        country table, so an option that spells the value directly wins
        over a table synonym.
        """
        if not country:
            return NO_MATCH
        direct = self.resolve(catalog, country)
        if direct:
            return direct
        return self.resolve(catalog, country, COUNTRY_MAPPINGS)

    def match_phone_type(self, catalog: Sequence[Option], phone_type: str | None = None) -> str | None:
        """Match a phone type (``mobile`` when unspecified)."""
        return self.resolve(catalog, phone_type or self.default_phone_type, PHONE_TYPE_MAPPINGS)

    def match_boolean(self, catalog: Sequence[Option], value: object) -> str | None:
        """Match a tri-state boolean against yes/no style options.

        ``None`` means unknown and never matches; it is not treated as false.
        """
        if value is None:
            return NO_MATCH
        return self.resolve(catalog, "yes" if value else "no", BOOLEAN_MAPPINGS)

    def match_state(self, catalog: Sequence[Option], state: str | None) -> str | None:
        """Match a state or province by name or two-letter code.

        The partial tier looks at display text only: short codes collide
        too easily with option values.
        """
        if not state:
            return NO_MATCH
        normalized = normalize(state)
        if not normalized:
            return NO_MATCH

        match = self._exact(catalog, normalized)
        if match is not None:
            return match.value

        if len(state) == 2:
            code = state.upper()
            for option in catalog:
                if option.value.upper() == code or f"({code})" in option.text:
                    return option.value

        match = self._partial(catalog, normalized, text_only=True)
        return None if match is None else match.value

    # ------------------------------------------------------------------
    # Control-level entry point
    # ------------------------------------------------------------------

    def infer_kind(self, control: Control) -> SelectKind | None:
        """Guess what a select holds from its name, id and aria-label."""
        text = f"{control.name} {control.id} {control.aria_label}".lower()
        if "country" in text:
            return SelectKind.COUNTRY
        if "phone" in text and "type" in text:
            return SelectKind.PHONE_TYPE
        if "state" in text or "province" in text or "region" in text:
            return SelectKind.STATE
        return None

    def smart_fill_select(
        self,
        control: Control,
        value: object,
        kind: SelectKind | str | None = None,
    ) -> bool:
        """Pick and apply the option of *control* that best matches *value*.

        The matcher is chosen from the explicit *kind*, then from the value
        being a boolean, then from the control's own attributes, falling
        back to the untyped ``resolve``. On a match the control's value is
        set and ``change`` + ``blur`` are dispatched.

        Returns:
            Whether an option was applied. ``None`` or ``""`` is a no-op.
        """
        if value is None or value == "":
            return False

        if kind is not None:
            kind = SelectKind(kind)
        elif isinstance(value, bool):
            kind = SelectKind.BOOLEAN
        else:
            kind = self.infer_kind(control)

        catalog = control.options
        if kind is SelectKind.BOOLEAN:
            matched = self.match_boolean(catalog, value)
        elif kind is SelectKind.COUNTRY:
            matched = self.match_country(catalog, str(value))
        elif kind is SelectKind.PHONE_TYPE:
            matched = self.match_phone_type(catalog, str(value))
        elif kind is SelectKind.STATE:
            matched = self.match_state(catalog, str(value))
        else:
            matched = self.resolve(catalog, value)

        if matched is None:
            logger.debug("No option matched for %r (kind=%s)", control, kind.value if kind else "generic")
            return False

        control.value = matched
        control.dispatch("change", "blur")
        return True

    def match_boolean_radio(self, control: Control, value: object) -> Control | None:
        """Pick the radio of *control*'s group that answers a yes/no question.

        Each radio is matched as an option made of its ``value`` attribute
        and its label text, so ``value="1"`` / ``"Yes"`` and ``value="n"`` /
        ``"No"`` both resolve. ``None`` (unknown) never picks a radio.

        Returns:
            The radio to check, or ``None`` when no radio matches.
        """
        if value is None:
            return None
        group = control.document.radio_group(control)
        choices = [Option(radio.attr("value"), control.document.label_text(radio)) for radio in group]
        match = self._find(choices, "yes" if value else "no", BOOLEAN_MAPPINGS)
        if match is None:
            logger.debug("No radio of %r answers %s", control, "yes" if value else "no")
            return None
        return group[choices.index(match)]
