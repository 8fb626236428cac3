"""Unit tests for dropdown option matching.

Covers:
  - normalize
  - OptionMatcher.resolve tiers (exact, mapping, partial) and thresholds
  - country / phone type / boolean / state matchers
  - smart_fill_select type inference and DOM side effects
"""

from __future__ import annotations

import pytest

from jobfill.dom import FormDocument, Option
from jobfill.matching import COUNTRY_MAPPINGS, NO_MATCH, OptionMatcher, SelectKind, normalize


def _catalog(*pairs: tuple[str, str]) -> list[Option]:
    return [Option(value, text) for value, text in pairs]


@pytest.fixture()
def matcher() -> OptionMatcher:
    return OptionMatcher()


# ---------------------------------------------------------------------------
# normalize
# ---------------------------------------------------------------------------


class TestNormalize:
    def test_strips_case_and_punctuation(self):
        assert normalize("  U.S.A. ") == "usa"

    def test_non_string_values(self):
        assert normalize(True) == "true"
        assert normalize(42) == "42"


# ---------------------------------------------------------------------------
# resolve
# ---------------------------------------------------------------------------


class TestResolve:
    def test_exact_tier_is_reflexive(self, matcher):
        catalog = _catalog(("", "Select"), ("us", "United States"), ("ca", "Canada"), ("mx", "Mexico"))
        for option in catalog:
            if option.value:
                assert matcher.resolve(catalog, option.value) == option.value

    def test_exact_on_display_text(self, matcher):
        catalog = _catalog(("1", "Full-time"), ("2", "Part-time"))
        assert matcher.resolve(catalog, "part time") == "2"

    def test_no_match_leaves_catalog_untouched(self, matcher):
        catalog = _catalog(("a", "Apple"), ("b", "Banana"))
        before = list(catalog)
        assert matcher.resolve(catalog, "zucchini") is NO_MATCH
        assert catalog == before

    def test_empty_and_none_targets(self, matcher):
        catalog = _catalog(("", "Select"), ("a", "Apple"))
        assert matcher.resolve(catalog, None) is NO_MATCH
        assert matcher.resolve(catalog, "") is NO_MATCH
        assert matcher.resolve(catalog, "!!!") is NO_MATCH

    def test_mapping_tier(self, matcher):
        catalog = _catalog(("1", "United States of America"), ("2", "Canada"))
        assert matcher.resolve(catalog, "USA", COUNTRY_MAPPINGS) == "1"

    def test_partial_tier_option_inside_target(self, matcher):
        catalog = _catalog(("eng", "Software Engineering"), ("ops", "Operations"))
        assert matcher.resolve(catalog, "engineer") == "eng"

    def test_partial_tier_target_inside_option(self, matcher):
        catalog = _catalog(("x", "X-ray"), ("y", "Yankee"))
        assert matcher.resolve(catalog, "ray") == "x"

    def test_partial_threshold_is_tunable(self):
        catalog = _catalog(("x", "X-ray"), ("y", "Yankee"))
        strict = OptionMatcher(partial_min_length=4)
        assert strict.resolve(catalog, "ray") is NO_MATCH

    def test_empty_option_values_never_partially_match(self, matcher):
        catalog = _catalog(("", "--"), ("b", "Blue"))
        assert matcher.resolve(catalog, "blu") == "b"

    def test_zero_threshold_lets_empty_values_contain_anything(self):
        catalog = _catalog(("", "--"), ("b", "Blue"))
        assert OptionMatcher(partial_min_length=0).resolve(catalog, "blu") == ""


# ---------------------------------------------------------------------------
# Typed matchers
# ---------------------------------------------------------------------------


class TestCountry:
    def test_falls_back_to_mapping_table(self, matcher):
        catalog = _catalog(("", "Choose"), ("GBR", "Great Britain"), ("FRA", "France"))
        assert matcher.match_country(catalog, "United Kingdom") == "GBR"

    def test_direct_pass_beats_mapping_synonym(self, matcher):
        catalog = _catalog(("america", "America (Country)"), ("US", "United States"))
        assert matcher.match_country(catalog, "United States") == "US"

    def test_empty_country(self, matcher):
        assert matcher.match_country(_catalog(("US", "United States")), "") is NO_MATCH


class TestPhoneType:
    def test_defaults_to_mobile(self, matcher):
        catalog = _catalog(("H", "Home"), ("C", "Cell"))
        assert matcher.match_phone_type(catalog) == "C"

    def test_explicit_type(self, matcher):
        catalog = _catalog(("H", "Home"), ("W", "Office"))
        assert matcher.match_phone_type(catalog, "work") == "W"


class TestBoolean:
    def test_unknown_never_matches(self, matcher):
        catalog = _catalog(("", "Select"), ("Y", "Yes"), ("N", "No"))
        assert matcher.match_boolean(catalog, None) is NO_MATCH

    def test_true_and_false(self, matcher):
        catalog = _catalog(("", "Select"), ("Y", "Yes"), ("N", "No"))
        assert matcher.match_boolean(catalog, True) == "Y"
        assert matcher.match_boolean(catalog, False) == "N"

    def test_mapping_variants(self, matcher):
        catalog = _catalog(("t", "True"), ("f", "False"))
        assert matcher.match_boolean(catalog, True) == "t"
        assert matcher.match_boolean(catalog, False) == "f"


YES_NO_RADIOS = """
<label><input type="radio" name="q" id="y" value="1">Yes</label>
<label><input type="radio" name="q" id="n" value="0">No</label>
"""


class TestBooleanRadio:
    def test_picks_answering_radio_by_label(self, matcher):
        doc = FormDocument(YES_NO_RADIOS)
        first = doc.query("#y")
        assert matcher.match_boolean_radio(first, True) == doc.query("#y")
        assert matcher.match_boolean_radio(first, False) == doc.query("#n")

    def test_same_answer_from_any_radio_of_the_group(self, matcher):
        doc = FormDocument(YES_NO_RADIOS)
        assert matcher.match_boolean_radio(doc.query("#n"), True) == doc.query("#y")

    def test_unknown_picks_nothing(self, matcher):
        doc = FormDocument(YES_NO_RADIOS)
        assert matcher.match_boolean_radio(doc.query("#y"), None) is None

    def test_lone_yes_radio_cannot_answer_no(self, matcher):
        doc = FormDocument('<input type="radio" name="q" value="yes">')
        assert matcher.match_boolean_radio(doc.query("input"), False) is None
        assert doc.events == []


class TestState:
    def test_code_in_parentheses(self, matcher):
        catalog = _catalog(("1", "Select"), ("5", "Calif. (CA)"), ("6", "Nevada (NV)"))
        assert matcher.match_state(catalog, "CA") == "5"

    def test_full_name(self, matcher):
        catalog = _catalog(("", "Select"), ("CA", "California"))
        assert matcher.match_state(catalog, "California") == "CA"

    def test_code_as_value(self, matcher):
        catalog = _catalog(("", "Select"), ("ca", "California"))
        assert matcher.match_state(catalog, "CA") == "ca"

    def test_partial_uses_text_only(self, matcher):
        catalog = _catalog(("nev", "State of NV"), ("7", "Nevada State"))
        assert matcher.match_state(catalog, "Nevada") == "7"

    def test_missing_state(self, matcher):
        assert matcher.match_state(_catalog(("CA", "California")), None) is NO_MATCH


# ---------------------------------------------------------------------------
# smart_fill_select
# ---------------------------------------------------------------------------


def _select(html: str):
    document = FormDocument(html)
    return document, document.query("select")


class TestSmartFillSelect:
    def test_infers_country_from_name(self, matcher):
        document, control = _select(
            '<select name="country"><option value="">Choose</option><option value="US">United States</option></select>'
        )
        assert matcher.smart_fill_select(control, "USA") is True
        assert control.value == "US"
        assert document.events_for(control) == ["change", "blur"]

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_value_is_noop(self, matcher, value):
        document, control = _select('<select name="x"><option value="a">A</option></select>')
        assert matcher.smart_fill_select(control, value) is False
        assert document.events == []

    def test_false_selects_no(self, matcher):
        _, control = _select(
            '<select name="sponsor"><option value="">-</option>'
            '<option value="1">Yes</option><option value="0">No</option></select>'
        )
        assert matcher.smart_fill_select(control, False) is True
        assert control.value == "0"

    def test_no_match_leaves_control_alone(self, matcher):
        document, control = _select('<select name="color"><option value="r">Red</option></select>')
        assert matcher.smart_fill_select(control, "blue") is False
        assert control.value == "r"
        assert document.events == []

    def test_explicit_kind_wins_over_attributes(self, matcher):
        _, control = _select(
            '<select name="country"><option value="">Select</option><option value="22">Nevada (NV)</option></select>'
        )
        assert matcher.smart_fill_select(control, "NV", "state") is True
        assert control.value == "22"

    @pytest.mark.parametrize(
        ("name", "kind"),
        [
            ("country", SelectKind.COUNTRY),
            ("country_state", SelectKind.COUNTRY),
            ("phone_type", SelectKind.PHONE_TYPE),
            ("province", SelectKind.STATE),
            ("favourite_color", None),
        ],
    )
    def test_infer_kind(self, matcher, name, kind):
        _, control = _select(f'<select name="{name}"><option>a</option></select>')
        assert matcher.infer_kind(control) is kind
