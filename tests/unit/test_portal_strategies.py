"""Unit tests for template-driven portal strategies.

Covers:
  - PortalTemplate validation and event flags
  - locate / apply for Greenhouse, Workday, Lever and Taleo pages
  - legacy overlay, idempotence, never clearing populated controls
  - StrategyRegistry
"""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from jobfill.dom import FormDocument
from jobfill.matching import OptionMatcher
from jobfill.models import Profile
from jobfill.portals import PortalId, PortalStrategy, PortalTemplate, StrategyRegistry, build_default_registry
from jobfill.portals.strategy import combined_location
from jobfill.portals.templates import GREENHOUSE, LEVER, TALEO, WORKDAY


def _strategy(template: PortalTemplate) -> PortalStrategy:
    return PortalStrategy(template, OptionMatcher())


def _fill(template: PortalTemplate, document: FormDocument, data: dict[str, Any]) -> list[str]:
    strategy = _strategy(template)
    return strategy.apply(document, Profile.model_validate(data), strategy.locate(document))


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


class TestPortalTemplate:
    def test_rejects_unknown_fields(self):
        with pytest.raises(ValidationError, match="Unknown field names"):
            PortalTemplate(portal_id=PortalId.LEVER, selectors={"shoe_size": ["input"]})

    def test_rejects_empty_selector_lists(self):
        with pytest.raises(ValidationError, match="without selectors"):
            PortalTemplate(portal_id=PortalId.LEVER, selectors={"email": []})

    def test_fill_events(self):
        assert GREENHOUSE.fill_events == ("input", "change")
        assert WORKDAY.fill_events == ("input", "change", "blur")

    def test_combined_location(self):
        profile = Profile.model_validate({"address": {"city": "Reno", "state": "NV", "postal_code": "89501"}})
        assert combined_location(profile.address) == "Reno, NV 89501"
        assert combined_location(Profile().address) is None


# ---------------------------------------------------------------------------
# Greenhouse
# ---------------------------------------------------------------------------


class TestGreenhouse:
    def test_locate(self, greenhouse_page):
        doc = FormDocument.from_file(greenhouse_page)
        mapping = _strategy(GREENHOUSE).locate(doc)
        assert mapping["email"].name == "email"
        assert mapping["linkedin"].name == "job_application[urls[LinkedIn]]"
        assert mapping["full_name"] is None
        assert mapping["country"] is None

    def test_apply(self, greenhouse_page, profile_data):
        doc = FormDocument.from_file(greenhouse_page)
        filled = _fill(GREENHOUSE, doc, profile_data)

        assert filled == [
            "first_name",
            "last_name",
            "email",
            "phone",
            "linkedin",
            "github",
            "city",
            "work_authorized",
            "needs_sponsorship",
            "degree",
            "institution",
            "graduation_date",
        ]
        assert doc.query("input[name='email']").value == "jane@example.com"
        assert doc.query("select[name='work_authorized']").value == "1"
        assert doc.query("select[name='need_sponsorship']").value == "0"
        assert doc.query("input[name*='education[degree]']").value == "MS"
        assert doc.query("input[name*='education[graduation_date]']").value == "2023-05"

    def test_text_fields_skip_blur(self, greenhouse_page, profile_data):
        doc = FormDocument.from_file(greenhouse_page)
        _fill(GREENHOUSE, doc, profile_data)
        assert doc.events_for(doc.query("input[name='email']")) == ["input", "change"]
        assert doc.events_for(doc.query("select[name='work_authorized']")) == ["change", "blur"]

    def test_legacy_overlay_wins(self):
        doc = FormDocument('<input name="email">')
        _fill(GREENHOUSE, doc, {"identity": {"email": "a@x.com"}, "email": "b@x.com"})
        assert doc.query("input[name='email']").value == "b@x.com"

    def test_populated_control_is_not_cleared(self):
        doc = FormDocument('<input name="phone" value="555-0000"><input name="email">')
        filled = _fill(GREENHOUSE, doc, {"identity": {"email": "jane@x.com"}})
        assert filled == ["email"]
        assert doc.query("input[name='phone']").value == "555-0000"
        assert doc.events_for(doc.query("input[name='phone']")) == []

    def test_unknown_work_auth_is_skipped(self):
        doc = FormDocument(
            '<select name="work_authorized"><option value="">Select</option>'
            '<option value="1">Yes</option><option value="0">No</option></select>'
        )
        assert _fill(GREENHOUSE, doc, {"work_auth": {}}) == []
        assert doc.events == []

    def test_apply_is_idempotent(self, greenhouse_page, profile_data):
        doc = FormDocument.from_file(greenhouse_page)
        _fill(GREENHOUSE, doc, profile_data)
        first = doc.to_html()
        _fill(GREENHOUSE, doc, profile_data)
        assert doc.to_html() == first


# ---------------------------------------------------------------------------
# Workday
# ---------------------------------------------------------------------------


class TestWorkday:
    def test_apply(self, workday_page, profile_data):
        doc = FormDocument.from_file(workday_page)
        filled = _fill(WORKDAY, doc, profile_data)

        assert "first_name" in filled
        assert doc.query("input[data-automation-id*='legalNameSection_firstName']").value == "Jane"
        assert doc.query("input[data-automation-id*='addressLine1']").value == "1 Main St"
        assert doc.query("select[name='stateProvince']").value == "NV"
        assert doc.query("select[data-automation-id*='country']").value == "US"
        assert doc.query("input[data-automation-id*='school']").value == "State U"

    def test_text_fields_blur(self, workday_page, profile_data):
        doc = FormDocument.from_file(workday_page)
        _fill(WORKDAY, doc, profile_data)
        email = doc.query("input[data-automation-id*='email']")
        assert email.value == "jane@example.com"
        assert doc.events_for(email) == ["input", "change", "blur"]

    def test_radio_booleans(self, workday_page, profile_data):
        doc = FormDocument.from_file(workday_page)
        filled = _fill(WORKDAY, doc, profile_data)

        assert {"work_authorized", "needs_sponsorship"} <= set(filled)
        auth_yes = doc.query("#auth_yes")
        assert auth_yes.checked is True
        assert doc.query("#auth_no").checked is False
        assert doc.events_for(auth_yes) == ["change"]
        # needs_sponsorship is False: the group's "no" radio answers it
        spon_no = doc.query("#spon_no")
        assert spon_no.checked is True
        assert doc.query("#spon_yes").checked is False
        assert doc.events_for(spon_no) == ["change"]

    def test_false_radio_needs_a_no_choice(self):
        html = '<input type="radio" name="requires_sponsorship" value="yes" checked>'
        doc = FormDocument(html)
        control = doc.query("input")
        profile = Profile.model_validate({"work_auth": {"needs_sponsorship": False}})
        filled = _strategy(WORKDAY).apply(doc, profile, {"needs_sponsorship": control})
        assert filled == []
        assert control.checked is True
        assert doc.events == []

    def test_radio_booleans_only_where_enabled(self):
        html = '<input type="radio" name="work_authorized_radio" value="yes">'
        doc = FormDocument(html)
        strategy = _strategy(GREENHOUSE)
        control = doc.query("input")
        profile = Profile.model_validate({"work_auth": {"authorized": True}})
        filled = strategy.apply(doc, profile, {"work_authorized": control})
        assert filled == []
        assert control.checked is False


# ---------------------------------------------------------------------------
# Lever
# ---------------------------------------------------------------------------


class TestLever:
    def test_single_name_field_gets_full_name(self, lever_page, profile_data):
        doc = FormDocument.from_file(lever_page)
        filled = _fill(LEVER, doc, profile_data)
        assert {"first_name", "full_name"} <= set(filled)
        assert doc.query("input[name='name']").value == "Jane Doe"

    def test_location_uses_line1(self, lever_page, profile_data):
        doc = FormDocument.from_file(lever_page)
        _fill(LEVER, doc, profile_data)
        assert doc.query("input[name='location']").value == "1 Main St"

    def test_location_synthesized_without_line1(self, lever_page, profile_factory):
        data = profile_factory(address={"city": "Reno", "state": "NV", "postal_code": "89501"})
        doc = FormDocument.from_file(lever_page)
        _fill(LEVER, doc, data)
        assert doc.query("input[name='location']").value == "Reno, NV 89501"

    def test_degree_dropdown(self, lever_page, profile_data):
        doc = FormDocument.from_file(lever_page)
        _fill(LEVER, doc, profile_data)
        assert doc.query("select[name='degree']").value == "ms"
        assert doc.query("select[name='authorized_to_work']").value == "yes"

    def test_links(self, lever_page, profile_data):
        doc = FormDocument.from_file(lever_page)
        _fill(LEVER, doc, profile_data)
        assert doc.query("input[name='urls[LinkedIn]']").value == "https://linkedin.com/in/janedoe"
        assert doc.query("input[name='urls[GitHub]']").value == "https://github.com/janedoe"


# ---------------------------------------------------------------------------
# Taleo
# ---------------------------------------------------------------------------


class TestTaleo:
    def test_apply(self, taleo_page, profile_data):
        doc = FormDocument.from_file(taleo_page)
        filled = _fill(TALEO, doc, profile_data)

        assert "work_authorized" not in filled
        assert doc.query("#cpi_firstName").value == "Jane"
        assert doc.query("#cpi_address1").value == "1 Main St"
        assert doc.query("#cpi_zip").value == "89501"
        assert doc.query("#cpi_state").value == "102"
        assert doc.query("#cpi_country").value == "US"
        assert doc.query("#q_sponsorship").value == "N"


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestStrategyRegistry:
    def test_default_registry(self):
        registry = build_default_registry(OptionMatcher())
        assert registry.count == 4
        assert registry.portals == [PortalId.GREENHOUSE, PortalId.WORKDAY, PortalId.LEVER, PortalId.TALEO]
        assert registry.get("lever").template is LEVER
        assert registry.get(PortalId.UNKNOWN) is None
        assert registry.get("bamboohr") is None
        assert registry.get(None) is None

    def test_register_replaces(self):
        registry = build_default_registry(OptionMatcher())
        custom = GREENHOUSE.model_copy(update={"blur_required": True})
        registry.register(_strategy(custom))
        assert registry.count == 4
        assert registry.get(PortalId.GREENHOUSE).template.blur_required is True

    def test_unknown_portal_cannot_be_registered(self):
        template = PortalTemplate(portal_id=PortalId.UNKNOWN, selectors={"email": ["input"]})
        with pytest.raises(ValueError):
            StrategyRegistry([_strategy(template)])

    def test_remove(self):
        registry = build_default_registry(OptionMatcher())
        assert registry.remove(PortalId.TALEO) is True
        assert registry.remove(PortalId.TALEO) is False
        assert registry.get("taleo") is None
