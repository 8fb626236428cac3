"""Built-in templates for the four supported portal families.

* Greenhouse keys off ``name`` attributes.
* Workday keys off ``data-automation-id`` substrings, falling back to ``name``.
* Lever uses plain ``name`` attributes; its single ``name`` input serves
  both the first-name and full-name roles.
* Taleo keys off ``id`` substrings because its form generator randomizes ``name``.
"""

from __future__ import annotations

from jobfill.portals.detector import PortalId
from jobfill.portals.models import PortalTemplate

GREENHOUSE = PortalTemplate(
    portal_id=PortalId.GREENHOUSE,
    description="Greenhouse hosted job boards (boards.greenhouse.io).",
    blur_required=False,
    selectors={
        "first_name": ["input[name='first_name']"],
        "last_name": ["input[name='last_name']"],
        "full_name": ["input[name='applicant.name']"],
        "email": ["input[name='email']"],
        "phone": ["input[name='phone']"],
        "linkedin": ["input[name*='urls[LinkedIn]']"],
        "github": ["input[name*='urls[GitHub]']"],
        "address_line1": ["input[name='address_line1']"],
        "address_line2": ["input[name='address_line2']"],
        "city": ["input[name='city']"],
        "state": ["input[name='state']"],
        "postal_code": ["input[name='zip']"],
        "country": ["input[name='country']"],
        "work_authorized": ["select[name='work_authorized']"],
        "needs_sponsorship": ["select[name='need_sponsorship']"],
        "degree": ["input[name*='education[degree]']"],
        "major": ["input[name*='education[major]']"],
        "institution": ["input[name*='education[school]']"],
        "graduation_date": ["input[name*='education[graduation_date]']"],
    },
)

WORKDAY = PortalTemplate(
    portal_id=PortalId.WORKDAY,
    description="Workday recruiting sites (*.myworkdayjobs.com).",
    radio_booleans=True,
    selectors={
        "first_name": [
            "input[data-automation-id*='legalNameSection_firstName']",
            "input[name*='firstName']",
        ],
        "last_name": [
            "input[data-automation-id*='legalNameSection_lastName']",
            "input[name*='lastName']",
        ],
        "email": ["input[data-automation-id*='email']", "input[type='email']"],
        "phone": ["input[data-automation-id*='phone']", "input[type='tel']"],
        "linkedin": ["input[data-automation-id*='linkedIn']", "input[name*='linkedin']"],
        "github": ["input[data-automation-id*='github']", "input[name*='github']"],
        "address_line1": ["input[data-automation-id*='addressLine1']", "input[name*='address1']"],
        "address_line2": ["input[data-automation-id*='addressLine2']", "input[name*='address2']"],
        "city": ["input[data-automation-id*='city']", "input[name*='city']"],
        "state": ["input[data-automation-id*='state']", "select[name*='state']"],
        "postal_code": ["input[data-automation-id*='postalCode']", "input[name*='zip']"],
        "country": ["select[data-automation-id*='country']", "select[name*='country']"],
        "work_authorized": [
            "select[data-automation-id*='legallyAuthorized']",
            "input[name*='authorized'][value='yes']",
        ],
        "needs_sponsorship": [
            "select[data-automation-id*='sponsorship']",
            "input[name*='sponsorship'][value='yes']",
        ],
        "degree": ["input[data-automation-id*='degree']", "input[name*='degree']"],
        "major": ["input[data-automation-id*='fieldOfStudy']", "input[name*='major']"],
        "institution": ["input[data-automation-id*='school']", "input[name*='school']"],
        "graduation_date": ["input[data-automation-id*='graduationDate']", "input[name*='graduation']"],
    },
)

LEVER = PortalTemplate(
    portal_id=PortalId.LEVER,
    description="Lever job postings (jobs.lever.co).",
    synthesize_full_name=True,
    synthesize_address=True,
    selectors={
        "first_name": ["input[name='name']", "input[name='first_name']"],
        "last_name": ["input[name='last_name']"],
        "full_name": ["input[name='name']"],
        "email": ["input[name='email']", "input[type='email']"],
        "phone": ["input[name='phone']", "input[type='tel']"],
        "linkedin": ["input[name='urls[LinkedIn]']", "input[name*='linkedin']"],
        "github": ["input[name='urls[GitHub]']", "input[name*='github']"],
        "address_line1": ["input[name='location']", "input[name='address']"],
        "city": ["input[name='city']"],
        "state": ["input[name='state']", "select[name='state']"],
        "postal_code": ["input[name='zip']", "input[name='postal_code']"],
        "country": ["select[name='country']"],
        "work_authorized": ["select[name='work_authorized']", "select[name='authorized_to_work']"],
        "needs_sponsorship": ["select[name='require_sponsorship']", "select[name='sponsorship']"],
        "degree": ["input[name='degree']", "select[name='degree']"],
        "major": ["input[name='major']", "input[name='field_of_study']"],
        "institution": ["input[name='school']", "input[name='university']"],
        "graduation_date": ["input[name='graduation_date']", "input[name='grad_date']"],
    },
)

TALEO = PortalTemplate(
    portal_id=PortalId.TALEO,
    description="Oracle Taleo career sections (*.taleo.net).",
    selectors={
        "first_name": ["input[id*='firstname']", "input[id*='firstName']"],
        "last_name": ["input[id*='lastname']", "input[id*='lastName']"],
        "email": ["input[id*='email']", "input[type='email']"],
        "phone": ["input[id*='phone']", "input[type='tel']"],
        "linkedin": ["input[id*='linkedin']", "input[name*='linkedin']"],
        "github": ["input[id*='github']", "input[name*='github']"],
        "address_line1": ["input[id*='address1']", "input[id*='streetaddress']"],
        "address_line2": ["input[id*='address2']"],
        "city": ["input[id*='city']"],
        "state": ["select[id*='state']", "input[id*='state']"],
        "postal_code": ["input[id*='zip']", "input[id*='postal']"],
        "country": ["select[id*='country']"],
        "work_authorized": ["select[id*='workauthorization']", "select[id*='authorized']"],
        "needs_sponsorship": ["select[id*='sponsorship']", "select[id*='visa']"],
        "degree": ["select[id*='degree']", "input[id*='degree']"],
        "major": ["input[id*='major']", "input[id*='fieldofstudy']"],
        "institution": ["input[id*='school']", "input[id*='university']", "input[id*='college']"],
        "graduation_date": ["input[id*='graduation']", "select[id*='gradyear']"],
    },
)

BUILTIN_TEMPLATES: tuple[PortalTemplate, ...] = (GREENHOUSE, WORKDAY, LEVER, TALEO)
