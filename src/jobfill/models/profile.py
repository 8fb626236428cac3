"""Applicant profile models.

The canonical shape is structured (``identity`` / ``address`` /
``work_auth`` / ``education``). Older profiles stored a flat record with
``full_name``, ``email``, ``phone`` and ``linkedin`` at the root; those keys
are still honoured as an overlay applied after the structured values.

Encrypted profiles are stored as an envelope ``{"_enc": true, "iv": [...],
"ct": [...]}`` (see ``EncryptedProfile``).
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any, Iterable, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field

PROFILE_SCHEMA_VERSION = "1.0.0"

# Semantic field names a form control can be bound to, in fill order.
FIELD_NAMES: tuple[str, ...] = (
    "first_name",
    "last_name",
    "full_name",
    "email",
    "phone",
    "linkedin",
    "github",
    "address_line1",
    "address_line2",
    "city",
    "state",
    "postal_code",
    "country",
    "work_authorized",
    "needs_sponsorship",
    "degree",
    "major",
    "institution",
    "graduation_date",
)


class Link(BaseModel):
    """A profile URL tagged with its kind (``linkedin``, ``github``, ...)."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    type: str = ""
    url: str | None = None


class Identity(BaseModel):
    """Who the applicant is and how to reach them."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    first_name: str | None = None
    last_name: str | None = None
    full_name: str | None = None
    email: str | None = None
    phone: str | None = None
    links: list[Link] = Field(default_factory=list)


class Address(BaseModel):
    """Postal address; every component is optional."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    line1: str | None = None
    line2: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None


class WorkAuth(BaseModel):
    """Work authorization answers. ``None`` means unknown, not ``False``."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    authorized: bool | None = None
    needs_sponsorship: bool | None = None


class EducationEntry(BaseModel):
    """One degree; ``graduation_date`` is compared as a plain string."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    degree: str | None = None
    major: str | None = None
    institution: str | None = None
    graduation_date: str | None = None


class Profile(BaseModel):
    """The applicant record a fill operation reads from.

    Unknown keys are preserved so that exporting an imported profile
    round-trips whatever the producer wrote.
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    version: str | None = None
    id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    identity: Identity = Field(default_factory=Identity)
    address: Address = Field(default_factory=Address)
    work_auth: WorkAuth = Field(default_factory=WorkAuth)
    education: list[EducationEntry] = Field(default_factory=list)

    # Legacy flat shape
    full_name: str | None = None
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    linkedin: str | None = None

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    def link(self, link_type: str) -> str | None:
        """URL of the first link whose type equals *link_type*."""
        for link in self.identity.links:
            if link.type == link_type:
                return link.url
        return None

    def most_recent_education(self) -> EducationEntry | None:
        """The entry with the greatest ``graduation_date`` (missing dates sort last)."""
        if not self.education:
            return None
        return sorted(self.education, key=lambda entry: entry.graduation_date or "", reverse=True)[0]

    def derived_full_name(self) -> str:
        """Explicit full name, else ``first last`` (possibly ``""``)."""
        if self.identity.full_name:
            return self.identity.full_name
        return f"{self.identity.first_name or ''} {self.identity.last_name or ''}".strip()

    def field_values(self, *, derive_full_name: bool = False) -> dict[str, Any]:
        """Map every semantic field name to its structured profile value.

        Args:
            derive_full_name: Fall back to ``first last`` when no explicit
                full name is stored.

        Returns:
            A dict keyed by ``FIELD_NAMES``; absent values are ``None``.
        """
        identity = self.identity
        address = self.address
        education = self.most_recent_education() or EducationEntry()

        full_name = identity.full_name
        if derive_full_name and not full_name:
            full_name = self.derived_full_name() or None

        return {
            "first_name": identity.first_name,
            "last_name": identity.last_name,
            "full_name": full_name,
            "email": identity.email,
            "phone": identity.phone,
            "linkedin": self.link("linkedin"),
            "github": self.link("github"),
            "address_line1": address.line1,
            "address_line2": address.line2,
            "city": address.city,
            "state": address.state,
            "postal_code": address.postal_code,
            "country": address.country,
            "work_authorized": self.work_auth.authorized,
            "needs_sponsorship": self.work_auth.needs_sponsorship,
            "degree": education.degree,
            "major": education.major,
            "institution": education.institution,
            "graduation_date": education.graduation_date,
        }

    def has_legacy_fields(self) -> bool:
        """True when any of the flat ``full_name`` / ``email`` / ``phone`` keys is set."""
        return any(value is not None for value in (self.full_name, self.email, self.phone))

    def legacy_overlay(self) -> dict[str, str]:
        """Flat root values that override structured ones, keyed by field name."""
        overlay = {
            "full_name": self.full_name if self.full_name is not None else self.name,
            "email": self.email,
            "phone": self.phone,
            "linkedin": self.linkedin,
        }
        return {field: value for field, value in overlay.items() if value is not None}


class EncryptedProfile(BaseModel):
    """Stored form of a passphrase-protected profile."""

    model_config = ConfigDict(populate_by_name=True)

    enc: Literal[True] = Field(default=True, alias="_enc")
    iv: list[int]
    ct: list[int]

    def to_payload(self) -> dict[str, Any]:
        """Serialize with the ``_enc`` marker key."""
        return self.model_dump(by_alias=True)


def is_encrypted(payload: object) -> bool:
    """Whether a stored payload is an encrypted envelope."""
    return isinstance(payload, Mapping) and payload.get("_enc") is True


def _yes_no(answer: str) -> bool | None:
    answer = answer.strip().lower()
    if answer == "yes":
        return True
    if answer == "no":
        return False
    return None


def build_profile(
    *,
    first_name: str = "",
    last_name: str = "",
    email: str = "",
    phone: str = "",
    linkedin: str = "",
    github: str = "",
    address_line1: str = "",
    address_line2: str = "",
    city: str = "",
    state: str = "",
    postal_code: str = "",
    country: str = "",
    work_authorized: str = "",
    needs_sponsorship: str = "",
    education: Iterable[Mapping[str, str]] = (),
) -> Profile:
    """Assemble a structured profile from raw form answers.

    Inputs are trimmed and empty answers dropped. ``full_name`` is set
    only when both first and last names are given. Work-authorization
    answers are ``"yes"`` / ``"no"``; anything else leaves them unknown.
    Education rows with no non-empty field are skipped.
    """
    now = datetime.now(timezone.utc).isoformat()
    first, last = first_name.strip(), last_name.strip()

    identity: dict[str, Any] = {}
    if first:
        identity["first_name"] = first
    if last:
        identity["last_name"] = last
    if first and last:
        identity["full_name"] = f"{first} {last}"
    if email.strip():
        identity["email"] = email.strip()
    if phone.strip():
        identity["phone"] = phone.strip()
    identity["links"] = [
        {"type": link_type, "url": url.strip()}
        for link_type, url in (("linkedin", linkedin), ("github", github))
        if url.strip()
    ]

    address = {
        key: value.strip()
        for key, value in (
            ("line1", address_line1),
            ("line2", address_line2),
            ("city", city),
            ("state", state),
            ("postal_code", postal_code),
            ("country", country),
        )
        if value.strip()
    }

    work_auth = {
        key: answer
        for key, answer in (
            ("authorized", _yes_no(work_authorized)),
            ("needs_sponsorship", _yes_no(needs_sponsorship)),
        )
        if answer is not None
    }

    entries = []
    for row in education:
        entry = {key: str(value).strip() for key, value in row.items() if value is not None and str(value).strip()}
        if entry:
            entries.append(entry)

    return Profile.model_validate(
        {
            "version": PROFILE_SCHEMA_VERSION,
            "id": str(int(time.time() * 1000)),
            "created_at": now,
            "updated_at": now,
            "identity": identity,
            "address": address,
            "work_auth": work_auth,
            "education": entries,
        }
    )
