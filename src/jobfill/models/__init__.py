"""Data models: applicant profile and stored documents."""

from __future__ import annotations

from jobfill.models.document import DocumentRecord, DocumentRef
from jobfill.models.profile import (
    FIELD_NAMES,
    Address,
    EducationEntry,
    EncryptedProfile,
    Identity,
    Link,
    Profile,
    WorkAuth,
    build_profile,
    is_encrypted,
)

__all__ = [
    "FIELD_NAMES",
    "Address",
    "DocumentRecord",
    "DocumentRef",
    "EducationEntry",
    "EncryptedProfile",
    "Identity",
    "Link",
    "Profile",
    "WorkAuth",
    "build_profile",
    "is_encrypted",
]
