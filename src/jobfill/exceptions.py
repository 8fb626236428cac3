"""jobfill-specific exception hierarchy."""

from __future__ import annotations


class JobFillError(Exception):
    """Base exception for all jobfill-specific errors."""


class DecryptionError(JobFillError):
    """Raised when an encrypted profile cannot be opened.

    Covers a wrong passphrase as well as a tampered or truncated payload;
    AES-GCM authentication does not distinguish the two.
    """


class ProfileNotFoundError(JobFillError):
    """Raised when an operation needs a stored profile and none exists."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"No profile stored under key {key!r}")


class DocumentNotFoundError(JobFillError):
    """Raised when a document id is not present in the document store.

    Attributes:
        document_id: The id that was looked up.
    """

    def __init__(self, document_id: str) -> None:
        self.document_id = document_id
        super().__init__(f"Document {document_id!r} not found")
