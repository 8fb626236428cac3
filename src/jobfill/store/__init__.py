"""jobfill store — SQL schema, engine helpers, profile and document stores."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jobfill.store.document_store import DocumentStore
    from jobfill.store.profile_store import ProfileStore


def build_profile_store(db_path: str | Path | None = None) -> "ProfileStore":
    """Factory: return a ``ProfileStore`` honouring jobfill settings.

    Args:
        db_path: Optional override for the SQLite file path.
    """
    from jobfill.store.profile_store import ProfileStore

    return ProfileStore(db_path=db_path)


def build_document_store(db_path: str | Path | None = None) -> "DocumentStore":
    """Factory: return a ``DocumentStore`` honouring jobfill settings."""
    from jobfill.store.document_store import DocumentStore

    return DocumentStore(db_path=db_path)
