"""Document persistence for resumes and cover letters.

Each row holds the raw bytes plus metadata. ``sha256`` is recomputed on
every save and is informational only: two documents may share a digest.
"""

from __future__ import annotations

import hashlib
import logging
import secrets
import string
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

import sqlalchemy as sa
from sqlalchemy.orm import sessionmaker

from jobfill.models.document import DocumentRecord, DocumentRef
from jobfill.store.sql import METADATA, build_session_factory, dialect_insert, documents

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits
_REF_COLUMNS = [column for column in documents.c if column.name != "bytes"]


def compute_sha256(data: bytes) -> str:
    """Lower-case hex SHA-256 digest of *data*."""
    return hashlib.sha256(data).hexdigest()


def generate_document_id() -> str:
    """``doc-<epoch ms>-<9 random base-36 chars>``."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"doc-{int(time.time() * 1000)}-{suffix}"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class DocumentStore:
    """Store and retrieve documents by id.

    Args:
        db_path: Convenience path for a local SQLite file. Mutually
            exclusive with *session_factory*.
        session_factory: Pre-configured ``sessionmaker``.
    """

    def __init__(
        self,
        db_path: str | Path | None = None,
        *,
        session_factory: sessionmaker | None = None,
    ) -> None:
        if session_factory is not None:
            self._session_factory = session_factory
        else:
            self._session_factory = build_session_factory(db_path=db_path)

        with self._session_factory() as session:
            METADATA.create_all(session.connection())
            session.commit()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save_document(
        self,
        *,
        data: bytes,
        label: str = "",
        version: str = "",
        mime: str = "application/octet-stream",
        tags: Iterable[str] = (),
        pages: int | None = None,
        document_id: str | None = None,
        created_at: str | None = None,
    ) -> DocumentRef:
        """Insert or replace a document and return its metadata.

        ``created_at`` comes from the caller, else from an existing row
        with the same id, else now. ``updated_at`` is always now.
        """
        doc_id = document_id or generate_document_id()
        now = _now_iso()

        with self._session_factory() as session:
            if created_at is None:
                created_at = session.execute(
                    sa.select(documents.c.created_at).where(documents.c.id == doc_id)
                ).scalar_one_or_none()

            record = DocumentRecord(
                id=doc_id,
                label=label,
                version=version,
                mime=mime,
                sha256=compute_sha256(data),
                tags=list(tags),
                pages=pages,
                created_at=created_at or now,
                updated_at=now,
                content=data,
            )
            values = record.model_dump(exclude={"content"})
            values["bytes"] = record.content

            stmt = dialect_insert(session, documents).values(**values)
            stmt = stmt.on_conflict_do_update(
                index_elements=[documents.c.id],
                set_={key: value for key, value in values.items() if key != "id"},
            )
            session.execute(stmt)
            session.commit()

        logger.debug("Saved document %s (%d bytes)", doc_id, len(data))
        return record.ref()

    def delete_document(self, document_id: str) -> bool:
        """Delete a document. Unknown ids are a no-op returning ``False``."""
        with self._session_factory() as session:
            result = session.execute(sa.delete(documents).where(documents.c.id == document_id))
            session.commit()
        return result.rowcount > 0

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_document(self, document_id: str) -> DocumentRecord | None:
        """Return the full record including bytes, or ``None``."""
        with self._session_factory() as session:
            row = session.execute(sa.select(documents).where(documents.c.id == document_id)).mappings().first()
        if row is None:
            return None
        values = dict(row)
        values["tags"] = values.get("tags") or []
        return DocumentRecord.model_validate(values)

    def list_documents(self) -> list[DocumentRef]:
        """Metadata for every stored document, oldest first."""
        with self._session_factory() as session:
            rows = session.execute(
                sa.select(*_REF_COLUMNS).order_by(documents.c.created_at, documents.c.id)
            ).mappings().all()
        return [DocumentRef.model_validate({**row, "tags": row.get("tags") or []}) for row in rows]
