"""Profile persistence.

The store keeps a single profile object under a fixed key. The payload is
saved exactly as given: a structured profile, a legacy flat record, or an
encrypted envelope. Interpretation is left to the caller.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

import sqlalchemy as sa
from sqlalchemy.orm import sessionmaker

from jobfill.store.sql import METADATA, build_session_factory, dialect_insert, profiles

logger = logging.getLogger(__name__)


class ProfileStore:
    """Load and save the applicant profile.

    Args:
        db_path: Convenience path for a local SQLite file. Mutually
            exclusive with *session_factory*.
        session_factory: Pre-configured ``sessionmaker`` (e.g. a shared
            test fixture).
        key: Storage key; defaults to ``settings.storage.profile_key``.
    """

    def __init__(
        self,
        db_path: str | Path | None = None,
        *,
        session_factory: sessionmaker | None = None,
        key: str | None = None,
    ) -> None:
        if session_factory is not None:
            self._session_factory = session_factory
        else:
            self._session_factory = build_session_factory(db_path=db_path)

        if key is None:
            from jobfill.settings import get_settings

            key = get_settings().storage.profile_key
        self.key = key

        with self._session_factory() as session:
            METADATA.create_all(session.connection())
            session.commit()

    def save(self, profile: Mapping[str, Any]) -> None:
        """Insert or replace the stored profile."""
        now = datetime.now(timezone.utc)
        payload = dict(profile)
        with self._session_factory() as session:
            stmt = dialect_insert(session, profiles).values(key=self.key, payload=payload, updated_at=now)
            stmt = stmt.on_conflict_do_update(
                index_elements=[profiles.c.key],
                set_={"payload": payload, "updated_at": now},
            )
            session.execute(stmt)
            session.commit()
        logger.debug("Saved profile under key %s", self.key)

    def load(self) -> dict[str, Any] | None:
        """Return the stored profile payload, or ``None`` when nothing is stored."""
        with self._session_factory() as session:
            payload = session.execute(
                sa.select(profiles.c.payload).where(profiles.c.key == self.key)
            ).scalar_one_or_none()
        if payload is None:
            return None
        return dict(payload)

    def clear(self) -> bool:
        """Remove the stored profile. Returns ``True`` when a row was deleted."""
        with self._session_factory() as session:
            result = session.execute(sa.delete(profiles).where(profiles.c.key == self.key))
            session.commit()
        return result.rowcount > 0
