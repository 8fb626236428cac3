"""SQLAlchemy table definitions for jobfill persistence.

Both tables share the ``METADATA`` instance so a single ``create_all``
brings a fresh SQLite file up to date.
"""

from __future__ import annotations

from pathlib import Path

import sqlalchemy as sa
from sqlalchemy.orm import Session, sessionmaker

TIMESTAMP = sa.DateTime(timezone=True)

METADATA = sa.MetaData()

# ---------------------------------------------------------------------------
# profiles: one row per storage key (normally just the fixed profile key)
# ---------------------------------------------------------------------------

profiles = sa.Table(
    "profiles",
    METADATA,
    sa.Column("key", sa.String(length=128), primary_key=True),
    sa.Column("payload", sa.JSON(), nullable=False),
    sa.Column("updated_at", TIMESTAMP, nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
)

# ---------------------------------------------------------------------------
# documents: resumes, cover letters and other uploads
# ---------------------------------------------------------------------------

documents = sa.Table(
    "documents",
    METADATA,
    sa.Column("id", sa.String(length=64), primary_key=True),
    sa.Column("label", sa.Text(), nullable=False, server_default=""),
    sa.Column("version", sa.Text(), nullable=False, server_default=""),
    sa.Column("mime", sa.Text(), nullable=False, server_default="application/octet-stream"),
    sa.Column("sha256", sa.String(length=64), nullable=False),
    sa.Column("bytes", sa.LargeBinary(), nullable=False),
    sa.Column("tags", sa.JSON(), nullable=True),
    sa.Column("pages", sa.Integer(), nullable=True),
    # ISO-8601 strings, kept exactly as supplied by the caller
    sa.Column("created_at", sa.Text(), nullable=False),
    sa.Column("updated_at", sa.Text(), nullable=False),
)
sa.Index("idx_documents_sha256", documents.c.sha256)
sa.Index("idx_documents_created_at", documents.c.created_at)


# ---------------------------------------------------------------------------
# Engine / session helpers
# ---------------------------------------------------------------------------


def build_engine(*, db_path: str | Path | None = None, echo: bool = False) -> sa.Engine:
    """Create a SQLAlchemy engine for the local jobfill database.

    Args:
        db_path: Override path for the SQLite file. Defaults to
            ``settings.storage.sqlite_path``.
        echo: When True, log all SQL statements.
    """
    if db_path is None:
        from jobfill.settings import get_settings

        db_path = get_settings().storage.sqlite_path

    resolved = Path(db_path)
    resolved.parent.mkdir(parents=True, exist_ok=True)
    url = f"sqlite:///{resolved.as_posix()}"
    return sa.create_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        connect_args={"check_same_thread": False, "timeout": 30},
    )


def build_session_factory(*, db_path: str | Path | None = None) -> sessionmaker:
    """Return a ``sessionmaker`` bound to the jobfill engine."""
    engine = build_engine(db_path=db_path)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


def dialect_insert(session: Session, table: sa.Table) -> sa.Insert:
    """Return a dialect-aware INSERT that supports ``on_conflict_do_update``."""
    bind = session.get_bind()
    if bind.dialect.name == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    else:
        from sqlalchemy.dialects.sqlite import insert
    return insert(table)
