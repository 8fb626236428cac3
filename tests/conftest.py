"""jobfill test configuration — shared fixtures for unit and integration tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

FIXTURES_DIR = Path(__file__).parent / "fixtures"
PAGES_DIR = FIXTURES_DIR / "pages"


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """Clear the settings LRU cache between tests."""
    from jobfill.settings.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _isolated_database(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the default SQLite path at a per-test temporary file."""
    db_path = tmp_path / "jobfill.db"
    monkeypatch.setenv("JOBFILL_STORAGE__SQLITE_PATH", str(db_path))
    return db_path


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------


@pytest.fixture()
def profile_store(tmp_path: Path):
    """Create a disposable ``ProfileStore`` backed by a temporary SQLite DB."""
    from jobfill.store.profile_store import ProfileStore

    return ProfileStore(db_path=tmp_path / "test_profiles.db", key="test_profile")


@pytest.fixture()
def document_store(tmp_path: Path):
    """Create a disposable ``DocumentStore`` backed by a temporary SQLite DB."""
    from jobfill.store.document_store import DocumentStore

    return DocumentStore(db_path=tmp_path / "test_documents.db")


@pytest.fixture()
def fast_crypto():
    """Crypto settings with a low iteration count so tests stay quick."""
    from jobfill.settings.config import CryptoSettings

    return CryptoSettings(iterations=1_000)


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------


def _profile_data(**overrides: Any) -> dict[str, Any]:
    """A complete structured profile dict with sensible defaults."""
    data: dict[str, Any] = {
        "version": "1.0.0",
        "identity": {
            "first_name": "Jane",
            "last_name": "Doe",
            "email": "jane@example.com",
            "phone": "+1 555 0100",
            "links": [
                {"type": "linkedin", "url": "https://linkedin.com/in/janedoe"},
                {"type": "github", "url": "https://github.com/janedoe"},
            ],
        },
        "address": {
            "line1": "1 Main St",
            "city": "Reno",
            "state": "NV",
            "postal_code": "89501",
            "country": "USA",
        },
        "work_auth": {"authorized": True, "needs_sponsorship": False},
        "education": [
            {"degree": "BS", "major": "Physics", "institution": "Old U", "graduation_date": "2015-05"},
            {"degree": "MS", "major": "CS", "institution": "State U", "graduation_date": "2023-05"},
            {"degree": "Cert", "major": "Data", "institution": "Bootcamp", "graduation_date": "2020-06"},
        ],
    }
    data.update(overrides)
    return data


@pytest.fixture()
def profile_factory():
    """Return a builder for profile dicts: ``profile_factory(address={...})``."""
    return _profile_data


@pytest.fixture()
def profile_data() -> dict[str, Any]:
    return _profile_data()


@pytest.fixture()
def profile(profile_data: dict[str, Any]):
    from jobfill.models import Profile

    return Profile.model_validate(profile_data)


# ---------------------------------------------------------------------------
# Fixture pages
# ---------------------------------------------------------------------------


@pytest.fixture()
def greenhouse_page() -> Path:
    """Greenhouse-style application form."""
    return PAGES_DIR / "greenhouse.html"


@pytest.fixture()
def workday_page() -> Path:
    """Workday-style application form with radio-button booleans."""
    return PAGES_DIR / "workday.html"


@pytest.fixture()
def lever_page() -> Path:
    """Lever-style application form with a single name field."""
    return PAGES_DIR / "lever.html"


@pytest.fixture()
def taleo_page() -> Path:
    """Taleo-style form keyed by element ids."""
    return PAGES_DIR / "taleo.html"


@pytest.fixture()
def generic_page() -> Path:
    """Unbranded careers form for the heuristic scanner."""
    return PAGES_DIR / "generic.html"


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests that exercise several layers together")
