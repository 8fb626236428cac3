"""Settings package — re-exports the cached settings accessor."""

from __future__ import annotations

from jobfill.settings.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
