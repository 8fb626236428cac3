"""jobfill — fill job-application forms from a stored applicant profile."""

from __future__ import annotations

try:
    from importlib.metadata import version

    __version__ = version("jobfill")
except Exception:
    __version__ = "0.0.0"
