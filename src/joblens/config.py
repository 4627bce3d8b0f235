# src/joblens/config.py
"""
Tunable limits for the analytics report.

Defaults mirror what the dashboard shows (top 6 companies, top 10 titles, ...).
Override any of them through JOBLENS_* environment variables, or a .env file
in the project root (the CLI calls load_dotenv() before reading them).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class AnalyticsSettings:
    # Top-N cut-offs per breakdown
    company_limit: int = 6
    location_limit: int = 10
    job_type_limit: int = 6
    source_limit: int = 10
    skill_limit: int = 50
    title_limit: int = 10
    skill_salary_limit: int = 10
    location_salary_limit: int = 5
    skill_trend_limit: int = 10

    # Minimum distinct postings before an average salary is reported
    skill_salary_min_jobs: int = 3
    location_salary_min_jobs: int = 2

    # Window for the "recent postings" KPI
    recent_days: int = 30

    @classmethod
    def from_env(cls, prefix: str = "JOBLENS_") -> "AnalyticsSettings":
        """
        Build settings from the environment, e.g. JOBLENS_SKILL_LIMIT=25.
        Unset or blank variables keep the default.
        """
        values = {
            f.name: _env_int(prefix + f.name.upper(), f.default)
            for f in fields(cls)
        }
        return cls(**values)
