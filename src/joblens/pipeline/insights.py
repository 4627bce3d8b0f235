# src/joblens/pipeline/insights.py
"""
Headline KPIs for the top of the dashboard.

Everything here is computed from values the other modules already produced;
the only moving input is `now`, which decides what counts as "recent".
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Dict, Optional, Sequence

from joblens.models import AggregateBucket, ParsedSalary, Record
from joblens.pipeline.filter import filter_remote, filter_since, filter_with_salary

NO_SKILL = "N/A"

# Stricter than the parser's bounds: only for the headline average
HEADLINE_SALARY_FLOOR = 10_000
HEADLINE_SALARY_CEILING = 500_000


def _percent(part: int, total: int) -> int:
    return round(part / total * 100) if total else 0


def headline_salary(salaries: Sequence[ParsedSalary]) -> int:
    avgs = [s["avg"] for s in salaries if HEADLINE_SALARY_FLOOR < s["avg"] < HEADLINE_SALARY_CEILING]
    return round(sum(avgs) / len(avgs)) if avgs else 0


def summarize(
    records: Sequence[Record],
    salaries: Sequence[ParsedSalary],
    skills: Sequence[AggregateBucket],
    now: Optional[datetime] = None,
    recent_days: int = 30,
) -> Dict:
    now = now or datetime.now()
    if now.tzinfo is not None:
        # posting dates are naive UTC
        now = now.astimezone(timezone.utc).replace(tzinfo=None)
    cutoff = now - timedelta(days=recent_days)
    total = len(records)
    top = max(skills, key=lambda b: b["count"]) if skills else None

    return {
        "total_jobs": total,
        "recent_jobs": len(filter_since(records, cutoff)),
        "average_salary": headline_salary(salaries),
        "top_skill": top["name"] if top else NO_SKILL,
        "salary_coverage": _percent(len(filter_with_salary(records)), total),
        "remote_share": _percent(len(filter_remote(records)), total),
    }
