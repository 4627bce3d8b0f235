# src/joblens/pipeline/trends.py
"""
Posting trends: postings per month, month-over-month growth, how crowded the
market is, and whether individual skills are gaining or losing demand.

Rows without a readable posting date are simply left out of the monthly
buckets; they still count everywhere else.
"""
from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from joblens.models import MonthBucket, Record, SkillTrend
from joblens.pipeline.normalize import DATE_FIELDS, resolve, title_of
from joblens.pipeline.skills import record_skills

logger = logging.getLogger(__name__)

MARKET_THRESHOLD = 0.05
SKILL_THRESHOLD = 0.1

Month = Tuple[int, int]

# pandas reads these as the current clock, not as a posting date
_RELATIVE_DATES = frozenset({"now", "today", "tomorrow", "yesterday"})


def parse_date(value: str) -> Optional[datetime]:
    """Parse a date cell leniently; None when pandas can't make sense of it."""
    if not value or value.strip().lower() in _RELATIVE_DATES:
        return None
    ts = pd.to_datetime(value, errors="coerce")
    if ts is None or pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_convert(None)
    return ts.to_pydatetime()


def posting_date(record: Record) -> Optional[datetime]:
    raw = resolve(record, DATE_FIELDS)
    parsed = parse_date(raw)
    if raw and parsed is None:
        logger.debug("unparseable posting date %r; left out of monthly trends", raw)
    return parsed


def month_key(month: Month) -> str:
    # (2024, 3) -> "2024-3"
    return f"{month[0]}-{month[1]}"


def _dated(records: Iterable[Record]) -> List[Tuple[Month, Record]]:
    out = []
    for record in records:
        when = posting_date(record)
        if when is not None:
            out.append(((when.year, when.month), record))
    return out


def monthly_counts(records: Iterable[Record]) -> List[MonthBucket]:
    """Postings per calendar month, in chronological (year, month) order."""
    counts = Counter(month for month, _ in _dated(records))
    return [{"month": month_key(m), "count": counts[m]} for m in sorted(counts)]


def growth_rate(counts: Sequence[int]) -> float:
    """(latest - previous) / previous; 0 without two points or a zero base."""
    if len(counts) < 2 or counts[-2] == 0:
        return 0.0
    return (counts[-1] - counts[-2]) / counts[-2]


def market_status(rate: float) -> str:
    if rate > MARKET_THRESHOLD:
        return "growing"
    if rate < -MARKET_THRESHOLD:
        return "declining"
    return "stable"


def competitiveness(records: Iterable[Record]) -> Dict:
    """Average postings per distinct title: "high" > 5, "medium" > 2, else "low"."""
    titles = [t for t in (title_of(r) for r in records) if t]
    distinct = len(set(titles))
    ratio = len(titles) / distinct if distinct else 0.0
    if ratio > 5:
        level = "high"
    elif ratio > 2:
        level = "medium"
    else:
        level = "low"
    return {"ratio": round(ratio, 2), "level": level}


def skill_trend_label(rate: float) -> str:
    if rate > SKILL_THRESHOLD:
        return "rising"
    if rate < -SKILL_THRESHOLD:
        return "falling"
    return "stable"


def skill_trends(records: Iterable[Record], skills: Sequence[str]) -> List[SkillTrend]:
    """
    Compare each skill's posting count in the earliest vs. the latest month.

    growth_rate is (latest - earliest) / earliest, or 0 when the skill did not
    appear in the earliest month.
    """
    dated = _dated(records)
    if not dated or not skills:
        return []

    months = sorted({m for m, _ in dated})
    first, last = months[0], months[-1]
    per_month: Dict[Month, Counter] = {first: Counter(), last: Counter()}
    for month, record in dated:
        if month in per_month:
            per_month[month].update(record_skills(record))

    out: List[SkillTrend] = []
    for skill in skills:
        earliest = per_month[first][skill]
        latest = per_month[last][skill]
        rate = (latest - earliest) / earliest if earliest > 0 else 0.0
        out.append({
            "name": skill,
            "earliest": earliest,
            "latest": latest,
            "growth_rate": round(rate, 4),
            "trend": skill_trend_label(rate),
        })
    return out


def market_trends(records: Sequence[Record], skills: Sequence[str] = ()) -> Dict:
    """Monthly series, growth, market status, competitiveness and skill trends."""
    monthly = monthly_counts(records)
    rate = growth_rate([m["count"] for m in monthly])
    return {
        "monthly": monthly,
        "growth_rate": round(rate, 4),
        "market_status": market_status(rate),
        "competitiveness": competitiveness(records),
        "skill_trends": skill_trends(records, skills),
    }
