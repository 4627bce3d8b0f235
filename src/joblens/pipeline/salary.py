# src/joblens/pipeline/salary.py
"""
Turn free-text salary cells into yearly numbers.

Handles patterns like:
- "$70,000 - $90,000"     -> 70000 / 90000, avg 80000
- "$45/hr", "30 hourly"    -> hourly rate, converted at 2080 h/year
- "$120,000/yr"            -> has "$" and "/", but too big to be hourly: yearly
- "$600,000"               -> capped at 500000
- "$999", "Competitive"    -> not a salary (dropped, never zero-filled)

Anything that fails these checks returns None and is left out of every
salary statistic.
"""
from __future__ import annotations

import logging
import re
import statistics
from typing import Dict, Iterable, List, Optional, Tuple

from joblens.models import AggregateBucket, ParsedSalary, Record
from joblens.pipeline.normalize import (
    SALARY_FIELDS,
    company_of,
    location_of,
    resolve,
    skills_of,
    title_of,
)

logger = logging.getLogger(__name__)

MAX_REASONABLE_SALARY = 500_000
MIN_YEARLY_SALARY = 1_000
HOURS_PER_YEAR = 2080  # 40 h/week x 52 weeks

# Hourly rates outside (10, 500) are assumed to be yearly figures mislabelled
MIN_HOURLY_RATE = 10
MAX_HOURLY_RATE = 500

_NON_NUMERIC = re.compile(r"[^\d.]")

# (label, lower bound inclusive, upper bound exclusive)
SALARY_BANDS: Tuple[Tuple[str, int, float], ...] = (
    ("Under $50k", 0, 50_000),
    ("$50k-$75k", 50_000, 75_000),
    ("$75k-$100k", 75_000, 100_000),
    ("$100k-$150k", 100_000, 150_000),
    ("$150k+", 150_000, float("inf")),
)


def looks_hourly(text: str) -> bool:
    lower = text.lower()
    if "hour" in lower or "/hr" in lower or "hourly" in lower:
        return True
    return "$" in lower and "/" in lower


def _to_int(part: str) -> Optional[int]:
    digits = _NON_NUMERIC.sub("", part)
    if not digits:
        return None
    try:
        return int(float(digits))
    except (ValueError, OverflowError):
        return None


def _in_range(value: int) -> bool:
    return MIN_YEARLY_SALARY <= value < MAX_REASONABLE_SALARY


def parse_salary(text: object) -> Optional[Dict]:
    """
    Parse one salary cell.

    Returns {"min", "max", "avg", "is_hourly"} in yearly units, or None when
    the cell is empty, unparseable or implausible.
    """
    if text is None:
        return None
    raw = str(text).strip()
    if not raw:
        return None

    is_hourly = looks_hourly(raw)
    is_range = "-" in raw

    if is_range:
        parts = raw.split("-")
        low, high = _to_int(parts[0]), _to_int(parts[1])
        if low is None or high is None:
            return None
        if low > high:
            low, high = high, low
    else:
        low = high = _to_int(raw)
        if low is None:
            return None

    # a "$/..." marker on a figure this size is a yearly salary
    if is_hourly and low > MAX_HOURLY_RATE:
        is_hourly = False

    if is_hourly and MIN_HOURLY_RATE < low < MAX_HOURLY_RATE:
        low *= HOURS_PER_YEAR
        high *= HOURS_PER_YEAR
    elif is_hourly:
        is_hourly = False

    if is_range:
        if not (_in_range(low) and _in_range(high)):
            return None
    elif low < MIN_YEARLY_SALARY:
        return None

    low = min(low, MAX_REASONABLE_SALARY)
    high = min(high, MAX_REASONABLE_SALARY)
    avg = min((low + high) // 2, MAX_REASONABLE_SALARY)
    if avg <= 0:
        return None

    return {"min": low, "max": high, "avg": avg, "is_hourly": is_hourly}


def _salary_text(record: Record) -> str:
    text = resolve(record, SALARY_FIELDS)
    if text:
        return text
    # separate min/max columns, e.g. "Salary Min" / "Salary Max"
    lo = resolve(record, ("salary_min", "salary min"))
    hi = resolve(record, ("salary_max", "salary max"))
    if lo and hi:
        return f"{lo} - {hi}"
    return lo or hi


def parse_record_salary(record: Record) -> Optional[ParsedSalary]:
    parsed = parse_salary(_salary_text(record))
    if parsed is None:
        return None
    return {
        **parsed,
        "title": title_of(record),
        "company": company_of(record),
        "skills": skills_of(record),
        "location": location_of(record),
    }


def valid_salaries(records: Iterable[Record]) -> List[ParsedSalary]:
    """Parse every record and keep only the valid salaries."""
    out: List[ParsedSalary] = []
    dropped = 0
    for record in records:
        parsed = parse_record_salary(record)
        if parsed is None:
            dropped += 1
            continue
        out.append(parsed)
    logger.debug("salary parse: %d valid, %d without a usable salary", len(out), dropped)
    return out


def salary_distribution(salaries: Iterable[ParsedSalary]) -> List[AggregateBucket]:
    """Count valid salaries per band (by avg); empty bands are left out."""
    counts = {label: 0 for label, _, _ in SALARY_BANDS}
    for s in salaries:
        for label, lo, hi in SALARY_BANDS:
            if lo <= s["avg"] < hi:
                counts[label] += 1
                break
    return [{"name": label, "count": n} for label, n in counts.items() if n > 0]


def salary_stats(salaries: Iterable[ParsedSalary]) -> Dict[str, int]:
    avgs = [s["avg"] for s in salaries]
    if not avgs:
        return {"count": 0, "min": 0, "max": 0, "avg": 0, "median": 0}
    return {
        "count": len(avgs),
        "min": min(avgs),
        "max": max(avgs),
        "avg": round(sum(avgs) / len(avgs)),
        "median": round(statistics.median(avgs)),
    }
