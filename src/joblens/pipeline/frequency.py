# src/joblens/pipeline/frequency.py
"""
"Count it, rank it, keep the top N" for every breakdown on the dashboard.

All breakdowns return AggregateBuckets ({"name", "count"}), highest count
first; ties keep the order in which the names were first seen.
"""
from __future__ import annotations

import re
from collections import Counter
from typing import Callable, Iterable, List, Optional

from joblens.models import AggregateBucket, Record
from joblens.pipeline.normalize import (
    EXPERIENCE_FIELDS,
    JOB_TYPE_FIELDS,
    SOURCE_FIELDS,
    UNKNOWN,
    company_of,
    location_of,
    resolve,
)

NOT_SPECIFIED = "Not Specified"

# (label, highest year count in the band, midpoint used for the average)
EXPERIENCE_BANDS = (
    ("0-1 years", 1, 0.5),
    ("2-3 years", 3, 2.5),
    ("4-5 years", 5, 4.5),
    ("6-10 years", 10, 8.0),
    ("10+ years", None, 12.0),
)

# Domain fragment -> display name for the big job boards
KNOWN_SOURCES = (
    ("linkedin", "LinkedIn"),
    ("indeed", "Indeed"),
    ("ziprecruiter", "ZipRecruiter"),
    ("monster", "Monster"),
    ("glassdoor", "Glassdoor"),
    ("dice", "Dice"),
    ("simplyhired", "SimplyHired"),
    ("careerbuilder", "CareerBuilder"),
)

_LEADING_INT = re.compile(r"^\s*(-?\d+)")
_DOMAIN = re.compile(r"^(?:[a-z][a-z0-9+.-]*://)?(?:[^@/\s]+@)?(?:www\.)?([^:/?#\s]+)", re.IGNORECASE)


def _rank(counts: Counter, limit: Optional[int]) -> List[AggregateBucket]:
    return [{"name": name, "count": count} for name, count in counts.most_common(limit)]


def count_by(
    records: Iterable[Record],
    key: Callable[[Record], str],
    limit: Optional[int] = None,
    default: str = UNKNOWN,
    include_default: bool = True,
) -> List[AggregateBucket]:
    """
    Count one key per record.

    `key` may return "" for missing data; that becomes `default`. With
    include_default=False the default bucket is dropped as noise.
    """
    counts: Counter = Counter()
    for record in records:
        counts[key(record) or default] += 1
    if not include_default:
        counts.pop(default, None)
    return _rank(counts, limit)


def count_tokens(
    records: Iterable[Record],
    keys: Callable[[Record], Iterable[str]],
    limit: Optional[int] = None,
    exclude: Iterable[str] = (UNKNOWN,),
) -> List[AggregateBucket]:
    """Like count_by, but a record may contribute several (distinct) keys."""
    counts: Counter = Counter()
    for record in records:
        counts.update(list(dict.fromkeys(k for k in keys(record) if k)))
    for name in exclude:
        counts.pop(name, None)
    return _rank(counts, limit)


def company_counts(records: Iterable[Record], limit: int = 6) -> List[AggregateBucket]:
    return count_by(records, company_of, limit, include_default=False)


def simplify_location(location: str) -> str:
    # "Austin, TX, USA" -> "Austin"
    return location.split(",")[0].strip()


def location_counts(records: Iterable[Record], limit: int = 10) -> List[AggregateBucket]:
    return count_by(records, lambda r: simplify_location(location_of(r)), limit)


def job_type_counts(records: Iterable[Record], limit: int = 6) -> List[AggregateBucket]:
    return count_by(records, lambda r: resolve(r, JOB_TYPE_FIELDS), limit)


def experience_band(value: str) -> str:
    match = _LEADING_INT.match(value or "")
    if not match:
        return NOT_SPECIFIED
    years = int(match.group(1))
    for label, upper, _ in EXPERIENCE_BANDS:
        if upper is None or years <= upper:
            return label
    return NOT_SPECIFIED


def experience_counts(records: Iterable[Record], limit: Optional[int] = None) -> List[AggregateBucket]:
    """Posting counts per experience band; "Not Specified" is kept."""
    return count_by(
        records,
        lambda r: experience_band(resolve(r, EXPERIENCE_FIELDS)),
        limit,
        default=NOT_SPECIFIED,
    )


def average_experience(buckets: Iterable[AggregateBucket]) -> Optional[float]:
    """Weighted mean of band midpoints, ignoring "Not Specified"."""
    midpoints = {label: mid for label, _, mid in EXPERIENCE_BANDS}
    total = weighted = 0.0
    for b in buckets:
        mid = midpoints.get(b["name"])
        if mid is None:
            continue
        total += b["count"]
        weighted += mid * b["count"]
    if not total:
        return None
    return round(weighted / total, 1)


def source_name(url: str) -> str:
    """
    Best-effort job board name from a URL.

    "https://www.linkedin.com/jobs/view/1" -> "LinkedIn"
    "careers.acme.io/123"                  -> "Acme"
    """
    if not url:
        return UNKNOWN
    match = _DOMAIN.match(url.strip())
    if not match:
        return UNKNOWN
    domain = match.group(1).lower()
    for fragment, label in KNOWN_SOURCES:
        if fragment in domain:
            return label
    parts = domain.split(".")
    if len(parts) >= 2:
        name = parts[-2]
        return name[:1].upper() + name[1:]
    return domain


def source_counts(records: Iterable[Record], limit: int = 10) -> List[AggregateBucket]:
    return count_by(records, lambda r: source_name(resolve(r, SOURCE_FIELDS)), limit, include_default=False)
