# src/joblens/models.py
"""
Lightweight typed dictionaries for job-posting rows and the aggregates we
derive from them.

Everything that leaves the engine is a plain dict with type hints, so the
report can be dumped straight to JSON. The only classes with behaviour are
the accumulators, which are folded over records and merged afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, TypedDict

# A normalized row: lower-cased header -> raw cell text (None when the row
# was shorter than the header).
Record = Dict[str, Optional[str]]


class RawTable(TypedDict):
    """
    A spreadsheet export exactly as it arrives: one header row plus data rows.

    Notes:
    - Rows may be shorter than `headers`; missing cells are simply absent.
    - Nothing is typed; every cell is text (or empty).
    """

    headers: List[str]
    rows: List[List[Optional[str]]]


class AggregateBucket(TypedDict):
    """One (name, count) pair of a frequency breakdown."""

    name: str
    count: int


class ParsedSalary(TypedDict):
    """
    A free-text salary cell turned into yearly numbers.

    Only valid salaries are ever built: 0 < min <= avg <= max <= 500000.
    """

    # Yearly figures (hourly rates are already converted)
    min: int
    max: int
    avg: int

    # True when the cell was read as an hourly rate
    is_hourly: bool

    # Carried through from the row for the correlation engine
    title: str
    company: str
    skills: str
    location: str


class SalaryCorrelation(TypedDict):
    """Average salary of the postings sharing one skill or location."""

    name: str
    avg_salary: int
    count: int


class MonthBucket(TypedDict):
    """Posting count for one calendar month, keyed "YYYY-M"."""

    month: str
    count: int


class SkillTrend(TypedDict):
    """Demand for one skill in the first vs. the last month of the series."""

    name: str
    earliest: int
    latest: int
    growth_rate: float
    trend: str  # "rising" | "falling" | "stable"


@dataclass
class SkillSalaryAccumulator:
    """Running salary total for one skill, deduplicated by job identity."""

    total_salary: int = 0
    job_count: int = 0
    # job identity -> salary credited for it
    credits: Dict[str, int] = field(default_factory=dict)

    @property
    def seen_job_ids(self) -> Set[str]:
        return set(self.credits)

    def add(self, job_id: str, salary: int) -> bool:
        """Credit `salary` once per job identity. Returns False on a repeat."""
        if job_id in self.credits:
            return False
        self.credits[job_id] = salary
        self.total_salary += salary
        self.job_count += 1
        return True

    def merge(self, other: "SkillSalaryAccumulator") -> None:
        """Fold another partition's totals in; first credit per job wins."""
        for job_id, salary in other.credits.items():
            self.add(job_id, salary)

    @property
    def average(self) -> float:
        return self.total_salary / self.job_count if self.job_count else 0.0
