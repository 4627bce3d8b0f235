# src/joblens/pipeline/filter.py
from datetime import datetime
from typing import Iterable, List

from joblens.models import Record
from joblens.pipeline.normalize import JOB_TYPE_FIELDS, SALARY_PRESENCE_FIELDS, location_of, resolve
from joblens.pipeline.trends import posting_date


def filter_since(records: Iterable[Record], cutoff: datetime) -> List[Record]:
    """
    Keep only records posted on or after `cutoff`.
    Records without a readable date are dropped.
    """
    out: List[Record] = []
    for r in records:
        when = posting_date(r)
        if when is None:
            continue  # no date, can't tell
        if when >= cutoff:
            out.append(r)
    return out


def filter_with_salary(records: Iterable[Record]) -> List[Record]:
    """Records with anything in a salary-ish column (parseable or not)."""
    return [r for r in records if resolve(r, SALARY_PRESENCE_FIELDS)]


def filter_remote(records: Iterable[Record]) -> List[Record]:
    out: List[Record] = []
    for r in records:
        location = location_of(r).lower()
        job_type = resolve(r, JOB_TYPE_FIELDS).lower()
        if "remote" in location or "remote" in job_type:
            out.append(r)
    return out
