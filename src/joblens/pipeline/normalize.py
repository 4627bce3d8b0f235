# src/joblens/pipeline/normalize.py
"""
Convert a raw spreadsheet export (header row + rows) into field-keyed records.

Job-board scrapers never agree on column names: one sheet says "Company_Name",
the next "company_name", a third just "company". This module handles those
messy details once, so the rest of the engine can ask for "the title" without
caring which header it came from.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from joblens.models import RawTable, Record

# Header aliases, most specific first
TITLE_FIELDS = ("title", "job_title")
COMPANY_FIELDS = ("company_name", "company")
JOB_TYPE_FIELDS = ("job_type", "type")
URL_FIELDS = ("url", "link")
SOURCE_FIELDS = ("company_website", "url", "link", "source")
SALARY_FIELDS = ("salary", "compensation")
SALARY_PRESENCE_FIELDS = ("salary", "salary_min", "salary_max", "compensation")
DATE_FIELDS = ("date_posted", "currentdate", "date_added", "posted_date")
LOCATION_FIELDS = ("location",)
SKILLS_FIELDS = ("skills",)
EXPERIENCE_FIELDS = ("experience",)

UNKNOWN = "Unknown"


def _fold(header: object) -> str:
    # Sheets sometimes hand back None or numbers for blank header cells
    return str(header if header is not None else "").strip().lower()


def normalize_rows(headers: Sequence[str], rows: Iterable[Sequence[Optional[str]]]) -> List[Record]:
    """
    Turn every row into a dict keyed by the lower-cased header.

    A row shorter than the header is fine: the missing cells come back as None
    and resolve to defaults downstream. Extra cells past the header are ignored.
    """
    keys = [_fold(h) for h in headers]
    out: List[Record] = []

    for row in rows:
        row = list(row or [])
        record: Record = {}
        for i, key in enumerate(keys):
            record[key] = row[i] if i < len(row) else None
        out.append(record)
    return out


def normalize_table(table: RawTable) -> List[Record]:
    return normalize_rows(table.get("headers") or [], table.get("rows") or [])


def _present(value: object) -> bool:
    return value is not None and str(value).strip() != ""


def resolve(record: Record, aliases: Iterable[str], default: str = "") -> str:
    """
    Return the first alias that holds a non-empty value, else `default`.

    Example:
        resolve({"job_title": "SWE"}, ("title", "job_title"))  -> "SWE"
    """
    for alias in aliases:
        value = record.get(alias.lower())
        if _present(value):
            return str(value).strip()
    return default


def title_of(record: Record) -> str:
    return resolve(record, TITLE_FIELDS)


def company_of(record: Record) -> str:
    return resolve(record, COMPANY_FIELDS, UNKNOWN)


def location_of(record: Record) -> str:
    return resolve(record, LOCATION_FIELDS)


def skills_of(record: Record) -> str:
    return resolve(record, SKILLS_FIELDS)
