# src/joblens/pipeline/skills.py
"""
Read the "skills" cell of a posting, whatever shape the scraper left it in.

Seen in the wild:
    '["React", "node"]'        JSON array
    '{"Python": 3, "SQL": 1}'  JSON object (keys are the skills)
    'Python, SQL, dbt'         comma string
    "['Go', 'Rust']"           Python-ish list (not valid JSON)
    '[]' or ''                 nothing at all

Every call site (global skill counts, salary correlation, trends) goes through
parse_skills() so they always agree on what a posting's skills are.
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Union

from joblens.models import AggregateBucket, Record
from joblens.pipeline.frequency import count_tokens
from joblens.pipeline.normalize import skills_of

logger = logging.getLogger(__name__)

_STRIP_CHARS = re.compile(r'[\[\]{}"]')
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class ParseFailure:
    """The cell looked like JSON but wasn't."""

    text: str
    reason: str


TokenParse = Union[List[str], ParseFailure]


def clean_token(raw: object) -> str:
    token = str(raw).replace('\\"', "")
    token = _STRIP_CHARS.sub("", token)
    token = _WHITESPACE.sub(" ", token).strip()
    if token.startswith("'"):
        token = token[1:]
    if token.endswith("'"):
        token = token[:-1]
    return token.strip()


def normalize_case(token: str) -> str:
    # "sQL" -> "Sql", "node" -> "Node"
    return token[:1].upper() + token[1:].lower()


def _parse_json(text: str) -> TokenParse:
    try:
        data = json.loads(text)
    except ValueError as e:
        return ParseFailure(text=text, reason=str(e))
    if isinstance(data, list):
        return [str(x) for x in data if x is not None]
    if isinstance(data, dict):
        return [str(k) for k in data.keys()]
    # a bare JSON scalar isn't a skill list
    return ParseFailure(text=text, reason=f"unexpected JSON {type(data).__name__}")


def _split_commas(text: str) -> List[str]:
    return text.split(",")


def parse_skills(cell: object) -> List[str]:
    """
    Return the cleaned, de-duplicated skills of one cell, in first-seen order.

    Dedup is per cell only ("Python, python" -> ["Python"]); counting the same
    skill across postings is the aggregator's job.
    """
    if cell is None:
        return []
    if isinstance(cell, (list, tuple)):
        raw_tokens = [str(x) for x in cell if x is not None]
    else:
        text = str(cell).strip()
        if not text or text == "[]":
            return []

        if text[0] in "[{":
            parsed = _parse_json(text)
            if isinstance(parsed, ParseFailure):
                logger.debug("skills cell is not JSON (%s); splitting on commas: %r", parsed.reason, text[:80])
                raw_tokens = _split_commas(text)
            else:
                raw_tokens = parsed
        else:
            raw_tokens = _split_commas(text)

    out: List[str] = []
    seen = set()
    for raw in raw_tokens:
        token = clean_token(raw)
        if len(token) < 2:
            continue
        token = normalize_case(token)
        if token not in seen:
            seen.add(token)
            out.append(token)
    return out


def record_skills(record: Record) -> List[str]:
    return parse_skills(skills_of(record))


def skill_frequency(records: Iterable[Record], limit: int = 50) -> List[AggregateBucket]:
    """
    Count in how many postings each skill appears, most common first.

    A posting listing "Go" twice still counts once for Go.
    """
    return count_tokens(records, record_skills, limit)


def top_skill_names(buckets: Sequence[AggregateBucket], limit: int) -> List[str]:
    return [b["name"] for b in buckets[:limit]]
