# src/joblens/pipeline/titles.py
"""
Group near-duplicate job titles ("Software Engineer", "Senior Software
Engineer II", ...) under one canonical label.

The grouping loop is first-match: each title is compared with the existing
groups in order and joins the first one the comparator accepts. Swap the
comparator to change what "similar" means without touching the loop.
"""
from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List, Optional, Protocol, Tuple

from rapidfuzz import fuzz

from joblens.models import AggregateBucket


class TitleComparator(Protocol):
    def are_similar(self, title: str, existing: str) -> bool: ...


class OverlapComparator:
    """
    Similar when one title contains the other, or when at least `min_words`
    words of the new title appear inside the existing one (case-insensitive).
    """

    def __init__(self, min_words: int = 2):
        self.min_words = min_words

    def are_similar(self, title: str, existing: str) -> bool:
        a, b = title.lower(), existing.lower()
        if a in b or b in a:
            return True
        shared = [word for word in a.split() if word in b]
        return len(shared) >= self.min_words


class FuzzyComparator:
    """RapidFuzz token-set similarity; `threshold` is 0-100."""

    def __init__(self, threshold: int = 85):
        self.threshold = threshold

    def are_similar(self, title: str, existing: str) -> bool:
        score = fuzz.token_set_ratio(title.lower(), existing.lower())
        return score >= self.threshold


def count_titles(titles: Iterable[Optional[str]]) -> List[Tuple[str, int]]:
    """Raw (title, count) pairs in first-seen order; blanks are skipped."""
    counts: Counter = Counter()
    for t in titles:
        title = (t or "").strip()
        if title:
            counts[title] += 1
    return list(counts.items())


def _merge_key(existing: str, existing_count: int, title: str, count: int) -> str:
    # shorter label wins, unless the longer one already has strictly more postings
    if len(title) < len(existing):
        return existing if existing_count > count else title
    if len(title) > len(existing):
        return title if count > existing_count else existing
    return existing


def group_titles(
    counted: Iterable[Tuple[str, int]],
    comparator: Optional[TitleComparator] = None,
) -> Dict[str, int]:
    """Fold (title, count) pairs into canonical groups, preserving group order."""
    comparator = comparator or OverlapComparator()
    groups: Dict[str, int] = {}

    for title, count in counted:
        for existing, existing_count in groups.items():
            if not comparator.are_similar(title, existing):
                continue
            key = _merge_key(existing, existing_count, title, count)
            if key == existing:
                groups[existing] = existing_count + count
            else:
                # re-keyed groups move to the end, as a fresh key would
                del groups[existing]
                groups[key] = existing_count + count
            break
        else:
            groups[title] = count
    return groups


def cluster_titles(
    titles: Iterable[Optional[str]],
    limit: Optional[int] = 10,
    comparator: Optional[TitleComparator] = None,
) -> List[AggregateBucket]:
    """
    Cluster raw titles and return the top `limit` groups, biggest first.

    Example:
        cluster_titles(["SWE", "SWE II", "PM"])
        -> [{"name": "SWE", "count": 2}, {"name": "PM", "count": 1}]
    """
    groups = group_titles(count_titles(titles), comparator)
    ranked = sorted(groups.items(), key=lambda kv: kv[1], reverse=True)
    if limit is not None:
        ranked = ranked[:limit]
    return [{"name": name, "count": count} for name, count in ranked]
