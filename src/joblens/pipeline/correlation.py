# src/joblens/pipeline/correlation.py
"""
Which skills and locations pay the most?

Both rankings only use valid salaries (see pipeline/salary.py) and need a
minimum number of postings before an average is trusted.

Logic:
- A posting credits each of its distinct skills with its avg salary, once.
- "Once" is keyed by job identity (title + company, lower-cased, spaces to
  hyphens). Two open reqs with the same title at the same company share one
  identity and only the first is credited; that is a known approximation.
- Location = text before the first comma ("Austin, TX" -> "Austin").
"""
from __future__ import annotations

import re
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from joblens.models import ParsedSalary, SalaryCorrelation, SkillSalaryAccumulator
from joblens.pipeline.frequency import simplify_location
from joblens.pipeline.skills import parse_skills

_WHITESPACE = re.compile(r"\s+")

SkillAccumulators = Dict[str, SkillSalaryAccumulator]


def job_identity(title: str, company: str) -> str:
    return _WHITESPACE.sub("-", f"{title}-{company}".lower())


def accumulate_skill_salaries(
    salaries: Iterable[ParsedSalary],
    acc: Optional[SkillAccumulators] = None,
) -> SkillAccumulators:
    """
    Fold salaries into per-skill accumulators.

    Pass an existing `acc` to keep folding; or fold partitions separately and
    combine them with merge_skill_accumulators().
    """
    acc = {} if acc is None else acc
    for s in salaries:
        if not s.get("skills"):
            continue
        job_id = job_identity(s.get("title", ""), s.get("company", ""))
        for skill in dict.fromkeys(parse_skills(s["skills"])):
            acc.setdefault(skill, SkillSalaryAccumulator()).add(job_id, s["avg"])
    return acc


def merge_skill_accumulators(*parts: SkillAccumulators) -> SkillAccumulators:
    merged: SkillAccumulators = {}
    for part in parts:
        for skill, a in part.items():
            merged.setdefault(skill, SkillSalaryAccumulator()).merge(a)
    return merged


def rank_skill_accumulators(
    acc: SkillAccumulators,
    limit: int = 10,
    min_jobs: int = 3,
) -> List[SalaryCorrelation]:
    rows: List[SalaryCorrelation] = [
        {"name": skill, "avg_salary": round(a.average), "count": a.job_count}
        for skill, a in acc.items()
        if a.job_count >= min_jobs
    ]
    rows.sort(key=lambda r: r["avg_salary"], reverse=True)
    return rows[:limit]


def skill_salary_correlation(
    salaries: Iterable[ParsedSalary],
    limit: int = 10,
    min_jobs: int = 3,
) -> List[SalaryCorrelation]:
    """Highest-paying skills with at least `min_jobs` distinct postings."""
    return rank_skill_accumulators(accumulate_skill_salaries(salaries), limit, min_jobs)


def location_salary_correlation(
    salaries: Iterable[ParsedSalary],
    limit: int = 5,
    min_jobs: int = 2,
) -> List[SalaryCorrelation]:
    """Highest-paying locations with at least `min_jobs` postings."""
    totals: Dict[str, List[int]] = defaultdict(list)
    for s in salaries:
        location = simplify_location(s.get("location") or "")
        if location:
            totals[location].append(s["avg"])

    rows: List[SalaryCorrelation] = [
        {"name": loc, "avg_salary": round(sum(avgs) / len(avgs)), "count": len(avgs)}
        for loc, avgs in totals.items()
        if len(avgs) >= min_jobs
    ]
    rows.sort(key=lambda r: r["avg_salary"], reverse=True)
    return rows[:limit]
