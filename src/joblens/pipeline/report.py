# src/joblens/pipeline/report.py
"""
One call from a raw sheet export to everything the analytics page renders.

Usage:
    from joblens.pipeline.report import build_report

    report = build_report(headers, rows)
    print(report["summary"]["total_jobs"])
    print(report["skills"]["top_skills"][:5])
    print(report["trends"]["market_status"])

The table is normalized once; every section below is an independent pass over
the same records, so sections never depend on each other's output except for
the skill ranking feeding the summary and the skill trends.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, Optional, Sequence

from joblens.config import AnalyticsSettings
from joblens.models import RawTable
from joblens.pipeline.correlation import location_salary_correlation, skill_salary_correlation
from joblens.pipeline.frequency import (
    average_experience,
    company_counts,
    experience_counts,
    job_type_counts,
    location_counts,
    source_counts,
)
from joblens.pipeline.insights import summarize
from joblens.pipeline.normalize import normalize_rows, title_of
from joblens.pipeline.salary import salary_distribution, salary_stats, valid_salaries
from joblens.pipeline.skills import skill_frequency, top_skill_names
from joblens.pipeline.titles import TitleComparator, cluster_titles
from joblens.pipeline.trends import market_trends

logger = logging.getLogger(__name__)


def build_report(
    headers: Sequence[str],
    rows: Sequence[Sequence[Optional[str]]],
    settings: Optional[AnalyticsSettings] = None,
    *,
    now: Optional[datetime] = None,
    title_comparator: Optional[TitleComparator] = None,
) -> Dict:
    """
    Build the full analytics report for one table.

    An empty table gives an all-zero report rather than an error.
    """
    settings = settings or AnalyticsSettings()
    records = normalize_rows(headers, rows)
    salaries = valid_salaries(records)
    skills = skill_frequency(records, settings.skill_limit)
    experience = experience_counts(records)

    report = {
        "summary": summarize(records, salaries, skills, now=now, recent_days=settings.recent_days),
        "companies": company_counts(records, settings.company_limit),
        "locations": location_counts(records, settings.location_limit),
        "job_types": job_type_counts(records, settings.job_type_limit),
        "sources": source_counts(records, settings.source_limit),
        "titles": cluster_titles(
            (title_of(r) for r in records),
            settings.title_limit,
            title_comparator,
        ),
        "experience": {
            "distribution": experience,
            "average_years": average_experience(experience),
        },
        "skills": {
            "top_skills": skills,
        },
        "salary": {
            "stats": salary_stats(salaries),
            "distribution": salary_distribution(salaries),
            "by_skill": skill_salary_correlation(
                salaries, settings.skill_salary_limit, settings.skill_salary_min_jobs
            ),
            "by_location": location_salary_correlation(
                salaries, settings.location_salary_limit, settings.location_salary_min_jobs
            ),
        },
        "trends": market_trends(records, top_skill_names(skills, settings.skill_trend_limit)),
    }

    logger.info(
        "report built: %d records, %d valid salaries, %d distinct top skills",
        len(records), len(salaries), len(skills),
    )
    return report


def build_table_report(table: RawTable, settings: Optional[AnalyticsSettings] = None, **kwargs) -> Dict:
    return build_report(table.get("headers") or [], table.get("rows") or [], settings, **kwargs)
