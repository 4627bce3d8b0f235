"""
Unit tests for pipeline/correlation.py

Skill and location salary rankings, minimum sample sizes, and the
once-per-job credit rule.
"""

from joblens.pipeline.correlation import (
    accumulate_skill_salaries,
    job_identity,
    location_salary_correlation,
    merge_skill_accumulators,
    rank_skill_accumulators,
    skill_salary_correlation,
)


def _job(title, company, avg, skills="", location=""):
    return {"min": avg, "max": avg, "avg": avg, "is_hourly": False,
            "title": title, "company": company, "skills": skills, "location": location}


class TestJobIdentity:
    """Test job_identity()"""

    def test_lowercase_and_hyphens(self):
        assert job_identity("Software  Engineer", "Big Co") == "software-engineer-big-co"


class TestSkillSalary:
    """Test skill_salary_correlation()"""

    def test_duplicate_skill_in_one_posting_counts_once(self):
        salaries = [
            _job("A", "X", 100000, "Go, go, GO"),
            _job("B", "X", 80000, "Go"),
            _job("C", "X", 60000, "Go"),
        ]
        result = skill_salary_correlation(salaries)
        assert result == [{"name": "Go", "avg_salary": 80000, "count": 3}]

    def test_min_sample_size(self):
        """A skill seen in only 2 distinct jobs is dropped"""
        salaries = [
            _job("A", "X", 100000, "Go, Rust"),
            _job("B", "X", 90000, "Go, Rust"),
            _job("C", "X", 80000, "Go"),
        ]
        result = skill_salary_correlation(salaries)
        assert [r["name"] for r in result] == ["Go"]

    def test_same_identity_credited_once(self):
        """Two reqs with identical title+company share one identity"""
        salaries = [
            _job("SWE", "Acme", 100000, "Go"),
            _job("swe", "ACME", 200000, "Go"),
            _job("B", "X", 100000, "Go"),
            _job("C", "X", 100000, "Go"),
        ]
        result = skill_salary_correlation(salaries)
        assert result == [{"name": "Go", "avg_salary": 100000, "count": 3}]

    def test_ranked_by_average(self):
        salaries = [_job(t, "X", avg, "Python, Sql") for t, avg in
                    (("A", 100000), ("B", 120000), ("C", 110000))]
        salaries += [_job(t, "Y", 150000, "Rust") for t in ("A", "B", "C")]
        result = skill_salary_correlation(salaries)
        assert [r["name"] for r in result] == ["Rust", "Python", "Sql"]
        assert result[1]["avg_salary"] == 110000

    def test_no_skills_no_rows(self):
        assert skill_salary_correlation([_job("A", "X", 100000)]) == []

    def test_limit(self):
        salaries = [_job(t, "X", 100000, "Aa, Bb, Cc") for t in ("A", "B", "C")]
        assert len(skill_salary_correlation(salaries, limit=2)) == 2

    def test_partitioned_fold_matches_single_pass(self):
        salaries = [
            _job("A", "X", 100000, "Go, Sql"),
            _job("B", "X", 80000, "Go"),
            _job("A", "X", 100000, "Go"),
            _job("C", "Y", 70000, "Go, Sql"),
            _job("D", "Y", 90000, "Sql"),
        ]
        whole = accumulate_skill_salaries(salaries)
        merged = merge_skill_accumulators(
            accumulate_skill_salaries(salaries[:2]),
            accumulate_skill_salaries(salaries[2:]),
        )
        assert rank_skill_accumulators(merged) == rank_skill_accumulators(whole)
        assert merged["Go"].job_count == 3
        assert merged["Go"].seen_job_ids == {"a-x", "b-x", "c-y"}


class TestLocationSalary:
    """Test location_salary_correlation()"""

    def test_first_segment_and_min_jobs(self):
        salaries = [
            _job("A", "X", 100000, location="Austin, TX"),
            _job("B", "X", 120000, location="Austin, Texas"),
            _job("C", "X", 200000, location="Denver, CO"),
            _job("D", "X", 90000, location=""),
        ]
        assert location_salary_correlation(salaries) == [
            {"name": "Austin", "avg_salary": 110000, "count": 2},
        ]

    def test_top_five(self):
        salaries = []
        for i, city in enumerate(["A1", "B1", "C1", "D1", "E1", "F1"]):
            salaries += [_job("T", "X", 100000 + i * 1000, location=city)] * 2
        result = location_salary_correlation(salaries)
        assert len(result) == 5
        assert result[0]["name"] == "F1"
