"""
Unit tests for pipeline/normalize.py

Header folding, short rows, and alias resolution.
"""

from joblens.pipeline.normalize import (
    TITLE_FIELDS,
    company_of,
    normalize_rows,
    normalize_table,
    resolve,
)


class TestNormalizeRows:
    """Test normalize_rows()"""

    def test_headers_are_case_folded(self):
        """Company_Name and company_name land on the same key"""
        records = normalize_rows(["Title", "Company_Name"], [["SWE", "Acme"]])
        assert records == [{"title": "SWE", "company_name": "Acme"}]

    def test_short_row_gives_none(self):
        """Missing trailing cells are absent, not an error"""
        records = normalize_rows(["title", "company_name", "salary"], [["SWE"]])
        assert records[0]["title"] == "SWE"
        assert records[0]["company_name"] is None
        assert records[0]["salary"] is None

    def test_extra_cells_ignored(self):
        """Cells past the header are dropped"""
        records = normalize_rows(["title"], [["SWE", "stray"]])
        assert records == [{"title": "SWE"}]

    def test_order_and_length_preserved(self):
        """One record per row, in row order"""
        rows = [["a"], ["b"], ["c"]]
        records = normalize_rows(["title"], rows)
        assert [r["title"] for r in records] == ["a", "b", "c"]

    def test_empty_table(self):
        """No rows -> no records"""
        assert normalize_rows(["title"], []) == []

    def test_header_whitespace_stripped(self):
        """' Location ' folds to 'location'"""
        records = normalize_rows([" Location "], [["Austin"]])
        assert records[0] == {"location": "Austin"}

    def test_normalize_table(self):
        """RawTable wrapper behaves like normalize_rows"""
        table = {"headers": ["TITLE"], "rows": [["PM"]]}
        assert normalize_table(table) == [{"title": "PM"}]


class TestResolve:
    """Test resolve() alias lookups"""

    def test_first_alias_wins(self):
        record = {"title": "SWE", "job_title": "Engineer"}
        assert resolve(record, TITLE_FIELDS) == "SWE"

    def test_falls_through_empty_values(self):
        """Blank and None values don't count as present"""
        record = {"title": "  ", "job_title": "Engineer"}
        assert resolve(record, TITLE_FIELDS) == "Engineer"
        assert resolve({"title": None, "job_title": "PM"}, TITLE_FIELDS) == "PM"

    def test_default_when_missing(self):
        assert resolve({}, ("url", "link"), "n/a") == "n/a"

    def test_aliases_case_insensitive(self):
        assert resolve({"job_type": "Full-time"}, ("JOB_TYPE",)) == "Full-time"

    def test_company_defaults_to_unknown(self):
        assert company_of({}) == "Unknown"
        assert company_of({"company": "Beta"}) == "Beta"
