"""
Unit Tests — Aggregator
=======================
Per-site folding of file results and per-run summing of site results.
"""
from datetime import datetime, timezone

from sitelint.models.lint_result import FileLintResult, SiteLintResult
from sitelint.services.aggregator import (
    add_file_result,
    aggregate_site,
    format_file_header,
    summarize_run,
)


def _result(errors=0, warnings=0, text=""):
    return FileLintResult(
        raw_output=text,
        error_count=errors,
        warning_count=warnings,
        diagnostic_text=text,
    )


# ---------------------------------------------------------------------------
# 1. Per-file fold
# ---------------------------------------------------------------------------
class TestAggregateSite:

    def test_totals_equal_sum_of_files(self):
        site = aggregate_site("shop", [
            ("/w/a.js", _result(2, 1, "e\ne\nw")),
            ("/w/b.js", _result(0, 0)),
            ("/w/c.js", _result(3, 4, "x")),
        ])
        assert site.total_errors == 5
        assert site.total_warnings == 5
        assert site.files_linted == 3
        assert site.has_issues

    def test_one_header_per_file_with_issues_in_order(self):
        site = aggregate_site("shop", [
            ("/w/b.js", _result(1, 0, "1:1 error b")),
            ("/w/clean.js", _result()),
            ("/w/a.js", _result(0, 2, "1:1 warning a\n2:1 warning a")),
        ])
        headers = [l for l in site.combined_report_text.splitlines() if l.startswith("File: ")]
        assert headers == [
            "File: /w/b.js - Errors: 1, Warnings: 0",
            "File: /w/a.js - Errors: 0, Warnings: 2",
        ]
        assert site.files_with_issues == ["/w/b.js", "/w/a.js"]

    def test_report_block_layout(self):
        site = aggregate_site("shop", [("/w/a.js", _result(1, 0, "1:1 error a"))])
        assert site.combined_report_text == (
            "File: /w/a.js - Errors: 1, Warnings: 0\n"
            "1:1 error a\n"
            "\n"
        )

    def test_clean_files_add_no_text(self):
        site = aggregate_site("shop", [("/w/a.js", _result()), ("/w/b.js", _result())])
        assert site.combined_report_text == ""
        assert site.files_linted == 2
        assert site.has_issues is False

    def test_no_files(self):
        site = aggregate_site("empty", [])
        assert site.has_issues is False
        assert site.total_errors == 0
        assert site.combined_report_text == ""

    def test_add_file_result_returns_same_site(self):
        site = SiteLintResult(site_name="s")
        assert add_file_result(site, "/w/a.js", _result(1)) is site

    def test_header_format(self):
        assert format_file_header("/w/a.js", _result(3, 7)) == (
            "File: /w/a.js - Errors: 3, Warnings: 7"
        )


# ---------------------------------------------------------------------------
# 2. Run fold
# ---------------------------------------------------------------------------
class TestSummarizeRun:

    def test_sums_all_sites(self):
        ts = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        sites = [
            SiteLintResult(site_name="a", total_errors=2, total_warnings=1),
            SiteLintResult(site_name="b"),
            SiteLintResult(site_name="c", total_errors=1, total_warnings=5),
        ]
        summary = summarize_run(sites, ts)
        assert summary.sites_processed == 3
        assert summary.total_errors == 3
        assert summary.total_warnings == 6
        assert summary.timestamp == ts

    def test_clean_sites_still_count_as_processed(self):
        summary = summarize_run([SiteLintResult(site_name="a"), SiteLintResult(site_name="b")])
        assert summary.sites_processed == 2
        assert summary.total_errors == 0

    def test_no_sites(self):
        summary = summarize_run([])
        assert summary.sites_processed == 0
        assert summary.timestamp.tzinfo is not None
