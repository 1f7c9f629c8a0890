"""
Aggregator
==========
Folds per-file results into a per-site result, and per-site results into
the run summary.

Report block per file with issues:

    File: <path> - Errors: <E>, Warnings: <W>
    <diagnostic text>
    <blank line>

Files without issues add nothing to the report text but still count as
linted. Site totals always equal the sum of the per-file counts.
"""
from datetime import datetime, timezone
from typing import Iterable, Optional, Tuple

from sitelint.models.lint_result import FileLintResult, RunSummary, SiteLintResult


def format_file_header(file_path: str, result: FileLintResult) -> str:
    return f"File: {file_path} - Errors: {result.error_count}, Warnings: {result.warning_count}"


def add_file_result(site: SiteLintResult, file_path: str, result: FileLintResult) -> SiteLintResult:
    """Fold one file's result into the site, in discovery order."""
    site.files_linted += 1
    if not result.has_issues:
        return site

    block = [format_file_header(file_path, result)]
    if result.diagnostic_text:
        block.append(result.diagnostic_text)
    site.combined_report_text += "\n".join(block) + "\n\n"
    site.total_errors += result.error_count
    site.total_warnings += result.warning_count
    site.files_with_issues.append(file_path)
    return site


def aggregate_site(
    site_name: str,
    file_results: Iterable[Tuple[str, FileLintResult]],
) -> SiteLintResult:
    """Build a SiteLintResult from (file_path, result) pairs."""
    site = SiteLintResult(site_name=site_name)
    for file_path, result in file_results:
        add_file_result(site, file_path, result)
    return site


def summarize_run(
    site_results: Iterable[SiteLintResult],
    timestamp: Optional[datetime] = None,
) -> RunSummary:
    """
    Sum every processed site's totals.

    Only sites that had a www directory reach this point, so each one
    counts as processed whether or not it had issues.
    """
    summary = RunSummary(timestamp=timestamp or datetime.now(timezone.utc))
    for site in site_results:
        summary.sites_processed += 1
        summary.total_errors += site.total_errors
        summary.total_warnings += site.total_warnings
    return summary
