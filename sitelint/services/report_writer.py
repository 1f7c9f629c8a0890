"""
Report Writer
=============
Persists per-site reports and the one-line-per-run log.

Artifacts:
    <reports_dir>/<site>_<yyyyMMdd_HHmmss>.txt   one per site with issues
    <run_log_file>                                 "<UTC timestamp>: <message>"

The run log is passed down the run as a RunLog object instead of being a
global file handle. FileRunLog appends to disk; MemoryRunLog keeps lines
for tests. A failing run log write is reported and swallowed so it can
never abort a run.
"""
import logging
import os
from datetime import datetime, timezone
from typing import Callable, List, Optional, Protocol

from sitelint.core.config import REPORTS_DIR, RUN_LOG_FILE
from sitelint.core.constants import (
    MODE_LABELS,
    REPORT_EXTENSION,
    REPORT_TIMESTAMP_FORMAT,
    RUN_LOG_TIMESTAMP_FORMAT,
)
from sitelint.models.lint_result import RunSummary, SiteLintResult

logger = logging.getLogger(__name__)


def report_filename(site_name: str, run_timestamp: datetime) -> str:
    return f"{site_name}_{run_timestamp.strftime(REPORT_TIMESTAMP_FORMAT)}{REPORT_EXTENSION}"


class ReportWriter:
    """Writes one text report per site that has issues."""

    def __init__(self, reports_dir: str = REPORTS_DIR) -> None:
        self.reports_dir = reports_dir

    def write_site_report(self, site: SiteLintResult, run_timestamp: datetime) -> Optional[str]:
        """
        Write the site's combined report.

        Returns
        -------
        str | None
            Absolute path of the written file, or None when the site had
            no issues and nothing was written.

        Raises
        ------
        OSError
            If the directory or the file cannot be written.
        """
        if not site.has_issues:
            return None

        os.makedirs(self.reports_dir, exist_ok=True)
        path = os.path.abspath(
            os.path.join(self.reports_dir, report_filename(site.site_name, run_timestamp))
        )
        with open(path, "w", encoding="utf-8") as f:
            f.write(site.combined_report_text)
        logger.info("Wrote report for %s to %s", site.site_name, path)
        return path


# ---------------------------------------------------------------------------
# Run Log
# ---------------------------------------------------------------------------
class RunLog(Protocol):
    def append(self, message: str, timestamp: Optional[datetime] = None) -> bool:
        ...


def format_log_line(message: str, timestamp: datetime) -> str:
    return f"{timestamp.strftime(RUN_LOG_TIMESTAMP_FORMAT)}: {message}"


class FileRunLog:
    """Append-only run log on disk."""

    def __init__(self, path: str = RUN_LOG_FILE, notify: Callable[[str], None] = print) -> None:
        self.path = path
        self.notify = notify

    def append(self, message: str, timestamp: Optional[datetime] = None) -> bool:
        line = format_log_line(message, timestamp or datetime.now(timezone.utc))
        try:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
            return True
        except OSError as e:
            logger.error("Failed to write run log %s: %s", self.path, e)
            self.notify(f"Error writing to log file: {e}")
            return False


class MemoryRunLog:
    """Run log that keeps formatted lines in memory."""

    def __init__(self) -> None:
        self.lines: List[str] = []

    def append(self, message: str, timestamp: Optional[datetime] = None) -> bool:
        self.lines.append(format_log_line(message, timestamp or datetime.now(timezone.utc)))
        return True


def format_run_message(mode: str, site_names: List[str], summary: RunSummary) -> str:
    """One-line description of a finished run: mode, sites and totals."""
    label = MODE_LABELS.get(mode, mode)
    sites = ", ".join(site_names) if site_names else "(none)"
    return (
        f"Mode: {label} | Sites: {sites} | "
        f"Sites processed: {summary.sites_processed}, "
        f"Total errors: {summary.total_errors}, "
        f"Total warnings: {summary.total_warnings}"
    )
