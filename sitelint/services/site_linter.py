"""
Site Linter
===========
Drives one run: Select → Invoke → Parse → Aggregate → Write, site by site.

Flow per site:
    1. Skip the site unless <root>/www exists
    2. Select candidate files under www
    3. Lint each file sequentially, parse its output
    4. Fold results into a SiteLintResult
    5. Write a report if the site has issues

After all sites, the run summary is appended to the run log.

Fault tolerance:
    - A file whose linter cannot be launched, or times out, is reported
      and counted as producing no output. The run continues.
    - A report that cannot be written is reported. The run continues.
    - A failing run log write is handled inside the RunLog.
"""
import logging
import os
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

from sitelint.core.constants import MODE_BULK, MODE_SINGLE, WWW_DIR
from sitelint.core.errors import InvalidPathError, LinterLaunchError
from sitelint.executor.linter_invoker import LinterInvocation, LinterInvoker
from sitelint.models.lint_result import FileLintResult, RunSummary, SiteLintResult
from sitelint.parser.lint_output_parser import LintOutputParser, StylishOutputParser
from sitelint.services.aggregator import add_file_result, summarize_run
from sitelint.services.file_selector import select_files
from sitelint.services.report_writer import (
    FileRunLog,
    ReportWriter,
    RunLog,
    format_run_message,
)

logger = logging.getLogger(__name__)


def resolve_site_roots(mode: str, path: str) -> List[Tuple[str, str]]:
    """
    Map the operator's path to (site_name, site_root) pairs.

    Mode 1 treats path as a single website root. Mode 2 treats every
    immediate child directory of path as a website root, sorted by name.

    Raises
    ------
    InvalidPathError
        If path is blank or not an existing directory.
    """
    if not path or not path.strip():
        raise InvalidPathError("")
    path = os.path.abspath(path.strip())
    if not os.path.isdir(path):
        raise InvalidPathError(path)

    if mode == MODE_SINGLE:
        return [(os.path.basename(path.rstrip(os.sep)) or path, path)]
    if mode == MODE_BULK:
        return [
            (entry, os.path.join(path, entry))
            for entry in sorted(os.listdir(path))
            if os.path.isdir(os.path.join(path, entry))
        ]
    raise ValueError(f"Unknown mode: {mode!r}")


class SiteLinter:
    """
    Runs the lint pipeline over one or more website roots.

    All collaborators are injected so tests can substitute the invoker and
    capture the run log in memory.
    """

    def __init__(
        self,
        invoker: LinterInvoker,
        parser: Optional[LintOutputParser] = None,
        report_writer: Optional[ReportWriter] = None,
        run_log: Optional[RunLog] = None,
        output: Callable[[str], None] = print,
    ) -> None:
        self.invoker = invoker
        self.parser = parser or StylishOutputParser()
        self.report_writer = report_writer or ReportWriter()
        self.run_log = run_log or FileRunLog(notify=output)
        self.output = output

    # -----------------------------------------------------------------
    # Per file
    # -----------------------------------------------------------------
    async def lint_file(self, file_path: str) -> FileLintResult:
        """Invoke the linter on one file and parse what it printed."""
        try:
            invocation = await self.invoker.lint_file(file_path)
        except LinterLaunchError as e:
            logger.error("%s", e)
            self.output(f"Error while processing file: {file_path}")
            self.output(str(e))
            return self.parser.parse("")

        self._report_invocation_problems(invocation)
        return self.parser.parse(invocation.stdout)

    def _report_invocation_problems(self, invocation: LinterInvocation) -> None:
        if invocation.timed_out:
            self.output(f"Linter timed out while processing file: {invocation.file_path}")
        elif invocation.stderr.strip():
            self.output(f"Error while processing file: {invocation.file_path}")
            self.output(invocation.stderr.rstrip())

    # -----------------------------------------------------------------
    # Per site
    # -----------------------------------------------------------------
    async def lint_site(self, site_name: str, www_dir: str) -> SiteLintResult:
        """Lint every selected file under www_dir, in discovery order."""
        site = SiteLintResult(site_name=site_name)
        files = select_files(www_dir)
        logger.info("%s: %d file(s) selected under %s", site_name, len(files), www_dir)

        for index, file_path in enumerate(files, start=1):
            self.output(f"  Linting file {index}/{len(files)}: {file_path}")
            result = await self.lint_file(file_path)
            add_file_result(site, file_path, result)

        return site

    def _write_report(self, site: SiteLintResult, run_timestamp: datetime) -> None:
        if not site.has_issues:
            self.output(f"No linter errors found for {site.site_name}.")
            return
        try:
            path = self.report_writer.write_site_report(site, run_timestamp)
        except OSError as e:
            logger.error("Could not write report for %s: %s", site.site_name, e)
            self.output(f"Could not write report for {site.site_name}: {e}")
            return
        self.output(
            f"Linter issues found for {site.site_name} in "
            f"{len(site.files_with_issues)}/{site.files_linted} file(s) "
            f"(errors: {site.total_errors}, warnings: {site.total_warnings}) "
            f"and written to {path}"
        )

    # -----------------------------------------------------------------
    # Whole run
    # -----------------------------------------------------------------
    async def run(
        self,
        mode: str,
        path: str,
        run_timestamp: Optional[datetime] = None,
    ) -> RunSummary:
        """
        Lint every website root the mode/path resolve to.

        Raises
        ------
        InvalidPathError
            Before any work starts, if path is blank or missing.
        """
        run_timestamp = run_timestamp or datetime.now(timezone.utc)
        site_roots = resolve_site_roots(mode, path)
        logger.info("Run started: mode=%s, %d candidate site(s) under %s", mode, len(site_roots), path)

        processed: list[SiteLintResult] = []
        for index, (site_name, site_root) in enumerate(site_roots, start=1):
            www_dir = os.path.join(site_root, WWW_DIR)
            if not os.path.isdir(www_dir):
                logger.info("Skipping %s: no %s directory", site_name, WWW_DIR)
                if mode == MODE_SINGLE:
                    self.output(f"No '{WWW_DIR}' directory found in {site_root}, nothing to lint.")
                continue

            self.output(f"Processing directory {index}/{len(site_roots)}: {site_name}")
            site = await self.lint_site(site_name, www_dir)
            processed.append(site)
            self._write_report(site, run_timestamp)

        summary = summarize_run(processed, run_timestamp)
        self.output(f"Total errors: {summary.total_errors}")
        self.output(f"Total warnings: {summary.total_warnings}")

        self.run_log.append(
            format_run_message(mode, [s.site_name for s in processed], summary),
            run_timestamp,
        )
        logger.info(
            "Run finished: %d site(s), %d error(s), %d warning(s)",
            summary.sites_processed, summary.total_errors, summary.total_warnings,
        )
        return summary
