"""
Lint Output Parser
==================
Converts the linter's raw text report for one file into a FileLintResult.

The linter's default ("stylish") text output is not a stable public API, so
parsing is line-oriented and deliberately tolerant:

    1. Split the report into lines
    2. Summary line (starts with ✖) → remember its counts, keep the line
    3. Line containing "error"      → +1 error, keep the line
    4. Line containing "warning"    → +1 warning, keep the line
    5. Anything else                → dropped from the diagnostic text
    6. If a summary line parsed, its counts replace the accumulated ones

Contract:
    - DETERMINISTIC: same text → equal FileLintResult, always.
    - Summary wins: a well-formed "✖ N problems (E errors, W warnings)"
      line overrides per-line counts, it never merges with them.
    - Tolerant: a malformed summary line leaves the accumulated counts alone.
    - Never raises on any input text.

Consumers depend only on the LintOutputParser protocol, so a parser for a
structured output format can be swapped in without touching aggregation.
"""
import logging
import re
from typing import Optional, Protocol

from sitelint.core.constants import SUMMARY_MARKER
from sitelint.models.lint_result import FileLintResult

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Summary Line Patterns
# ---------------------------------------------------------------------------
# Typical line: ✖ 3 problems (2 errors, 1 warning)
_SUMMARY_ERRORS = re.compile(r"(\d+)\s+errors?\b")
_SUMMARY_WARNINGS = re.compile(r"(\d+)\s+warnings?\b")

_ERROR_KEYWORD = "error"
_WARNING_KEYWORD = "warning"


class LintOutputParser(Protocol):
    """Anything that turns one invocation's stdout into a FileLintResult."""

    def parse(self, raw_output: str) -> FileLintResult:
        ...


def is_summary_line(line: str) -> bool:
    return line.lstrip().startswith(SUMMARY_MARKER)


def parse_summary_counts(line: str) -> Optional[tuple[int, int]]:
    """
    Extract (errors, warnings) from the linter's summary line.

    Returns None unless both counts are present, so the caller keeps
    whatever it has already accumulated.
    """
    errors = _SUMMARY_ERRORS.search(line)
    warnings = _SUMMARY_WARNINGS.search(line)
    if errors is None or warnings is None:
        logger.debug("Unparseable summary line: %r", line)
        return None
    return int(errors.group(1)), int(warnings.group(1))


class StylishOutputParser:
    """Parser for the linter's default human-readable report format."""

    def parse(self, raw_output: str) -> FileLintResult:
        if not raw_output or not raw_output.strip():
            return FileLintResult(raw_output=raw_output or "")

        error_count = 0
        warning_count = 0
        summary_counts: Optional[tuple[int, int]] = None
        kept: list[str] = []

        for line in raw_output.splitlines():
            if is_summary_line(line):
                kept.append(line)
                parsed = parse_summary_counts(line)
                if parsed is not None:
                    summary_counts = parsed
            elif _ERROR_KEYWORD in line:
                error_count += 1
                kept.append(line)
            elif _WARNING_KEYWORD in line:
                warning_count += 1
                kept.append(line)

        if summary_counts is not None:
            error_count, warning_count = summary_counts

        return FileLintResult(
            raw_output=raw_output,
            error_count=error_count,
            warning_count=warning_count,
            diagnostic_text="\n".join(kept),
        )


_default_parser = StylishOutputParser()


def parse_lint_output(raw_output: str) -> FileLintResult:
    """Parse one file's linter output with the default stylish parser."""
    return _default_parser.parse(raw_output)
