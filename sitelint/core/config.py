"""
Configuration
=============
Loads environment variables from .env file using python-dotenv.

Environment Variables:
    LINTER_COMMAND        — Linter entry point, split shell-style (default: npx eslint)
    ESLINT_CONFIG_FILE    — Config file passed to the linter in bulk mode (default: .eslintrc.json)
    LINT_TIMEOUT_SECONDS  — Max seconds a single file invocation may run (default: 120)
    LINT_EXTENSIONS       — Comma-separated lintable extensions (default: .js)
    RESERVED_SUBDIR       — Template-fragment directory under www (default: cms/includes)
    INLINE_PREFIX         — Filename prefix re-included from RESERVED_SUBDIR (default: inline_)
    REPORTS_DIR           — Directory receiving per-site reports (default: lint_reports)
    RUN_LOG_FILE          — Append-only run log, one line per run (default: lint_runs.log)
    WEBSITES_PATH         — Default folder of website roots for bulk mode (default: unset)
    LOG_LEVEL             — Diagnostic log level (default: INFO)
    LOG_DIR               — Diagnostic log directory (default: logs)

Timeout Philosophy:
    The linter is an external process that may hang on a pathological file.
    LINT_TIMEOUT_SECONDS bounds each invocation so one file cannot stall the
    whole run. The timed-out file is reported and the run moves on.
"""
import os
from dotenv import load_dotenv

load_dotenv()

LINTER_COMMAND = os.getenv("LINTER_COMMAND", "npx eslint")
ESLINT_CONFIG_FILE = os.getenv("ESLINT_CONFIG_FILE", ".eslintrc.json")
LINT_TIMEOUT_SECONDS = float(os.getenv("LINT_TIMEOUT_SECONDS", 120))

LINT_EXTENSIONS: tuple[str, ...] = tuple(
    ext.strip().lower()
    for ext in os.getenv("LINT_EXTENSIONS", ".js").split(",")
    if ext.strip()
)

# File selection override
RESERVED_SUBDIR = os.getenv("RESERVED_SUBDIR", "cms/includes")
INLINE_PREFIX = os.getenv("INLINE_PREFIX", "inline_")

# Output artifacts
REPORTS_DIR = os.getenv("REPORTS_DIR", "lint_reports")
RUN_LOG_FILE = os.getenv("RUN_LOG_FILE", "lint_runs.log")

# Bulk mode fallback when the operator leaves the path prompt blank
WEBSITES_PATH = os.getenv("WEBSITES_PATH", "")

# Diagnostics
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "logs")
