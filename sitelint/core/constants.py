"""
Constants
Centralised storage for fixed directory names, linter flags, and report formats.
"""
WWW_DIR = "www"

# U+2716 HEAVY MULTIPLICATION X, prefix of the linter's own summary line
SUMMARY_MARKER = "✖"

NO_COLOR_FLAG = "--no-color"
RULE_FLAG = "--rule"
UNDEFINED_VARIABLE_RULE = "no-undef:error"
CONFIG_FLAG = "--config"
FIX_FLAG = "--fix"

REPORT_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
RUN_LOG_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
REPORT_EXTENSION = ".txt"

MODE_SINGLE = "1"
MODE_BULK = "2"
MODE_LABELS = {
    MODE_SINGLE: "single website",
    MODE_BULK: "websites folder",
}
