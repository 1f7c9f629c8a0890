"""
Lint Result Models
==================
Pydantic models carried between the pipeline stages.

    FileLintResult  — one linter invocation, parsed (Parser → Aggregator)
    SiteLintResult  — all files of one website, folded (Aggregator → Report Writer)
    RunSummary      — all sites of one run (Aggregator → Run Log)

FileLintResult is frozen once the parser builds it. SiteLintResult is
filled in discovery order by the aggregator and only read afterwards.
"""
from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class FileLintResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    raw_output: str = ""
    error_count: int = Field(default=0, ge=0)
    warning_count: int = Field(default=0, ge=0)
    diagnostic_text: str = ""

    @property
    def has_issues(self) -> bool:
        return self.error_count > 0 or self.warning_count > 0


class SiteLintResult(BaseModel):
    site_name: str
    combined_report_text: str = ""
    total_errors: int = 0
    total_warnings: int = 0
    files_linted: int = 0
    files_with_issues: List[str] = []

    @property
    def has_issues(self) -> bool:
        return self.total_errors > 0 or self.total_warnings > 0


class RunSummary(BaseModel):
    sites_processed: int = 0
    total_errors: int = 0
    total_warnings: int = 0
    timestamp: datetime
