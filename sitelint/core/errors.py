"""
Errors
======
Exception types raised across the lint pipeline.

    SiteLintError       — base class, caught once at the CLI's outermost scope
    InvalidPathError    — operator supplied a blank or missing path; run aborts
    LinterLaunchError   — the linter process could not be started for one file
"""


class SiteLintError(Exception):
    """Base class for all sitelint failures."""


class InvalidPathError(SiteLintError):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Invalid path: '{path}'" if path else "No path provided")


class LinterLaunchError(SiteLintError):
    """Raised when the linter subprocess cannot be started (missing binary, no permission)."""

    def __init__(self, file_path: str, command: list[str], cause: OSError) -> None:
        self.file_path = file_path
        self.command = command
        self.cause = cause
        super().__init__(f"Could not launch '{command[0]}' for {file_path}: {cause}")
