"""
Linter Invoker
==============
Runs the external linter against one file and returns its raw output.

BOUNDARY RULES:
    - Invoker ONLY observes the linter.
    - Invoker NEVER interprets the report. Parsing belongs to the Parser.
    - Invoker NEVER acts on the exit code; the linter exits non-zero
      whenever it reports anything.

STREAM HANDLING:
    Both pipes are drained with communicate() before the exit status is
    read. Waiting on the process first can deadlock once a bounded pipe
    buffer fills up.

FAILURE SEMANTICS:
    - Non-empty stderr is surfaced to the operator, stdout is still returned.
    - Launch failure (binary missing, permission denied) raises
      LinterLaunchError for this file only.
    - Timeout kills the process and returns an empty, timed_out result.
"""
import asyncio
import logging
import shlex
from dataclasses import dataclass
from typing import List, Optional

from sitelint.core.config import ESLINT_CONFIG_FILE, LINT_TIMEOUT_SECONDS, LINTER_COMMAND
from sitelint.core.constants import (
    CONFIG_FLAG,
    FIX_FLAG,
    NO_COLOR_FLAG,
    RULE_FLAG,
    UNDEFINED_VARIABLE_RULE,
)
from sitelint.core.errors import LinterLaunchError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Invocation Result (returned to the site linter / Parser)
# ---------------------------------------------------------------------------
@dataclass
class LinterInvocation:
    """
    Raw output of one linter run against one file.

    Fields
    ------
    file_path : str
        The file that was linted.
    stdout : str
        Full standard output, the input for the Parser.
    stderr : str
        Full standard error. Non-empty means the linter complained about
        itself (bad config, crash), not about the file.
    exit_code : int | None
        Process exit code, informational only. None if the run timed out.
    timed_out : bool
        True if the process was killed after exceeding the timeout.
    """
    file_path: str
    stdout: str = ""
    stderr: str = ""
    exit_code: Optional[int] = None
    timed_out: bool = False


def build_command(
    file_path: str,
    linter_command: str = LINTER_COMMAND,
    config_file: Optional[str] = None,
    fix: bool = False,
) -> List[str]:
    """
    Build the deterministic argument list for one file.

    Single-site mode passes no config_file and fix=False. Bulk mode passes
    the shared config file and enables auto-fix.
    """
    command = shlex.split(linter_command)
    command += [file_path, NO_COLOR_FLAG, RULE_FLAG, UNDEFINED_VARIABLE_RULE]
    if config_file:
        command += [CONFIG_FLAG, config_file]
    if fix:
        command.append(FIX_FLAG)
    return command


def _decode(data: Optional[bytes]) -> str:
    return data.decode("utf-8", errors="replace") if data else ""


class LinterInvoker:
    """
    Launches the linter once per file, sequentially.

    Holds the invocation settings for a run so the site linter only has to
    pass file paths.
    """

    def __init__(
        self,
        linter_command: str = LINTER_COMMAND,
        config_file: Optional[str] = None,
        fix: bool = False,
        timeout_seconds: float = LINT_TIMEOUT_SECONDS,
    ) -> None:
        self.linter_command = linter_command
        self.config_file = config_file
        self.fix = fix
        self.timeout_seconds = timeout_seconds

    @classmethod
    def for_bulk_mode(cls, config_file: str = ESLINT_CONFIG_FILE, **kwargs) -> "LinterInvoker":
        return cls(config_file=config_file, fix=True, **kwargs)

    async def lint_file(self, file_path: str) -> LinterInvocation:
        """
        Run the linter against file_path and capture both streams.

        Raises
        ------
        LinterLaunchError
            If the linter process cannot be started.
        """
        command = build_command(file_path, self.linter_command, self.config_file, self.fix)
        logger.debug("Running: %s", shlex.join(command))

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            # FileNotFoundError, PermissionError and friends
            raise LinterLaunchError(file_path, command, exc) from exc

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(), timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError:
            logger.warning("Linter timed out after %ss on %s", self.timeout_seconds, file_path)
            try:
                process.kill()
            except ProcessLookupError:
                # Exited between the timeout and the kill
                pass
            await process.wait()
            return LinterInvocation(file_path=file_path, timed_out=True)

        result = LinterInvocation(
            file_path=file_path,
            stdout=_decode(stdout),
            stderr=_decode(stderr),
            exit_code=process.returncode,
        )
        if result.stderr.strip():
            logger.warning("Linter wrote to stderr for %s: %s", file_path, result.stderr.strip())
        return result
