"""
Command Line Interface
======================
Interactive operator surface for a lint run.

    1. Ask for the mode: 1 (single website root) or 2 (folder of website roots)
    2. Ask for the path to lint
    3. Run the pipeline, print progress and totals

--mode and --path skip the matching prompt so the tool can be scheduled.

Exit codes:
    0   run completed (issues found or not)
    1   invalid path or unexpected error
    130 interrupted by the operator
"""
import argparse
import asyncio
import logging
from typing import Callable, List, Optional

from sitelint.core.config import ESLINT_CONFIG_FILE, LOG_DIR, LOG_LEVEL, WEBSITES_PATH
from sitelint.core.constants import MODE_BULK, MODE_LABELS, MODE_SINGLE
from sitelint.core.errors import InvalidPathError
from sitelint.executor.linter_invoker import LinterInvoker
from sitelint.services.site_linter import SiteLinter
from sitelint.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

_MODE_PROMPT = (
    "Select mode:\n"
    f"  {MODE_SINGLE}) Lint a single website root\n"
    f"  {MODE_BULK}) Lint a folder containing multiple website roots\n"
    "Enter 1 or 2: "
)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sitelint",
        description="Run ESLint over every website's www folder and write per-site reports.",
    )
    parser.add_argument("--mode", choices=[MODE_SINGLE, MODE_BULK],
                        help="1 = single website root, 2 = folder of website roots")
    parser.add_argument("--path", help="path to lint (skips the prompt)")
    parser.add_argument("--log-level", default=LOG_LEVEL,
                        help="diagnostic log level (default: %(default)s)")
    return parser


def prompt_mode(input_func: Callable[[str], str], output: Callable[[str], None]) -> str:
    """Ask until the operator picks a valid mode."""
    while True:
        choice = input_func(_MODE_PROMPT).strip()
        if choice in (MODE_SINGLE, MODE_BULK):
            return choice
        output("Invalid choice. Please enter 1 or 2.")


def prompt_path(mode: str, input_func: Callable[[str], str]) -> str:
    if mode == MODE_SINGLE:
        return input_func("Enter the path of the website root: ").strip()

    hint = f" [{WEBSITES_PATH}]" if WEBSITES_PATH else ""
    answer = input_func(f"Enter the path of the folder containing the websites{hint}: ").strip()
    return answer or WEBSITES_PATH


def create_site_linter(mode: str, output: Callable[[str], None]) -> SiteLinter:
    if mode == MODE_BULK:
        invoker = LinterInvoker.for_bulk_mode(config_file=ESLINT_CONFIG_FILE)
    else:
        invoker = LinterInvoker()
    return SiteLinter(invoker=invoker, output=output)


def main(
    argv: Optional[List[str]] = None,
    input_func: Callable[[str], str] = input,
    output: Callable[[str], None] = print,
) -> int:
    args = build_arg_parser().parse_args(argv)

    try:
        if setup_logging(level=args.log_level) is None:
            output(f"Could not open the log directory '{LOG_DIR}', logging to the console only.")

        mode = args.mode or prompt_mode(input_func, output)
        path = args.path if args.path is not None else prompt_path(mode, input_func)
        logger.info("Starting %s run on %r", MODE_LABELS[mode], path)

        site_linter = create_site_linter(mode, output)
        asyncio.run(site_linter.run(mode, path))
        return 0
    except InvalidPathError as e:
        output(f"{e}. Please provide a valid directory.")
        return 1
    except KeyboardInterrupt:
        output("Interrupted.")
        return 130
    except Exception as e:
        logger.exception("Unexpected error during lint run")
        output(f"An unexpected error occurred: {e}")
        return 1
