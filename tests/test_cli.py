"""
Unit Tests — CLI
================
Prompt handling, path validation and top-level error handling.
The pipeline itself is patched out; logging setup is stubbed unless a test
exercises it.
"""
import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from sitelint import cli
from sitelint.executor.linter_invoker import LinterInvoker
from sitelint.utils.logging_config import setup_logging


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda level: "sitelint.log")


def _answers(*values):
    it = iter(values)
    return lambda _prompt: next(it)


class TestPrompts:

    def test_mode_reprompts_until_valid(self):
        messages = []
        mode = cli.prompt_mode(_answers("3", "abc", "", " 2 "), messages.append)
        assert mode == "2"
        assert messages.count("Invalid choice. Please enter 1 or 2.") == 3

    def test_single_path_prompt(self):
        assert cli.prompt_path("1", _answers("  /srv/site  ")) == "/srv/site"

    def test_bulk_blank_path_falls_back_to_websites_path(self, monkeypatch):
        monkeypatch.setattr(cli, "WEBSITES_PATH", "/srv/inetpub")
        assert cli.prompt_path("2", _answers("")) == "/srv/inetpub"


class TestCreateSiteLinter:

    def test_bulk_mode_uses_config_and_fix(self):
        linter = cli.create_site_linter("2", print)
        assert linter.invoker.fix is True
        assert linter.invoker.config_file

    def test_single_mode_plain_arguments(self):
        linter = cli.create_site_linter("1", print)
        assert linter.invoker.fix is False
        assert linter.invoker.config_file is None


class TestMain:

    def test_invalid_path_exits_cleanly(self, tmp_path):
        messages = []
        code = cli.main(["--mode", "1", "--path", str(tmp_path / "missing")],
                        input_func=_answers(), output=messages.append)
        assert code == 1
        assert messages[-1].startswith("Invalid path")

    def test_blank_path_from_prompt(self, monkeypatch):
        monkeypatch.setattr(cli, "WEBSITES_PATH", "")
        messages = []
        code = cli.main([], input_func=_answers("2", ""), output=messages.append)
        assert code == 1
        assert messages[-1].startswith("No path provided")

    def test_successful_run(self, tmp_path):
        fake = MagicMock()
        fake.run = AsyncMock()
        with patch.object(cli, "create_site_linter", return_value=fake) as factory:
            code = cli.main([], input_func=_answers("1", str(tmp_path)), output=lambda _m: None)
        assert code == 0
        factory.assert_called_once()
        fake.run.assert_awaited_once_with("1", str(tmp_path))

    def test_unexpected_error_is_caught(self, tmp_path):
        fake = MagicMock()
        fake.run = AsyncMock(side_effect=RuntimeError("boom"))
        messages = []
        with patch.object(cli, "create_site_linter", return_value=fake):
            code = cli.main(["--mode", "2", "--path", str(tmp_path)],
                            input_func=_answers(), output=messages.append)
        assert code == 1
        assert messages[-1] == "An unexpected error occurred: boom"

    def test_keyboard_interrupt(self):
        def interrupt(_prompt):
            raise KeyboardInterrupt

        messages = []
        code = cli.main([], input_func=interrupt, output=messages.append)
        assert code == 130
        assert messages == ["Interrupted."]

    def test_bad_mode_flag_rejected_by_argparse(self):
        with pytest.raises(SystemExit):
            cli.main(["--mode", "7"])

    def test_real_invoker_type(self):
        assert isinstance(cli.create_site_linter("1", print).invoker, LinterInvoker)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)


class TestLoggingSetupFailures:

    def test_log_dir_is_a_file_falls_back_to_console(self, tmp_path, monkeypatch,
                                                     restore_root_logger):
        blocker = tmp_path / "logs"
        blocker.write_text("not a directory")
        monkeypatch.setattr(
            cli, "setup_logging",
            lambda level: setup_logging(level=level, log_dir=str(blocker)),
        )
        fake = MagicMock()
        fake.run = AsyncMock()
        messages = []

        with patch.object(cli, "create_site_linter", return_value=fake):
            code = cli.main(["--mode", "1", "--path", str(tmp_path)],
                            input_func=_answers(), output=messages.append)

        assert code == 0
        assert any("console only" in m for m in messages)
        fake.run.assert_awaited_once_with("1", str(tmp_path))

    def test_logging_setup_error_is_caught(self, tmp_path, monkeypatch):
        def broken(level):
            raise RuntimeError("handler exploded")

        monkeypatch.setattr(cli, "setup_logging", broken)
        messages = []
        code = cli.main(["--mode", "1", "--path", str(tmp_path)],
                        input_func=_answers(), output=messages.append)
        assert code == 1
        assert messages[-1] == "An unexpected error occurred: handler exploded"
