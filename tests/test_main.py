"""Command line and logging setup tests."""
import logging

import pytest

from lucky_slots.config import Config
from lucky_slots.main import PACKAGE_LOGGER_NAME, configure_logging, parse_args
from lucky_slots.scheduler import Scheduler, tick_scheduler
from lucky_slots.slot_machine import create_slot_machine, spin


@pytest.fixture
def package_logger():
    """Package logger with its handlers and level restored after the test."""
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    saved_handlers = list(package_logger.handlers)
    saved_level = package_logger.level

    yield package_logger

    for handler in package_logger.handlers:
        if handler not in saved_handlers:
            handler.close()
    package_logger.handlers = saved_handlers
    package_logger.setLevel(saved_level)


def _flush(logger: logging.Logger) -> None:
    for handler in logger.handlers:
        handler.flush()


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])

        assert args.seed is None
        assert args.fps == Config().fps
        assert args.log_file is None
        assert args.log_level == "INFO"

    def test_all_flags(self):
        args = parse_args(
            ["--seed", "42", "--fps", "60", "--log-file", "slots.log", "--log-level", "DEBUG"]
        )

        assert args.seed == 42
        assert args.fps == 60.0
        assert args.log_file == "slots.log"
        assert args.log_level == "DEBUG"

    def test_unknown_log_level_is_rejected(self):
        with pytest.raises(SystemExit):
            parse_args(["--log-level", "VERBOSE"])

    def test_seed_must_be_an_integer(self):
        with pytest.raises(SystemExit):
            parse_args(["--seed", "abc"])


class TestConfigureLogging:
    def test_without_log_file_adds_null_handler(self, package_logger):
        configure_logging(None, "INFO")

        assert any(isinstance(h, logging.NullHandler) for h in package_logger.handlers)
        assert not any(isinstance(h, logging.FileHandler) for h in package_logger.handlers)

    def test_log_file_receives_module_records(self, package_logger, tmp_path):
        log_file = tmp_path / "slots.log"

        configure_logging(str(log_file), "DEBUG")
        machine = create_slot_machine()
        scheduler = Scheduler()
        spin(machine, scheduler, _AlwaysOne())
        tick_scheduler(scheduler, 1.0)
        _flush(package_logger)

        contents = log_file.read_text()
        assert "DEBUG lucky_slots.slot_machine: Spin started, 950 credits left" in contents
        assert "Spin resolved" in contents

    def test_log_level_filters_records(self, package_logger, tmp_path):
        log_file = tmp_path / "slots.log"

        configure_logging(str(log_file), "INFO")
        logging.getLogger(f"{PACKAGE_LOGGER_NAME}.slot_machine").debug("hidden")
        logging.getLogger(f"{PACKAGE_LOGGER_NAME}.slot_machine").info("shown")
        _flush(package_logger)

        contents = log_file.read_text()
        assert "shown" in contents
        assert "hidden" not in contents


class _AlwaysOne:
    def randint(self, a: int, b: int) -> int:
        return 1
