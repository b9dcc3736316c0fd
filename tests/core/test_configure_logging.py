import logging

import pytest

from seo_shell.core.utils.configure_logging import LogWithTqdm, configure_logger


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_logger_installs_tqdm_handler(restore_root_logger):
    configure_logger("debug")
    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], LogWithTqdm)


def test_configure_logger_module_levels(restore_root_logger):
    configure_logger(
        "INFO",
        module_specific_levels={"levels_test.module": "ERROR"},
        silenced_loggers={"noisy.lib": None}
    )
    assert logging.getLogger("levels_test.module").level == logging.ERROR
    assert logging.getLogger("noisy.lib").level == logging.CRITICAL


def test_log_with_tqdm_writes_to_stderr(restore_root_logger, capsys):
    configure_logger("WARNING")
    logging.getLogger("stderr_test.module").warning("let op")
    assert "let op" in capsys.readouterr().err
