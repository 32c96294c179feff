import logging

import pytest

from linearlab.logging_config import setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger("linearlab")
    yield logger
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def test_level_by_name_and_file(tmp_path, package_logger):
    log_file = tmp_path / "app.log"
    setup_logging(level="debug", log_file=str(log_file))

    assert package_logger.level == logging.DEBUG
    assert len(package_logger.handlers) == 2

    logging.getLogger("linearlab.tests").debug("hello from the test")
    for handler in package_logger.handlers:
        handler.flush()
    assert "hello from the test" in log_file.read_text(encoding="utf-8")

    for handler in list(package_logger.handlers):
        handler.close()
        package_logger.removeHandler(handler)

    setup_logging(level=logging.WARNING)
    assert len(package_logger.handlers) == 1
    assert package_logger.level == logging.WARNING
    assert logging.getLogger("httpx").level == logging.WARNING


def test_unknown_level_name_falls_back_to_info(package_logger):
    setup_logging(level="chatty")
    assert package_logger.level == logging.INFO
