import logging

import pytest

from wadl_segment.logger import configure_logging


@pytest.fixture
def clean_logger():
    logger = logging.getLogger("wadl_segment")
    original_handlers = logger.handlers[:]
    original_level = logger.level

    logger.handlers = []
    yield logger

    for handler in logger.handlers:
        handler.close()
    logger.handlers = original_handlers
    logger.setLevel(original_level)


class TestConfigureLogging:
    def test_console_handler(self, clean_logger):
        configure_logging()
        assert len(clean_logger.handlers) == 1
        assert isinstance(clean_logger.handlers[0], logging.StreamHandler)
        assert clean_logger.level == logging.WARNING

    def test_level(self, clean_logger):
        configure_logging("DEBUG")
        assert clean_logger.level == logging.DEBUG

    def test_file_handler(self, clean_logger, tmp_path):
        log_file = tmp_path / "wadl.log"
        configure_logging("INFO", str(log_file))
        file_handlers = [h for h in clean_logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1

        logging.getLogger("wadl_segment.segment.path_segment").info("hello")
        file_handlers[0].flush()
        assert "INFO - hello" in log_file.read_text(encoding="utf-8")

    def test_repeated_calls_do_not_stack(self, clean_logger):
        configure_logging()
        configure_logging()
        assert len(clean_logger.handlers) == 1

    def test_root_logger_unaffected(self, clean_logger):
        root_logger = logging.getLogger()
        original_root_handlers = root_logger.handlers[:]
        original_root_level = root_logger.level

        configure_logging("DEBUG")

        assert root_logger.handlers == original_root_handlers
        assert root_logger.level == original_root_level
