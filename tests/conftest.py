import logging

import pytest


@pytest.fixture(autouse=True)
def restore_package_logger():
    """CLI runs attach handlers bound to CliRunner streams; drop them afterwards."""
    logger = logging.getLogger("wadl_segment")
    original_handlers = logger.handlers[:]
    original_level = logger.level
    yield
    for handler in logger.handlers:
        if handler not in original_handlers:
            handler.close()
    logger.handlers = original_handlers
    logger.setLevel(original_level)
