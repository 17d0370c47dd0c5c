import logging

import pytest


@pytest.fixture
def restore_logging():
    """Put back the root and API logger handlers replaced by AppLogger."""
    root_logger = logging.getLogger()
    api_logger = logging.getLogger('wallet.api')
    root_handlers = list(root_logger.handlers)
    root_level = root_logger.level
    yield
    for logger in (root_logger, api_logger):
        for handler in list(logger.handlers):
            if handler not in root_handlers:
                handler.close()
    root_logger.handlers[:] = root_handlers
    root_logger.setLevel(root_level)
    api_logger.handlers.clear()
    api_logger.propagate = True
