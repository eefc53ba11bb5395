"""Root pytest configuration for all tests."""

import logging

import pytest

from src.content_converter import MarkdownConverter


@pytest.fixture
def converter():
    """Create MarkdownConverter with default options."""
    return MarkdownConverter()


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Drop handlers the CLI attaches to the 'src' logger between tests."""
    yield
    app_logger = logging.getLogger("src")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.setLevel(logging.NOTSET)
