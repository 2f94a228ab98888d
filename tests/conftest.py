from unittest.mock import MagicMock

import pytest

from litespring.config.settings import Settings
from litespring.shared.logger import StructuredLogger


@pytest.fixture
def fake_logger():
    """Logger double so tests can assert on what the framework reports."""
    return MagicMock()


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def clean_logger_cache():
    StructuredLogger.clear_cache()
    yield
    StructuredLogger.clear_cache()
