"""
Shared test fixtures and configuration for scribedb tests.
"""
import logging
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from scribedb import create_app
from scribedb.config import Config
from scribedb.storage.json_store import JsonStore, Options


@pytest.fixture
def temp_data_dir(tmp_path: Path) -> Path:
    """Create a temporary data directory for JsonStore tests."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def test_logger() -> logging.Logger:
    """A plain logger so caplog can observe store messages."""
    logger = logging.getLogger("scribedb.tests")
    logger.setLevel(logging.DEBUG)
    return logger


@pytest.fixture
def json_store(temp_data_dir: Path, test_logger: logging.Logger) -> JsonStore:
    """Create a JsonStore instance with temporary directory."""
    return JsonStore(str(temp_data_dir), Options(logger=test_logger))


@pytest.fixture
def app(tmp_path: Path) -> Flask:
    """Create and configure a test Flask application backed by a temp store."""

    class TestConfig(Config):
        TESTING = True
        DATA_DIR = tmp_path / "api-data"
        LOG_LEVEL = "WARNING"

    app = create_app(TestConfig)
    yield app


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create a Flask test client."""
    return app.test_client()

