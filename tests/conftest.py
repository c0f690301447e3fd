"""Pytest configuration helpers for test collection.

Ensure the project root is on sys.path so tests can import the package
without requiring PYTHONPATH to be set externally.
"""
import sys
from pathlib import Path

import pytest


def pytest_configure(config):
    # Insert repo root (one level up from tests/) to sys.path
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root))


@pytest.fixture
def recording_logger():
    from tests.helpers import RecordingLogger
    return RecordingLogger()


@pytest.fixture
def store_config(recording_logger):
    from securestore_lib.config import StoreConfig
    cfg = StoreConfig()
    cfg.configure(logger=recording_logger, chunk_size=4)
    return cfg
