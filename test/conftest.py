"""
Test Configuration

Environment setup MUST happen before any application import: settings and the
loguru sinks are built at import time.
"""

import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Point file logging at test/test_log and pin settings that tests rely on."""
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ.setdefault('DEBUG', 'true')
    os.environ['OTEL_EXPORTER_OTLP_ENDPOINT'] = ''
    os.environ['OTEL_CONSOLE_EXPORT'] = 'false'
    os.environ['HTTP_RETRY_BACKOFF_SECONDS'] = '0'


# Call immediately to set env vars before any imports
_early_setup_test_environment()

import pytest  # noqa: E402


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Tests without an explicit marker run as unit tests."""
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers and 'integration' not in markers:
            item.add_marker(pytest.mark.unit)
