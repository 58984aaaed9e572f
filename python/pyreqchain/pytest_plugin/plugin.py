import pytest

from .mock import http_mock  # load the http_mock fixture


def pytest_configure(config: pytest.Config) -> None:
    """Configure the pytest plugin."""
    config.addinivalue_line(
        "markers",
        "pyreqchain: mark test to use pyreqchain HTTP client mocking"
    )
