"""pyreqchain pytest plugin for HTTP client mocking."""

from .mock import HttpClientMock, PendingRequest, http_mock

__all__ = [  # noqa: RUF022
    "http_mock",
    "HttpClientMock",
    "PendingRequest",
]
