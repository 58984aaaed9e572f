"""Module providing HTTP request mocking capabilities for pyreqchain clients in tests."""

import re
from collections.abc import Callable, Generator
from contextlib import contextmanager
from typing import NoReturn

import pytest

from pyreqchain.client import HttpClient, http
from pyreqchain.exceptions import TooFewRequestsError, TooManyRequestsError
from pyreqchain.middleware import Context, Next
from pyreqchain.request import Request
from pyreqchain.response import Response
from pyreqchain.types import MethodsMatcher, UrlMatcher


class PendingRequest:
    """A request held by the mock until the test answers it."""

    def __init__(self, request: Request, answer: Callable[[Response], None]) -> None:
        self.request = request
        self.answer = answer
        self.viewed = False

    def __repr__(self) -> str:
        return f"<PendingRequest {self.request.method} {self.request.url} viewed={self.viewed}>"


class HttpClientMock:
    """Middleware holding every request that reaches it until the test answers it.

    Install it into `root_middleware.after` so it sits right in front of the transport. The call stays pending until
    `answer` of its ledger entry is called, all other middleware of the call still see the answer.
    """

    def __init__(self) -> None:
        self.requests: list[PendingRequest] = []

    def __call__(self, request: Request, response: Response | None, context: Context, next_handler: Next) -> None:
        if response is not None:
            next_handler.answer(response)
            return
        self.requests.append(PendingRequest(request, next_handler.answer))

    @contextmanager
    def installed(self, client: HttpClient) -> Generator["HttpClientMock"]:
        """Attach the mock to the client's root middleware for the duration of the block."""
        client.root_middleware.after.append(self)
        try:
            yield self
        finally:
            client.root_middleware.after.remove(self)

    def flush(self) -> None:
        """Forget all recorded requests."""
        self.requests.clear()

    def expect_requests(
        self,
        methods: MethodsMatcher,
        url: UrlMatcher,
        min_count: int = 0,
        max_count: int | None = None,
    ) -> list[PendingRequest]:
        """Get the recorded requests matching the methods and the URL, marking them viewed.

        An empty `methods` matches any method. A string `url` matches as a substring, a compiled pattern is searched.

        Raises:
            TooManyRequestsError: More than `max_count` requests matched.
            TooFewRequestsError: Fewer than `min_count` requests matched.
        """
        wanted = {method.upper() for method in ([methods] if isinstance(methods, str) else methods) if method}
        items = [
            item
            for item in self.requests
            if (not wanted or item.request.method.upper() in wanted) and _matches_url(url, item.request.url)
        ]
        for item in items:
            item.viewed = True

        count = len(items)
        if max_count is not None and count > max_count:
            self._fail(TooManyRequestsError, "More items than it should be", wanted, url, count, min_count, max_count)
        if count < min_count:
            self._fail(TooFewRequestsError, "Elements less than it should be", wanted, url, count, min_count, max_count)
        return items

    def expect_one(self, methods_or_url: MethodsMatcher | UrlMatcher, url: UrlMatcher | None = None) -> PendingRequest:
        """Expect exactly one matching request and return it.

        Call as `expect_one(url)` or `expect_one(methods, url)`.
        """
        methods, url = _split_args(methods_or_url, url)
        return self.expect_requests(methods, url, 1, 1)[0]

    def expect_none(self, methods_or_url: MethodsMatcher | UrlMatcher = "", url: UrlMatcher | None = None) -> None:
        """Expect no matching request. Call as `expect_none(url)` or `expect_none(methods, url)`."""
        methods, url = _split_args(methods_or_url, url)
        self.expect_requests(methods, url, 0, 0)

    def expect_no_requests(self) -> None:
        """Expect that no request was recorded at all."""
        if self.requests:
            self._fail(TooManyRequestsError, "More items than it should be", set(), "", len(self.requests), 0, 0)

    def _fail(
        self,
        error: type[AssertionError],
        summary: str,
        methods: set[str],
        url: UrlMatcher,
        count: int,
        min_count: int,
        max_count: int | None,
    ) -> NoReturn:
        from pyreqchain.pytest_plugin.internal import format_expectation_error

        raise error(format_expectation_error(self, summary, methods, url, count, min_count, max_count))


def _split_args(
    methods_or_url: MethodsMatcher | UrlMatcher, url: UrlMatcher | None
) -> tuple[MethodsMatcher, UrlMatcher]:
    if url is None:
        if not isinstance(methods_or_url, str | re.Pattern):
            raise TypeError(f"URL must be a string or a compiled pattern, got {methods_or_url!r}")
        return [], methods_or_url
    if isinstance(methods_or_url, re.Pattern):
        raise TypeError("Methods can not be a pattern")
    return methods_or_url, url


def _matches_url(matcher: UrlMatcher, url: str) -> bool:
    if isinstance(matcher, re.Pattern):
        return matcher.search(url) is not None
    return matcher in url


@pytest.fixture
def http_mock() -> Generator[HttpClientMock]:
    """Fixture that holds all requests of the default `http` client for the duration of the test."""
    mock = HttpClientMock()
    with mock.installed(http):
        yield mock
