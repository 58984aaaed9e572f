import re

from pyreqchain.pytest_plugin.mock import HttpClientMock
from pyreqchain.types import UrlMatcher


def format_expectation_error(
    mock: HttpClientMock,
    summary: str,
    methods: set[str],
    url: UrlMatcher,
    count: int,
    min_count: int,
    max_count: int | None,
) -> str:
    error_parts = [summary + "."]

    if min_count == max_count:
        error_parts.append(f"Expected exactly {min_count} request(s), but got {count}.")
    else:
        expectations = [f"at least {min_count}"]
        if max_count is not None:
            expectations.append(f"at most {max_count}")
        error_parts.append(f"Expected {' and '.join(expectations)} request(s), but got {count}.")

    error_parts.append("\nExpectation:")
    error_parts.append(_format_methods(methods))
    error_parts.append(_format_url(url))

    if mock.requests:
        error_parts.append(f"\nRecorded requests ({len(mock.requests)}):")
        for i, item in enumerate(mock.requests[-5:], 1):
            error_parts.append(f"  {i}. {item.request.method} {item.request.url}{' (viewed)' if item.viewed else ''}")
        if len(mock.requests) > 5:
            error_parts.append(f"  ... and {len(mock.requests) - 5} more")
    else:
        error_parts.append("\nNo recorded requests")

    return "\n".join(error_parts)


def _format_methods(methods: set[str]) -> str:
    if not methods:
        return "  Method: Any"
    return f"  Method: {' or '.join(sorted(methods))}"


def _format_url(url: UrlMatcher) -> str:
    if isinstance(url, re.Pattern):
        return f"  URL: {url.pattern} (regex)"
    if not url:
        return "  URL: Any"
    return f"  URL: contains {url!r}"
