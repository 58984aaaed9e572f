"""Request class."""

from datetime import timedelta
from typing import Any, Self

from pyreqchain.proxy import ProxyAgent
from pyreqchain.types import HeadersType


class Request:
    """Mutable HTTP request passed through the middleware pipeline.

    Middleware receive the request by reference and may modify it in place before passing it on.
    Use `extensions` to attach per-call data, for example a correlation id.
    """

    def __init__(
        self,
        method: str,
        url: str,
        *,
        headers: HeadersType | None = None,
        body: Any | None = None,
        json_body: bool = False,
        timeout: timedelta | None = None,
        agent: ProxyAgent | None = None,
        extensions: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> None:
        self.method = method.upper()
        self.url = url
        self.headers: dict[str, str] = dict(headers or {})
        self.body = body
        self.json_body = json_body
        self.timeout = timeout
        self.agent = agent
        self.extensions: dict[str, Any] = dict(extensions or {})
        self.options: dict[str, Any] = dict(options or {})

    def copy(self) -> Self:
        """Copy the request. Headers, extensions and options are copied, the body is shared."""
        return type(self)(
            self.method,
            self.url,
            headers=self.headers,
            body=self.body,
            json_body=self.json_body,
            timeout=self.timeout,
            agent=self.agent,
            extensions=self.extensions,
            options=self.options,
        )

    def header(self, name: str) -> str | None:
        """Get a header value, matching the name case-insensitively."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None

    def __repr__(self) -> str:
        return f"<Request {self.method} {self.url}>"


__all__ = [
    "Request",
]
