"""Response class."""

import json
from typing import Any, Self

from pyreqchain.exceptions import DecodingError
from pyreqchain.logging import get_logger
from pyreqchain.transport.types import TransportReply

logger = get_logger(__name__)


class Response:
    """Result of a call, decoded from a transport reply or built by a middleware.

    A `status_code` of 0 means the response was never populated, usually because the transport failed.
    """

    def __init__(
        self,
        status_code: int = 0,
        status_message: str = "",
        body: Any = "",
        headers: dict[str, str] | None = None,
        *,
        json_content: bool = False,
        raw: TransportReply | None = None,
    ) -> None:
        self.status_code = status_code
        self.status_message = status_message
        self.body = body
        self.headers: dict[str, str] = headers if headers is not None else {}
        self.json_content = json_content
        self.raw = raw
        self.extensions: dict[str, Any] = {}

    @classmethod
    def ok(cls, body: Any) -> Self:
        """Build a successful response, as used by middleware answering on their own."""
        return cls(200, "OK", body, json_content=True)

    @classmethod
    def from_transport(cls, error: Exception | None, reply: TransportReply | None, body: Any = None) -> Self:
        """Normalize the outcome of a transport call.

        A transport error is logged and yields an unpopulated response.

        Raises:
            DecodingError: The reply declares JSON content but the text body does not parse.
        """
        response = cls(raw=reply)
        if error is not None or reply is None:
            logger.warning("transport_error", error=repr(error), url=reply.url if reply else None)
            return response

        response.status_code = reply.status
        response.status_message = reply.reason
        response.headers = dict(reply.headers)
        response.body = body

        if _is_json(reply.headers) and isinstance(body, str):
            try:
                response.body = json.loads(body)
            except json.JSONDecodeError as exc:
                raise DecodingError(reply.url) from exc
            response.json_content = True
        return response

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 400

    @property
    def status(self) -> str:
        """Status line, `"200: OK"` style, or only the message when no status code is set."""
        if self.status_code:
            return f"{self.status_code}: {self.status_message}"
        return self.status_message

    def __repr__(self) -> str:
        return f"<Response {self.status}>"


def _is_json(headers: dict[str, str]) -> bool:
    for name, value in headers.items():
        if name.lower() == "content-type":
            mime = value.split(";", 1)[0].strip().lower()
            return mime == "application/json" or mime.endswith("+json")
    return False


__all__ = [
    "Response",
]
