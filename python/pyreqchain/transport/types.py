"""Transport interface."""

from collections.abc import Mapping
from typing import Any, Protocol

from pyreqchain.request import Request


class TransportReply:
    """Status line and headers of a reply received by a transport."""

    def __init__(
        self,
        status: int,
        reason: str = "",
        headers: Mapping[str, str] | None = None,
        url: str | None = None,
        raw: Any = None,
    ) -> None:
        self.status = status
        self.reason = reason
        self.headers: dict[str, str] = dict(headers or {})
        self.url = url
        self.raw = raw

    def __repr__(self) -> str:
        return f"<TransportReply {self.status} {self.reason} {self.url}>"


class Transport(Protocol):
    """Performs the actual network call at the end of the pipeline."""

    async def send(self, request: Request) -> tuple[TransportReply, Any]:
        """Send the request and return the reply together with its body.

        Textual bodies are returned as `str`, anything else as `bytes`.

        Raises:
            TransportError: The request could not be completed.
        """
        ...
