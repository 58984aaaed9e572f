"""Transports performing the network call at the end of the pipeline."""

from collections.abc import Callable
from http import HTTPStatus
from typing import Any

from pyreqwest.client import Client, ClientBuilder
from pyreqwest.proxy import ProxyBuilder

from pyreqchain.exceptions import TransportError
from pyreqchain.logging import get_logger
from pyreqchain.proxy import ProxyAgent
from pyreqchain.request import Request
from pyreqchain.transport.types import Transport, TransportReply

logger = get_logger(__name__)

_TEXT_MIME_SUFFIXES = ("json", "xml", "javascript", "x-www-form-urlencoded")

ClientFactory = Callable[[ProxyAgent | None], Client]


def build_client(agent: ProxyAgent | None) -> Client:
    """Build a pyreqwest client routing its traffic through the given agent."""
    builder = ClientBuilder()
    if agent is not None:
        if agent.flavor == "http":
            proxy = ProxyBuilder.http(agent.url)
        elif agent.flavor == "https":
            proxy = ProxyBuilder.https(agent.url)
        else:
            proxy = ProxyBuilder.all(agent.url)
        builder = builder.proxy(proxy)
    return builder.build()


class PyreqwestTransport:
    """Transport sending requests with pyreqwest clients, one client per proxy agent."""

    def __init__(self, client_factory: ClientFactory = build_client) -> None:
        self._client_factory = client_factory
        self._clients: dict[ProxyAgent | None, Client] = {}

    async def send(self, request: Request) -> tuple[TransportReply, Any]:
        builder = self._client(request.agent).request(request.method, request.url)
        for name, value in request.headers.items():
            builder = builder.header(name, value)
        if request.timeout is not None:
            builder = builder.timeout(request.timeout)

        body = request.body
        if body is not None:
            if isinstance(body, str):
                builder = builder.body_text(body)
            elif isinstance(body, bytes | bytearray | memoryview):
                builder = builder.body_bytes(body)
            else:
                builder = builder.body_json(body)

        logger.debug("transport_send", method=request.method, url=request.url)
        try:
            response = await builder.build().send()
            headers = {name: value for name, value in response.headers.items()}
            if _is_text(headers):
                content: Any = await response.text()
            else:
                content = bytes(await response.bytes())
        except Exception as exc:
            raise TransportError(f"{request.method} {request.url} failed: {exc}") from exc

        reply = TransportReply(
            status=response.status,
            reason=_reason(response.status),
            headers=headers,
            url=request.url,
            raw=response,
        )
        return reply, content

    async def close(self) -> None:
        """Close all pyreqwest clients created so far."""
        clients = list(self._clients.values())
        self._clients.clear()
        for client in clients:
            await client.close()

    def _client(self, agent: ProxyAgent | None) -> Client:
        if (client := self._clients.get(agent)) is None:
            client = self._clients[agent] = self._client_factory(agent)
        return client


def _reason(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


def _is_text(headers: dict[str, str]) -> bool:
    content_type = next((value for name, value in headers.items() if name.lower() == "content-type"), "")
    mime = content_type.split(";", 1)[0].strip().lower()
    return mime.startswith("text/") or mime.endswith(_TEXT_MIME_SUFFIXES)


__all__ = [
    "PyreqwestTransport",
    "Transport",
    "TransportReply",
    "build_client",
]
