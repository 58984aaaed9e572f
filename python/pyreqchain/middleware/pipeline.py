"""Per-call pipeline wiring middleware between the caller and the transport.

Slots are addressed by index. Slot 0 resolves the caller's future, slots 1..N-2 wrap one middleware each and slot
N-1 performs the network call. Requests travel toward higher indexes (query phase), responses toward lower ones
(answer phase).
"""

import asyncio
from collections.abc import Sequence
from urllib.parse import urlencode

from pyreqchain.exceptions import TransportError
from pyreqchain.logging import get_logger
from pyreqchain.middleware.types import Context, Middleware
from pyreqchain.request import Request
from pyreqchain.response import Response
from pyreqchain.transport.types import Transport

logger = get_logger(__name__)

_RAW_BODY_TYPES = (str, bytes, bytearray, memoryview)


class Next:
    """Continuations handed to the middleware at one slot.

    `query` goes one slot toward the transport, `answer` goes one slot toward the caller. The answer continuation is
    bound to the request the slot was entered with.
    """

    def __init__(self, pipeline: "Pipeline", index: int, request: Request) -> None:
        self._pipeline = pipeline
        self._index = index
        self.request = request

    def query(self, request: Request) -> None:
        """Pass the request on toward the transport."""
        self._pipeline._query(self._index + 1, request)

    def answer(self, response: Response) -> None:
        """Pass the response on toward the caller."""
        self._pipeline._answer(self._index - 1, self.request, response)


class Pipeline:
    """Chain of middleware for a single call.

    The middleware list and the per-slot contexts are fixed when the pipeline is created, so configuration changes
    only affect calls started afterwards.
    """

    def __init__(self, middleware: Sequence[Middleware], transport: Transport) -> None:
        self._middleware = list(middleware)
        self._contexts: list[Context] = [{} for _ in self._middleware]
        self._transport = transport
        self._size = len(self._middleware) + 2
        self._future: asyncio.Future[Response] = asyncio.get_running_loop().create_future()
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def future(self) -> asyncio.Future[Response]:
        return self._future

    def start(self, request: Request) -> asyncio.Future[Response]:
        """Run the query phase up to the first suspension point and return the call's future."""
        self._query(1, request)
        return self._future

    def _query(self, index: int, request: Request) -> None:
        if index == self._size - 1:
            self._send(request)
        else:
            self._invoke(index, request, None)

    def _answer(self, index: int, request: Request, response: Response) -> None:
        if index == 0:
            self._resolve(response)
        else:
            self._invoke(index, request, response)

    def _invoke(self, index: int, request: Request, response: Response | None) -> None:
        middleware = self._middleware[index - 1]
        try:
            middleware(request, response, self._contexts[index - 1], Next(self, index, request))
        except Exception as exc:
            self._fail(exc)

    def _send(self, request: Request) -> None:
        body = request.body
        if body is not None and not isinstance(body, _RAW_BODY_TYPES) and not request.json_body:
            try:
                request.body = urlencode(body, doseq=True)
            except Exception as exc:
                self._fail(exc)
                return
            if request.header("Content-Type") is None:
                request.headers["Content-Type"] = "application/x-www-form-urlencoded"

        task = asyncio.get_running_loop().create_task(self._transport_call(request))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _transport_call(self, request: Request) -> None:
        try:
            reply, body = await self._transport.send(request)
            response = Response.from_transport(None, reply, body)
        except TransportError as exc:
            response = Response.from_transport(exc, None)
        except Exception as exc:
            # DecodingError surfaces to the caller before any middleware sees the response
            self._fail(exc)
            return
        self._answer(self._size - 2, request, response)

    def _resolve(self, response: Response) -> None:
        if self._future.done():
            logger.warning("call_already_resolved", status=response.status)
            return
        self._future.set_result(response)

    def _fail(self, exc: Exception) -> None:
        if self._future.done():
            logger.warning("call_already_resolved", error=repr(exc))
            return
        self._future.set_exception(exc)
