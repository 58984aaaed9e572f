"""Middleware types and interfaces."""

from typing import TYPE_CHECKING, Any, Protocol

from pyreqchain.request import Request
from pyreqchain.response import Response

if TYPE_CHECKING:
    from pyreqchain.middleware.pipeline import Next

Context = dict[str, Any]


class Middleware(Protocol):
    """Middleware interface for processing HTTP requests and responses."""

    def __call__(self, request: Request, response: Response | None, context: Context, next_handler: "Next") -> None:
        """Invoked once while the request goes out and once while the response comes back.

        While the request goes out `response` is None. Call `next_handler.query(request)` to pass the (possibly
        modified) request on, or `next_handler.answer(response)` to answer it yourself, in which case nothing deeper
        in the pipeline runs.
        While the response comes back `response` is set. Call `next_handler.answer(response)` with the original or a
        changed response. Calling `next_handler.query(request)` instead sends the request again from this position.

        Exactly one of the two must be called, exactly once, per invocation.

        Args:
            request: HTTP request of the call
            response: HTTP response when it comes back, None while the request goes out
            context: State private to this middleware for this call, shared between both invocations
            next_handler: Continuations toward the transport (query) and toward the caller (answer)
        """
        ...
