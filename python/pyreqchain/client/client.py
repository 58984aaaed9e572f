"""HTTP client entry point."""

import asyncio
from datetime import timedelta
from typing import Any, Self
from urllib.parse import urlsplit

from pyreqchain.client.presets import Preset, PresetStore, merge_options, presets
from pyreqchain.middleware.pipeline import Pipeline
from pyreqchain.middleware.types import Middleware
from pyreqchain.request import Request
from pyreqchain.response import Response
from pyreqchain.transport import PyreqwestTransport
from pyreqchain.transport.types import Transport
from pyreqchain.types import Body, OptionsType, PresetOrOptions

_REQUEST_FIELDS = frozenset({"headers", "json_body", "timeout", "agent", "extensions"})
_CONFIG_FIELDS = frozenset({"base_url", "use_proxy", "middleware"})


class RootMiddleware:
    """Middleware applied to every call regardless of preset.

    `before` middleware are the outermost, `after` middleware sit right in front of the transport.
    """

    def __init__(self) -> None:
        self.before: list[Middleware] = []
        self.after: list[Middleware] = []


class HttpClient:
    """Client sending requests through the middleware pipeline.

    Every call merges, in increasing precedence, the selected preset, an options mapping given in place of the preset
    name and the trailing options mapping. Calls must be made while an event loop is running, they return a future
    resolving to the `Response`.
    """

    def __init__(
        self,
        preset: str = "default",
        *,
        store: PresetStore | None = None,
        transport: Transport | None = None,
        root_middleware: RootMiddleware | None = None,
    ) -> None:
        self.preset = preset
        self.store = store if store is not None else presets
        self.root_middleware = root_middleware if root_middleware is not None else RootMiddleware()
        self._transport = transport

    @property
    def config(self) -> Preset | None:
        """Preset the client is bound to."""
        return self.store.get_preset(self.preset)

    @property
    def transport(self) -> Transport:
        if self._transport is None:
            self._transport = PyreqwestTransport()
        return self._transport

    def get_preset(self, name: str) -> Preset | None:
        return self.store.get_preset(name)

    def set_preset(self, name: str, config: Preset | OptionsType) -> Preset:
        return self.store.set_preset(name, config)

    def with_preset(self, name: str) -> Self:
        """Return a new client bound to the named preset. This client is left unchanged.

        The new client shares the preset store, the transport and the root middleware with this one.
        """
        self.store.ensure_preset(name)
        return type(self)(name, store=self.store, transport=self.transport, root_middleware=self.root_middleware)

    def apply_middleware(self, middleware: Middleware, preset: str = "default") -> None:
        self.store.apply_middleware(middleware, preset)

    def get(
        self, url: str, preset_or_options: PresetOrOptions | None = None, options: OptionsType | None = None
    ) -> asyncio.Future[Response]:
        return self.execute("GET", url, None, preset_or_options, options)

    def delete(
        self, url: str, preset_or_options: PresetOrOptions | None = None, options: OptionsType | None = None
    ) -> asyncio.Future[Response]:
        return self.execute("DELETE", url, None, preset_or_options, options)

    def options(
        self, url: str, preset_or_options: PresetOrOptions | None = None, options: OptionsType | None = None
    ) -> asyncio.Future[Response]:
        return self.execute("OPTIONS", url, None, preset_or_options, options)

    def post(
        self,
        url: str,
        body: Body | None,
        preset_or_options: PresetOrOptions | None = None,
        options: OptionsType | None = None,
    ) -> asyncio.Future[Response]:
        return self.execute("POST", url, body, preset_or_options, options)

    def put(
        self,
        url: str,
        body: Body | None,
        preset_or_options: PresetOrOptions | None = None,
        options: OptionsType | None = None,
    ) -> asyncio.Future[Response]:
        return self.execute("PUT", url, body, preset_or_options, options)

    def patch(
        self,
        url: str,
        body: Body | None,
        preset_or_options: PresetOrOptions | None = None,
        options: OptionsType | None = None,
    ) -> asyncio.Future[Response]:
        return self.execute("PATCH", url, body, preset_or_options, options)

    def execute(
        self,
        method: str,
        url: str,
        body: Body | None = None,
        preset_or_options: PresetOrOptions | None = None,
        options: OptionsType | None = None,
    ) -> asyncio.Future[Response]:
        """Send a request through the pipeline.

        The query phase runs synchronously until the transport is reached or a middleware suspends the call.
        """
        if isinstance(preset_or_options, str):
            preset_name, call_options = preset_or_options, {}
        else:
            preset_name, call_options = self.preset, preset_or_options or {}

        config = merge_options(self.store.get_preset(preset_name), call_options, options or {})
        request = self._build_request(method, url, body, config)
        middleware = [
            *self.root_middleware.before,
            *(config.get("middleware") or []),
            *self.root_middleware.after,
        ]
        return Pipeline(middleware, self.transport).start(request)

    def _build_request(self, method: str, url: str, body: Body | None, config: dict[str, Any]) -> Request:
        if base_url := config.get("base_url"):
            url = _join_url(base_url, url)
        extra = {name: value for name, value in config.items() if name not in _REQUEST_FIELDS | _CONFIG_FIELDS}
        return Request(
            method,
            url,
            headers=config["headers"],
            body=body,
            json_body=bool(config.get("json_body")),
            timeout=_timeout(config.get("timeout")),
            agent=config.get("agent"),
            extensions=config.get("extensions"),
            options=extra,
        )


def _timeout(value: timedelta | float | None) -> timedelta | None:
    if value is None or isinstance(value, timedelta):
        return value
    return timedelta(seconds=value)


def _join_url(base_url: str, url: str) -> str:
    """Append the call URL to the base URL path with exactly one slash between. Absolute URLs are kept."""
    if urlsplit(url).scheme:
        return url
    if not url:
        return base_url
    return base_url.rstrip("/") + "/" + url.lstrip("/")


http = HttpClient()
