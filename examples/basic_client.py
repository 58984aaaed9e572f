"""Basic usage examples for pyreqchain.

Run directly:
    uv run python -m examples.basic_client

The examples answer requests from middleware, so they run without network access.
"""

import asyncio
import sys

from pyreqchain.client import HttpClient, PresetStore
from pyreqchain.middleware import Context, Next
from pyreqchain.pytest_plugin import HttpClientMock
from pyreqchain.request import Request
from pyreqchain.response import Response


def fake_api(request: Request, response: Response | None, context: Context, next_handler: Next) -> None:
    """Answer every request with a JSON echo of it instead of calling the network."""
    next_handler.answer(
        Response.ok(
            {
                "method": request.method,
                "url": request.url,
                "headers": request.headers,
                "body": request.body,
            }
        )
    )


def new_client(preset: str = "default") -> HttpClient:
    client = HttpClient(preset, store=PresetStore())
    client.root_middleware.after.append(fake_api)
    return client


async def example_simple_get() -> None:
    """Example 1: Simple GET"""
    client = new_client()
    resp = await client.get("http://example.com/get?q=pyreqchain")
    print({"example": "simple_get", "status": resp.status, "url": resp.body["url"]})


async def example_presets() -> None:
    """Example 2: Presets with base URL and merged headers"""
    client = new_client()
    client.set_preset("api", {"base_url": "http://api.example.com/v1/", "headers": {"Accept": "application/json"}})
    api = client.with_preset("api")

    resp = await api.get("users", {"headers": {"X-Request-Id": "1"}})
    print({"example": "presets", "url": resp.body["url"], "headers": resp.body["headers"]})


async def example_post_form() -> None:
    """Example 3: POST form data and JSON"""
    client = new_client()
    client.set_preset("json", {"json_body": True})

    form = await client.post("http://example.com/post", {"message": "hello world"})
    json_resp = await client.post("http://example.com/post", {"message": "hello"}, "json")
    print({"example": "post_form", "form": form.body["body"], "json": json_resp.body["body"]})


async def example_middleware() -> None:
    """Example 4: Middleware adding a header and timing the answer"""
    client = new_client()
    loop = asyncio.get_running_loop()

    def auth(request: Request, response: Response | None, context: Context, next_handler: Next) -> None:
        if response is None:
            context["start"] = loop.time()
            request.headers["Authorization"] = "Bearer token"
            next_handler.query(request)
        else:
            response.extensions["elapsed"] = loop.time() - context["start"]
            next_handler.answer(response)

    client.apply_middleware(auth)

    resp = await client.get("http://example.com/private")
    print({"example": "middleware", "headers": resp.body["headers"], "timed": resp.extensions["elapsed"] >= 0})


async def example_cache() -> None:
    """Example 5: Short-circuit with a cache middleware"""
    client = new_client()
    cache: dict[str, Response] = {}

    def cached(request: Request, response: Response | None, context: Context, next_handler: Next) -> None:
        if response is not None:
            cache[request.url] = response
            next_handler.answer(response)
        elif request.method == "GET" and request.url in cache:
            next_handler.answer(cache[request.url])
        else:
            next_handler.query(request)

    calls = 0

    def counter(request: Request, response: Response | None, context: Context, next_handler: Next) -> None:
        nonlocal calls
        if response is None:
            calls += 1
            next_handler.query(request)
        else:
            next_handler.answer(response)

    client.apply_middleware(cached)
    client.apply_middleware(counter)

    for _ in range(3):
        await client.get("http://example.com/cached")
    print({"example": "cache", "network_calls": calls, "cached": sorted(cache)})


async def example_mock() -> None:
    """Example 6: Answer pending requests with the mock"""
    client = HttpClient(store=PresetStore())
    with HttpClientMock().installed(client) as mock:
        pending = client.delete("http://example.com/items/1")
        mock.expect_one("DELETE", "/items/").answer(Response(204, "No Content"))
        resp = await pending
    print({"example": "mock", "status": resp.status, "pending": len(mock.requests)})


async def main() -> None:
    from examples._utils import run_examples

    await run_examples(sys.modules[__name__])


if __name__ == "__main__":
    asyncio.run(main())
