"""pyreqchain - Asyncio HTTP client driven by a bidirectional middleware pipeline.

Built on top of [pyreqwest](https://github.com/MarkusSintonen/pyreqwest) for the actual network I/O.

Feature-rich:
- Middleware that can rewrite requests, short-circuit them or rewrite responses
- Per-call, per-middleware context shared between the query and the answer phase
- Named configuration presets merged into every call
- Proxy configuration resolved and validated when a preset is registered
- Root middleware applied to all calls regardless of preset
- Mocking and testing utilities with a pytest plugin
- Type-safe APIs with Python type hints
"""
