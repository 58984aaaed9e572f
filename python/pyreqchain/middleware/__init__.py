"""Middleware pipeline."""

from pyreqchain.middleware.pipeline import Next, Pipeline
from pyreqchain.middleware.types import Context, Middleware

__all__ = [
    "Context",
    "Middleware",
    "Next",
    "Pipeline",
]
