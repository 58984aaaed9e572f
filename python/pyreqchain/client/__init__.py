"""Client classes and presets."""

from pyreqchain.client.client import HttpClient, RootMiddleware, http
from pyreqchain.client.presets import Preset, PresetStore, merge_options, presets

__all__ = [
    "HttpClient",
    "Preset",
    "PresetStore",
    "RootMiddleware",
    "http",
    "merge_options",
    "presets",
]
