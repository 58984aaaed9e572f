"""Named configuration presets."""

from collections.abc import Callable, Iterator, Mapping
from datetime import timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pyreqchain.exceptions import ConfigurationError
from pyreqchain.logging import get_logger
from pyreqchain.middleware.types import Middleware
from pyreqchain.proxy import ProxyAgent, resolve_proxy
from pyreqchain.types import OptionsType

logger = get_logger(__name__)


class Preset(BaseModel):
    """Request defaults and middleware shared by all calls made with the preset.

    Fields not declared here are kept as extra request options and passed to the request's `options`.
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    headers: dict[str, str] = Field(default_factory=dict)
    base_url: str | None = None
    use_proxy: str | None = None
    agent: ProxyAgent | None = None
    json_body: bool = False
    timeout: timedelta | None = None
    middleware: list[Callable[..., None]] = Field(default_factory=list)

    def as_options(self) -> dict[str, Any]:
        """Flatten the preset into a plain options mapping, the lowest precedence source of a call."""
        options = {name: getattr(self, name) for name in type(self).model_fields}
        options.update(self.model_extra or {})
        return options


class PresetStore:
    """Registry of named presets. The `default` preset always exists."""

    def __init__(self, presets: Mapping[str, Preset | OptionsType] | None = None) -> None:
        self._presets: dict[str, Preset] = {"default": Preset()}
        for name, config in (presets or {}).items():
            self._presets[name] = _validate(name, config)

    def get_preset(self, name: str) -> Preset | None:
        return self._presets.get(name)

    def set_preset(self, name: str, config: Preset | OptionsType) -> Preset:
        """Validate and store a preset, replacing any preset of the same name.

        A `use_proxy` string is resolved into an `agent` here, so a bad proxy fails before any request is made.

        Raises:
            ConfigurationError: The configuration is invalid or the proxy can not be resolved.
        """
        preset = self._presets[name] = _validate(name, config)
        logger.debug("preset_registered", preset=name, agent=preset.agent.url if preset.agent else None)
        return preset

    def ensure_preset(self, name: str) -> Preset:
        """Get the named preset, creating an empty one when missing."""
        if (preset := self._presets.get(name)) is None:
            preset = self._presets[name] = Preset()
        return preset

    def apply_middleware(self, middleware: Middleware, name: str = "default") -> None:
        """Append a middleware to the named preset, creating the preset when missing."""
        self.ensure_preset(name).middleware.append(middleware)

    def __contains__(self, name: object) -> bool:
        return name in self._presets

    def __iter__(self) -> Iterator[str]:
        return iter(self._presets)


def merge_options(preset: Preset | None, *sources: OptionsType) -> dict[str, Any]:
    """Merge a preset with call options, later sources taking precedence.

    Headers are merged key by key instead of being replaced, so per-call headers never drop the preset's defaults.
    """
    merged = preset.as_options() if preset is not None else {}
    headers = dict(merged.get("headers") or {})
    for source in sources:
        merged.update(source)
        headers.update(source.get("headers") or {})
    merged["headers"] = headers
    return merged


def _validate(name: str, config: Preset | OptionsType) -> Preset:
    try:
        options = config.as_options() if isinstance(config, Preset) else dict(config)
        preset = Preset.model_validate(options)
    except ValidationError as exc:
        raise ConfigurationError(f'Invalid configuration for preset "{name}": {exc}') from exc

    if preset.use_proxy is not None:
        if preset.agent is not None:
            raise ConfigurationError("Can not specify use_proxy and agent both")
        preset.agent = resolve_proxy(preset.use_proxy)
        preset.use_proxy = None
    return preset


presets = PresetStore({"json": {"json_body": True, "headers": {"Accept": "application/json"}}})
