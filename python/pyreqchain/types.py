"""Common types and interfaces used in the library."""

from collections.abc import Mapping, Sequence
from re import Pattern
from typing import Any

HeadersType = Mapping[str, str]
Body = Mapping[str, Any] | Sequence[tuple[str, Any]] | str | bytes | bytearray | memoryview
OptionsType = Mapping[str, Any]
PresetOrOptions = str | OptionsType

MethodsMatcher = str | Sequence[str]
UrlMatcher = str | Pattern[str]
