"""Read-only snapshot of the pipeline environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


def _clean(text: str) -> str:
    """Replace undecodable bytes (held as surrogate escapes) with U+FFFD."""
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


@dataclass(frozen=True)
class Context:
    """Environment values available to a single notifier run.

    Built once at process start and passed to every component, so nothing
    else needs to touch ``os.environ``.
    """

    values: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> Context:
        source = os.environ if environ is None else environ
        values = {_clean(key): _clean(value) for key, value in source.items()}
        return cls(values=MappingProxyType(values))

    def get(self, name: str, default: str = "") -> str:
        """Return the value for ``name``, or ``default`` when unset or empty."""
        value = self.values.get(name, "")
        if value:
            return value
        return default

    def items(self) -> list[tuple[str, str]]:
        return sorted(self.values.items())
