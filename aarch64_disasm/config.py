from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import FrozenSet
import os


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    normalized = raw.strip().casefold()
    return normalized not in {"0", "false", "off", ""}


def _env_set(name: str) -> FrozenSet[str]:
    raw = os.getenv(name)
    if not raw:
        return frozenset()
    return frozenset(
        chunk.strip().casefold() for chunk in raw.split(",") if chunk.strip()
    )


@dataclass(frozen=True)
class RenderConfig:
    trace: bool = False
    # empty means every family is traced
    trace_families: FrozenSet[str] = field(default_factory=frozenset)

    def traces(self, family: str) -> bool:
        if not self.trace:
            return False
        return not self.trace_families or family.casefold() in self.trace_families


def load_render_config() -> RenderConfig:
    return RenderConfig(
        trace=_env_flag("AARCH64_DISASM_TRACE", default=False),
        trace_families=_env_set("AARCH64_DISASM_TRACE_FAMILIES"),
    )


@lru_cache(maxsize=1)
def default_render_config() -> RenderConfig:
    return load_render_config()


__all__ = ["RenderConfig", "load_render_config", "default_render_config"]
