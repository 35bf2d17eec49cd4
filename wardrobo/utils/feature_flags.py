"""Feature flag helpers for runtime configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Literal, TypedDict, cast


FeatureFlagKey = Literal[
    "llm_features_enabled",
    "vision_tagging_enabled",
]


class FeatureFlagValues(TypedDict):
    llm_features_enabled: bool
    vision_tagging_enabled: bool


@dataclass(frozen=True)
class FeatureFlagDefinition:
    env_var: str
    default: bool


_FEATURE_FLAG_DEFINITIONS: Dict[FeatureFlagKey, FeatureFlagDefinition] = {
    "llm_features_enabled": FeatureFlagDefinition("LLM_FEATURES_ENABLED", True),
    "vision_tagging_enabled": FeatureFlagDefinition("VISION_TAGGING_ENABLED", True),
}


def _normalize_bool(value: str | None, default: bool = True) -> bool:
    """Return normalized boolean from environment-style value."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"", "0", "false", "no", "off"}:
        return False
    if normalized in {"1", "true", "yes", "on"}:
        return True
    return default


@lru_cache(maxsize=None)
def get_feature_flags() -> FeatureFlagValues:
    """Return the cached feature flag state sourced from the environment."""
    values: Dict[FeatureFlagKey, bool] = {}
    for key, definition in _FEATURE_FLAG_DEFINITIONS.items():
        values[key] = _normalize_bool(os.getenv(definition.env_var), default=definition.default)
    return cast(FeatureFlagValues, values)


def is_feature_enabled(flag: FeatureFlagKey) -> bool:
    """Return whether the supplied feature flag evaluates to true."""
    return get_feature_flags()[flag]


def llm_features_enabled() -> bool:
    """Global toggle for prompt-driven search."""
    return is_feature_enabled("llm_features_enabled")


def vision_tagging_enabled() -> bool:
    """Toggle auto-tagging of uploaded photos."""
    return is_feature_enabled("vision_tagging_enabled")


def refresh_feature_flag_cache() -> None:
    """Invalidate cached feature flag values (useful for tests)."""
    get_feature_flags.cache_clear()
