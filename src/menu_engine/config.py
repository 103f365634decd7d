"""Session configuration, fixed before the session starts."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from menu_engine.buffer import DEFAULT_CAPACITY, DEFAULT_DELIMITERS
from menu_engine.matching import MatchPolicy
from menu_engine.paging import LayoutMode

ENV_PREFIX = "MENU_ENGINE_"


class ConfigError(ValueError):
    """Raised for invalid startup configuration; always fatal."""

    def __init__(self, message: str, *, option: str | None = None) -> None:
        super().__init__(message)
        self.option = option


@dataclass(frozen=True, slots=True)
class MenuConfig:
    """Immutable knobs consumed once by ``MenuSession``.

    ``lines > 0`` selects the vertical layout; otherwise items are laid out
    horizontally within ``budget`` cost units, which the frontend supplies
    through ``with_budget`` once it knows its width.
    """

    case_sensitive: bool = True
    policy: MatchPolicy = MatchPolicy.FUZZY
    lines: int = 0
    budget: Optional[float] = None
    word_delimiters: str = DEFAULT_DELIMITERS
    max_query_bytes: int = DEFAULT_CAPACITY
    prompt: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.policy, MatchPolicy):
            try:
                object.__setattr__(self, "policy", MatchPolicy(str(self.policy)))
            except ValueError as exc:
                raise ConfigError(
                    f"unknown match policy '{self.policy}'", option="policy"
                ) from exc
        if self.lines < 0:
            raise ConfigError("lines cannot be negative", option="lines")
        if self.budget is not None and self.budget <= 0:
            raise ConfigError("budget must be positive", option="budget")
        if not self.word_delimiters:
            raise ConfigError(
                "at least one word delimiter is required", option="delimiters"
            )
        wide = [ch for ch in self.word_delimiters if ord(ch) > 0x7F]
        if wide:
            raise ConfigError(
                f"word delimiters must be single-byte characters, got {wide}",
                option="delimiters",
            )
        if self.max_query_bytes <= 0:
            raise ConfigError(
                "max_query_bytes must be positive", option="max_query_bytes"
            )

    @property
    def layout(self) -> LayoutMode:
        return LayoutMode.VERTICAL if self.lines > 0 else LayoutMode.HORIZONTAL

    def with_budget(self, budget: float) -> "MenuConfig":
        return replace(self, budget=budget)

    def require_budget(self) -> float:
        if self.layout is LayoutMode.HORIZONTAL and self.budget is None:
            raise ConfigError("horizontal layout needs a budget", option="budget")
        return self.budget or 0

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, **overrides: object
    ) -> "MenuConfig":
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        lines = _env_int(env, "LINES")
        if lines is not None:
            values["lines"] = lines
        max_bytes = _env_int(env, "MAX_QUERY_BYTES")
        if max_bytes is not None:
            values["max_query_bytes"] = max_bytes
        if f"{ENV_PREFIX}IGNORE_CASE" in env:
            values["case_sensitive"] = not _env_flag(env, "IGNORE_CASE")
        if f"{ENV_PREFIX}POLICY" in env:
            values["policy"] = env[f"{ENV_PREFIX}POLICY"].lower()
        if f"{ENV_PREFIX}DELIMITERS" in env:
            values["word_delimiters"] = env[f"{ENV_PREFIX}DELIMITERS"]
        if f"{ENV_PREFIX}PROMPT" in env:
            values["prompt"] = env[f"{ENV_PREFIX}PROMPT"]

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)  # type: ignore[arg-type]


def _env_flag(env: Mapping[str, str], name: str) -> bool:
    return env.get(f"{ENV_PREFIX}{name}", "").lower() in {"1", "true", "yes", "on"}


def _env_int(env: Mapping[str, str], name: str) -> Optional[int]:
    key = f"{ENV_PREFIX}{name}"
    value = env.get(key)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigError(
            f"{key} must be an integer, got '{value}'", option=key
        ) from exc


__all__ = ["ConfigError", "MenuConfig"]
