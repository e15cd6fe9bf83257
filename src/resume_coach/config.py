"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

DEFAULT_MODEL = "claude-haiku-4-5-20251001"


@dataclass(frozen=True)
class LLMConfig:
    default_model: str = DEFAULT_MODEL
    available_models: tuple[str, ...] = (
        "claude-haiku-4-5-20251001",
        "claude-sonnet-4-5-20250929",
    )
    max_retries: int = 3
    timeout: int = 60
    max_tokens: int = 4096
    temperature: float = 0.0

    def __post_init__(self) -> None:
        # YAML hands us lists
        object.__setattr__(self, "available_models", tuple(self.available_models))
        if not 1 <= self.timeout <= 600:
            raise ValueError(f"llm.timeout must be between 1 and 600, got {self.timeout}")
        if not 1 <= self.max_retries <= 10:
            raise ValueError(f"llm.max_retries must be between 1 and 10, got {self.max_retries}")
        if self.max_tokens < 1:
            raise ValueError(f"llm.max_tokens must be positive, got {self.max_tokens}")


@dataclass(frozen=True)
class RefreshConfig:
    debounce_seconds: float = 3.0
    layout_debounce_seconds: float = 0.2
    success_cooldown_seconds: float = 5.0
    failure_cooldown_seconds: float = 10.0
    request_timeout: float | None = None  # None disables the safety timeout
    auto_refresh: bool = True

    def __post_init__(self) -> None:
        if self.debounce_seconds < 0:
            raise ValueError(
                f"refresh.debounce_seconds must be >= 0, got {self.debounce_seconds}"
            )
        if self.layout_debounce_seconds < 0:
            raise ValueError(
                f"refresh.layout_debounce_seconds must be >= 0, got {self.layout_debounce_seconds}"
            )
        if self.success_cooldown_seconds < 0:
            raise ValueError(
                f"refresh.success_cooldown_seconds must be >= 0, got {self.success_cooldown_seconds}"
            )
        if self.failure_cooldown_seconds < self.success_cooldown_seconds:
            raise ValueError(
                "refresh.failure_cooldown_seconds must be >= success_cooldown_seconds "
                f"({self.failure_cooldown_seconds} < {self.success_cooldown_seconds})"
            )
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise ValueError(
                f"refresh.request_timeout must be positive or null, got {self.request_timeout}"
            )


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    refresh: RefreshConfig = field(default_factory=RefreshConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        # Look for config.yaml relative to the project root
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        refresh=RefreshConfig(**raw.get("refresh", {})),
    )
