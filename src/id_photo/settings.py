"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from contracts.photo import FitMode, TargetSpec
from size_target.contracts import OversizePolicy


def _load_env_file(path: str = ".env") -> None:
    """Populate os.environ from the provided .env file if it exists."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


@dataclass(frozen=True, slots=True)
class Settings:
    """Default pipeline settings based on OS environment variables."""

    log_level: str = "INFO"

    width: int = 295
    height: int = 413
    min_kb: int = 150
    max_kb: int = 250
    preferred_kb: int = 200

    fit_mode: FitMode = FitMode.STRETCH
    oversize_policy: OversizePolicy = OversizePolicy.PASSTHROUGH

    def target_spec(self) -> TargetSpec:
        return TargetSpec.from_kib(
            width=self.width,
            height=self.height,
            min_kib=self.min_kb,
            max_kib=self.max_kb,
            preferred_kib=self.preferred_kb,
        )


def _build_settings() -> Settings:
    _load_env_file()

    return Settings(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        width=_env_int("ID_PHOTO_WIDTH", 295),
        height=_env_int("ID_PHOTO_HEIGHT", 413),
        min_kb=_env_int("ID_PHOTO_MIN_KB", 150),
        max_kb=_env_int("ID_PHOTO_MAX_KB", 250),
        preferred_kb=_env_int("ID_PHOTO_PREFERRED_KB", 200),
        fit_mode=FitMode(os.getenv("ID_PHOTO_FIT_MODE", FitMode.STRETCH.value)),
        oversize_policy=OversizePolicy(os.getenv("ID_PHOTO_OVERSIZE_POLICY", OversizePolicy.PASSTHROUGH.value)),
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance to avoid re-reading configuration."""

    return _build_settings()
