# core/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

VARIANTS = ("shuffle", "library")


class ConfigError(Exception):
    """Raised when an environment setting is invalid."""


@dataclass(frozen=True)
class AppConfig:
    catalog_url: str = "https://example.org/music/catalog.txt"
    count_url: str = "https://example.org/music/count.txt"
    asset_template: str = "https://example.org/music/{filename}"
    variant: str = "shuffle"
    recovery_delay_ms: int = 1500
    request_timeout_s: float = 15.0
    settings_org: str = "ShufflePlayer"
    settings_app: str = "ShufflePlayer"
    log_level: str = "INFO"

    @property
    def browsable(self) -> bool:
        return self.variant == "library"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "AppConfig":
        env = os.environ if env is None else env
        d = cls()

        def _int(name: str, default: int, lo: int, hi: int) -> int:
            raw = env.get(name)
            if raw is None or raw == "":
                return default
            try:
                v = int(raw)
            except ValueError:
                raise ConfigError(f"{name}={raw!r} is not an integer")
            if not (lo <= v <= hi):
                raise ConfigError(f"{name}={v} out of bounds [{lo}, {hi}]")
            return v

        def _float(name: str, default: float, lo: float, hi: float) -> float:
            raw = env.get(name)
            if raw is None or raw == "":
                return default
            try:
                v = float(raw)
            except ValueError:
                raise ConfigError(f"{name}={raw!r} is not a number")
            if not (lo <= v <= hi):
                raise ConfigError(f"{name}={v} out of bounds [{lo}, {hi}]")
            return v

        variant = (env.get("SHUFFLE_VARIANT") or d.variant).strip().lower()
        if variant not in VARIANTS:
            raise ConfigError(f"SHUFFLE_VARIANT must be one of {VARIANTS}, got {variant!r}")

        template = env.get("SHUFFLE_ASSET_TEMPLATE") or d.asset_template
        if "{filename}" not in template:
            raise ConfigError("SHUFFLE_ASSET_TEMPLATE must contain {filename}")

        return cls(
            catalog_url=env.get("SHUFFLE_CATALOG_URL") or d.catalog_url,
            count_url=env.get("SHUFFLE_COUNT_URL") or d.count_url,
            asset_template=template,
            variant=variant,
            recovery_delay_ms=_int("SHUFFLE_RECOVERY_DELAY_MS", d.recovery_delay_ms, 0, 60_000),
            request_timeout_s=_float("SHUFFLE_REQUEST_TIMEOUT", d.request_timeout_s, 0.5, 300.0),
            settings_org=env.get("SHUFFLE_SETTINGS_ORG") or d.settings_org,
            settings_app=env.get("SHUFFLE_SETTINGS_APP") or d.settings_app,
            log_level=(env.get("SHUFFLE_LOG_LEVEL") or d.log_level).upper(),
        )
