from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

UNMATCHED_POLICIES = ("deny", "allow")
LOOKUP_MODES = ("memory", "core_service")


class ConfigError(Exception):
    pass


def _env(name: str, default: str = "") -> str:
    return (os.getenv(name) or default).strip()


def _flag(name: str, default: str) -> bool:
    return _env(name, default).lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class ServiceSettings:
    """
    Runtime settings, read from TOPOAUTH_* environment variables.

    unmatched_policy is the explicit default for requests no resolver family
    recognizes; it is reported back to the transport, never applied here.
    """

    env: str = "dev"
    unmatched_policy: str = "deny"
    lookup_mode: str = "memory"
    lookup_fixture: Optional[str] = None
    core_url: Optional[str] = None
    core_timeout_seconds: float = 5.0
    security_headers_enabled: bool = False

    @classmethod
    def from_env(cls) -> "ServiceSettings":
        env = _env("TOPOAUTH_ENV", "dev").lower()

        policy = _env("TOPOAUTH_UNMATCHED_POLICY", "deny").lower()
        if policy not in UNMATCHED_POLICIES:
            raise ConfigError(f"TOPOAUTH_UNMATCHED_POLICY must be one of {UNMATCHED_POLICIES}, got {policy!r}")

        core_url = _env("TOPOAUTH_CORE_URL") or None
        mode = _env("TOPOAUTH_LOOKUP_MODE", "core_service" if core_url else "memory").lower()
        if mode not in LOOKUP_MODES:
            raise ConfigError(f"TOPOAUTH_LOOKUP_MODE must be one of {LOOKUP_MODES}, got {mode!r}")
        if mode == "core_service" and not core_url:
            raise ConfigError("Missing TOPOAUTH_CORE_URL for core_service lookup mode")

        raw_timeout = _env("TOPOAUTH_CORE_TIMEOUT_SECONDS", "5")
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigError(f"Invalid TOPOAUTH_CORE_TIMEOUT_SECONDS: {raw_timeout!r}")
        if timeout <= 0:
            raise ConfigError("TOPOAUTH_CORE_TIMEOUT_SECONDS must be positive")

        return cls(
            env=env,
            unmatched_policy=policy,
            lookup_mode=mode,
            lookup_fixture=_env("TOPOAUTH_LOOKUP_FIXTURE") or None,
            core_url=core_url,
            core_timeout_seconds=timeout,
            security_headers_enabled=_flag("TOPOAUTH_SECURITY_HEADERS_ENABLED", "true" if env == "prod" else "false"),
        )
