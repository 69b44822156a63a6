"""Environment-driven configuration for the issuing service and the client."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .keys import KeyConfigurationError

DEFAULT_PRODUCT_ID = "localendar-mvp"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3001
DEFAULT_STORE_PATH = Path.home() / ".offline_license" / "license.json"
DEFAULT_REVERIFY_DAYS = 7


def _parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError as exc:
        raise ValueError(f"PORT must be an integer, got {raw!r}") from exc
    if port < 0 or port > 65535:
        raise ValueError(f"PORT must be between 0 and 65535, got {port}")
    return port


@dataclass(frozen=True)
class IssuerConfig:
    """Settings for the license issuing service."""

    private_key: str
    product_id: str = DEFAULT_PRODUCT_ID
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "IssuerConfig":
        env = os.environ if env is None else env
        private_key = env.get("PRIVATE_KEY", "").strip()
        if not private_key:
            raise KeyConfigurationError("PRIVATE_KEY is not set. Generate one with: offline-license-keygen")
        return cls(
            private_key=private_key,
            product_id=env.get("PRODUCT_ID") or DEFAULT_PRODUCT_ID,
            host=env.get("HOST") or DEFAULT_HOST,
            port=_parse_port(env.get("PORT") or str(DEFAULT_PORT)),
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        )

    def __repr__(self) -> str:
        return f"IssuerConfig(product_id={self.product_id!r}, host={self.host!r}, port={self.port})"


@dataclass(frozen=True)
class CheckerConfig:
    """Settings for the checking side: trusted public key and saved-license store."""

    public_key: str
    store_path: Path = DEFAULT_STORE_PATH
    reverify_after_days: int = DEFAULT_REVERIFY_DAYS

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "CheckerConfig":
        env = os.environ if env is None else env
        public_key = env.get("LICENSE_PUBLIC_KEY", "").strip()
        if not public_key:
            raise KeyConfigurationError("LICENSE_PUBLIC_KEY is not set")
        store_path = env.get("LICENSE_STORE_PATH")
        return cls(
            public_key=public_key,
            store_path=Path(store_path).expanduser() if store_path else DEFAULT_STORE_PATH,
            reverify_after_days=int(env.get("LICENSE_REVERIFY_DAYS") or DEFAULT_REVERIFY_DAYS),
        )
