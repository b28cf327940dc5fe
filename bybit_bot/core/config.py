"""Configuration helpers for the Bybit order bot."""
from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from dotenv import load_dotenv


_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    env_path = Path(__file__).resolve().parents[2] / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)
    else:
        load_dotenv(override=False)
    _DOTENV_LOADED = True


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes", "on"}


@dataclass
class BybitConfig:
    """Holds configuration values required to talk to the Bybit V5 API."""

    api_key: str
    api_secret: str
    testnet: bool = True
    recv_window: int = 5000
    timeout: int = 10
    max_retries: int = 3
    default_category: str = "linear"

    @classmethod
    def from_env(cls) -> "BybitConfig":
        """Load credentials and options from environment variables."""
        _load_dotenv_once()
        api_key = os.getenv("BYBIT_API_KEY")
        api_secret = os.getenv("BYBIT_API_SECRET")
        if not api_key or not api_secret:
            raise EnvironmentError(
                "BYBIT_API_KEY and BYBIT_API_SECRET must be set as environment variables."
            )

        return cls(
            api_key=api_key,
            api_secret=api_secret,
            testnet=_env_flag("BYBIT_TESTNET", "true"),
            recv_window=int(os.getenv("BYBIT_RECV_WINDOW", "5000")),
            timeout=int(os.getenv("BYBIT_TIMEOUT", "10")),
            max_retries=int(os.getenv("BYBIT_MAX_RETRIES", "3")),
            default_category=os.getenv("BYBIT_CATEGORY", "linear").lower(),
        )
