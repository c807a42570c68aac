"""RPC connection settings, read once at startup."""
from __future__ import annotations

import os
from dataclasses import dataclass, replace

from dotenv import find_dotenv, load_dotenv

from .const import COMMITMENTS

DEFAULT_TIMEOUT = 180.0
DEFAULT_COMMITMENT = "confirmed"


class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class RpcConfig:
    url: str
    timeout: float = DEFAULT_TIMEOUT
    commitment: str = DEFAULT_COMMITMENT


def load_config(
    url: str | None = None,
    timeout: float | None = None,
    commitment: str | None = None,
    env_file: str | None = None,
) -> RpcConfig:
    """Build an RpcConfig from RPC_URL (.env supported) plus explicit overrides."""
    # Existing environment wins over .env values.
    load_dotenv(env_file or find_dotenv(usecwd=True))

    url = url or os.environ.get("RPC_URL")
    if not url:
        raise ConfigError("RPC_URL must be set in environment or .env file")

    cfg = RpcConfig(url=url)
    if timeout is not None:
        if timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {timeout}")
        cfg = replace(cfg, timeout=float(timeout))
    if commitment is not None:
        if commitment not in COMMITMENTS:
            raise ConfigError(f"Unknown commitment {commitment!r}; expected one of {', '.join(COMMITMENTS)}")
        cfg = replace(cfg, commitment=commitment)
    return cfg
