from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

_SUPPORTED_OWNER_POLICIES = {"recover", "fatal"}


def _bool_from_env(value: str | None, *, default: bool) -> bool:
    if value is None:
        return default
    value = value.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return default


def _normalise_owner_policy(value: str | None) -> str:
    if value is None:
        return "recover"
    value = value.strip().lower()
    if value not in _SUPPORTED_OWNER_POLICIES:
        raise ValueError(
            f"Unsupported owner policy '{value}'. Expected one of {_SUPPORTED_OWNER_POLICIES}."
        )
    return value


@dataclass(frozen=True)
class RuntimeConfig:
    log_level: str
    track_nodes: bool
    owner_policy: str

    @property
    def owner_gone_is_fatal(self) -> bool:
        return self.owner_policy == "fatal"


def _configure_logging(level: str) -> None:
    logger = logging.getLogger("linkcell")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        formatter = logging.Formatter("%(levelname)s %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)


@lru_cache(maxsize=None)
def runtime_config() -> RuntimeConfig:
    log_level = os.getenv("LINKCELL_LOG_LEVEL", "INFO").upper()
    track_nodes = _bool_from_env(os.getenv("LINKCELL_TRACK_NODES"), default=False)
    owner_policy = _normalise_owner_policy(os.getenv("LINKCELL_OWNER_POLICY"))

    config = RuntimeConfig(
        log_level=log_level,
        track_nodes=track_nodes,
        owner_policy=owner_policy,
    )
    _configure_logging(config.log_level)
    return config


def reset_runtime_config_cache() -> None:
    runtime_config.cache_clear()


__all__ = ["RuntimeConfig", "runtime_config", "reset_runtime_config_cache"]
