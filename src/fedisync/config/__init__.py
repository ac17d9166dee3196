"""Application configuration helpers."""

from __future__ import annotations

from .env import ENV_OVERRIDES, read_env_overrides
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .instance import (
    CONFIG_TEMPLATE,
    DEFAULT_CONFIG_PATH,
    InstanceConfig,
    SyncPaths,
    generate_config,
    load_instance_config,
)
from .logging import configure_logging

__all__ = [
    "CONFIG_TEMPLATE",
    "DEFAULT_CONFIG_PATH",
    "ENV_OVERRIDES",
    "ConfigurationError",
    "InstanceConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SyncPaths",
    "configure_logging",
    "generate_config",
    "load_instance_config",
    "read_env_overrides",
]
