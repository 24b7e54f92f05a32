from __future__ import annotations

import logging
import os
from typing import Optional

from pydantic import BaseModel, Field

from .errors import ConfigError


# Environment variable names
ENV_REGION = "MIGRATE_REGION"
ENV_PATH = "MIGRATE_PATH"
ENV_LOG_LEVEL = "MIGRATE_LOG_LEVEL"

# Fallbacks shared with the rest of the deployment tooling
FALLBACK_ENV_REGION = "AWS_REGION"
FALLBACK_ENV_PATH = "PARAM_PREFIX"

DEFAULT_REGION = "us-east-1"
DEFAULT_PATH = "/payrit/preprod/"
DEFAULT_LOG_LEVEL = "WARNING"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    val = os.environ.get(name)
    return val if val not in (None, "") else default


class MigrationConfig(BaseModel):
    """
    Settings for one migration run.

    Fields
    - region: AWS region of the Parameter Store to migrate.
    - path_prefix: namespace root; everything below it (recursively) is converted.
    - log_level: stdlib logging level name for diagnostic output.
    """

    region: str = Field(default=DEFAULT_REGION)
    path_prefix: str = Field(default=DEFAULT_PATH)
    log_level: str = Field(default=DEFAULT_LOG_LEVEL)

    @classmethod
    def from_env(cls) -> "MigrationConfig":
        region = _getenv(ENV_REGION) or _getenv(FALLBACK_ENV_REGION, DEFAULT_REGION)
        path = _getenv(ENV_PATH) or _getenv(FALLBACK_ENV_PATH, DEFAULT_PATH)
        level = (_getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL) or DEFAULT_LOG_LEVEL).strip().upper()

        if not path.startswith("/"):
            raise ConfigError(f"{ENV_PATH} must start with '/': {path!r}")
        if level not in _LOG_LEVELS:
            raise ConfigError(f"{ENV_LOG_LEVEL} must be one of {', '.join(_LOG_LEVELS)}: {level!r}")
        return cls(region=region, path_prefix=path, log_level=level)

    def logging_level(self) -> int:
        return getattr(logging, self.log_level)
