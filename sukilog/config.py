"""
Configuration schema for SukiLogger.

This module defines the logger configuration: minimum level, the
application identity stamped on every record, and the HTTP body size
limit. Configuration can be built in code or loaded from YAML.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union
import yaml

from .levels import LogLevel

DEFAULT_APP_NAME = "application"
DEFAULT_VERSION = "1.0.0"
DEFAULT_MAX_BODY_SIZE = 1048576  # 1 MiB


@dataclass(frozen=True)
class Config:
    """
    Logger configuration.

    Immutable after construction (frozen dataclass). ``log_level`` may be
    given as a LogLevel, its number or its name; it is stored as a
    LogLevel.

    Attributes:
        log_level: Minimum level written by the sink
        app_name: Written as ``app_name``; also keys the application
            payload inside ``data`` ("payload" when empty)
        version: Written as ``version``
        max_body_size: HTTP bodies longer than this many bytes are
            replaced; 0 or less disables the check
    """

    log_level: LogLevel = LogLevel.INFO
    app_name: str = DEFAULT_APP_NAME
    version: str = DEFAULT_VERSION
    max_body_size: int = DEFAULT_MAX_BODY_SIZE

    def __post_init__(self):
        """Validate configuration."""
        object.__setattr__(self, "log_level", LogLevel.parse(self.log_level))

        if not isinstance(self.app_name, str):
            raise ValueError(
                f"app_name must be a string, got {type(self.app_name).__name__}"
            )

        if not isinstance(self.version, str):
            raise ValueError(
                f"version must be a string, got {type(self.version).__name__}"
            )

        if isinstance(self.max_body_size, bool) or not isinstance(self.max_body_size, int):
            raise ValueError(
                f"max_body_size must be an integer, got {self.max_body_size!r}"
            )

    @property
    def payload_key(self) -> str:
        """Key of the application payload inside ``data``."""
        return self.app_name if len(self.app_name) > 0 else "payload"

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Config":
        """
        Build configuration from a mapping.

        Missing keys and null values take production defaults.

        Raises:
            ValueError: If values are invalid
        """
        data = {key: value for key, value in (data or {}).items() if value is not None}
        return cls(
            log_level=data.get("log_level", LogLevel.INFO),
            app_name=str(data.get("app_name", DEFAULT_APP_NAME)),
            version=str(data.get("version", DEFAULT_VERSION)),
            max_body_size=data.get("max_body_size", DEFAULT_MAX_BODY_SIZE),
        )

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "Config":
        """
        Load configuration from YAML file.

        Example YAML:
            log_level: info          # debug, info, warn, error, panic, fatal
            app_name: "order-service"
            version: "2.3.1"
            max_body_size: 4096      # bytes, 0 disables truncation
        """
        with open(yaml_path) as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(
                f"Config file must contain a mapping, got {type(data).__name__}: {yaml_path}"
            )

        return cls.from_dict(data)


def new_production_config() -> Config:
    return Config(
        log_level=LogLevel.INFO,
        app_name=DEFAULT_APP_NAME,
        version=DEFAULT_VERSION,
        max_body_size=DEFAULT_MAX_BODY_SIZE,
    )
