"""Centralized configuration for wordcalc.

Configuration is loaded from YAML files and validated at startup. Loading
never raises: every entry point returns a Result carrying a ConfigError.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from wordcalc.utils.result import ConfigError, Err, Ok, Result


@dataclass
class LexerConfig:
    """Input limits applied before lexing."""

    max_input_length: int = 1000


@dataclass
class ServerConfig:
    """HTTP server settings."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class ClientConfig:
    """HTTP client settings for remote mode."""

    base_url: str = "http://127.0.0.1:8080"
    timeout: float = 10.0


@dataclass
class StorageConfig:
    """Error-frequency store settings. No file means in-memory only."""

    errors_file: Optional[Path] = None


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "info"
    format: str = "json"


@dataclass
class CalcConfig:
    """Complete wordcalc configuration."""

    lexer: LexerConfig = field(default_factory=LexerConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    client: ClientConfig = field(default_factory=ClientConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> Result["CalcConfig", ConfigError]:
        """
        Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Result with loaded config or error
        """
        path = Path(path)

        if not path.exists():
            return Err(ConfigError(
                field="path",
                message=f"Configuration file not found: {path}",
            ))

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            return Err(ConfigError(
                field="yaml",
                message=f"Failed to parse YAML: {e}",
            ))
        except OSError as e:
            return Err(ConfigError(
                field="file",
                message=f"Failed to read config file: {e}",
            ))

        if not isinstance(data, dict):
            return Err(ConfigError(
                field="yaml",
                message="Top-level YAML value must be a mapping",
            ))

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Result["CalcConfig", ConfigError]:
        """
        Create configuration from a dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            Result with loaded config or error
        """
        try:
            lexer_data = data.get("lexer") or {}
            lexer = LexerConfig(
                max_input_length=int(lexer_data.get("max_input_length", 1000)),
            )

            server_data = data.get("server") or {}
            server = ServerConfig(
                host=server_data.get("host", "127.0.0.1"),
                port=int(server_data.get("port", 8080)),
            )

            client_data = data.get("client") or {}
            client = ClientConfig(
                base_url=client_data.get("base_url", "http://127.0.0.1:8080"),
                timeout=float(client_data.get("timeout", 10.0)),
            )

            storage_data = data.get("storage") or {}
            errors_file = storage_data.get("errors_file")
            storage = StorageConfig(
                errors_file=Path(errors_file) if errors_file else None,
            )

            logging_data = data.get("logging") or {}
            logging_config = LoggingConfig(
                level=logging_data.get("level", "info"),
                format=logging_data.get("format", "json"),
            )

        except (AttributeError, TypeError, ValueError) as e:
            return Err(ConfigError(
                field="unknown",
                message=f"Failed to parse configuration: {e}",
            ))

        return Ok(cls(
            lexer=lexer,
            server=server,
            client=client,
            storage=storage,
            logging=logging_config,
        ))

    def validate(self) -> Result[None, ConfigError]:
        """
        Validate configuration values.

        Returns:
            Result indicating success or validation error
        """
        if self.lexer.max_input_length < 1:
            return Err(ConfigError(
                field="lexer.max_input_length",
                message=f"Must be at least 1, got {self.lexer.max_input_length}",
            ))

        if not 0 < self.server.port < 65536:
            return Err(ConfigError(
                field="server.port",
                message=f"Must be between 1 and 65535, got {self.server.port}",
            ))

        if not self.client.base_url.startswith(("http://", "https://")):
            return Err(ConfigError(
                field="client.base_url",
                message=f"Must be an http(s) URL, got {self.client.base_url!r}",
            ))

        if self.client.timeout <= 0:
            return Err(ConfigError(
                field="client.timeout",
                message=f"Must be positive, got {self.client.timeout}",
            ))

        if self.logging.format not in ("json", "text"):
            return Err(ConfigError(
                field="logging.format",
                message=f"Must be 'json' or 'text', got {self.logging.format!r}",
            ))

        return Ok(None)


def load_config(config_dir: Optional[Path] = None) -> Result[CalcConfig, ConfigError]:
    """
    Load configuration from the standard location.

    Reads config/defaults.yaml when present, otherwise uses built-in
    defaults, then validates the result.

    Args:
        config_dir: Configuration directory (defaults to ./config)

    Returns:
        Result with loaded config or error
    """
    if config_dir is None:
        config_dir = Path("./config")

    defaults_path = Path(config_dir) / "defaults.yaml"
    if defaults_path.exists():
        result = CalcConfig.from_yaml(defaults_path)
        if result.is_err():
            return result
        config = result.unwrap()
    else:
        config = CalcConfig()

    return config.validate().and_then(lambda _: Ok(config))
