"""
Configuration management for veo
"""

import json
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from platformdirs import user_config_dir

from veo.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from veo.exceptions import ConfigError


class Config:
    """Configuration loader and validator with multi-source support"""

    OPTIONAL_FIELDS: dict[str, Any] = {
        "token": None,
        "club": None,
        "api_base_url": DEFAULT_BASE_URL,
        "timeout": DEFAULT_TIMEOUT,
        "log_level": "WARNING",
    }
    VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    def __init__(self, config_file: str | None = None):
        # Configuration priority:
        # 1. Explicit config file (JSON or .env)
        # 2. Environment variables
        # 3. Default config file in the user config directory
        # 4. Defaults

        self.config_dir = Path(user_config_dir("veo"))
        config_data: dict[str, Any] = {}
        prefer_file_over_env = config_file is not None

        if config_file is not None:
            config_data = self._load_config_file(config_file)
        else:
            default_config = self.config_dir / "config.json"
            if default_config.exists():
                config_data = self._load_config_file(str(default_config))

        def _resolve(config_key: str, env_key: str) -> Any:
            config_value = config_data.get(config_key)
            env_value = os.getenv(env_key) or None
            if prefer_file_over_env:
                return config_value if config_value is not None else env_value
            return env_value if env_value is not None else config_value

        # Kept private to avoid leaking the token through repr/tracebacks
        self._token: str | None = _resolve("token", "VEO_TOKEN")
        club = _resolve("club", "VEO_CLUB")
        self.club: str | None = str(club).strip() if club else None
        if not self.club:
            self.club = None

        api_base = _resolve("api_base_url", "VEO_API_BASE_URL") or DEFAULT_BASE_URL
        self.api_base_url = str(api_base).rstrip("/")

        raw_timeout = _resolve("timeout", "VEO_TIMEOUT")
        self.timeout = self._parse_timeout(raw_timeout)

        log_level = _resolve("log_level", "LOG_LEVEL") or "WARNING"
        self.log_level = str(log_level).upper()

    @property
    def token(self) -> str | None:
        """Veo bearer token (read-only property)"""
        return self._token

    def __repr__(self) -> str:
        """
        String representation that excludes the token

        Prevents accidental credential exposure in logs, tracebacks, and debugging
        """
        return (
            f"Config("
            f"club={self.club!r}, "
            f"api_base_url={self.api_base_url!r}, "
            f"timeout={self.timeout!r}, "
            f"log_level={self.log_level!r}, "
            f"token={'configured' if self._token else 'missing'}"
            f")"
        )

    @staticmethod
    def _parse_timeout(value: Any) -> float:
        if value is None or value == "":
            return DEFAULT_TIMEOUT
        try:
            timeout = float(value)
        except (TypeError, ValueError):
            raise ConfigError(f"timeout must be a number of seconds, got {value!r}")
        if timeout <= 0:
            raise ConfigError(f"timeout must be greater than zero, got {value!r}")
        return timeout

    def _load_config_file(self, config_path: str) -> dict[str, Any]:
        """
        Load configuration from a JSON file or a .env file

        Args:
            config_path: Path to config file (.json, anything else is read as .env)

        Returns:
            Configuration dictionary (empty for .env files, which populate os.environ)

        Raises:
            ConfigError: If file cannot be loaded or parsed
        """
        if config_path.strip().lower() in {os.devnull.lower(), "/dev/null", "nul"}:
            # Opt-out from config file loading
            return {}

        path = Path(config_path)
        if not path.exists():
            raise ConfigError(
                f"Config file '{config_path}' does not exist. "
                "Provide an existing JSON or .env file or remove the --config flag."
            )

        if path.suffix.lower() != ".json":
            load_dotenv(path, override=False)
            return {}

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in config file {config_path}: {e}")
        except OSError as e:
            raise ConfigError(f"Failed to load config file {config_path}: {e}")

        self._validate_schema(data, path)
        return dict(data)

    def _validate_schema(self, data: Any, path: Path) -> None:
        """
        Validate configuration schema

        Raises:
            ConfigError: If schema validation fails
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a JSON object")

        unknown_keys = set(data.keys()) - set(self.OPTIONAL_FIELDS)
        if unknown_keys:
            raise ConfigError(
                f"Unknown keys in config file {path}: {', '.join(sorted(unknown_keys))}\n"
                f"Valid keys: {', '.join(sorted(self.OPTIONAL_FIELDS))}"
            )

        for key in ("token", "club", "api_base_url", "log_level"):
            if key in data and data[key] is not None and not isinstance(data[key], str):
                raise ConfigError(f"{key} must be a string in {path}")

        if "timeout" in data and (
            isinstance(data["timeout"], bool) or not isinstance(data["timeout"], int | float)
        ):
            raise ConfigError(f"timeout must be a number in {path}")

        if "log_level" in data and str(data["log_level"]).upper() not in self.VALID_LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {self.VALID_LOG_LEVELS} in {path}")

    def validate(self) -> None:
        """Validate that a token is available"""
        if not self._token:
            raise ConfigError(
                "VEO_TOKEN environment variable is required",
                details="Set VEO_TOKEN in your environment, a .env file, or config.json",
            )

    def require_club(self, club: str | None = None) -> str:
        """Return the club from the --club flag, falling back to VEO_CLUB"""
        resolved = (club or "").strip() or self.club
        if not resolved:
            raise ConfigError("--club flag or VEO_CLUB environment variable is required")
        return resolved
