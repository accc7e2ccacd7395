"""
Configuration module for Spaceship-DNS.
"""

import os
import re
from pathlib import Path
from typing import Mapping, Optional, Union

import yaml
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from spaceship_dns.models.errors import ConfigError
from spaceship_dns.provider.spaceship import DEFAULT_BASE_URL, DEFAULT_PAGE_SIZE

ENV_API_KEY = "SPACESHIP_API_KEY"
ENV_API_SECRET = "SPACESHIP_API_SECRET"
ENV_BASE_URL = "SPACESHIP_BASE_URL"
ENV_LOG_LEVEL = "SPACESHIP_LOG_LEVEL"


class Config(BaseModel):
    """Configuration for Spaceship-DNS."""

    # Spaceship API configuration
    api_key: str = ""
    api_secret: str = ""
    base_url: str = DEFAULT_BASE_URL
    list_page_size: int = DEFAULT_PAGE_SIZE
    timeout: Optional[float] = None

    # Server configuration
    transport: str = "stdio"

    # Logging configuration
    log_level: str = "info"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """
        Load configuration from environment variables.

        Args:
            environ: Environment mapping, defaults to os.environ

        Returns:
            Config: Config instance populated from the environment
        """
        environ = os.environ if environ is None else environ
        return cls(**cls._env_overrides(environ))

    @classmethod
    def from_yaml(
        cls,
        config_path: Union[str, Path],
        environ: Optional[Mapping[str, str]] = None,
    ) -> "Config":
        """
        Load configuration from a YAML file. Environment variables take precedence.

        Args:
            config_path: Path to the YAML configuration file
            environ: Environment mapping, defaults to os.environ

        Returns:
            Config: Config instance populated with values from the YAML file
        """
        environ = os.environ if environ is None else environ
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        with open(path, "r") as f:
            yaml_content = cls._substitute_env_vars(f.read(), environ)
        try:
            config_data = yaml.safe_load(yaml_content) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(config_data, dict):
            raise ConfigError(f"Configuration file {path} must contain a mapping")

        flat_config = cls._flatten_config(config_data)
        flat_config.update(cls._env_overrides(environ))
        try:
            return cls(**flat_config)
        except PydanticValidationError as e:
            raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    @staticmethod
    def _env_overrides(environ: Mapping[str, str]) -> dict:
        overrides = {}
        for env_var, field_name in (
            (ENV_API_KEY, "api_key"),
            (ENV_API_SECRET, "api_secret"),
            (ENV_BASE_URL, "base_url"),
            (ENV_LOG_LEVEL, "log_level"),
        ):
            if environ.get(env_var):
                overrides[field_name] = environ[env_var]
        return overrides

    @staticmethod
    def _substitute_env_vars(content: str, environ: Mapping[str, str]) -> str:
        """
        Substitute environment variables in the configuration content.

        Args:
            content: Configuration content
            environ: Environment mapping

        Returns:
            str: Configuration content with environment variables substituted
        """
        # Pattern for ${ENV_VAR} or ${ENV_VAR:-default}
        pattern = r"\${([^}]+)}"

        def replace_env_var(match):
            env_var = match.group(1)
            if ":-" in env_var:
                env_var, default = env_var.split(":-", 1)
                return environ.get(env_var, default)
            return environ.get(env_var, "")

        return re.sub(pattern, replace_env_var, content)

    @staticmethod
    def _section(config_data: dict, key: str) -> dict:
        section = config_data.get(key) or {}
        if not isinstance(section, dict):
            raise ConfigError(f"Configuration section '{key}' must be a mapping")
        return section

    @staticmethod
    def _flatten_config(config_data: dict) -> dict:
        """
        Flatten nested configuration.

        Args:
            config_data: Nested configuration data

        Returns:
            dict: Flattened configuration data, only keys present in the file
        """
        flat_config = {}

        spaceship = Config._section(config_data, "spaceship")
        for key, field_name in (
            ("api_key", "api_key"),
            ("api_secret", "api_secret"),
            ("base_url", "base_url"),
            ("page_size", "list_page_size"),
            ("timeout", "timeout"),
        ):
            if spaceship.get(key) is not None:
                flat_config[field_name] = spaceship[key]

        server = Config._section(config_data, "server")
        if server.get("transport"):
            flat_config["transport"] = server["transport"]

        logging = Config._section(config_data, "logging")
        if logging.get("level"):
            flat_config["log_level"] = logging["level"]

        return flat_config

    def validate_credentials(self) -> None:
        """
        Ensure the API credentials are present.

        Raises:
            ConfigError: If the key or secret is missing
        """
        if not self.api_key or not self.api_secret:
            raise ConfigError(
                f"{ENV_API_KEY} and {ENV_API_SECRET} environment variables are required"
            )
