"""Configuration loader with YAML parsing and environment variable substitution."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..utils.async_helpers import ConfigError
from .schema import NotifierConfig


def substitute_env_vars(text: str) -> str:
    """
    Replace ${VAR_NAME} patterns with environment variable values.

    Args:
        text: Text containing ${VAR_NAME} patterns

    Returns:
        Text with environment variables substituted

    Raises:
        ConfigError: If a referenced environment variable is not found
    """

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(f"Environment variable {var_name} not found")
        return value

    return re.sub(r"\$\{([^}]+)\}", replacer, text)


def load_config(path: Path | None = None) -> NotifierConfig:
    """
    Load notifier configuration.

    Without a path the settings are read from the environment only. With a
    path the YAML file is read, ``${VAR}`` references are substituted and
    the result is validated.

    Args:
        path: Optional path to a YAML configuration file

    Returns:
        Validated NotifierConfig instance

    Raises:
        ConfigError: If the file is missing, is not valid YAML, or does not
            match the schema
    """
    if path is None:
        try:
            return NotifierConfig()
        except ValidationError as e:
            raise ConfigError(f"invalid configuration from environment: {e}") from e

    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    with path.open() as f:
        raw_yaml = f.read()

    yaml_with_env = substitute_env_vars(raw_yaml)

    try:
        config_dict = yaml.safe_load(yaml_with_env) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"failed parsing {path}: {e}") from e

    if not isinstance(config_dict, dict):
        raise ConfigError(f"failed parsing {path}: expected a mapping at the top level")

    try:
        return NotifierConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigError(f"invalid configuration in {path}: {e}") from e
