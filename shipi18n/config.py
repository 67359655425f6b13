#!/usr/bin/env python3
"""
CLI configuration.

Settings live in ~/.shipi18n/config.yml (camelCase keys). Environment
variables, including those from a .env file, take priority over the file.
"""

import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".shipi18n"
CONFIG_FILE = CONFIG_DIR / "config.yml"

# File key -> dataclass field
FILE_KEYS = {
    "apiKey": "api_key",
    "sourceLanguage": "source_language",
    "targetLanguages": "target_languages",
    "outputDir": "output_dir",
    "saveKeys": "save_keys",
}

DEFAULT_CONFIG = {
    "apiKey": "",
    "sourceLanguage": "en",
    "targetLanguages": ["es", "fr", "de"],
    "outputDir": "./locales",
    "saveKeys": True,
}


@dataclass
class Config:
    """Effective CLI configuration."""
    api_key: Optional[str] = None
    source_language: Optional[str] = None
    target_languages: Optional[list[str]] = None
    output_dir: Optional[str] = None
    save_keys: Optional[bool] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to file representation (camelCase keys, unset values dropped)."""
        data = asdict(self)
        return {
            file_key: data[attr]
            for file_key, attr in FILE_KEYS.items()
            if data[attr] is not None
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Create from file representation, ignoring unknown keys."""
        return cls(**{
            attr: data[file_key]
            for file_key, attr in FILE_KEYS.items()
            if file_key in data
        })

    def get(self, key: str) -> Any:
        return getattr(self, _attr_for(key))


def _attr_for(key: str) -> str:
    """Map a camelCase config key to its dataclass field."""
    if key in FILE_KEYS:
        return FILE_KEYS[key]
    if key in {f.name for f in fields(Config)}:
        return key
    available = ', '.join(FILE_KEYS)
    raise ConfigError(f"Unknown config key: {key}. Available: {available}")


def _config_from_env() -> Config:
    """Read settings from environment variables."""
    load_dotenv()
    target_langs = os.environ.get("SHIPI18N_TARGET_LANGS")
    return Config(
        api_key=os.environ.get("SHIPI18N_API_KEY"),
        source_language=os.environ.get("SHIPI18N_SOURCE_LANG"),
        target_languages=[lang.strip() for lang in target_langs.split(",")] if target_langs else None,
        output_dir=os.environ.get("SHIPI18N_OUTPUT_DIR"),
        save_keys=os.environ["SHIPI18N_SAVE_KEYS"] == "true" if "SHIPI18N_SAVE_KEYS" in os.environ else None,
    )


def read_config_file(config_file: Optional[Path] = None) -> dict:
    """
    Read the raw YAML config file.

    An unreadable or invalid file is reported as a warning and treated as empty.
    """
    config_file = config_file or CONFIG_FILE
    if not config_file.exists():
        return {}

    try:
        data = yaml.safe_load(config_file.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Could not read config file: %s", e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Could not read config file: %s is not a mapping", config_file)
        return {}
    return data


def get_config(config_file: Optional[Path] = None) -> Config:
    """
    Get the effective configuration.

    Priority: environment variables > config file > built-in defaults.

    Args:
        config_file: Override for the config file path

    Returns:
        Config with every field set
    """
    config = _config_from_env()
    file_config = Config.from_dict(read_config_file(config_file))

    for f in fields(Config):
        if getattr(config, f.name) is None:
            setattr(config, f.name, getattr(file_config, f.name))

    if config.source_language is None:
        config.source_language = "en"
    if config.output_dir is None:
        config.output_dir = "./locales"
    if config.save_keys is None:
        config.save_keys = False

    return config


def save_config(config: dict, config_file: Optional[Path] = None) -> Path:
    """
    Write configuration to the YAML config file.

    Args:
        config: File representation (camelCase keys)
        config_file: Override for the config file path

    Returns:
        Path of the written file
    """
    config_file = config_file or CONFIG_FILE
    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_file.write_text(
            yaml.safe_dump(config, allow_unicode=True, default_flow_style=False, sort_keys=False),
            encoding="utf-8",
        )
    except OSError as e:
        raise ConfigError(f"Failed to save config: {e}") from e
    return config_file


def get_config_value(key: str, config_file: Optional[Path] = None) -> Any:
    """Get a specific config value by camelCase key."""
    return get_config(config_file).get(key)


def set_config_value(key: str, value: Any, config_file: Optional[Path] = None) -> Path:
    """
    Set a specific config value in the config file.

    Only the file contents are rewritten; environment overrides are not
    persisted.
    """
    attr = _attr_for(key)
    file_key = next(k for k, a in FILE_KEYS.items() if a == attr)

    data = read_config_file(config_file)
    data[file_key] = value
    return save_config(data, config_file)


def parse_config_value(raw: str) -> Any:
    """
    Parse a value typed on the command line.

    "true"/"false" become booleans, comma-separated values become lists.
    """
    if raw == "true":
        return True
    if raw == "false":
        return False
    if "," in raw:
        return [part.strip() for part in raw.split(",") if part.strip()]
    return raw


def mask_api_key(api_key: str) -> str:
    """Show only the first characters of an API key."""
    return f"{api_key[:12]}..." if isinstance(api_key, str) and api_key else api_key
