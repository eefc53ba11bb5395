"""YAML configuration loading and validation.

This module loads converter settings from a YAML file and turns them into
an immutable ConverterOptions. Every field is optional; missing fields keep
their defaults.

Configuration file structure:
    bullet_marker: "-"
    strong_symbol: "**"
    em_symbol: "_"
    code_fence: "```"
    table_cell_separator: " / "
    escape_markdown: true
"""

import os
from typing import Any, Dict, Optional

import yaml

from src.content_converter.options import ConverterOptions

from .errors import ConfigError, FilesystemError


class ConfigLoader:
    """Handles configuration file loading and validation."""

    # Looked up in the working directory when no --config is given
    DEFAULT_CONFIG_FILE = '.confluence-md.yaml'

    # Allowed values for enumerated fields
    CHOICES = {
        'bullet_marker': ('-', '*', '+'),
        'strong_symbol': ('**', '__'),
        'em_symbol': ('_', '*'),
        'code_fence': ('```', '~~~'),
    }

    STRING_FIELDS = ('bullet_marker', 'strong_symbol', 'em_symbol', 'code_fence', 'table_cell_separator')
    BOOL_FIELDS = ('escape_markdown',)

    @classmethod
    def load(cls, config_path: str) -> ConverterOptions:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            ConverterOptions built from the file

        Raises:
            FilesystemError: If file cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise FilesystemError(
                config_path,
                'read',
                'Configuration file not found'
            )
        except PermissionError:
            raise FilesystemError(
                config_path,
                'read',
                'Permission denied'
            )
        except OSError as e:
            raise FilesystemError(
                config_path,
                'read',
                str(e)
            )

        # Empty file means all defaults
        if not content.strip():
            return ConverterOptions()

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML syntax: {str(e)}"
            )

        if config_dict is None:
            return ConverterOptions()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(config_dict)

    @classmethod
    def resolve(cls, config_path: Optional[str] = None, cwd: str = '.') -> ConverterOptions:
        """Load options from an explicit path or the default file if present.

        Args:
            config_path: Explicit configuration path (must exist)
            cwd: Directory searched for DEFAULT_CONFIG_FILE

        Returns:
            ConverterOptions, defaults when no file applies
        """
        if config_path:
            return cls.load(config_path)

        default_path = os.path.join(cwd, cls.DEFAULT_CONFIG_FILE)
        if os.path.isfile(default_path):
            return cls.load(default_path)
        return ConverterOptions()

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> ConverterOptions:
        """Validate a configuration dictionary.

        Args:
            config_dict: Raw configuration dictionary from YAML

        Returns:
            Validated ConverterOptions

        Raises:
            ConfigError: If a field is unknown or has an invalid value
        """
        known = set(cls.STRING_FIELDS) | set(cls.BOOL_FIELDS)
        unknown = sorted(str(key) for key in config_dict if key not in known)
        if unknown:
            raise ConfigError(f"Unknown field(s): {', '.join(unknown)}")

        values: Dict[str, Any] = {}

        for field_name in cls.STRING_FIELDS:
            if field_name not in config_dict:
                continue
            value = config_dict[field_name]
            if not isinstance(value, str):
                raise ConfigError(
                    f"Field must be a string, got {type(value).__name__}",
                    field_name
                )
            if not value:
                raise ConfigError("Field cannot be empty", field_name)
            choices = cls.CHOICES.get(field_name)
            if choices and value not in choices:
                raise ConfigError(
                    f"Value {value!r} is not one of {', '.join(repr(c) for c in choices)}",
                    field_name
                )
            values[field_name] = value

        for field_name in cls.BOOL_FIELDS:
            if field_name not in config_dict:
                continue
            value = config_dict[field_name]
            if not isinstance(value, bool):
                raise ConfigError(
                    f"Field must be a boolean, got {type(value).__name__}",
                    field_name
                )
            values[field_name] = value

        return ConverterOptions(**values)
