"""Configuration loader with YAML support and environment variable substitution."""

import copy
import os
import re
from typing import Any, Dict

import yaml

from models import ConversionOptions


class ConfigLoader:
    """Handles loading and validation of configuration files."""

    ENV_VAR_PATTERN = re.compile(r'\$\{([A-Za-z_][A-Za-z0-9_]*)\}')

    ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

    @classmethod
    def load(cls, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from YAML file with environment variable substitution.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            Parsed configuration dictionary

        Raises:
            FileNotFoundError: If config file doesn't exist
            yaml.YAMLError: If YAML parsing fails
        """
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            config_data = {}

        if not isinstance(config_data, dict):
            raise ValueError("Configuration file must contain a dictionary")

        # Substitute environment variables recursively
        config_data = cls._substitute_env_vars_recursive(config_data)

        return config_data

    @classmethod
    def validate(cls, config: Dict[str, Any]) -> None:
        """
        Validate configuration for correct value types.

        Args:
            config: Configuration dictionary to validate

        Raises:
            ValueError: If validation fails
        """
        for flag in ('conversion.demote_headings', 'conversion.indented_blockquotes'):
            value = get_nested(config, flag, False)
            if not isinstance(value, bool):
                raise ValueError(f"{flag} must be a boolean")

        crosslinks = get_nested(config, 'conversion.crosslinks_paths', {})
        if not isinstance(crosslinks, dict):
            raise ValueError("conversion.crosslinks_paths must be a mapping of document id to path")
        for document_id, path in crosslinks.items():
            if not isinstance(path, str) or not path:
                raise ValueError(
                    f"conversion.crosslinks_paths['{document_id}'] must be a non-empty string"
                )

        code_fonts = get_nested(config, 'conversion.code_fonts', ['Consolas'])
        if not isinstance(code_fonts, list) or not all(isinstance(font, str) for font in code_fonts):
            raise ValueError("conversion.code_fonts must be a list of font family names")

        for section in ('metadata.fields_default', 'metadata.fields_mapper'):
            value = get_nested(config, section, {})
            if not isinstance(value, dict):
                raise ValueError(f"{section} must be a mapping")

        mapper = get_nested(config, 'metadata.fields_mapper', {})
        if not all(isinstance(new_key, str) for new_key in mapper.values()):
            raise ValueError("metadata.fields_mapper values must be strings")

        output_dir = get_nested(config, 'export.output_directory')
        if output_dir is not None:
            if not isinstance(output_dir, str):
                raise ValueError("export.output_directory must be a string")
            if os.path.exists(output_dir) and not os.path.isdir(output_dir):
                raise ValueError(f"export.output_directory '{output_dir}' is not a directory")

        level = get_nested(config, 'logging.level')
        if level is not None and str(level).upper() not in cls.ALLOWED_LOG_LEVELS:
            raise ValueError(
                f"logging.level must be one of: {sorted(cls.ALLOWED_LOG_LEVELS)}"
            )

    @classmethod
    def merge_with_args(cls, config: Dict[str, Any], args) -> Dict[str, Any]:
        """
        Merge configuration file with CLI arguments.
        CLI arguments take precedence over config file values.

        Args:
            config: Base configuration dictionary
            args: CLI arguments with attributes matching config keys

        Returns:
            Merged configuration dictionary
        """
        merged = copy.deepcopy(config)

        # Ensure nested dictionaries exist
        for section in ('conversion', 'metadata', 'export', 'logging'):
            if not isinstance(merged.get(section), dict):
                merged[section] = {}

        # Flags only ever switch options on
        if getattr(args, 'demote_headings', False):
            merged['conversion']['demote_headings'] = True

        if getattr(args, 'indented_blockquotes', False):
            merged['conversion']['indented_blockquotes'] = True

        if getattr(args, 'output_dir', None):
            merged['export']['output_directory'] = args.output_dir

        if getattr(args, 'log_file', None):
            merged['logging']['file'] = args.log_file

        return merged

    @classmethod
    def to_conversion_options(cls, config: Dict[str, Any]) -> ConversionOptions:
        """Build the engine options from the ``conversion`` section."""
        return ConversionOptions.from_dict(get_nested(config, 'conversion', {}))

    @classmethod
    def _substitute_env_vars_recursive(cls, data: Any) -> Any:
        """Recursively substitute environment variables in data structure."""
        if isinstance(data, dict):
            return {key: cls._substitute_env_vars_recursive(value) for key, value in data.items()}
        elif isinstance(data, list):
            return [cls._substitute_env_vars_recursive(item) for item in data]
        elif isinstance(data, str):
            return cls._substitute_env_vars(data)
        else:
            return data

    @classmethod
    def _substitute_env_vars(cls, value: str) -> str:
        """Substitute environment variables in a string value."""
        def replace_match(match):
            var_name = match.group(1)
            env_value = os.getenv(var_name)
            return env_value if env_value is not None else match.group(0)

        return cls.ENV_VAR_PATTERN.sub(replace_match, value)


def get_nested(config: dict, path: str, default: Any = None) -> Any:
    """Safely retrieve nested configuration values using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "conversion.demote_headings")
        default: Default value if path doesn't exist

    Returns:
        Value at the nested path or default
    """
    keys = path.split('.')
    value = config

    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value


__all__ = ['ConfigLoader', 'get_nested']
