"""
StrandCover v0.1.0

Configuration schema for StrandCover.

Defines all available configuration parameters with defaults and validation.

Author: StrandCover Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import copy
from typing import Dict, Any, Optional, List
from pathlib import Path
import yaml

from ..assembly_core.path_cover import (
    PATH_COVER_DEFAULT_K,
    PATH_COVER_DEFAULT_N,
    PATH_COVER_MIN_K,
)
from ..index import DEFAULT_BATCH_SIZE, DEFAULT_SAMPLE_INTERVAL


class ConfigValidationError(Exception):
    """Raised when configuration loading or validation fails."""
    pass


VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
TEMPLATES = ['default', 'sparse', 'dense']


# Default configuration values
DEFAULT_CONFIG = {
    # ========================================================================
    # Path Cover
    # ========================================================================
    'path_cover': {
        'num_paths': PATH_COVER_DEFAULT_N,  # Paths per connected component
        'window_length': PATH_COVER_DEFAULT_K,  # k; windows of k oriented nodes
    },

    # ========================================================================
    # Index Construction (tuning only, does not change the index)
    # ========================================================================
    'index': {
        'batch_size': DEFAULT_BATCH_SIZE,
        'sample_interval': DEFAULT_SAMPLE_INTERVAL,
    },

    # ========================================================================
    # Output
    # ========================================================================
    'output': {
        'show_progress': False,
        'logging': {
            'level': 'INFO',  # 'DEBUG', 'INFO', 'WARNING', 'ERROR'
            'log_file': None,  # Log to stderr only
        },
    },
}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Path to YAML config file (None = use defaults)

    Returns:
        Configuration dictionary

    Raises:
        ConfigValidationError: If the file is not valid YAML or not a mapping,
                               or a section is not a mapping
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        config_path = Path(config_path)
        if config_path.exists():
            try:
                with open(config_path) as f:
                    user_config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigValidationError(f"Invalid YAML in config file {config_path}: {e}")

            if user_config is None:
                return config
            if not isinstance(user_config, dict):
                raise ConfigValidationError(f"Config file {config_path} must contain a mapping")

            # Deep merge user config into defaults
            config = _deep_merge(config, user_config)
            _check_sections(config, DEFAULT_CONFIG, config_path)

    return config


def _check_sections(config: Dict, defaults: Dict, config_path: Path, prefix: str = ''):
    """Raise if a section that holds settings by default was replaced by a non-mapping."""
    for key, default in defaults.items():
        if not isinstance(default, dict):
            continue
        name = f"{prefix}{key}"
        value = config.get(key)
        if not isinstance(value, dict):
            raise ConfigValidationError(
                f"Section '{name}' in {config_path} must be a mapping, got {value!r}"
            )
        _check_sections(value, default, config_path, prefix=f"{name}.")


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def save_config_template(output_path: Path, template: str = 'default'):
    """
    Save a configuration template to file.

    Args:
        output_path: Output file path
        template: Template type ('default', 'sparse', 'dense')
    """
    if template not in TEMPLATES:
        raise ConfigValidationError(f"Unknown template: {template}")

    config = copy.deepcopy(DEFAULT_CONFIG)

    # Few short-window paths: smallest index
    if template == 'sparse':
        config['path_cover']['num_paths'] = 4
        config['path_cover']['window_length'] = 2

    # Many long-window paths: better coverage of complex regions
    elif template == 'dense':
        config['path_cover']['num_paths'] = 64
        config['path_cover']['window_length'] = 8

    with open(output_path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration dictionary.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    def _is_int(value) -> bool:
        return isinstance(value, int) and not isinstance(value, bool)

    def _section(parent, key, name):
        value = parent.get(key, {})
        if not isinstance(value, dict):
            errors.append(f"Invalid {name}: {value!r} (must be a mapping)")
            return {}
        return value

    path_cover = _section(config, 'path_cover', 'path_cover')
    n = path_cover.get('num_paths')
    if not _is_int(n) or n < 0:
        errors.append(f"Invalid path_cover.num_paths: {n!r} (must be an integer >= 0)")
    k = path_cover.get('window_length')
    if not _is_int(k) or k < PATH_COVER_MIN_K:
        errors.append(f"Invalid path_cover.window_length: {k!r} (must be an integer >= {PATH_COVER_MIN_K})")

    index = _section(config, 'index', 'index')
    for key in ('batch_size', 'sample_interval'):
        value = index.get(key)
        if not _is_int(value) or value < 1:
            errors.append(f"Invalid index.{key}: {value!r} (must be an integer >= 1)")

    output = _section(config, 'output', 'output')
    level = _section(output, 'logging', 'output.logging').get('level')
    if level not in VALID_LOG_LEVELS:
        errors.append(f"Invalid output.logging.level: {level!r}")

    return errors

# StrandCover v0.1.0
# Any usage is subject to this software's license.
