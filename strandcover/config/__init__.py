"""
StrandCover v0.1.0

Configuration management for StrandCover.

Author: StrandCover Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .schema import (
    DEFAULT_CONFIG,
    ConfigValidationError,
    load_config,
    save_config_template,
    validate_config,
)

__all__ = [
    "DEFAULT_CONFIG",
    "ConfigValidationError",
    "load_config",
    "save_config_template",
    "validate_config",
]
