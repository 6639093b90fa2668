"""
Configuration package for dbtester.
"""

from .config_manager import ConfigManager, ConfigValidationError

__all__ = [
    'ConfigManager',
    'ConfigValidationError'
]
