"""
Configuration module for the time-tracking system.
"""
from .logging_config import LoggingConfig, configure_logging, reset_logging
from .settings import (
    TimeBudgetConfig,
    get_config,
    load_config,
    reload_config
)

__all__ = [
    'LoggingConfig',
    'TimeBudgetConfig',
    'configure_logging',
    'get_config',
    'load_config',
    'reload_config',
    'reset_logging'
]
