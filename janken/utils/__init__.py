"""
工具类模块
Utility Classes
"""
from .logger import setup_logger, setup_logger_from_config, get_log_level
from .config_loader import ConfigLoader, GameConfig
from .error_handler import ErrorHandler, global_error_handler
from .exceptions import (
    SetupFailure,
    RuntimeTimeoutError,
    ModelLoadError,
    CameraSetupError,
    PredictionFailure,
    ConfigurationException
)

__all__ = [
    'setup_logger',
    'setup_logger_from_config',
    'get_log_level',
    'ConfigLoader',
    'GameConfig',
    'ErrorHandler',
    'global_error_handler',
    'SetupFailure',
    'RuntimeTimeoutError',
    'ModelLoadError',
    'CameraSetupError',
    'PredictionFailure',
    'ConfigurationException'
]
