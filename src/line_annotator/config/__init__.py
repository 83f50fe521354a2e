from .loader import ConfigError, load_config, parse_config
from .models import AnnotationConfig, AppConfig, InputConfig, LoggingConfig, OutputConfig

__all__ = [
    "AnnotationConfig",
    "AppConfig",
    "ConfigError",
    "InputConfig",
    "LoggingConfig",
    "OutputConfig",
    "load_config",
    "parse_config",
]
