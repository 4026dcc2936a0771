"""livesnips configuration.

Example:
    >>> from livesnips.config import Config
    >>> Config.from_dict({}).long_context_lines
    20
"""

from livesnips.exceptions import ConfigError, ConfigLoadError, ConfigValidationError

from ._defaults import DEFAULT_CONFIG, DEFAULT_VISUAL_WINDOW_SECONDS
from ._load import safe_load_config
from ._loader import (
    ENV_PREFIX,
    deep_merge,
    parse_env_vars,
    parse_string_value,
    read_toml_file,
    set_nested_key,
)
from ._models import Config, LogFormat, LoggingConfig, LogLevel

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_VISUAL_WINDOW_SECONDS",
    "ENV_PREFIX",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigValidationError",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "deep_merge",
    "parse_env_vars",
    "parse_string_value",
    "read_toml_file",
    "safe_load_config",
    "set_nested_key",
]
