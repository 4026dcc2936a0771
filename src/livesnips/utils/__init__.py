"""Shared utilities: logging and filesystem locations."""

from ._logging import LogFormatType, create_cli_logger, create_logger
from ._paths import (
    APP_NAME,
    expand_path_variables,
    get_default_snippet_dir,
    get_snippet_dir,
    get_user_config_path,
)

__all__ = [
    "APP_NAME",
    "LogFormatType",
    "create_cli_logger",
    "create_logger",
    "expand_path_variables",
    "get_default_snippet_dir",
    "get_snippet_dir",
    "get_user_config_path",
]
