"""Filesystem locations used by livesnips."""

import os
import re
import sys
from pathlib import Path

import platformdirs

APP_NAME = "livesnips"
SNIPPET_DIR_NAME = "hsnips"

_WINDOWS_VARIABLE = re.compile(r"%([^%]+)%")


def expand_path_variables(value: str) -> Path:
    """Expand ``~``, ``$VAR``/``${VAR}`` and ``%VAR%`` references in a path.

    Unknown variables are left as written.

    Examples:
        >>> os.environ["LIVESNIPS_DOCTEST"] = "/tmp/snips"
        >>> expand_path_variables("%LIVESNIPS_DOCTEST%/tex").as_posix()
        '/tmp/snips/tex'
    """
    expanded = _WINDOWS_VARIABLE.sub(
        lambda match: os.environ.get(match.group(1), match.group(0)), value
    )
    return Path(os.path.expandvars(expanded)).expanduser()


def get_user_config_path() -> Path:
    r"""Get the platform-specific user config file path.

    - Linux: ``~/.config/livesnips/config.toml``
    - macOS: ``~/Library/Application Support/livesnips/config.toml``
    - Windows: ``%APPDATA%\livesnips\config.toml``

    The file is not required to exist.
    """
    return platformdirs.user_config_path(APP_NAME) / "config.toml"


def get_default_snippet_dir() -> Path:
    """Get the snippet library directory used when none is configured.

    Follows the editor's user settings layout for the current platform.
    """
    if sys.platform == "win32":
        return Path(os.environ.get("APPDATA", "")) / "Code" / "User" / SNIPPET_DIR_NAME
    home = Path(os.environ.get("HOME", str(Path.home())))
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / "Code" / "User" / SNIPPET_DIR_NAME
    return home / ".config" / "Code" / "User" / SNIPPET_DIR_NAME


def get_snippet_dir(configured: str = "") -> Path:
    """Resolve the snippet directory from a configured value or the default."""
    if configured:
        return expand_path_variables(configured)
    return get_default_snippet_dir()
