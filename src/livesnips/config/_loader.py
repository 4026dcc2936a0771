# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Configuration sources: TOML files and ``LIVESNIPS_*`` environment variables.

Each source yields a plain nested dictionary. Sources are combined with
deep_merge before the result is validated by the Config model.
"""

from __future__ import annotations

import copy
import os
import tomllib
from typing import TYPE_CHECKING, Any

import orjson

from livesnips.exceptions import ConfigLoadError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

ENV_PREFIX = "LIVESNIPS_"

_BOOLEANS = {"true": True, "false": False}

type ConfigDict = dict[str, Any]  # pyright: ignore[reportExplicitAny]


def read_toml_file(path: Path) -> ConfigDict:
    """Parse the TOML file at ``path``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigLoadError: If the file is not valid TOML, located by line and
            column.
    """
    with path.open("rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Failed to parse TOML file: {e}"
            raise ConfigLoadError(msg, path=path, line=e.lineno, column=e.colno) from e


def deep_merge(base: ConfigDict, override: ConfigDict) -> ConfigDict:
    """Return ``base`` with ``override`` layered on top.

    Tables present on both sides merge recursively; any other override value
    (scalar or array) replaces the base value outright. The result shares no
    mutable state with either input.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def set_nested_key(d: ConfigDict, key_path: str, value: object) -> None:
    """Store ``value`` under a dotted ``key_path``, creating tables on the way.

    Example:
        >>> d = {}
        >>> set_nested_key(d, "logging.level", "debug")
        >>> d
        {'logging': {'level': 'debug'}}
    """
    *tables, leaf = key_path.split(".")
    for table in tables:
        child = d.get(table)
        if not isinstance(child, dict):
            child = d[table] = {}
        d = child
    d[leaf] = value


def parse_string_value(value: str) -> object:
    """Infer the type of an environment variable value.

    Booleans and integers are recognised first, then decimals, then JSON
    arrays and objects. Anything else stays a string.

    Examples:
        >>> parse_string_value("FALSE")
        False
        >>> parse_string_value("2.5")
        2.5
        >>> parse_string_value("1.2.3")
        '1.2.3'
    """
    if value.lower() in _BOOLEANS:
        return _BOOLEANS[value.lower()]

    converters: list[type[int] | type[float]] = [int]
    if "." in value:
        converters.append(float)
    for convert in converters:
        try:
            return convert(value)
        except ValueError:
            continue

    if value[:1] + value[-1:] in ("[]", "{}"):
        try:
            return orjson.loads(value)
        except orjson.JSONDecodeError:
            return value
    return value


def parse_env_vars(
    prefix: str = ENV_PREFIX,
    environ: Mapping[str, str] | None = None,
) -> ConfigDict:
    """Collect ``<prefix><SECTION>__<KEY>`` variables into a config dictionary.

    ``LIVESNIPS_LOGGING__LEVEL=debug`` becomes ``{"logging": {"level": "debug"}}``.
    A bare prefix with no key is ignored.
    """
    if environ is None:
        environ = os.environ

    result: ConfigDict = {}
    for name, raw in environ.items():
        key = name.removeprefix(prefix)
        if key == name or not key:
            continue
        set_nested_key(result, key.replace("__", ".").lower(), parse_string_value(raw))
    return result
