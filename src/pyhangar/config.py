"""Settings resolution with XDG paths and precedence handling.

The CLI settings (base URL, API token, timeout and output format) are
merged from four layers, highest precedence first:

1. CLI flags (``--base-url``, ``--token``, ``--timeout``, ``--output``)
2. Environment variables (``HANGAR_BASE_URL``, ``HANGAR_API_TOKEN``,
   ``HANGAR_TIMEOUT``, ``HANGAR_OUTPUT``)
3. YAML config file (``--config``, else ``$XDG_CONFIG_HOME/hangar/config.yaml``,
   else ``~/.config/hangar/config.yaml``)
4. Defaults declared on :class:`~pyhangar.models.Settings`

:func:`load_settings` returns one immutable
:class:`~pyhangar.models.Settings` value that the CLI passes explicitly to
every command; nothing is stored in module globals.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from pyhangar.exceptions import ConfigError
from pyhangar.models import Settings

_APP_NAME = "hangar"
_CONFIG_FILENAME = "config.yaml"
ENV_PREFIX = "HANGAR_"

# Config-file keys and env suffixes that feed each Settings field.
_KEY_ALIASES: dict[str, tuple[str, ...]] = {
    "base_url": ("base_url", "base-url"),
    "api_token": ("api_token", "token"),
    "timeout": ("timeout",),
    "output": ("output",),
}

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|h|m|s)")
_DURATION_UNITS = {"h": 3600.0, "m": 60.0, "s": 1.0, "ms": 0.001}


# --- XDG path resolution ---


def get_config_dir() -> Path:
    """Return the configuration directory (not created).

    ``$XDG_CONFIG_HOME/hangar/`` when the variable is set, otherwise
    ``~/.config/hangar/``.
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    if base and os.path.isabs(base):
        return Path(base) / _APP_NAME
    return Path.home() / ".config" / _APP_NAME


def default_config_path() -> Path:
    """Path of the YAML config file used when ``--config`` is not given.

    The file under :func:`get_config_dir` wins; when it does not exist,
    ``~/.config/hangar/config.yaml`` is used if present.
    """
    primary = get_config_dir() / _CONFIG_FILENAME
    fallback = Path.home() / ".config" / _APP_NAME / _CONFIG_FILENAME
    if not primary.is_file() and fallback.is_file():
        return fallback
    return primary


# --- Durations ---


def parse_duration(value: Union[str, int, float]) -> float:
    """Convert a timeout value to seconds.

    Accepts plain numbers (seconds) and Go-style durations such as ``30s``,
    ``1m30s``, ``500ms`` or ``1h``.

    Raises:
        ConfigError: If *value* is neither a number nor a valid duration.
    """
    if isinstance(value, bool):
        raise ConfigError(f"Invalid timeout: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)

    text = str(value).strip().lower()
    try:
        return float(text)
    except ValueError:
        pass

    pos = 0
    total = 0.0
    for match in _DURATION_PART.finditer(text):
        if match.start() != pos:
            break
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    if pos == 0 or pos != len(text):
        raise ConfigError(f"Invalid timeout: {value!r} (expected seconds or e.g. '30s', '1m30s')")
    return total


# --- Layers ---


def load_config_file(path: Optional[Path] = None) -> dict[str, Any]:
    """Read the YAML config file.

    Args:
        path: Explicit file (from ``--config``); it must exist. When
            ``None``, the default location is used and silently skipped if
            missing.

    Returns:
        Settings keys found in the file, normalised to field names.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, or is
            not a mapping.
    """
    explicit = path is not None
    target = path if path is not None else default_config_path()
    if not target.is_file():
        if explicit:
            raise ConfigError(f"Config file not found: {target}")
        return {}

    try:
        raw = yaml.safe_load(target.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {target}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in config file {target}: {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ConfigError(f"Config file {target} must contain a mapping, got {type(raw).__name__}")
    return _pick(raw)


def load_env(environ: Optional[Mapping[str, str]] = None) -> dict[str, Any]:
    """Collect ``HANGAR_*`` environment variables as settings keys."""
    env = os.environ if environ is None else environ
    suffixes = {
        key[len(ENV_PREFIX):].lower(): value
        for key, value in env.items()
        if key.startswith(ENV_PREFIX) and value != ""
    }
    return _pick(suffixes)


def _pick(source: Mapping[str, Any]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for field_name, aliases in _KEY_ALIASES.items():
        for alias in aliases:
            if source.get(alias) is not None:
                values[field_name] = source[alias]
                break
    return values


# --- Precedence resolution ---


def load_settings(
    config_file: Optional[Path] = None,
    *,
    base_url: Optional[str] = None,
    token: Optional[str] = None,
    timeout: Optional[Union[str, float]] = None,
    output: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Resolve the effective settings.

    Precedence (high to low): keyword overrides (CLI flags), environment,
    config file, defaults. ``None`` overrides are ignored.

    Raises:
        ConfigError: If any layer is unreadable or the merged values are
            invalid (for example a negative timeout).
    """
    merged: dict[str, Any] = {}
    merged.update(load_config_file(config_file))
    merged.update(load_env(environ))

    flags = {"base_url": base_url, "api_token": token, "timeout": timeout, "output": output}
    merged.update({key: value for key, value in flags.items() if value is not None})

    if "timeout" in merged:
        merged["timeout"] = parse_duration(merged["timeout"])

    try:
        return Settings.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
