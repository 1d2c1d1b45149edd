"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for reqview:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.reqview/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- A single :class:`~reqview.models.GlobalConfig`
  JSON file storing request defaults, render limits and styles.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables and the config file into the effective
  configuration.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`) so a crash never leaves a half-written config.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from reqview.exceptions import ConfigError
from reqview.models import GlobalConfig

_APP_NAME = "reqview"
_CONFIG_FILENAME = "config.json"

ENV_URL = "REQVIEW_URL"
ENV_LEGACY_URL = "FETCH_URL"
ENV_TIMEOUT = "REQVIEW_TIMEOUT"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG base directories (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/reqview/`` (default ``~/.config/reqview/``).
    On macOS/Windows: ``~/.reqview/``.

    Returns:
        Absolute path to the configuration directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/reqview/`` (default ``~/.local/share/reqview/``).
    On macOS/Windows: ``~/.reqview/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is removed and the exception re-raised.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close below
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the config directory.

    Returns:
        The deserialised :class:`~reqview.models.GlobalConfig`. If the
        file does not exist, a default instance is returned.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    _atomic_write(config_path(), json.dumps(data, indent=2) + "\n")


def reset_global_config() -> GlobalConfig:
    """Overwrite the config file with defaults and return them."""
    config = GlobalConfig()
    save_global_config(config)
    return config


# --- Precedence resolution ---


def resolve_config(
    cli_timeout: Optional[float] = None,
    no_color: bool = False,
) -> GlobalConfig:
    """Resolve the effective configuration.

    Precedence (high to low):
        1. CLI flags (``cli_timeout``, ``no_color``)
        2. Environment variables (``REQVIEW_URL``, then the legacy
           ``FETCH_URL``; ``REQVIEW_TIMEOUT``)
        3. User config (``~/.config/reqview/config.json``)
        4. Defaults

    Returns:
        A fresh :class:`~reqview.models.GlobalConfig`; the file on disk is
        never modified.

    Raises:
        ConfigError: If the config file is invalid or ``REQVIEW_TIMEOUT``
            is not a positive number.
    """
    config = load_global_config()

    env_url = os.environ.get(ENV_URL) or os.environ.get(ENV_LEGACY_URL)
    if env_url:
        config.request.default_url = env_url

    env_timeout = os.environ.get(ENV_TIMEOUT)
    if env_timeout:
        config.request.timeout = _parse_timeout(env_timeout, source=ENV_TIMEOUT)

    if cli_timeout is not None:
        config.request.timeout = _parse_timeout(str(cli_timeout), source="--timeout")

    if no_color:
        config.render.color = False

    return config


def _parse_timeout(raw: str, source: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid timeout {raw!r} (source: {source})") from exc
    if value <= 0:
        raise ConfigError(f"Timeout must be positive, got {raw!r} (source: {source})")
    return value
