"""Configuration sources and their precedence.

Sources merge in this order, later ones winning for scalar fields and
appending to the input map:

1. defaults (all absent)
2. the per-user config file
3. the file named by ``$TTYCONF_CONFIG_FILE``
4. direct environment overrides (``$TTYCONF_DEBUG_LOG``)

Unreadable files contribute nothing. Only ``standard_io_config`` can fail,
when ``$TERM`` is missing.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from platformdirs import user_config_dir

from .config import DEFAULT_VMIN, DEFAULT_VTIME, EMPTY_CONFIG, Config, merge, merge_all
from .errors import MissingTermEnvVarError
from .parser import run_parse_config

logger = logging.getLogger(__name__)

APP_NAME = "ttyconf"
CONFIG_FILENAME = "config"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
LEGACY_CONFIG_PATH = Path.home() / f".{APP_NAME}" / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

CONFIG_FILE_ENV_VAR = "TTYCONF_CONFIG_FILE"
DEBUG_LOG_ENV_VAR = "TTYCONF_DEBUG_LOG"
TERM_ENV_VAR = "TERM"

STDIN_FD = 0
STDOUT_FD = 1


def _environ(environ: Mapping[str, str] | None) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def user_config_path() -> Path:
    """Locate the per-user config file.

    The platformdirs location wins when it exists. Older installs kept the
    file at ``~/.ttyconf/config``; that path is used only while the platform
    location is missing and ``CONFIG_PATH`` has not been redirected.
    """
    uses_platform_dir = CONFIG_PATH == DEFAULT_CONFIG_PATH
    if not CONFIG_PATH.exists() and uses_platform_dir and LEGACY_CONFIG_PATH.exists():
        return LEGACY_CONFIG_PATH
    return CONFIG_PATH


def parse_config_file(path: str | os.PathLike[str]) -> Config:
    """Parse one config file; a missing or unreadable file yields ``EMPTY_CONFIG``."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        logger.debug("config file %s not loaded: %s", path, exc)
        return EMPTY_CONFIG
    return run_parse_config(str(path), data)


def override_env_config(environ: Mapping[str, str] | None = None) -> Config:
    """Build a fragment straight from environment values (not parsed)."""
    debug_log = _environ(environ).get(DEBUG_LOG_ENV_VAR)
    return Config(debug_log=debug_log)


def user_config(environ: Mapping[str, str] | None = None) -> Config:
    """Load and merge the user file, the override file, and env overrides."""
    env = _environ(environ)
    sources = [EMPTY_CONFIG, parse_config_file(user_config_path())]
    override_path = env.get(CONFIG_FILE_ENV_VAR)
    if override_path:
        sources.append(parse_config_file(override_path))
    sources.append(override_env_config(env))
    return merge_all(sources)


def standard_io_config(environ: Mapping[str, str] | None = None) -> Config:
    """Baseline values for a terminal on stdin/stdout.

    Raises ``MissingTermEnvVarError`` when ``$TERM`` is unset or empty.
    """
    term = _environ(environ).get(TERM_ENV_VAR)
    if not term:
        raise MissingTermEnvVarError()
    return Config(
        vmin=DEFAULT_VMIN,
        vtime=DEFAULT_VTIME,
        mouse_mode=False,
        bracketed_paste_mode=False,
        input_fd=STDIN_FD,
        output_fd=STDOUT_FD,
        term_name=term,
    )


def load_config(environ: Mapping[str, str] | None = None) -> Config:
    """Effective configuration for a session: terminal baseline, then user sources."""
    env = _environ(environ)
    return merge(standard_io_config(env), user_config(env))
