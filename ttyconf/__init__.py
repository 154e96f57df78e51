"""Public package surface for ttyconf.

Re-exports the config record, merge helpers, parsers and source loaders.
"""

from __future__ import annotations

from .config import EMPTY_CONFIG, Config, InputMapEntry, default_config, merge, merge_all
from .errors import (
    ConfigParseError,
    ConfigurationError,
    DecodeError,
    LexError,
    MissingTermEnvVarError,
    TtyConfError,
)
from .events import Event, Key, Modifier
from .loader import (
    load_config,
    override_env_config,
    parse_config_file,
    standard_io_config,
    user_config,
)
from .parser import parse_config, run_parse_config

__all__ = [
    "EMPTY_CONFIG",
    "Config",
    "ConfigParseError",
    "ConfigurationError",
    "DecodeError",
    "Event",
    "InputMapEntry",
    "Key",
    "LexError",
    "MissingTermEnvVarError",
    "Modifier",
    "TtyConfError",
    "default_config",
    "load_config",
    "merge",
    "merge_all",
    "override_env_config",
    "parse_config",
    "parse_config_file",
    "run_parse_config",
    "standard_io_config",
    "user_config",
]
