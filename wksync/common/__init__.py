"""Common utilities shared across input and output processing."""

from wksync.common.utils import (
    unique_ignore_case,
    collapse_whitespace,
    utf8_len,
    _load_env_file,
    ensure_dir,
)
from wksync.common.logging import (
    log_debug,
    log_error,
)
from wksync.common.errors import (
    ConfigError,
    WaniKaniError,
    InvalidTokenError,
    MissingScopeError,
    PayloadRejectedError,
    RateLimitedError,
    RemoteRequestError,
    ResponseValidationError,
)
from wksync.common.config import (
    SyncConfig,
    load_config,
    resolve_path,
    get_api_token,
    CONFIG_FILENAME,
)
from wksync.common.progress import ProgressReporter, ConsoleProgress

__all__ = [
    # utils
    "unique_ignore_case",
    "collapse_whitespace",
    "utf8_len",
    "_load_env_file",
    "ensure_dir",
    # logging
    "log_debug",
    "log_error",
    # errors
    "ConfigError",
    "WaniKaniError",
    "InvalidTokenError",
    "MissingScopeError",
    "PayloadRejectedError",
    "RateLimitedError",
    "RemoteRequestError",
    "ResponseValidationError",
    # config
    "SyncConfig",
    "load_config",
    "resolve_path",
    "get_api_token",
    "CONFIG_FILENAME",
    # progress
    "ProgressReporter",
    "ConsoleProgress",
]
