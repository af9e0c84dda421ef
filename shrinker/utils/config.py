"""Utility functions for application configuration management.

The service is configured exclusively through environment variables, which
may also be provided by a `.env` file in the working directory:

    FUNCTIONS_CUSTOMHANDLER_PORT   listen port (default: 3000)
    HOST                           bind address (default: 127.0.0.1)
    REDIS_URI                      Redis connection URI (required)
    REDIS_TIMEOUT                  Redis connect/socket timeout in seconds (default: 5)
    ORIGIN_LENGTH                  length of generated origins (default: 8)
    APP_NAME / APP_ENV             optional Redis key prefix '<name>:<env>'
    LOG_LEVEL                      root log level (default: INFO)

Configuration is read once at startup. Any problem raises a
ConfigurationError, and the process must not start serving.

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return the Redis key prefix, or None if `APP_NAME` is not set.

    load_settings() -> Settings
        Read and validate the runtime settings.

Example:
    >>> from shrinker.utils.config import load_settings
    >>> settings = load_settings()
    >>> settings.port
    3000
"""

import os
import logging
import urllib.parse
from dataclasses import dataclass

from shrinker.constants import ENV, Defaults, REDIS_URI_SCHEMES
from shrinker.exceptions import BadConfigurationError
from shrinker.utils.helpers import require_environment


logger = logging.getLogger(__name__)


# fmt: off
@dataclass(frozen=True)
class Settings:
    redis_uri: str                                  # Redis connection URI
    port: int = Defaults.PORT                       # Listen port
    host: str = Defaults.HOST                       # Bind address
    redis_timeout: float = Defaults.REDIS_TIMEOUT   # Redis connect/socket timeout in seconds
    origin_length: int = Defaults.ORIGIN_LENGTH     # Length of generated origins
    prefix: str | None = None                       # Redis key prefix
# fmt: on


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'

    Returns:
        str:
            Value of `APP_NAME` environment variable.
            None if variable is not set.
    """
    return os.environ.get(ENV.App.APP_NAME) or None


def app_prefix() -> str | None:
    """Return the Redis key prefix

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set, in which case origins are stored
             under their bare names.

    Example:
        >>> os.environ['APP_NAME'] = 'shrinker'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'shrinker:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _read_number(name: str, default, cast):
    raw = os.environ.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise BadConfigurationError(f"Environment variable '{name}' must be a number (given value: {raw!r}).") from e


def _validate_redis_uri(uri: str) -> str:
    components = urllib.parse.urlparse(uri)
    if components.scheme not in REDIS_URI_SCHEMES:
        schemes = ', '.join(sorted(REDIS_URI_SCHEMES))
        raise BadConfigurationError(f"Environment variable '{ENV.Redis.URI}' must use one of the schemes: {schemes}.")
    return uri


@require_environment(ENV.Redis.URI)
def load_settings() -> Settings:
    """Read runtime settings from the environment

    Environment variables required:
        REDIS_URI       – Redis connection URI

    Returns:
        Settings: validated runtime settings.

    Raises:
        MissingEnvironmentVariableError:
            If REDIS_URI is not set.
        BadConfigurationError:
            If a numeric variable is not a number or out of range, or REDIS_URI has an unknown scheme.

    Example:
        >>> os.environ['REDIS_URI'] = 'redis://localhost:6379/0'
        >>> load_settings()
        Settings(redis_uri='redis://localhost:6379/0', port=3000, host='127.0.0.1', ...)
    """
    port = _read_number(ENV.App.PORT, Defaults.PORT, int)
    if not 0 < port < 65536:
        raise BadConfigurationError(f"Environment variable '{ENV.App.PORT}' must be a valid TCP port (given value: {port}).")

    redis_timeout = _read_number(ENV.Redis.TIMEOUT, Defaults.REDIS_TIMEOUT, float)
    if redis_timeout <= 0:
        raise BadConfigurationError(f"Environment variable '{ENV.Redis.TIMEOUT}' must be positive (given value: {redis_timeout}).")

    origin_length = _read_number(ENV.App.ORIGIN_LENGTH, Defaults.ORIGIN_LENGTH, int)
    if origin_length < 1:
        raise BadConfigurationError(f"Environment variable '{ENV.App.ORIGIN_LENGTH}' must be positive (given value: {origin_length}).")

    settings = Settings(
        redis_uri=_validate_redis_uri(os.environ[ENV.Redis.URI]),
        port=port,
        host=os.environ.get(ENV.App.HOST) or Defaults.HOST,
        redis_timeout=redis_timeout,
        origin_length=origin_length,
        prefix=app_prefix(),
    )
    logger.debug('Loaded settings.', extra={'port': settings.port, 'host': settings.host, 'prefix': settings.prefix})
    return settings
