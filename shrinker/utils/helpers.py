"""Helper utilities for the shrink API.

Functions:
    parse_expire_date(value: str) -> datetime
        Parse a client supplied expiry date (YYYY-MM-DDTHH:MM:SS.sssZ) as UTC
    format_expire_date(value: datetime) -> str
        Render a datetime in the same format
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present

Example:
    >>> from shrinker.utils.helpers import parse_expire_date
    >>> parse_expire_date('2025-10-15T12:30:00.000Z')
    datetime.datetime(2025, 10, 15, 12, 30, tzinfo=datetime.timezone.utc)

    >>> parse_expire_date('2025-10-15')
    ValueError: Expire date must match YYYY-MM-DDTHH:MM:SS.sssZ (given value: '2025-10-15').
"""

import os
import re
import functools
from datetime import datetime, UTC
from collections.abc import Callable

from shrinker.constants import EXPIRE_DATE_FORMAT, EXPIRE_DATE_PATTERN
from shrinker.exceptions import MissingEnvironmentVariableError


_EXPIRE_DATE_RE = re.compile(EXPIRE_DATE_PATTERN)


def parse_expire_date(value: str) -> datetime:
    """Parse an ISO-8601 expiry date with millisecond precision and a 'Z' suffix

    Args:
        value (str): date string, e.g. '2025-10-15T12:30:00.000Z'

    Returns:
        datetime: timezone-aware datetime in UTC

    Raises:
        ValueError: if the string doesn't match the format or isn't a valid date
    """
    if not isinstance(value, str) or not _EXPIRE_DATE_RE.match(value):
        raise ValueError(f'Expire date must match YYYY-MM-DDTHH:MM:SS.sssZ (given value: {value!r}).')
    return datetime.strptime(value, EXPIRE_DATE_FORMAT).replace(tzinfo=UTC)


def format_expire_date(value: datetime) -> str:
    """Render a datetime as YYYY-MM-DDTHH:MM:SS.sssZ (converted to UTC)"""
    return value.astimezone(UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('REDIS_URI')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'REDIS_URI'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator
