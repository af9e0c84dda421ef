from enum import StrEnum


class Defaults:
    """Default runtime values."""

    ORIGIN_LENGTH = 8  # Generated origin length (62^8 possible codes)
    MAX_GENERATION_ATTEMPTS = 100  # Collision retries before giving up on a unique origin
    PORT = 3000
    HOST = '127.0.0.1'
    REDIS_TIMEOUT = 5.0  # seconds, applies to both connect and socket timeouts
    QR_BOX_SIZE = 10


class RecordField(StrEnum):
    """Field names of a redirect record hash."""

    TARGET = 'target'
    STATUS = 'status'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        HOST = 'HOST'
        PORT = 'FUNCTIONS_CUSTOMHANDLER_PORT'
        LOG_LEVEL = 'LOG_LEVEL'
        ORIGIN_LENGTH = 'ORIGIN_LENGTH'

    class Redis(StrEnum):
        URI = 'REDIS_URI'
        TIMEOUT = 'REDIS_TIMEOUT'


# Accepted format of client supplied expiry dates, e.g. 2025-10-15T12:30:00.000Z
EXPIRE_DATE_FORMAT = '%Y-%m-%dT%H:%M:%S.%fZ'
EXPIRE_DATE_PATTERN = r'^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$'

REDIS_URI_SCHEMES = frozenset({'redis', 'rediss', 'unix'})

# Headers attached to every HTTP response
CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'POST, GET, OPTIONS',
    'Access-Control-Allow-Headers': '*',
    'Access-Control-Allow-Credentials': 'true',
}

# Log event codes
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
ORIGIN_NOT_FOUND = 'ORIGIN_NOT_FOUND'
ORIGIN_CONFLICT = 'ORIGIN_CONFLICT'
ORIGIN_GENERATED = 'ORIGIN_GENERATED'
ORIGIN_COLLISION = 'ORIGIN_COLLISION'
GENERATION_EXHAUSTED = 'GENERATION_EXHAUSTED'
MAPPING_CREATED = 'MAPPING_CREATED'
PARTIAL_WRITE = 'PARTIAL_WRITE'
STORE_UNAVAILABLE = 'STORE_UNAVAILABLE'
MALFORMED_REQUEST = 'MALFORMED_REQUEST'
QR_CODE_FAILED = 'QR_CODE_FAILED'
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
