from shrinker.utils.config import Settings, app_env, app_name, app_prefix, load_settings
from shrinker.utils.helpers import parse_expire_date, format_expire_date, require_environment
from shrinker.utils.shortener import generate_origin
from shrinker.utils.logging import initialize_logging


__all__ = [
    'generate_origin',
    'Settings',
    'app_env',
    'app_name',
    'app_prefix',
    'load_settings',
    'parse_expire_date',
    'format_expire_date',
    'require_environment',
    'initialize_logging',
]
