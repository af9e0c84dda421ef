from shrinker.api.app_factory import create_app, create_app_from_settings


__all__ = [
    'create_app',
    'create_app_from_settings',
]
