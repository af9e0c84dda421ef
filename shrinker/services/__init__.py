from shrinker.services.shrink_service import ShrinkService
from shrinker.services.redirect_resolver import RedirectResolver


__all__ = [
    'ShrinkService',
    'RedirectResolver',
]
