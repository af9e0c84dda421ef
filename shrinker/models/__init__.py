from shrinker.models.redirect_model import RedirectModel
from shrinker.models.redirect_decision import RedirectKind, RedirectDecision


__all__ = [
    'RedirectModel',
    'RedirectKind',
    'RedirectDecision',
]
