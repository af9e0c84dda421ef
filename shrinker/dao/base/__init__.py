from shrinker.dao.base.redirect_base_dao import RedirectBaseDAO


__all__ = [
    'RedirectBaseDAO',
]
