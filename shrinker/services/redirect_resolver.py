import logging

from shrinker.constants import REDIRECT_SUCCESS
from shrinker.models import RedirectDecision, RedirectKind
from shrinker.dao.base import RedirectBaseDAO


logger = logging.getLogger(__name__)


# Stored status -> issued redirect. Anything else falls back to 303 See Other.
REDIRECT_KINDS = {
    301: RedirectKind.MOVED_PERMANENTLY,
    302: RedirectKind.FOUND,
    303: RedirectKind.SEE_OTHER,
    307: RedirectKind.TEMPORARY_REDIRECT,
    308: RedirectKind.PERMANENT_REDIRECT,
}
DEFAULT_REDIRECT_KIND = RedirectKind.SEE_OTHER


def redirect_kind(status: int) -> RedirectKind:
    return REDIRECT_KINDS.get(status, DEFAULT_REDIRECT_KIND)


class RedirectResolver:
    """Decide the redirect issued for an origin.

    resolve() raises RedirectNotFoundError when the origin has no usable
    record (absent, expired, missing a field or holding a non-numeric status)
    and DataStoreError when the data store can't be reached.
    """

    def __init__(self, dao: RedirectBaseDAO):
        self.dao = dao

    def resolve(self, origin: str) -> RedirectDecision:
        redirect = self.dao.get(origin)
        logger.debug('Matched redirect record.', extra={'origin': origin, 'target': redirect.target, 'status': redirect.status})

        decision = RedirectDecision(kind=redirect_kind(redirect.status), location=redirect.target)
        logger.info(
            'Resolved origin.',
            extra={'origin': origin, 'redirect': int(decision.kind), 'event': REDIRECT_SUCCESS},
        )
        return decision
