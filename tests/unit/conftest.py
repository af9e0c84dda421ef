from datetime import datetime, UTC

import pytest

from shrinker.models import RedirectModel
from shrinker.types import RecordFields
from shrinker.dao.base import RedirectBaseDAO
from shrinker.dao.exceptions import ExpiryNotSetError, RedirectAlreadyExistsError


class InMemoryRedirectDAO(RedirectBaseDAO):
    """Dict-backed redirect DAO for service and API tests.

    Mimics the Redis semantics the services rely on:
        - put() overwrites fields but keeps an existing expiry (like HSET);
        - keys whose expiry is due are gone on the next access (like EXPIREAT);
        - expire_at() on a missing key reports failure.

    Set `fail_expire` to force expire_at() to fail after a successful put().
    """

    def __init__(self, bound: tuple[str, ...] = ()):
        self.records: dict[str, RecordFields] = {}
        self.expiries: dict[str, datetime] = {}
        self.fail_expire = False
        for origin in bound:
            self.records[origin] = {'target': 'https://example.com/taken', 'status': '302'}

    def _purge_if_expired(self, origin: str) -> None:
        expiry = self.expiries.get(origin)
        if expiry is not None and expiry <= datetime.now(UTC):
            self.records.pop(origin, None)
            self.expiries.pop(origin, None)

    def fetch(self, origin: str) -> RecordFields:
        self._purge_if_expired(origin)
        return dict(self.records.get(origin, {}))

    def put(self, origin: str, target: str, status: int) -> 'InMemoryRedirectDAO':
        self._purge_if_expired(origin)
        self.records[origin] = RedirectModel(origin=origin, target=target, status=status).fields()
        return self

    def put_if_absent(self, origin: str, target: str, status: int) -> 'InMemoryRedirectDAO':
        if self.fetch(origin):
            raise RedirectAlreadyExistsError(f"Redirect with origin '{origin}' already exists.")
        return self.put(origin, target, status)

    def expire_at(self, origin: str, when: datetime) -> 'InMemoryRedirectDAO':
        self._purge_if_expired(origin)
        if self.fail_expire or origin not in self.records:
            raise ExpiryNotSetError(f"Expiry of redirect with origin '{origin}' was not set.")
        self.expiries[origin] = when
        self._purge_if_expired(origin)
        return self


@pytest.fixture
def memory_dao() -> InMemoryRedirectDAO:
    return InMemoryRedirectDAO()
