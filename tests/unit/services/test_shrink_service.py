"""Unit tests for ShrinkService.

Test coverage includes:
    1. Origin generation
       - Ensures generated origins have the configured length and are free.
       - Ensures taken candidates are skipped.
       - Confirms exhausted retries raise OriginGenerationExhaustedError.
    2. Mapping creation
       - Ensures a created mapping is readable with the same target and status.
       - Ensures creating an existing origin overwrites it, or refuses to when asked.
       - Ensures mappings with an expiry disappear once it passes.
       - Confirms a failed expiry raises PartialWriteError and keeps the record.
       - Ensures empty origins and targets are stored as given.
       - Confirms malformed arguments raise InvalidRedirectError and write nothing.
    3. Origin validation
       - Ensures bound origins are reported as taken, on every check after creation.
       - Confirms data store failures propagate.
"""

from datetime import datetime, timedelta, UTC
from unittest.mock import MagicMock

import pytest
from freezegun import freeze_time

from shrinker.dao.base import RedirectBaseDAO
from shrinker.dao.exceptions import DataStoreError, PartialWriteError, RedirectAlreadyExistsError, RedirectNotFoundError
from shrinker.exceptions import InvalidRedirectError, OriginGenerationExhaustedError
from shrinker.models import RedirectModel
from shrinker.services import ShrinkService
from shrinker.utils.shortener import ALPHABET


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def service(memory_dao):
    return ShrinkService(memory_dao)


def candidates(monkeypatch, *origins):
    """Make the shortener yield the given origins in order."""
    draws = iter(origins)
    monkeypatch.setattr('shrinker.services.shrink_service.generate_origin', lambda length: next(draws))


# -------------------------------
# 1. Origin generation
# -------------------------------


def test_generate_unique_origin(service):
    """Ensure a generated origin has the default length, uses the alphabet and is free."""
    origin = service.generate_unique_origin()

    assert len(origin) == 8
    assert set(origin) <= set(ALPHABET)
    assert service.validate_origin(origin)


def test_generate_unique_origin_with_custom_length(memory_dao):
    """Ensure the configured origin length is honored."""
    service = ShrinkService(memory_dao, origin_length=12)

    assert len(service.generate_unique_origin()) == 12


def test_generate_unique_origin_skips_taken_candidates(service, memory_dao, monkeypatch):
    """Ensure bound candidates are skipped until a free one is drawn."""
    memory_dao.put('taken001', 'https://example.com/a', 301)
    memory_dao.put('taken002', 'https://example.com/b', 301)
    candidates(monkeypatch, 'taken001', 'taken002', 'free0003')

    assert service.generate_unique_origin() == 'free0003'


def test_generate_unique_origin_exhausted(memory_dao, monkeypatch):
    """Ensure generation gives up after max_attempts taken candidates."""
    memory_dao.put('taken001', 'https://example.com', 301)
    monkeypatch.setattr('shrinker.services.shrink_service.generate_origin', lambda length: 'taken001')
    service = ShrinkService(memory_dao, max_attempts=3)

    with pytest.raises(OriginGenerationExhaustedError, match='after 3 attempts'):
        service.generate_unique_origin()


def test_generate_unique_origin_with_unreachable_store():
    """Ensure data store failures propagate."""
    dao = MagicMock(spec=RedirectBaseDAO)
    dao.exists.side_effect = DataStoreError("Can't connect to Redis at redis:6379/0.")

    with pytest.raises(DataStoreError):
        ShrinkService(dao).generate_unique_origin()


@pytest.mark.parametrize('max_attempts', [0, -1])
def test_invalid_max_attempts(memory_dao, max_attempts):
    """Ensure the retry bound must be positive."""
    with pytest.raises(ValueError):
        ShrinkService(memory_dao, max_attempts=max_attempts)


# -------------------------------
# 2. Mapping creation
# -------------------------------


@pytest.mark.parametrize('status_code', [301, 302, 303, 307, 308, 999, 0])
def test_create_mapping_is_readable(service, memory_dao, status_code):
    """Ensure a created mapping reads back with the same target and status."""
    created = service.create_mapping('abc123', 'https://example.com/page', status_code)

    assert created == RedirectModel(origin='abc123', target='https://example.com/page', status=status_code)
    assert memory_dao.get('abc123') == created


def test_create_mapping_accepts_generated_origin(service, memory_dao):
    """Ensure a freshly generated origin can be bound right away."""
    origin = service.generate_unique_origin()
    service.create_mapping(origin, 'https://example.com', 308)

    assert service.validate_origin(origin) is False


def test_create_mapping_overwrites_existing_origin(service, memory_dao):
    """Ensure the last write wins for an existing origin."""
    service.create_mapping('abc123', 'https://example.com/old', 301)
    service.create_mapping('abc123', 'https://example.com/new', 302)

    assert memory_dao.get('abc123') == RedirectModel(origin='abc123', target='https://example.com/new', status=302)


def test_create_mapping_without_overwrite(service, memory_dao):
    """Ensure overwrite=False refuses to replace an existing record."""
    service.create_mapping('abc123', 'https://example.com/old', 301)

    with pytest.raises(RedirectAlreadyExistsError):
        service.create_mapping('abc123', 'https://example.com/new', 302, overwrite=False)

    assert memory_dao.get('abc123').target == 'https://example.com/old'


def test_create_mapping_without_overwrite_on_free_origin(service, memory_dao):
    """Ensure overwrite=False writes a free origin."""
    service.create_mapping('abc123', 'https://example.com', 307, overwrite=False)

    assert memory_dao.get('abc123').status == 307


def test_create_mapping_with_expiry(service, memory_dao):
    """Ensure a mapping disappears once its expiry passes."""
    with freeze_time('2025-10-15 12:00:00') as frozen:
        expire_at = datetime(2025, 10, 15, 12, 0, 1, tzinfo=UTC)
        created = service.create_mapping('abc123', 'https://example.com', 301, expire_at=expire_at)

        assert created.expires_at == expire_at
        assert memory_dao.get('abc123').target == 'https://example.com'

        frozen.tick(timedelta(seconds=2))

        with pytest.raises(RedirectNotFoundError):
            memory_dao.get('abc123')
        assert service.validate_origin('abc123') is True


def test_create_mapping_with_past_expiry(service, memory_dao):
    """Ensure a past expiry is accepted and the mapping is gone right away."""
    service.create_mapping('abc123', 'https://example.com', 301, expire_at=datetime(2000, 1, 1, tzinfo=UTC))

    assert memory_dao.exists('abc123') is False


def test_create_mapping_with_failed_expiry(service, memory_dao):
    """Ensure a failed expiry reports a partial write and keeps the record."""
    memory_dao.fail_expire = True

    with pytest.raises(PartialWriteError, match="Redirect with origin 'abc123' was stored, but its expiry was not set."):
        service.create_mapping('abc123', 'https://example.com', 301, expire_at=datetime(2030, 1, 1, tzinfo=UTC))

    assert 'abc123' not in memory_dao.expiries
    assert memory_dao.exists('abc123')


def test_create_mapping_with_unreachable_store():
    """Ensure a failed write propagates and no expiry is attempted."""
    dao = MagicMock(spec=RedirectBaseDAO)
    dao.put.side_effect = DataStoreError("Can't connect to Redis at redis:6379/0.")

    with pytest.raises(DataStoreError):
        ShrinkService(dao).create_mapping('abc123', 'https://example.com', 301, expire_at=datetime(2030, 1, 1, tzinfo=UTC))

    dao.expire_at.assert_not_called()


@pytest.mark.parametrize('origin, target', [('abc123', ''), ('', 'https://example.com')])
def test_create_mapping_with_empty_strings(service, memory_dao, origin, target):
    """Ensure origins and targets are stored as given, even when empty."""
    created = service.create_mapping(origin, target, 302)

    assert created == RedirectModel(origin=origin, target=target, status=302)
    assert memory_dao.get(origin) == created


@pytest.mark.parametrize(
    'origin, target, status_code, expire_at',
    [
        (None, 'https://example.com', 301, None),
        ('abc123', 42, 301, None),
        ('abc123', 'https://example.com', -1, None),
        ('abc123', 'https://example.com', '301', None),
        ('abc123', 'https://example.com', True, None),
        ('abc123', 'https://example.com', 301, datetime(2030, 1, 1)),
        ('abc123', 'https://example.com', 301, '2030-01-01T00:00:00.000Z'),
    ],
)
def test_create_mapping_with_invalid_arguments(service, memory_dao, origin, target, status_code, expire_at):
    """Ensure malformed arguments are refused before anything is written."""
    with pytest.raises(InvalidRedirectError):
        service.create_mapping(origin, target, status_code, expire_at=expire_at)

    assert memory_dao.records == {}


# -------------------------------
# 3. Origin validation
# -------------------------------


def test_validate_origin(service, memory_dao):
    """Ensure only unbound origins are valid."""
    memory_dao.put('taken001', 'https://example.com', 301)

    assert service.validate_origin('taken001') is False
    assert service.validate_origin('free0001') is True


def test_validate_origin_is_stable_after_create(service):
    """Ensure an origin validates as free before creation and taken on every check after it."""
    assert service.validate_origin('abc123') is True

    service.create_mapping('abc123', 'https://example.com', 301)

    assert service.validate_origin('abc123') is False
    assert service.validate_origin('abc123') is False


def test_validate_origin_with_unreachable_store():
    """Ensure data store failures propagate instead of reporting the origin as free."""
    dao = MagicMock(spec=RedirectBaseDAO)
    dao.exists.side_effect = DataStoreError("Can't connect to Redis at redis:6379/0.")

    with pytest.raises(DataStoreError):
        ShrinkService(dao).validate_origin('abc123')
