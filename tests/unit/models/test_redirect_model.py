"""Unit tests for redirect models.

Test coverage includes:
    1. Field serialization
       - Ensures a record is persisted as target and status strings.
    2. Field parsing
       - Ensures valid mappings parse into a RedirectModel.
       - Ensures incomplete or malformed mappings yield None.
    3. Redirect decisions
       - Ensures redirect kinds carry their HTTP status codes.
"""

from datetime import datetime, UTC

import pytest

from shrinker.models import RedirectDecision, RedirectKind, RedirectModel


# -------------------------------
# 1. Field serialization
# -------------------------------


def test_fields():
    """Ensure fields() renders the status as a decimal string."""
    redirect = RedirectModel(origin='abc123', target='https://example.com', status=301)

    assert redirect.fields() == {'target': 'https://example.com', 'status': '301'}


def test_model_is_immutable():
    """Ensure models cannot be modified after construction."""
    redirect = RedirectModel(origin='abc123', target='https://example.com', status=301)

    with pytest.raises(AttributeError):
        redirect.status = 302


# -------------------------------
# 2. Field parsing
# -------------------------------


def test_from_fields():
    """Ensure a complete mapping parses into a model."""
    expires_at = datetime(2030, 1, 1, tzinfo=UTC)

    redirect = RedirectModel.from_fields('abc123', {'target': 'https://example.com', 'status': '0308'}, expires_at=expires_at)

    assert redirect == RedirectModel(origin='abc123', target='https://example.com', status=308, expires_at=expires_at)


def test_from_fields_ignores_extra_fields():
    """Ensure unknown hash fields don't break parsing."""
    redirect = RedirectModel.from_fields('abc123', {'target': 'https://example.com', 'status': '302', 'hits': '7'})

    assert redirect.status == 302


@pytest.mark.parametrize(
    'fields',
    [
        {},
        {'target': 'https://example.com'},
        {'status': '301'},
        {'target': 'https://example.com', 'status': ''},
        {'target': 'https://example.com', 'status': 'three-o-one'},
        {'target': 'https://example.com', 'status': '30.1'},
        {'target': 'https://example.com', 'status': '-1'},
        {'target': 'https://example.com', 'status': '٣٠١'},  # Arabic-Indic digits
    ],
)
def test_from_fields_with_malformed_record(fields):
    """Ensure incomplete or non-numeric records yield None."""
    assert RedirectModel.from_fields('abc123', fields) is None


# -------------------------------
# 3. Redirect decisions
# -------------------------------


@pytest.mark.parametrize(
    'kind, code',
    [
        (RedirectKind.MOVED_PERMANENTLY, 301),
        (RedirectKind.FOUND, 302),
        (RedirectKind.SEE_OTHER, 303),
        (RedirectKind.TEMPORARY_REDIRECT, 307),
        (RedirectKind.PERMANENT_REDIRECT, 308),
    ],
)
def test_redirect_kind_codes(kind, code):
    """Ensure every redirect kind maps to its HTTP status code."""
    assert int(kind) == code


def test_redirect_decision():
    """Ensure a decision holds the kind and location."""
    decision = RedirectDecision(kind=RedirectKind.FOUND, location='https://example.com')

    assert decision.kind is RedirectKind.FOUND
    assert decision.location == 'https://example.com'
