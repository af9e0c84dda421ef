from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from shrinker.constants import RecordField


@dataclass(frozen=True)
class RedirectModel:
    """Represent a redirect record bound to an origin.

    Attributes:
        origin (str):
            The short code clients navigate to. Key of the record in the data store.
        target (str):
            The URL the origin redirects to.
        status (int):
            HTTP status requested for the redirect (301, 302, 303, 307 or 308).
            Other values are stored as given and resolved as 303.
        expires_at (Optional[datetime]):
            Moment after which the data store purges the record.
            None if the record never expires.

    Example:
        >>> redirect = RedirectModel(origin='abc123', target='https://example.com', status=301)
        >>> redirect.fields()
        {'target': 'https://example.com', 'status': '301'}
        >>> RedirectModel.from_fields('abc123', {'target': 'https://example.com', 'status': '301'})
        RedirectModel(origin='abc123', target='https://example.com', status=301, expires_at=None)
    """

    origin: str
    target: str
    status: int
    expires_at: Optional[datetime] = None

    def fields(self) -> dict[str, str]:
        """Return the record as the field mapping persisted in the data store."""
        return {
            RecordField.TARGET.value: self.target,
            RecordField.STATUS.value: str(self.status),
        }

    @classmethod
    def from_fields(cls, origin: str, fields: Mapping[str, str], expires_at: Optional[datetime] = None) -> Optional['RedirectModel']:
        """Build a model from a stored field mapping.

        Returns None when the mapping lacks a target or a status, or when
        the status is not an unsigned integer.
        """
        target = fields.get(RecordField.TARGET)
        status = fields.get(RecordField.STATUS)
        if target is None or status is None:
            return None
        if not (status.isascii() and status.isdecimal()):
            return None

        return cls(origin=origin, target=target, status=int(status), expires_at=expires_at)
