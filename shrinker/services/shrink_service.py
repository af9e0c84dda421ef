"""Business logic for minting origins and binding them to targets

Classes:
    ShrinkService:
        Generate unique origins, validate custom ones and create redirect mappings.

Known races (accepted, not prevented):
    - generate_unique_origin() and a later create_mapping() are not
      transactional. Two clients may both see the same origin as free and
      both write it; the last write wins. Clients that care pass
      overwrite=False, which turns the write into a guarded set-if-absent.
    - validate_origin() is advisory for the same reason.
    - create_mapping() writes the record first and its expiry second. If the
      second step fails, the record stays without expiry and the call
      raises PartialWriteError.

Example:
    >>> service = ShrinkService(RedirectRedisDAO(redis_url='redis://localhost:6379/0'))
    >>> origin = service.generate_unique_origin()
    >>> service.create_mapping(origin, 'https://example.com', 308)
    RedirectModel(origin='Qa81pX0c', target='https://example.com', status=308, expires_at=None)
    >>> service.validate_origin(origin)
    False
"""

import logging
from datetime import datetime

from shrinker.constants import (
    Defaults,
    ORIGIN_GENERATED,
    ORIGIN_COLLISION,
    GENERATION_EXHAUSTED,
    MAPPING_CREATED,
    PARTIAL_WRITE,
)
from shrinker.models import RedirectModel
from shrinker.dao.base import RedirectBaseDAO
from shrinker.dao.exceptions import DataStoreError, PartialWriteError
from shrinker.exceptions import InvalidRedirectError, OriginGenerationExhaustedError
from shrinker.utils.helpers import format_expire_date
from shrinker.utils.shortener import generate_origin


logger = logging.getLogger(__name__)


class ShrinkService:
    """Shortening service layered over a redirect DAO.

    Attributes:
        dao (RedirectBaseDAO):
            Record store adapter.
        origin_length (int):
            Length of generated origins.
        max_attempts (int):
            Upper bound of candidates drawn by generate_unique_origin().
    """

    def __init__(
        self,
        dao: RedirectBaseDAO,
        origin_length: int = Defaults.ORIGIN_LENGTH,
        max_attempts: int = Defaults.MAX_GENERATION_ATTEMPTS,
    ):
        if max_attempts < 1:
            raise ValueError(f'Max attempts must be a positive integer (given value: {max_attempts}).')

        self.dao = dao
        self.origin_length = origin_length
        self.max_attempts = max_attempts

    def generate_unique_origin(self) -> str:
        """Draw random origins until one is not bound in the data store.

        Returns:
            str: an origin that was free at the time of the check.

        Raises:
            OriginGenerationExhaustedError:
                If max_attempts candidates in a row were taken.
            DataStoreError:
                If the data store can't be reached.
        """
        for attempt in range(1, self.max_attempts + 1):
            origin = generate_origin(self.origin_length)
            if not self.dao.exists(origin):
                logger.debug('Generated unique origin.', extra={'origin': origin, 'attempt': attempt, 'event': ORIGIN_GENERATED})
                return origin
            logger.info('Generated origin is already bound. Retrying.', extra={'origin': origin, 'attempt': attempt, 'event': ORIGIN_COLLISION})

        logger.error(
            'No free origin found.',
            extra={'attempts': self.max_attempts, 'origin_length': self.origin_length, 'event': GENERATION_EXHAUSTED},
        )
        raise OriginGenerationExhaustedError(f'No free origin of length {self.origin_length} found after {self.max_attempts} attempts.')

    def create_mapping(
        self,
        origin: str,
        target: str,
        status_code: int,
        expire_at: datetime | None = None,
        overwrite: bool = True,
    ) -> RedirectModel:
        """Bind an origin to a target.

        The origin is used as given: generated and custom origins are both
        accepted. An existing record under the same origin is overwritten
        unless overwrite is False.

        Args:
            origin (str):
                Key of the mapping.
            target (str):
                URL to redirect to.
            status_code (int):
                Redirect status. Values other than 301, 302, 303, 307, 308
                are stored as given and resolved as 303.
            expire_at (datetime | None):
                Timezone-aware moment after which the mapping disappears.
            overwrite (bool):
                If False, refuse to replace an existing record.

        Returns:
            RedirectModel: the created mapping.

        Raises:
            InvalidRedirectError:
                If an argument is malformed (nothing is written).
            RedirectAlreadyExistsError:
                If overwrite is False and the origin is bound.
            PartialWriteError:
                If the record was written but its expiry was not.
            DataStoreError:
                If the data store can't be reached.
        """
        self._validate(origin, target, status_code, expire_at)

        if overwrite:
            self.dao.put(origin, target, status_code)
        else:
            self.dao.put_if_absent(origin, target, status_code)

        if expire_at is not None:
            try:
                self.dao.expire_at(origin, expire_at)
            except DataStoreError as e:
                logger.error(
                    'Redirect record was stored without its expiry.',
                    extra={'origin': origin, 'expire_at': format_expire_date(expire_at), 'event': PARTIAL_WRITE},
                )
                raise PartialWriteError(f"Redirect with origin '{origin}' was stored, but its expiry was not set.") from e

        logger.info(
            'Created redirect mapping.',
            extra={'origin': origin, 'status': status_code, 'expires': expire_at is not None, 'event': MAPPING_CREATED},
        )
        return RedirectModel(origin=origin, target=target, status=status_code, expires_at=expire_at)

    def validate_origin(self, origin: str) -> bool:
        """Report whether an origin is free.

        Advisory only: the origin may be taken between this check and a later create_mapping().

        Raises:
            DataStoreError:
                If the data store can't be reached.
        """
        return not self.dao.exists(origin)

    @staticmethod
    def _validate(origin: str, target: str, status_code: int, expire_at: datetime | None) -> None:
        if not isinstance(origin, str):
            raise InvalidRedirectError(f'Origin must be a string (given type: {type(origin)}).')
        if not isinstance(target, str):
            raise InvalidRedirectError(f'Target must be a string (given type: {type(target)}).')
        if not isinstance(status_code, int) or isinstance(status_code, bool) or status_code < 0:
            raise InvalidRedirectError(f'Status code must be a non-negative integer (given value: {status_code!r}).')
        if expire_at is not None and (not isinstance(expire_at, datetime) or expire_at.tzinfo is None):
            raise InvalidRedirectError('Expire date must be a timezone-aware datetime.')
