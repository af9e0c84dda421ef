"""Abstract base class for redirect record data access objects (DAOs).

This class establishes a consistent contract for all redirect DAO implementations,
regardless of the underlying key-value store.

Responsibilities:
    - Provide an interface for reading and writing the {target, status} record of an origin.
    - Expose the store's native per-key expiry.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from shrinker.dao.redis import RedirectRedisDAO

        >>> dao = RedirectRedisDAO(redis_url='redis://localhost:6379/0')

        >>> dao.put('a1b2c3d4', 'https://example.com/blog/article-123', 301)
        >>> dao.fetch('a1b2c3d4')
        {'target': 'https://example.com/blog/article-123', 'status': '301'}

        >>> dao.exists('a1b2c3d4')
        True

        >>> dao.get('a1b2c3d4').status
        301
"""

from abc import ABC, abstractmethod
from datetime import datetime

from shrinker.models import RedirectModel
from shrinker.types import RecordFields
from shrinker.dao.exceptions import RedirectNotFoundError


class RedirectBaseDAO(ABC):
    """Interface for redirect record data access objects (DAOs).

    Methods:
        fetch(origin: str) -> RecordFields:
            Return every field stored for an origin, or an empty mapping.
            Raises DataStoreError on connection or read failure.

        put(origin: str, target: str, status: int) -> RedirectBaseDAO:
            Write target and status of an origin in a single operation.
            Overwrites an existing record.
            Raises DataStoreError on connection or write failure.

        put_if_absent(origin: str, target: str, status: int) -> RedirectBaseDAO:
            Same as put(), but only if the origin is not bound yet.
            Raises RedirectAlreadyExistsError if it is.

        expire_at(origin: str, when: datetime) -> RedirectBaseDAO:
            Set the store-native expiry of an existing record.
            Raises ExpiryNotSetError if the store didn't apply it.

        exists(origin: str) -> bool:
            True if fetch() returns any field.

        get(origin: str) -> RedirectModel:
            Return the parsed record of an origin.
            Raises RedirectNotFoundError if absent or malformed.

    NOTE:
        - Records are removed by the store when they expire. The DAO does not
          provide an interface to delete or edit entries.
    """

    @abstractmethod
    def fetch(self, origin: str) -> RecordFields:
        """Fetch all fields stored for an origin.

        Args:
            origin (str):
                The origin whose record is fetched.

        Returns:
            RecordFields: field name to value mapping, empty if the origin is not bound.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def put(self, origin: str, target: str, status: int) -> 'RedirectBaseDAO':
        """Write the target and status of an origin atomically.

        Args:
            origin (str):
                Key of the record.

            target (str):
                URL the origin redirects to.

            status (int):
                Redirect status code.

        Returns:
            RedirectBaseDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def put_if_absent(self, origin: str, target: str, status: int) -> 'RedirectBaseDAO':
        """Write the target and status of an origin unless it is already bound.

        Returns:
            RedirectBaseDAO: self (for method chaining)

        Raises:
            RedirectAlreadyExistsError:
                If the origin already has a record.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def expire_at(self, origin: str, when: datetime) -> 'RedirectBaseDAO':
        """Set the moment at which the store purges the record of an origin.

        Args:
            origin (str):
                Key of the record.

            when (datetime):
                Timezone-aware expiry moment.

        Returns:
            RedirectBaseDAO: self (for method chaining)

        Raises:
            ExpiryNotSetError:
                If the store didn't apply the expiry (e.g. the key doesn't exist).

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    def exists(self, origin: str) -> bool:
        """Report whether an origin is bound.

        Expired and never created origins both read as free.
        """
        return bool(self.fetch(origin))

    def get(self, origin: str) -> RedirectModel:
        """Retrieve the redirect record of an origin.

        Raises:
            RedirectNotFoundError:
                If the origin has no record, or the record misses its target or status.

            DataStoreError:
                If there is an error in the data store.
        """
        redirect = RedirectModel.from_fields(origin, self.fetch(origin))
        if redirect is None:
            raise RedirectNotFoundError(f"Redirect with origin '{origin}' not found.")
        return redirect
