"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    RedirectNotFoundError:
        Raised when no usable redirect record is bound to an origin.

    RedirectAlreadyExistsError:
        Raised when a guarded write finds the origin already bound.

    DataStoreError:
        Raised when there is an error in the data store (connection issues, timeouts, refused expiries).

    ExpiryNotSetError:
        Raised when the data store refuses to set an expiry on a record.

    PartialWriteError:
        Raised when a record was written but its requested expiry was not applied.

Example:
    >>> from shrinker.dao.exceptions import RedirectNotFoundError
    >>> raise RedirectNotFoundError("Redirect with origin 'abc123' not found.")
    Traceback (most recent call last):
        ...
    shrinker.dao.exceptions.RedirectNotFoundError: Redirect with origin 'abc123' not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class RedirectNotFoundError(DAOError):
    """Exception raised when an origin has no record, or its record is malformed."""

    pass


class RedirectAlreadyExistsError(DAOError):
    """Exception raised when a guarded insert finds the origin already bound."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    Redis connection errors and timeouts, and expiries the server refused.
    """

    pass


class ExpiryNotSetError(DataStoreError):
    """Exception raised when the data store did not apply an expiry to a key."""

    pass


class PartialWriteError(DataStoreError):
    """Exception raised when a record was stored but its expiry was not.

    The record stays in the data store without a TTL.
    """

    pass
