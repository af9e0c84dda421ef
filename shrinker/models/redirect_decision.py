from dataclasses import dataclass
from enum import IntEnum


class RedirectKind(IntEnum):
    """HTTP redirect family issued for a resolved origin."""

    MOVED_PERMANENTLY = 301  # permanent, client may switch to GET
    FOUND = 302  # temporary, method handling left to client convention
    SEE_OTHER = 303  # always followed with GET
    TEMPORARY_REDIRECT = 307  # temporary, method and body preserved
    PERMANENT_REDIRECT = 308  # permanent, method and body preserved


# fmt: off
@dataclass(frozen=True)
class RedirectDecision:
    kind: RedirectKind  # Redirect status to answer with
    location: str       # Value of the Location header
# fmt: on
