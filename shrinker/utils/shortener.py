"""Origin generation utility

This module provides a helper function for drawing random, fixed-length
origins (short codes) from the Base62 alphabet.

Functions:
    generate_origin(length=8):
        Generate a random alphanumeric origin suitable for use as a URL slug.

Example:
    >>> from shrinker.utils import generate_origin
    >>> generate_origin()
    'q3ZbT0aK'
    >>> generate_origin(length=5)
    'Xa81p'
"""

import random
import string

from shrinker.constants import Defaults


ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
BASE = len(ALPHABET)  # 26 uppercase + 26 lowercase + 10 digits


def generate_origin(length: int = Defaults.ORIGIN_LENGTH) -> str:
    """Generate a random origin of the given length.

    Every character is drawn independently and uniformly from the Base62
    alphabet [A-Za-z0-9]. The output is statistically uniform but NOT
    cryptographically secure: origins are public identifiers, not secrets.
    Uniqueness is not guaranteed here, see ShrinkService.generate_unique_origin().

    Args:
        length (int, optional):
            Number of characters of the origin. Defaults to 8.

    Returns:
        str: A random alphanumeric origin.

    Raises:
        TypeError: If length is not an integer.
        ValueError: If length is not positive.
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length < 1:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    return ''.join(random.choices(ALPHABET, k=length))
