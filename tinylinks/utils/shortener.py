"""Shortcode generation utility

This module provides a helper function for drawing random, fixed-length
Base62 shortcodes.

Functions:
    generate_shortcode(length=6, alphabet=Shortcode.ALPHABET):
        Generate a random candidate shortcode suitable for use as a URL slug.

Example:
    >>> from tinylinks.utils import generate_shortcode
    >>> generate_shortcode()
    'q7FemO'

NOTE:
    Candidates carry no uniqueness guarantee. Uniqueness is enforced when the
    candidate is claimed in the data store (see ShortcodeResolver).
"""

import secrets

from tinylinks.constants import Shortcode


def generate_shortcode(length: int = Shortcode.LENGTH, alphabet: str = Shortcode.ALPHABET) -> str:
    """Generate a random shortcode of a fixed length.

    Every character is drawn independently and uniformly from `alphabet`
    using the process-wide CSPRNG (`secrets`), so all len(alphabet)**length
    codes are equally likely.

    Args:
        length (int, optional):
            Number of characters in the shortcode. Defaults to 6.

        alphabet (str, optional):
            Characters to draw from. Defaults to Base62 [a-zA-Z0-9].

    Returns:
        str: A random alphanumeric shortcode.

    Raises:
        TypeError: If length is not an integer.
        ValueError: If length is not positive or the alphabet is empty.

    Example:
        >>> len(generate_shortcode(length=6))
        6
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')
    if not alphabet:
        raise ValueError('Alphabet must be a non-empty string.')

    return ''.join(secrets.choice(alphabet) for _ in range(length))
