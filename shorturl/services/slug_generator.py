"""
Slug Generator

Random slugs for requests that do not supply one. Characters are drawn
uniformly (with replacement) from the 62-character alphanumeric alphabet
using the secrets module, so generated slugs are not predictable.

Generated slugs are not guaranteed unique. The create path checks the
store before writing and reports a conflict on collision.
"""

import secrets
import string
from typing import Optional

SLUG_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
DEFAULT_SLUG_LENGTH = 6


def generate_slug(length: int = DEFAULT_SLUG_LENGTH) -> str:
    """
    Generate a random slug.

    Args:
        length: Number of characters (default: 6)

    Returns:
        Random string over [A-Za-z0-9]

    Example:
        generate_slug() -> "aZ3k9Q"
    """
    if length < 1:
        raise ValueError(f"Slug length must be positive, got {length}")
    return "".join(secrets.choice(SLUG_ALPHABET) for _ in range(length))


class SlugGenerator:
    """Slug generator bound to a configured default length."""

    def __init__(self, default_length: int = DEFAULT_SLUG_LENGTH):
        if default_length < 1:
            raise ValueError(f"Slug length must be positive, got {default_length}")
        self.default_length = default_length

    def generate(self, length: Optional[int] = None) -> str:
        return generate_slug(self.default_length if length is None else length)
