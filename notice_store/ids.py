"""Generated notice ids: base-36 millisecond time plus a random suffix."""

from __future__ import annotations

import secrets
import string

from .clock import Clock

_ALPHABET = string.digits + string.ascii_lowercase
SUFFIX_LENGTH = 11


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("base-36 encoding needs a non-negative value")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def generate_id(clock: Clock) -> str:
    """Return a fresh id that satisfies the notice id rules."""
    millis = clock.now() // 1_000_000
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(SUFFIX_LENGTH))
    return to_base36(millis) + suffix
