"""Human-friendly order numbers: ``FB-<base36 millis>-<4 random chars>``."""

from __future__ import annotations

import secrets
import time
from typing import Callable

OrderNumberGenerator = Callable[[], str]

_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
PREFIX = "FB"


def _base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def generate_order_number() -> str:
    timestamp = _base36(time.time_ns() // 1_000_000)
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(4))
    return f"{PREFIX}-{timestamp}-{suffix}"
