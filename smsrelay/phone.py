"""Phone number helpers."""

from __future__ import annotations

import re

_NON_DIGITS = re.compile(r"\D")


def digits_only(phone: str | None) -> str:
    """Strip everything but digits, e.g. ``"+44 (0) 7700-900123"`` -> ``"4407700900123"``."""
    if not phone:
        return ""
    return _NON_DIGITS.sub("", phone)
