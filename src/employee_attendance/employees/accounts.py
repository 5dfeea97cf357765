"""Generated credentials for employee login accounts."""

from __future__ import annotations

import re
import secrets

_UPPER = "ABCDEFGHJKLMNPQRSTUVWXYZ"
_LOWER = "abcdefghijkmnopqrstuvwxyz"
_DIGITS = "23456789"


def username_from_name(name: str) -> str:
    """'John Doe' -> 'john.doe'"""
    normalized = re.sub(r"\s+", ".", name.strip().lower())
    return re.sub(r"[^a-z0-9.]", "", normalized)


def email_from_name(name: str, domain: str = "company.com") -> str:
    return f"{username_from_name(name)}@{domain}"


def generate_password(length: int = 12) -> str:
    """Random password with at least one upper, one lower and one digit."""
    charset = _UPPER + _LOWER + _DIGITS
    chars = [secrets.choice(_UPPER), secrets.choice(_LOWER), secrets.choice(_DIGITS)]
    chars += [secrets.choice(charset) for _ in range(max(length, 3) - len(chars))]
    secrets.SystemRandom().shuffle(chars)
    return "".join(chars)
