"""Input checks run before any upstream call"""

import re
from typing import Any

from explorer.errors import invalid_input

HASH_PATTERN = re.compile(r"[0-9a-fA-F]{64}")

# Longer digit strings are far past any chain tip
MAX_HEIGHT_DIGITS = 20


def is_hash(value: Any) -> bool:
    return isinstance(value, str) and HASH_PATTERN.fullmatch(value) is not None


def require_hash(value: Any, label: str) -> str:
    """Return ``value`` if it is 64 hex characters, else raise invalid-input"""
    if not is_hash(value):
        raise invalid_input(f"Invalid {label} hash", code=f"invalid_{label}_hash")
    return value


def require_height(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise invalid_input("Invalid block height", code="invalid_block_height")
    return value


def is_oversized_height(digits: str) -> bool:
    return len(digits.lstrip("0")) > MAX_HEIGHT_DIGITS
