"""
24-hex identifiers shaped like document-store object ids.
"""

import re
import secrets
import time

OBJECT_ID_REGEX = re.compile(r"^[0-9a-fA-F]{24}$")


def generate_object_id() -> str:
    """Generate a 24-char hex id: 4-byte timestamp + 8 random bytes."""
    return f"{int(time.time()) & 0xFFFFFFFF:08x}{secrets.token_hex(8)}"


def is_object_id(value: str | None) -> bool:
    return bool(value) and bool(OBJECT_ID_REGEX.match(value))
