"""
Record identifiers for the Posts service.

Identifiers are 12-byte object ids rendered as 24 lowercase hex characters:
a 4-byte big-endian timestamp, 5 bytes of per-process randomness and a
3-byte counter.
"""
import itertools
import os
import random
import re
import time

_HEX_ID = re.compile(r"[0-9a-fA-F]{24}")
_PROCESS_UNIQUE = os.urandom(5)
_counter = itertools.count(random.randint(0, 0xFFFFFF))


class InvalidObjectId(ValueError):
    """Raised when a string is not a valid record identifier."""


def new_object_id() -> str:
    """Generate a fresh record identifier."""
    timestamp = int(time.time()).to_bytes(4, "big")
    count = (next(_counter) % 0x1000000).to_bytes(3, "big")
    return (timestamp + _PROCESS_UNIQUE + count).hex()


def parse_object_id(value: str) -> str:
    """
    Validate a record identifier taken from a request.

    Args:
        value: Candidate identifier

    Returns:
        The identifier normalised to lowercase

    Raises:
        InvalidObjectId: If the value is not 24 hex characters
    """
    if not isinstance(value, str) or not _HEX_ID.fullmatch(value):
        raise InvalidObjectId(f"'{value}' is not a valid ObjectID: must be a 24-character hex string")
    return value.lower()
