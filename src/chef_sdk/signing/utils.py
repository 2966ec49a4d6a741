"""
Utility functions for request signing

This module provides utility functions for the Chef authentication protocol,
including timestamp handling, SHA-1 content hashing, method normalization
and signature chunking.
"""

import time
import hashlib
import base64
import re
from typing import List, Optional, Union

from .types import (
    SigningError,
    SigningErrorCodes,
    HttpMethod,
    RequestBody,
    SIGNATURE_CHUNK_SIZE,
    TIMESTAMP_FORMAT,
)


_TIMESTAMP_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$')


def format_timestamp(timestamp: Optional[Union[int, float]] = None) -> str:
    """
    Format a Unix timestamp as the ISO-8601 UTC string the server expects.

    Fractional seconds are dropped and the zone is always the literal ``Z``.

    Args:
        timestamp: Unix timestamp (uses current time if None)

    Returns:
        str: Timestamp such as ``2010-12-04T15:47:49Z``
    """
    if timestamp is None:
        timestamp = time.time()

    return time.strftime(TIMESTAMP_FORMAT, time.gmtime(int(timestamp)))


def generate_timestamp() -> str:
    """
    Generate the current request timestamp.

    Returns:
        str: Current UTC time formatted for the X-Ops-Timestamp header
    """
    return format_timestamp()


def validate_timestamp(timestamp: str) -> bool:
    """
    Validate timestamp format.

    Args:
        timestamp: Timestamp string to validate

    Returns:
        bool: True if timestamp matches ``YYYY-MM-DDTHH:MM:SSZ``
    """
    if not isinstance(timestamp, str):
        return False

    if not _TIMESTAMP_PATTERN.match(timestamp):
        return False

    try:
        time.strptime(timestamp, TIMESTAMP_FORMAT)
    except ValueError:
        return False

    return True


def normalize_method(method: Union[str, HttpMethod]) -> HttpMethod:
    """
    Normalize an HTTP method name to its uppercase enum member.

    Args:
        method: Method name in any case, or an HttpMethod

    Returns:
        HttpMethod: Normalized method

    Raises:
        SigningError: If the method is not GET, PUT, POST or DELETE
    """
    if isinstance(method, HttpMethod):
        return method

    if not isinstance(method, str):
        raise SigningError(
            f"HTTP method must be a string, got {type(method)}",
            SigningErrorCodes.INVALID_METHOD,
            {"method": repr(method)}
        )

    try:
        return HttpMethod(method.strip().upper())
    except ValueError:
        raise SigningError(
            f"Unsupported HTTP method: {method}",
            SigningErrorCodes.INVALID_METHOD,
            {"method": method, "supported": [m.value for m in HttpMethod]}
        )


def to_bytes(content: RequestBody) -> bytes:
    """
    Convert a request body to bytes.

    Args:
        content: Body as string, bytes or None

    Returns:
        bytes: UTF-8 encoded body (empty for None)

    Raises:
        SigningError: If the body has an unsupported type
    """
    if content is None:
        return b""
    if isinstance(content, str):
        return content.encode('utf-8')
    if isinstance(content, (bytes, bytearray)):
        return bytes(content)

    raise SigningError(
        f"Content must be string, bytes, or None, got {type(content)}",
        SigningErrorCodes.INVALID_BODY,
        {"content_type": str(type(content))}
    )


def hash_content(content: RequestBody) -> str:
    """
    Calculate the base64-encoded SHA-1 digest of some content.

    The raw digest is encoded, not its hex representation.

    Args:
        content: Content to hash (string, bytes, or None)

    Returns:
        str: Base64 digest, e.g. ``2jmj7l5rSw0yVb/vlWAYkK/YBwk=`` for empty content
    """
    digest = hashlib.sha1(to_bytes(content)).digest()
    return base64.b64encode(digest).decode('ascii')


def split_signature(signature: str, chunk_size: int = SIGNATURE_CHUNK_SIZE) -> List[str]:
    """
    Split a base64 signature into consecutive fixed-size chunks.

    Args:
        signature: Base64 signature string
        chunk_size: Maximum chunk length

    Returns:
        list: Chunks in order; only the last one may be shorter
    """
    if chunk_size <= 0:
        raise ValueError("Chunk size must be positive")

    return [signature[i:i + chunk_size] for i in range(0, len(signature), chunk_size)]


def validate_user_id(user_id: str) -> bool:
    """
    Validate the client/user name used for signing.

    Args:
        user_id: User identifier

    Returns:
        bool: True if user id is a non-empty single-line string
    """
    if not isinstance(user_id, str) or not user_id:
        return False

    return '\n' not in user_id and '\r' not in user_id


def validate_uri(uri: str) -> bool:
    """
    Validate the request path used for signing.

    Args:
        uri: Request path

    Returns:
        bool: True if the path is a string starting with ``/``
    """
    return isinstance(uri, str) and uri.startswith('/')


class PerformanceTimer:
    """Simple performance timer for monitoring signing operations."""

    def __init__(self):
        self.start_time = time.perf_counter()

    def elapsed_ms(self) -> float:
        """Get elapsed time in milliseconds."""
        return (time.perf_counter() - self.start_time) * 1000
