"""
Canonical message construction for Chef request signatures

The canonical message is the exact text that gets encrypted with the
client's private key. It has five ``Name:value`` lines joined by ``\\n``
with no trailing newline.
"""

from typing import Dict, Union

from .types import (
    HttpMethod,
    SigningError,
    SigningErrorCodes,
)
from .utils import hash_content, normalize_method


CANONICAL_FIELDS = (
    'Method',
    'Hashed Path',
    'X-Ops-Content-Hash',
    'X-Ops-Timestamp',
    'X-Ops-UserId',
)


def hash_path(uri: str) -> str:
    """
    Hash the request path for the ``Hashed Path`` line.

    Args:
        uri: Request path without host or query string

    Returns:
        str: Base64-encoded SHA-1 digest of the path
    """
    return hash_content(uri)


def build_canonical_message(
    method: Union[str, HttpMethod],
    hashed_path: str,
    content_hash: str,
    timestamp: str,
    user_id: str
) -> str:
    """
    Build canonical message for signing.

    Args:
        method: HTTP method (normalized to uppercase)
        hashed_path: Base64 SHA-1 of the request path
        content_hash: Base64 SHA-1 of the request body
        timestamp: Request timestamp
        user_id: Client name

    Returns:
        str: Canonical message string

    Raises:
        SigningError: If the method is not supported
    """
    method = normalize_method(method)

    values = (method.value, hashed_path, content_hash, timestamp, user_id)
    return '\n'.join(f'{name}:{value}' for name, value in zip(CANONICAL_FIELDS, values))


def parse_canonical_message(canonical_message: str) -> Dict[str, str]:
    """
    Split a canonical message back into its fields.

    Useful for debugging signature mismatches against server logs.

    Args:
        canonical_message: Canonical message string

    Returns:
        dict: Field name to value, in canonical order

    Raises:
        SigningError: If the message does not follow the canonical layout
    """
    lines = canonical_message.split('\n')
    if len(lines) != len(CANONICAL_FIELDS):
        raise SigningError(
            f"Canonical message must have {len(CANONICAL_FIELDS)} lines, got {len(lines)}",
            SigningErrorCodes.SIGNING_FAILED,
            {"lines": len(lines)}
        )

    fields = {}
    for expected, line in zip(CANONICAL_FIELDS, lines):
        name, sep, value = line.partition(':')
        if not sep or name != expected:
            raise SigningError(
                f"Unexpected canonical line: {line!r}",
                SigningErrorCodes.SIGNING_FAILED,
                {"expected": expected}
            )
        fields[name] = value

    return fields


def validate_canonical_message(canonical_message: str) -> bool:
    """
    Validate canonical message format.

    Args:
        canonical_message: Canonical message to validate

    Returns:
        bool: True if message format is valid
    """
    if not canonical_message or not isinstance(canonical_message, str):
        return False

    if canonical_message.endswith('\n'):
        return False

    try:
        parse_canonical_message(canonical_message)
    except SigningError:
        return False

    return True
