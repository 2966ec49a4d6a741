"""
Type definitions for request signing functionality

This module provides type definitions and data classes for the Chef server
request authentication protocol (X-Ops-Sign version 1.0).
"""

from typing import Dict, Optional, Union, Callable, Any
from dataclasses import dataclass, field
from enum import Enum


class HttpMethod(str, Enum):
    """HTTP methods accepted by the Chef server API"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


# Authentication protocol constants
SIGNING_PROTOCOL_VERSION = "1.0"
SIGNATURE_CHUNK_SIZE = 60
TIMESTAMP_FORMAT = '%Y-%m-%dT%H:%M:%SZ'

# PKCS#1 v1.5 padding needs at least 11 bytes of the modulus
PKCS1_PADDING_OVERHEAD = 11

HEADER_SIGN = 'X-Ops-Sign'
HEADER_USER_ID = 'X-Ops-UserId'
HEADER_TIMESTAMP = 'X-Ops-Timestamp'
HEADER_CONTENT_HASH = 'X-Ops-Content-Hash'
HEADER_AUTHORIZATION_PREFIX = 'X-Ops-Authorization-'


@dataclass
class SignedRequest:
    """
    Result of signing a single Chef API request

    Attributes:
        method: Normalized (uppercase) HTTP method
        path: Request path that was signed (no host, no query string)
        content_hash: Base64-encoded SHA-1 digest of the body
        timestamp: ISO-8601 UTC timestamp used in both the signature and headers
        signature: Base64-encoded RSA signature of the canonical message
        canonical_message: Exact text that was signed
        headers: Authentication headers in emission order
    """
    method: HttpMethod
    path: str
    content_hash: str
    timestamp: str
    signature: str
    canonical_message: str
    headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        """Validate signed request"""
        if not self.signature:
            raise ValueError("Signature cannot be empty")

        if not isinstance(self.headers, dict):
            raise ValueError("Headers must be a dictionary")

    def authorization_chunks(self) -> Dict[str, str]:
        """Return only the X-Ops-Authorization-N headers."""
        return {
            name: value for name, value in self.headers.items()
            if name.startswith(HEADER_AUTHORIZATION_PREFIX)
        }


class SigningError(Exception):
    """
    Error class for signing operations

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Optional additional error details
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (code: {self.code}, details: {self.details})"
        return f"{self.message} (code: {self.code})"

    def __repr__(self) -> str:
        return f"SigningError(message='{self.message}', code='{self.code}', details={self.details})"


# Common signing error codes
class SigningErrorCodes:
    """Standard error codes for signing operations"""

    # Input errors
    INVALID_PRIVATE_KEY = "INVALID_PRIVATE_KEY"
    INVALID_USER_ID = "INVALID_USER_ID"
    INVALID_METHOD = "INVALID_METHOD"
    INVALID_URI = "INVALID_URI"
    INVALID_BODY = "INVALID_BODY"
    INVALID_TIMESTAMP = "INVALID_TIMESTAMP"

    # Signing errors
    SIGNING_FAILED = "SIGNING_FAILED"
    MESSAGE_TOO_LONG = "MESSAGE_TOO_LONG"


# Type aliases for convenience
TimestampGenerator = Callable[[], str]
RequestBody = Union[str, bytes, None]
