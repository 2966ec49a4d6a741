"""
Chef request signer (X-Ops-Sign version 1.0)

This module provides the main signer implementation for the Chef server
authentication protocol: it hashes the path and body with SHA-1, builds the
canonical message, encrypts it with the client's RSA private key and spreads
the base64 result over ``X-Ops-Authorization-N`` headers.
"""

import base64
import logging
from typing import Optional, Union

from .types import (
    HttpMethod,
    SignedRequest,
    SigningError,
    SigningErrorCodes,
    RequestBody,
    TimestampGenerator,
    SIGNING_PROTOCOL_VERSION,
    HEADER_SIGN,
    HEADER_USER_ID,
    HEADER_TIMESTAMP,
    HEADER_CONTENT_HASH,
    HEADER_AUTHORIZATION_PREFIX,
)
from .utils import (
    generate_timestamp,
    hash_content,
    normalize_method,
    split_signature,
    validate_timestamp,
    validate_uri,
    validate_user_id,
    PerformanceTimer,
)
from .canonical_message import build_canonical_message, hash_path
from .rsa_keys import PrivateKeyMaterial, load_rsa_private_key, rsa_private_encrypt

logger = logging.getLogger(__name__)

# Signing slower than this is logged as a warning
SLOW_SIGNING_THRESHOLD_MS = 250


class ChefRequestSigner:
    """
    Signer for Chef server API requests

    The signer only holds the client name and the PEM key bytes. The key is
    parsed on every call and no derived material is kept between requests.
    """

    def __init__(
        self,
        user_id: str,
        private_key: PrivateKeyMaterial,
        timestamp_generator: Optional[TimestampGenerator] = None,
        password: Optional[bytes] = None
    ):
        """
        Initialize the signer.

        Args:
            user_id: Client name associated with the private key
            private_key: PEM-encoded RSA private key
            timestamp_generator: Optional clock returning formatted timestamps
            password: Optional passphrase for an encrypted key

        Raises:
            SigningError: If the user id is invalid
        """
        if not validate_user_id(user_id):
            raise SigningError(
                f"Invalid user id: {user_id!r}",
                SigningErrorCodes.INVALID_USER_ID,
                {"user_id": repr(user_id)}
            )

        self.user_id = user_id
        self.private_key = private_key
        self.timestamp_generator = timestamp_generator or generate_timestamp
        self.password = password

    def sign_request(
        self,
        uri: str,
        http_method: Union[str, HttpMethod],
        body: RequestBody = b"",
        timestamp: Optional[str] = None
    ) -> SignedRequest:
        """
        Sign a Chef API request.

        Args:
            uri: Request path, without host and query string
            http_method: GET, PUT, POST or DELETE (any case)
            body: Request body, empty for GET and DELETE
            timestamp: Fixed timestamp; the clock is read once when omitted

        Returns:
            SignedRequest: Signing result with headers and metadata

        Raises:
            SigningError: If signing fails
        """
        timer = PerformanceTimer()

        try:
            method = normalize_method(http_method)

            if not validate_uri(uri):
                raise SigningError(
                    f"Request path must start with '/': {uri!r}",
                    SigningErrorCodes.INVALID_URI,
                    {"uri": repr(uri)}
                )

            key = load_rsa_private_key(self.private_key, self.password)

            if timestamp is None:
                timestamp = self.timestamp_generator()

            if not validate_timestamp(timestamp):
                raise SigningError(
                    f"Invalid timestamp: {timestamp!r}",
                    SigningErrorCodes.INVALID_TIMESTAMP,
                    {"timestamp": repr(timestamp)}
                )

            content_hash = hash_content(body)
            canonical_message = build_canonical_message(
                method,
                hash_path(uri),
                content_hash,
                timestamp,
                self.user_id
            )

            encrypted = rsa_private_encrypt(key, canonical_message.encode('utf-8'))
            signature = base64.b64encode(encrypted).decode('ascii')

            headers = {
                HEADER_SIGN: f'version={SIGNING_PROTOCOL_VERSION}',
                HEADER_USER_ID: self.user_id,
                HEADER_TIMESTAMP: timestamp,
                HEADER_CONTENT_HASH: content_hash,
            }
            for index, chunk in enumerate(split_signature(signature), start=1):
                headers[f'{HEADER_AUTHORIZATION_PREFIX}{index}'] = chunk

            elapsed_ms = timer.elapsed_ms()
            if elapsed_ms > SLOW_SIGNING_THRESHOLD_MS:
                logger.warning(
                    f"Signing operation took {elapsed_ms:.2f}ms (target: <{SLOW_SIGNING_THRESHOLD_MS}ms)"
                )

            return SignedRequest(
                method=method,
                path=uri,
                content_hash=content_hash,
                timestamp=timestamp,
                signature=signature,
                canonical_message=canonical_message,
                headers=headers
            )

        except SigningError:
            raise
        except Exception as e:
            raise SigningError(
                f"Request signing failed: {e}",
                SigningErrorCodes.SIGNING_FAILED,
                {"original_error": str(e)}
            ) from e


def create_signer(
    user_id: str,
    private_key: PrivateKeyMaterial,
    timestamp_generator: Optional[TimestampGenerator] = None
) -> ChefRequestSigner:
    """
    Create a new Chef request signer.

    Args:
        user_id: Client name
        private_key: PEM-encoded RSA private key
        timestamp_generator: Optional clock

    Returns:
        ChefRequestSigner: Configured signer instance
    """
    return ChefRequestSigner(user_id, private_key, timestamp_generator)


def sign_request(
    uri: str,
    http_method: Union[str, HttpMethod],
    body: RequestBody,
    user_id: str,
    private_key: PrivateKeyMaterial,
    timestamp: Optional[str] = None
) -> SignedRequest:
    """
    Sign a request in one call.

    Args:
        uri: Request path
        http_method: HTTP method
        body: Request body
        user_id: Client name
        private_key: PEM-encoded RSA private key
        timestamp: Optional fixed timestamp

    Returns:
        SignedRequest: Signing result
    """
    signer = create_signer(user_id, private_key)
    return signer.sign_request(uri, http_method, body, timestamp=timestamp)
