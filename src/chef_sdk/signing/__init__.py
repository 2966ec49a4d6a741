"""
Chef Python SDK - Request Signing Module

Implementation of the Chef server request authentication protocol
(X-Ops-Sign version 1.0) with RSA private keys. This module provides the
signing functionality required by every Chef server API call.
"""

from .types import (
    HttpMethod,
    SignedRequest,
    SigningError,
    SigningErrorCodes,
    SIGNING_PROTOCOL_VERSION,
    SIGNATURE_CHUNK_SIZE,
)

from .request_signer import (
    ChefRequestSigner,
    create_signer,
    sign_request,
)

from .canonical_message import (
    build_canonical_message,
    hash_path,
    parse_canonical_message,
    validate_canonical_message,
)

from .rsa_keys import (
    load_rsa_private_key,
    max_message_length,
    rsa_private_encrypt,
)

from .utils import (
    format_timestamp,
    generate_timestamp,
    hash_content,
    normalize_method,
    split_signature,
    validate_timestamp,
    validate_user_id,
)

from .integration import (
    ChefRequestAuth,
    create_signing_session,
)

# Public API exports
__all__ = [
    # Core signing functionality
    'ChefRequestSigner',
    'create_signer',
    'sign_request',
    # Types
    'HttpMethod',
    'SignedRequest',
    'SigningError',
    'SigningErrorCodes',
    'SIGNING_PROTOCOL_VERSION',
    'SIGNATURE_CHUNK_SIZE',
    # Canonical message
    'build_canonical_message',
    'hash_path',
    'parse_canonical_message',
    'validate_canonical_message',
    # RSA keys
    'load_rsa_private_key',
    'max_message_length',
    'rsa_private_encrypt',
    # Utilities
    'format_timestamp',
    'generate_timestamp',
    'hash_content',
    'normalize_method',
    'split_signature',
    'validate_timestamp',
    'validate_user_id',
    # HTTP Integration
    'ChefRequestAuth',
    'create_signing_session',
]
