"""
Chef Python SDK
Signed client for the Chef server HTTP API
"""

from .version import __version__
from .exceptions import (
    ChefSDKError,
    ValidationError,
    TransportError,
    DecodeError,
)
from .config import (
    ClientConfig,
    DEFAULT_API_VERSION,
    read_private_key_file,
)
from .http_client import (
    ChefApiClient,
    create_client,
)
from .search import (
    find_key,
    sort_search_result,
)
from .signing import (
    # Core signing functionality
    ChefRequestSigner,
    create_signer,
    sign_request,
    # Types
    HttpMethod,
    SignedRequest,
    SigningError,
    SigningErrorCodes,
    # Canonical message
    build_canonical_message,
    # Utilities
    format_timestamp,
    generate_timestamp,
    hash_content,
    split_signature,
    load_rsa_private_key,
    # HTTP Integration
    ChefRequestAuth,
    create_signing_session,
)


# Public API exports
__all__ = [
    '__version__',
    # Exceptions
    'ChefSDKError',
    'ValidationError',
    'TransportError',
    'DecodeError',
    'SigningError',
    'SigningErrorCodes',
    # Configuration
    'ClientConfig',
    'DEFAULT_API_VERSION',
    'read_private_key_file',
    # HTTP Client
    'ChefApiClient',
    'create_client',
    # Search
    'find_key',
    'sort_search_result',
    # Request Signing
    'ChefRequestSigner',
    'create_signer',
    'sign_request',
    'HttpMethod',
    'SignedRequest',
    'build_canonical_message',
    'format_timestamp',
    'generate_timestamp',
    'hash_content',
    'split_signature',
    'load_rsa_private_key',
    'ChefRequestAuth',
    'create_signing_session',
]
