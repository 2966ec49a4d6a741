"""
HTTP client integration for request signing

This module plugs the Chef request signer into the requests library as an
authentication handler, so any ``requests`` call can be signed without going
through ``ChefApiClient``.
"""

import logging
from typing import Optional
from urllib.parse import urlsplit

import requests
from requests.auth import AuthBase
from requests.models import PreparedRequest

from .types import SigningError, SigningErrorCodes, TimestampGenerator
from .request_signer import ChefRequestSigner
from .rsa_keys import PrivateKeyMaterial

logger = logging.getLogger(__name__)


class ChefRequestAuth(AuthBase):
    """
    requests authentication handler that signs prepared requests.

    Example:
        >>> session = requests.Session()
        >>> session.auth = ChefRequestAuth('my-client', pem_bytes)
        >>> session.get('http://chef.example.com:4000/nodes')
    """

    def __init__(
        self,
        user_id: str,
        private_key: PrivateKeyMaterial,
        api_version: Optional[str] = None,
        timestamp_generator: Optional[TimestampGenerator] = None
    ):
        """
        Initialize the handler.

        Args:
            user_id: Client name associated with the private key
            private_key: PEM-encoded RSA private key
            api_version: Value for X-Chef-Version, omitted when None
            timestamp_generator: Optional clock for the signer
        """
        self.signer = ChefRequestSigner(user_id, private_key, timestamp_generator)
        self.api_version = api_version

    def __call__(self, request: PreparedRequest) -> PreparedRequest:
        """Sign the prepared request in place."""
        body = request.body
        if body is not None and not isinstance(body, (bytes, str)):
            raise SigningError(
                "Streaming request bodies cannot be signed",
                SigningErrorCodes.INVALID_BODY,
                {"body_type": str(type(body))}
            )

        # The query string is not part of the signed path
        path = urlsplit(request.url).path or '/'

        signed = self.signer.sign_request(path, request.method, body or b"")
        request.headers.update(signed.headers)

        if self.api_version:
            request.headers['X-Chef-Version'] = self.api_version

        logger.debug(f"Signed {signed.method.value} {path} for {self.signer.user_id}")
        return request


def create_signing_session(
    user_id: str,
    private_key: PrivateKeyMaterial,
    api_version: Optional[str] = None,
    session: Optional[requests.Session] = None
) -> requests.Session:
    """
    Create (or configure) a requests session that signs every request.

    Args:
        user_id: Client name
        private_key: PEM-encoded RSA private key
        api_version: Optional X-Chef-Version header value
        session: Existing session to configure

    Returns:
        requests.Session: Session with ChefRequestAuth installed
    """
    session = session or requests.Session()
    session.auth = ChefRequestAuth(user_id, private_key, api_version)
    return session
