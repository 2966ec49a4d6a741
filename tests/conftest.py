"""
Shared fixtures for the Chef Python SDK test suite
"""

import base64
from unittest.mock import MagicMock

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa

FIXED_TIMESTAMP = "2010-12-04T15:47:49Z"
EMPTY_BODY_HASH = "2jmj7l5rSw0yVb/vlWAYkK/YBwk="


@pytest.fixture(scope="session")
def rsa_key():
    """2048-bit RSA key, the size Chef generates for clients."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_key_pem(rsa_key):
    """Traditional OpenSSL (PKCS#1) PEM, as written by the Chef server."""
    return rsa_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption()
    )


@pytest.fixture(scope="session")
def pkcs8_private_key_pem(rsa_key):
    return rsa_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption()
    )


@pytest.fixture(scope="session")
def small_private_key_pem():
    """1024-bit key: too small for the canonical message."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=1024)
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption()
    )


@pytest.fixture(scope="session")
def ec_private_key_pem():
    key = ec.generate_private_key(ec.SECP256R1())
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption()
    )


@pytest.fixture
def recover_message(rsa_key):
    """Decrypt a base64 signature with the public key, as the server does."""
    public_key = rsa_key.public_key()

    def _recover(signature_b64: str) -> str:
        signature = base64.b64decode(signature_b64)
        data = public_key.recover_data_from_signature(signature, padding.PKCS1v15(), None)
        return data.decode('utf-8')

    return _recover


def make_response(content=b'{}', status_code=200, url='http://chef.example.com:4000/'):
    """Build a mock requests.Response."""
    response = MagicMock()
    response.content = content
    response.status_code = status_code
    response.ok = status_code < 400
    response.url = url
    return response


@pytest.fixture
def mock_session():
    """Mock requests session returning an empty JSON object."""
    session = MagicMock()
    session.request.return_value = make_response()
    return session
