"""
RSA private key handling for Chef request signing

Chef's authentication protocol does not use a hash-then-sign signature
scheme. The canonical message itself is padded with PKCS#1 v1.5 type 1
padding and raised to the private exponent (OpenSSL's
``RSA_private_encrypt``). The cryptography package parses the key and
supplies the private numbers; it has no public API for the raw operation.
"""

from typing import Optional, Union

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.exceptions import UnsupportedAlgorithm

from .types import (
    SigningError,
    SigningErrorCodes,
    PKCS1_PADDING_OVERHEAD,
)

PrivateKeyMaterial = Union[bytes, str]


def load_rsa_private_key(
    private_key: PrivateKeyMaterial,
    password: Optional[bytes] = None
) -> rsa.RSAPrivateKey:
    """
    Parse PEM-encoded RSA private key material.

    Both PKCS#1 (``BEGIN RSA PRIVATE KEY``) and PKCS#8 encodings are accepted.

    Args:
        private_key: PEM key as bytes or text
        password: Optional passphrase for encrypted keys

    Returns:
        RSAPrivateKey: Parsed key object

    Raises:
        SigningError: If the material is not a valid RSA private key
    """
    if isinstance(private_key, str):
        private_key = private_key.encode('utf-8')

    if not isinstance(private_key, (bytes, bytearray)) or not private_key:
        raise SigningError(
            "Private key must be non-empty PEM bytes",
            SigningErrorCodes.INVALID_PRIVATE_KEY,
            {"key_type": str(type(private_key))}
        )

    try:
        key = serialization.load_pem_private_key(bytes(private_key), password=password)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise SigningError(
            f"Failed to parse private key: {e}",
            SigningErrorCodes.INVALID_PRIVATE_KEY,
            {"original_error": str(e)}
        ) from e

    if not isinstance(key, rsa.RSAPrivateKey):
        raise SigningError(
            f"Private key must be an RSA key, got {type(key).__name__}",
            SigningErrorCodes.INVALID_PRIVATE_KEY,
            {"key_type": type(key).__name__}
        )

    return key


def max_message_length(key: rsa.RSAPrivateKey) -> int:
    """
    Largest message that fits in one PKCS#1 v1.5 block for this key.

    Args:
        key: RSA private key

    Returns:
        int: Maximum message length in bytes
    """
    return (key.key_size + 7) // 8 - PKCS1_PADDING_OVERHEAD


def _pad_pkcs1_type1(message: bytes, block_size: int) -> bytes:
    padding_length = block_size - len(message) - 3
    return b'\x00\x01' + b'\xff' * padding_length + b'\x00' + message


def rsa_private_encrypt(key: rsa.RSAPrivateKey, message: bytes) -> bytes:
    """
    Encrypt a message with the private key using PKCS#1 v1.5 type 1 padding.

    The output can be recovered by anyone holding the public key, which is
    how the server authenticates the request.

    Args:
        key: RSA private key
        message: Message bytes (at most ``max_message_length(key)`` long)

    Returns:
        bytes: Ciphertext, exactly as long as the modulus

    Raises:
        SigningError: If the message does not fit in the key's modulus, or
            the result does not check out against the public key
    """
    block_size = (key.key_size + 7) // 8
    limit = block_size - PKCS1_PADDING_OVERHEAD
    if len(message) > limit:
        raise SigningError(
            f"Message of {len(message)} bytes exceeds the {limit} byte limit of a {key.key_size}-bit key",
            SigningErrorCodes.MESSAGE_TOO_LONG,
            {"message_length": len(message), "key_size": key.key_size}
        )

    numbers = key.private_numbers()
    m = int.from_bytes(_pad_pkcs1_type1(message, block_size), 'big')

    # CRT form of pow(m, d, n)
    p, q = numbers.p, numbers.q
    m1 = pow(m, numbers.dmp1, p)
    m2 = pow(m, numbers.dmq1, q)
    h = (numbers.iqmp * (m1 - m2)) % p
    c = m2 + h * q

    public = numbers.public_numbers
    if pow(c, public.e, public.n) != m:
        raise SigningError(
            "RSA result failed verification against the public key",
            SigningErrorCodes.SIGNING_FAILED,
            {"key_size": key.key_size}
        )

    return c.to_bytes(block_size, 'big')
