"""
Client configuration for the Chef Python SDK

Connection settings are plain values validated once at construction time.
There is no configuration file format and no environment lookup.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ..exceptions import ValidationError

DEFAULT_API_VERSION = '0.9.12'
DEFAULT_SCHEME = 'http'
SUPPORTED_SCHEMES = ('http', 'https')

PEM_MARKER = b'-----BEGIN'


def read_private_key_file(key_path: Union[str, Path]) -> bytes:
    """
    Read PEM key bytes from disk.

    Args:
        key_path: Path to a PEM file, usually ``<client>.pem``

    Returns:
        bytes: File contents

    Raises:
        ValidationError: If the file cannot be read
    """
    try:
        with open(Path(key_path), 'rb') as f:
            return f.read()
    except OSError as e:
        raise ValidationError(
            f"Failed to read private key file: {e}",
            "KEY_FILE_ERROR",
            {"path": str(key_path)}
        ) from e


def resolve_private_key(private_key: Union[bytes, str, Path]) -> bytes:
    """
    Accept key bytes, key text or the path of a key file.

    Args:
        private_key: PEM bytes, PEM text, or a filesystem path

    Returns:
        bytes: PEM key bytes
    """
    if isinstance(private_key, Path):
        return read_private_key_file(private_key)

    if isinstance(private_key, str):
        if PEM_MARKER.decode('ascii') not in private_key and os.path.isfile(private_key):
            return read_private_key_file(private_key)
        return private_key.encode('utf-8')

    return private_key


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for a Chef server connection."""
    host: str
    port: int
    user_id: str
    private_key: bytes
    api_version: str = DEFAULT_API_VERSION
    scheme: str = DEFAULT_SCHEME
    strict_decoding: bool = False

    def __post_init__(self):
        """Validate client configuration."""
        if not self.host:
            raise ValidationError("Server host cannot be empty", "INVALID_HOST")

        if '/' in self.host or ':' in self.host:
            raise ValidationError(
                f"Server host must be a bare hostname or IPv4 address: {self.host}",
                "INVALID_HOST"
            )

        if isinstance(self.port, bool) or not isinstance(self.port, int) or not 0 < self.port < 65536:
            raise ValidationError(f"Invalid server port: {self.port!r}", "INVALID_PORT")

        if not self.user_id:
            raise ValidationError("User id cannot be empty", "INVALID_USER_ID")

        if isinstance(self.private_key, str):
            object.__setattr__(self, 'private_key', self.private_key.encode('utf-8'))

        if not isinstance(self.private_key, bytes) or not self.private_key:
            raise ValidationError("Private key must be non-empty PEM bytes", "INVALID_PRIVATE_KEY")

        if not self.api_version:
            raise ValidationError("API version cannot be empty", "INVALID_API_VERSION")

        if self.scheme not in SUPPORTED_SCHEMES:
            raise ValidationError(
                f"Unsupported scheme: {self.scheme} (expected one of {', '.join(SUPPORTED_SCHEMES)})",
                "INVALID_SCHEME"
            )

    @property
    def base_url(self) -> str:
        """Server URL without a trailing slash."""
        return f"{self.scheme}://{self.host}:{self.port}"

    @classmethod
    def from_key_file(
        cls,
        host: str,
        port: int,
        user_id: str,
        key_path: Union[str, Path],
        api_version: str = DEFAULT_API_VERSION,
        **kwargs
    ) -> 'ClientConfig':
        """Build a configuration whose private key is read from a PEM file."""
        return cls(
            host=host,
            port=port,
            user_id=user_id,
            private_key=read_private_key_file(key_path),
            api_version=api_version,
            **kwargs
        )

    def __repr__(self) -> str:
        return (
            f"ClientConfig(host={self.host!r}, port={self.port}, user_id={self.user_id!r}, "
            f"api_version={self.api_version!r}, scheme={self.scheme!r})"
        )
