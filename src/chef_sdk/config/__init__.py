"""
Configuration management for Chef Python SDK
"""

from .client_config import (
    ClientConfig,
    DEFAULT_API_VERSION,
    DEFAULT_SCHEME,
    read_private_key_file,
    resolve_private_key,
)

__all__ = [
    'ClientConfig',
    'DEFAULT_API_VERSION',
    'DEFAULT_SCHEME',
    'read_private_key_file',
    'resolve_private_key',
]
