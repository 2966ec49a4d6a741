#!/usr/bin/env python3
"""
Chef Python SDK - Request Signing Example

This example signs Chef server requests with a throwaway RSA key. Given a
server, client name and key file on the command line it also queries a
live Chef server.

Usage:
    python request_signing_example.py
    python request_signing_example.py chef.example.com 4000 my-client /path/to/my-client.pem
"""

import sys
import os
import time

# Add src to path for development
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from chef_sdk import (
    ChefRequestSigner,
    ChefSDKError,
    SigningError,
    create_client,
    hash_content,
)


def generate_demo_key() -> bytes:
    """Generate a 2048-bit RSA key in the PEM format Chef writes."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption()
    )


def basic_signing_example():
    """Sign a GET and a POST and show the resulting headers"""
    print("=== Basic Request Signing Example ===")

    pem = generate_demo_key()
    signer = ChefRequestSigner("example-client", pem)

    print("\n1. Signing GET /nodes ...")
    start_time = time.perf_counter()
    signed = signer.sign_request("/nodes", "GET")
    print(f"   Signing completed in {(time.perf_counter() - start_time) * 1000:.2f}ms")

    for name, value in signed.headers.items():
        print(f"   {name}: {value}")

    print("\n2. Canonical message that was signed:")
    print("   " + "\n   ".join(signed.canonical_message.split('\n')))

    body = '{"id": "alice", "shell": "/bin/zsh"}'
    signed_post = signer.sign_request("/data/users", "post", body)
    print("\n3. POST /data/users")
    print(f"   Content hash: {signed_post.content_hash} (expected {hash_content(body)})")
    print(f"   Authorization chunks: {len(signed_post.authorization_chunks())}")


def error_handling_example():
    """Show what an unusable key looks like"""
    print("\n\n=== Error Handling Example ===")

    signer = ChefRequestSigner("example-client", b"not a pem key")
    try:
        signer.sign_request("/nodes", "GET")
    except SigningError as e:
        print(f"   {type(e).__name__}: {e}")


def server_example(host: str, port: int, user_id: str, key_path: str):
    """Query a live Chef server"""
    print("\n\n=== Chef Server Example ===")

    with create_client(host, port, user_id, key_path) as chef:
        print(f"   Nodes: {chef.get_nodes()}")
        print(f"   Roles: {chef.get_roles()}")
        result = chef.search("node", "*:*", sort="name", rows=10)
        if result and "rows" in result:
            print(f"   First {len(result['rows'])} of {result.get('total')} nodes, sorted by name")


def main():
    """Run all examples"""
    print("Chef Python SDK - Request Signing Examples")
    print("=" * 50)

    try:
        basic_signing_example()
        error_handling_example()

        if len(sys.argv) == 5:
            server_example(sys.argv[1], int(sys.argv[2]), sys.argv[3], sys.argv[4])

        print("\n\n=== All Examples Completed Successfully! ===")

    except (ChefSDKError, SigningError) as e:
        print(f"\nExample failed: {type(e).__name__}: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
