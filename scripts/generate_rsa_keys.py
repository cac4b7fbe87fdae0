"""
Generate the RSA key pair used to sign and verify access tokens.

Writes PEM files to the paths configured by JWT_PRIVATE_KEY_PATH and
JWT_PUBLIC_KEY_PATH (default rsakey/jwtrsa256.key and .key.pub).

Usage:
    python scripts/generate_rsa_keys.py [--bits 2048] [--force]
"""

import argparse
import sys
from pathlib import Path

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

sys.path.insert(0, ".")
from user_service.config import get_settings  # noqa: E402


def generate_pem_pair(bits: int = 2048) -> tuple[bytes, bytes]:
    """Return (private_pem, public_pem) for a fresh RSA key."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=bits)
    private_pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_pem = key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return private_pem, public_pem


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--bits", type=int, default=2048)
    parser.add_argument("--force", action="store_true", help="overwrite existing keys")
    args = parser.parse_args()

    settings = get_settings()
    private_path = Path(settings.jwt_private_key_path)
    public_path = Path(settings.jwt_public_key_path)

    if not args.force and (private_path.exists() or public_path.exists()):
        print(f"Refusing to overwrite {private_path} / {public_path} (use --force)")
        return 1

    private_pem, public_pem = generate_pem_pair(args.bits)
    private_path.parent.mkdir(parents=True, exist_ok=True)
    public_path.parent.mkdir(parents=True, exist_ok=True)
    private_path.write_bytes(private_pem)
    private_path.chmod(0o600)
    public_path.write_bytes(public_pem)

    print(f"Wrote {private_path} and {public_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
