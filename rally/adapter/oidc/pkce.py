"""PKCE (Proof Key for Code Exchange) utilities."""

import secrets
from base64 import urlsafe_b64encode
from hashlib import sha256


def compute_challenge(verifier: str) -> str:
    """S256 challenge for a verifier: unpadded base64url of its SHA-256."""
    digest = sha256(verifier.encode("ascii")).digest()
    return urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


def generate_pkce_pair() -> tuple[str, str]:
    """Generate a PKCE verifier and its S256 challenge.

    The challenge goes into the authorization URL; the verifier is kept in
    an http-only cookie and sent with the token exchange.

    Returns:
        Tuple of (verifier, challenge), both unpadded base64url strings
    """
    # 64 random bytes encode to 86 characters (RFC 7636 allows 43-128)
    verifier = urlsafe_b64encode(secrets.token_bytes(64)).rstrip(b"=").decode("ascii")
    return verifier, compute_challenge(verifier)
