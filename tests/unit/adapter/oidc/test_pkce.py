"""Unit tests for PKCE helpers."""

import base64
import hashlib
import re

from rally.adapter.oidc.pkce import compute_challenge, generate_pkce_pair

BASE64URL = re.compile(r"^[A-Za-z0-9_-]+$")


def test_challenge_matches_rfc7636_example():
    verifier = "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"

    assert compute_challenge(verifier) == "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM"


def test_pair_is_consistent():
    verifier, challenge = generate_pkce_pair()

    digest = hashlib.sha256(verifier.encode()).digest()
    assert challenge == base64.urlsafe_b64encode(digest).rstrip(b"=").decode()


def test_verifier_shape():
    verifier, challenge = generate_pkce_pair()

    assert 43 <= len(verifier) <= 128
    assert BASE64URL.match(verifier)
    assert BASE64URL.match(challenge)
    assert "=" not in challenge


def test_pairs_are_random():
    assert generate_pkce_pair()[0] != generate_pkce_pair()[0]
