"""Webhook signature verification: constant-time HMAC-SHA256.

Miniflux sends ``X-Miniflux-Signature``: the hex-encoded HMAC-SHA256 of the
raw request body, keyed by the shared webhook secret.

Security contract:
- Verification runs on the raw bytes, before any JSON parsing
- Comparison uses hmac.compare_digest() (constant-time, no timing attacks)
- Empty secret -> verification always fails (fail-closed)
- Malformed signature text is a mismatch, never an exception
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import string

logger = logging.getLogger(__name__)

_HEX_DIGITS = frozenset(string.hexdigits)

# Hex length of a SHA-256 digest
_SIGNATURE_LENGTH = hashlib.sha256().digest_size * 2


def _as_bytes(secret: bytes | str) -> bytes:
    if isinstance(secret, str):
        return secret.encode("utf-8")
    return secret


def compute_signature(secret: bytes | str, body: bytes) -> str:
    """Return the hex HMAC-SHA256 of *body* keyed by *secret*."""
    return hmac.new(_as_bytes(secret), body, hashlib.sha256).hexdigest()


def verify_signature(
    secret: bytes | str, body: bytes, signature: str | None
) -> bool:
    """Verify a Miniflux webhook signature.

    Args:
        secret: Shared webhook secret
        body: Raw request body bytes
        signature: Value of the X-Miniflux-Signature header

    Returns:
        True if signature is valid
    """
    if not secret:
        logger.warning("Webhook secret not set, rejecting webhook")
        return False
    if not signature:
        return False

    # compare_digest() raises on non-ASCII str, so reject anything non-hex first
    if len(signature) != _SIGNATURE_LENGTH or not _HEX_DIGITS.issuperset(signature):
        return False

    expected = compute_signature(secret, body)
    return hmac.compare_digest(expected, signature)
