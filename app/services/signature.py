"""HMAC-SHA256 signing and verification for GitHub webhook deliveries."""

import hashlib
import hmac

SIGNATURE_PREFIX = "sha256="


def sign_payload(body: bytes, secret: str) -> str:
    """Compute the ``X-Hub-Signature-256`` header value GitHub sends for *body*."""
    digest = hmac.new(
        secret.encode("utf-8"),
        msg=body,
        digestmod=hashlib.sha256,
    ).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


def verify_signature(body: bytes, signature: str, secret: str) -> bool:
    """Check *signature* against the raw request *body* in constant time.

    *body* must be the exact bytes received on the wire. Parsing and
    re-serializing the JSON changes whitespace and key order and breaks
    the digest.
    """
    expected = sign_payload(body, secret)
    return hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))
