"""Tests for HMAC-SHA256 webhook signature signing and verification."""

import pytest

from app.services.signature import sign_payload, verify_signature

SECRET = "It's a Secret to Everybody"
BODY = b"Hello, World!"


def test_sign_payload_matches_github_example() -> None:
    """Signature matches the worked example in GitHub's webhook docs."""
    assert sign_payload(BODY, SECRET) == (
        "sha256=757107ea0eb2509fc211221cce984b8a37570b6d7586c22c46f4379c8b043e17"
    )


@pytest.mark.parametrize(
    "body",
    [b"", b"{}", b'{"ref": "refs/heads/main"}', bytes(range(256))],
)
def test_verify_accepts_own_signature(body: bytes) -> None:
    """Any body verifies against the signature computed with the same secret."""
    assert verify_signature(body, sign_payload(body, SECRET), SECRET)


def test_verify_rejects_flipped_body_bit() -> None:
    """Changing a single bit of the body invalidates the signature."""
    signature = sign_payload(BODY, SECRET)
    tampered = bytes([BODY[0] ^ 0x01]) + BODY[1:]

    assert not verify_signature(tampered, signature, SECRET)


def test_verify_rejects_flipped_signature_character() -> None:
    """Changing a single hex digit of the signature fails verification."""
    signature = sign_payload(BODY, SECRET)
    last = signature[-1]
    tampered = signature[:-1] + ("0" if last != "0" else "1")

    assert not verify_signature(BODY, tampered, SECRET)


def test_verify_rejects_other_secret() -> None:
    assert not verify_signature(BODY, sign_payload(BODY, "other"), SECRET)


@pytest.mark.parametrize(
    "signature",
    ["", "sha256=", "sha1=757107ea0eb2509fc211221cce984b8a37570b6d", "garbage", "sha256=é"],
)
def test_verify_rejects_malformed_header(signature: str) -> None:
    """Malformed headers fail verification instead of raising."""
    assert not verify_signature(BODY, signature, SECRET)
