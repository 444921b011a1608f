"""Hashing and HMAC helpers used by the request signers."""

from __future__ import annotations

import hashlib
import hmac

__all__ = ["hmac_sha256", "hmac_sha256_hex", "sha256_hex"]


def _to_bytes(data: str | bytes | bytearray) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def hmac_sha256(message: str | bytes, key: str | bytes) -> bytes:
    """Return the raw 32-byte HMAC-SHA256 of ``message`` under ``key``."""
    return hmac.new(_to_bytes(key), _to_bytes(message), hashlib.sha256).digest()


def hmac_sha256_hex(message: str | bytes, key: str | bytes) -> str:
    """Return the HMAC-SHA256 of ``message`` under ``key`` as lowercase hex."""
    return hmac_sha256(message, key).hex()


def sha256_hex(text: str | bytes) -> str:
    """Return the SHA-256 digest of ``text`` as lowercase hex."""
    return hashlib.sha256(_to_bytes(text)).hexdigest()