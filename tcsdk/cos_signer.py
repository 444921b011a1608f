"""Request signatures for the object storage service (q-sign-algorithm=sha1)."""

from __future__ import annotations

import hashlib
import hmac
import time
from typing import Mapping
from urllib.parse import quote, unquote

__all__ = ["Signer"]


def _encode(text: str) -> str:
    return quote(text, safe="")


def _encoded(data: Mapping[str, str]) -> dict[str, str]:
    return {_encode(k).lower(): _encode(v) for k, v in data.items()}


def _key_list(data: Mapping[str, str] | None) -> str:
    if data is None:
        return ""
    return ";".join(sorted(_encoded(data)))


def _pairs(data: Mapping[str, str] | None) -> str:
    if data is None:
        return ""
    encoded = _encoded(data)
    return "&".join(f"{k}={encoded[k]}" for k in sorted(encoded))


class Signer:
    """Computes the Authorization value for one request."""

    def __init__(
        self,
        method: str,
        url_path: str,
        headers: Mapping[str, str] | None = None,
        query: Mapping[str, str] | None = None,
    ) -> None:
        self.method = method
        self.url_path = url_path
        self.headers = headers
        self.query = query

    def key_time(self, valid_seconds: int) -> str:
        """Return ``start;end`` where start is now and end is ``valid_seconds`` later."""
        start = int(time.time())
        return f"{start};{start + valid_seconds}"

    def sign_key(self, key_time: str, secret_key: str) -> str:
        """Return the hex HMAC-SHA1 of ``key_time`` under ``secret_key``."""
        return hmac.new(
            secret_key.encode("utf-8"), key_time.encode("utf-8"), hashlib.sha1
        ).hexdigest()

    def url_param_list(self) -> str:
        return _key_list(self.query)

    def http_parameters(self) -> str:
        return _pairs(self.query)

    def header_list(self) -> str:
        return _key_list(self.headers)

    def header_string(self) -> str:
        return _pairs(self.headers)

    def http_string(self) -> str:
        path = unquote(self.url_path, errors="strict")
        parts = [self.method, path, self.http_parameters(), self.header_string()]
        return "\n".join(parts) + "\n"

    def string_to_sign(self, key_time: str) -> str:
        digest = hashlib.sha1(self.http_string().encode("utf-8")).hexdigest()
        return "\n".join(["sha1", key_time, digest]) + "\n"

    def signature(
        self,
        secret_key: str,
        secret_id: str,
        security_token: str | None,
        valid_seconds: int,
    ) -> str:
        """Return the full signature string for use as Authorization or a query string."""
        key_time = self.key_time(valid_seconds)
        sign_key = self.sign_key(key_time, secret_key)
        signature = self.sign_key(self.string_to_sign(key_time), sign_key)
        return (
            f"q-sign-algorithm=sha1&q-ak={secret_id}&q-sign-time={key_time}"
            f"&q-key-time={key_time}&q-header-list={self.header_list()}"
            f"&q-url-param-list={self.url_param_list()}&q-signature={signature}"
            f"&x-cos-security-token={security_token or ''}"
        )