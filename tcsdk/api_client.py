"""Client for the signed JSON API (TC3-HMAC-SHA256)."""

from __future__ import annotations

import json
import time
from datetime import datetime, timezone
from typing import Any, Mapping

import httpx

from .encryption import hmac_sha256, hmac_sha256_hex, sha256_hex

__all__ = ["ApiClient", "ApiError"]

CONTENT_TYPE = "application/json; charset=utf-8"
ALGORITHM = "TC3-HMAC-SHA256"
SIGNED_HEADERS = "content-type;host"
DEFAULT_VERSION = "2021-03-23"


class ApiError(Exception):
    """Raised when a request fails or its answer cannot be understood."""


class ApiClient:
    """Sends actions to one API host, signing each request."""

    def __init__(
        self,
        secret_id: str,
        secret_key: str,
        host: str,
        service: str,
        *,
        region: str = "",
        version: str = DEFAULT_VERSION,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.secret_id = secret_id
        self.secret_key = secret_key
        self.host = host
        self.service = service
        self.region = region
        self.version = version
        self._transport = transport

    def make_authorization(self, timestamp: int, date: str, payload: str) -> str:
        """Build the Authorization header value for a POST of ``payload``."""
        canonical_headers = f"content-type:{CONTENT_TYPE}\nhost:{self.host}\n"
        canonical_request = "\n".join(
            ["POST", "/", "", canonical_headers, SIGNED_HEADERS, sha256_hex(payload)]
        )
        credential_scope = f"{date}/{self.service}/tc3_request"
        string_to_sign = "\n".join(
            [ALGORITHM, str(timestamp), credential_scope, sha256_hex(canonical_request)]
        )
        secret_date = hmac_sha256(date, f"TC3{self.secret_key}")
        secret_service = hmac_sha256(self.service, secret_date)
        secret_signing = hmac_sha256("tc3_request", secret_service)
        signature = hmac_sha256_hex(string_to_sign, secret_signing)
        return (
            f"{ALGORITHM} Credential={self.secret_id}/{credential_scope},"
            f"SignedHeaders={SIGNED_HEADERS},Signature={signature}"
        )

    def build_headers(self, action: str, payload: str, timestamp: int) -> dict[str, str]:
        """Return the full header set for sending ``payload`` as ``action``."""
        date = datetime.fromtimestamp(timestamp, timezone.utc).strftime("%Y-%m-%d")
        return {
            "Authorization": self.make_authorization(timestamp, date, payload),
            "Content-Type": CONTENT_TYPE,
            "Host": self.host,
            "X-TC-Action": action,
            "X-TC-Timestamp": str(timestamp),
            "X-TC-Version": self.version,
            "X-TC-Region": self.region,
        }

    async def send(self, action: str, payload: Mapping[str, Any]) -> Any:
        """POST ``payload`` as ``action`` and return the ``Response`` member of the answer."""
        body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
        headers = self.build_headers(action, body, int(time.time()))
        async with httpx.AsyncClient(transport=self._transport) as client:
            try:
                resp = await client.post(
                    f"https://{self.host}", headers=headers, content=body.encode("utf-8")
                )
            except httpx.HTTPError as exc:
                raise ApiError(f"request failed: {exc}") from exc
        try:
            data = resp.json()
        except ValueError as exc:
            raise ApiError(f"invalid JSON in response: {exc}") from exc
        if not isinstance(data, dict) or "Response" not in data:
            raise ApiError("response has no 'Response' member")
        return data["Response"]