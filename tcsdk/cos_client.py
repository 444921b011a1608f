"""Base client for the object storage service: hosts, URLs and signed headers."""

from __future__ import annotations

from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Mapping

import httpx

from .cos_acl import AclHeader
from .cos_signer import Signer

__all__ = ["Client"]

AUTH_VALID_SECONDS = 7200


class Client:
    """Holds credentials and the bucket/region every operation is aimed at."""

    def __init__(
        self,
        secret_id: str,
        secret_key: str,
        security_token: str | None,
        bucket: str,
        region: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.secret_id = secret_id
        self.secret_key = secret_key
        self.security_token = security_token
        self.bucket = bucket
        self.region = region
        self.transport = transport

    @property
    def host(self) -> str:
        return f"{self.bucket}.cos.{self.region}.myqcloud.com"

    def gen_common_headers(self, now: datetime | None = None) -> dict[str, str]:
        """Return the ``Host`` and ``Date`` headers every request carries."""
        now = now or datetime.now(timezone.utc)
        return {
            "Host": self.host,
            "Date": format_datetime(now.astimezone(timezone.utc), usegmt=True),
        }

    def full_url(self, path: str) -> str:
        return f"https://{self.host}{path}"

    def path_from_object_key(self, key: str) -> str:
        return key if key.startswith("/") else f"/{key}"

    @property
    def bucket_query_host(self) -> str:
        """Host used to list buckets: regional if a region is set."""
        if not self.region:
            return "service.cos.myqcloud.com"
        return f"cos.{self.region}.myqcloud.com"

    def headers_with_auth(
        self,
        method: str,
        url_path: str,
        acl_header: AclHeader | None = None,
        origin_headers: Mapping[str, str] | None = None,
        query: Mapping[str, str] | None = None,
    ) -> dict[str, str]:
        """Return headers with ACL entries and ``Authorization`` added.

        Starts from ``origin_headers`` when given, otherwise from the common headers.
        """
        headers = dict(origin_headers) if origin_headers is not None else self.gen_common_headers()
        if acl_header is not None:
            headers.update(acl_header.headers)
        headers["Authorization"] = Signer(method, url_path, headers, query).signature(
            self.secret_key, self.secret_id, self.security_token, AUTH_VALID_SECONDS
        )
        return headers

    def presigned_download_url(self, object_key: str, expire: int) -> str:
        """Return a download URL for ``object_key`` valid for ``expire`` seconds."""
        url_path = self.path_from_object_key(object_key)
        signature = Signer("get", url_path, {"host": self.host}).signature(
            self.secret_key, self.secret_id, self.security_token, expire
        )
        return f"{self.full_url(url_path)}?{signature}"