"""Bucket-level operations."""

from __future__ import annotations

from .cos_acl import AclHeader
from .cos_client import Client
from .cos_request import Method, Response, send_request

__all__ = ["BucketOperations"]

MAX_KEYS_LIMIT = 1000


class BucketOperations(Client):
    """Create, delete, inspect and list the client's bucket.

    Each operation returns a :class:`Response` and raises ``CosError`` on failure.
    """

    async def put_bucket(self, acl_header: AclHeader | None = None) -> Response:
        """Create the bucket; without an ACL the service makes it private."""
        headers = self.headers_with_auth("put", "/", acl_header)
        return await send_request(
            Method.PUT, self.full_url("/"), headers=headers, transport=self.transport
        )

    async def delete_bucket(self) -> Response:
        """Delete the bucket; needs write permission on it."""
        headers = self.headers_with_auth("delete", "/")
        return await send_request(
            Method.DELETE, self.full_url("/"), headers=headers, transport=self.transport
        )

    async def list_objects(
        self,
        prefix: str = "",
        delimiter: str = "",
        encoding_type: str = "",
        marker: str = "",
        max_keys: int = 0,
    ) -> Response:
        """List objects; empty arguments and ``max_keys`` outside 1..1000 are left out."""
        query = {
            name: value
            for name, value in (
                ("prefix", prefix),
                ("delimiter", delimiter),
                ("encoding-type", encoding_type),
                ("marker", marker),
            )
            if value
        }
        if 0 < max_keys <= MAX_KEYS_LIMIT:
            query["max-keys"] = str(max_keys)
        headers = self.headers_with_auth("get", "/", query=query)
        return await send_request(
            Method.GET,
            self.full_url("/"),
            query=query,
            headers=headers,
            transport=self.transport,
        )

    async def check_bucket(self) -> Response:
        """Check the bucket exists and is readable (HEAD)."""
        headers = self.headers_with_auth("head", "/")
        return await send_request(
            Method.HEAD, self.full_url("/"), headers=headers, transport=self.transport
        )

    async def put_bucket_acl(self, acl_header: AclHeader) -> Response:
        """Write the bucket's access control list."""
        query = {"acl": ""}
        headers = self.headers_with_auth("put", "/", acl_header, query=query)
        return await send_request(
            Method.PUT,
            self.full_url("/"),
            query=query,
            headers=headers,
            transport=self.transport,
        )