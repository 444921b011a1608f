"""Service-level operations: listing buckets."""

from __future__ import annotations

from .cos_client import Client
from .cos_request import Method, Response, send_request

__all__ = ["ServiceOperations"]


class ServiceOperations(Client):
    """Operations that address the service rather than a single bucket."""

    async def get_bucket_list(self) -> Response:
        """List the requester's buckets, limited to the client's region if one is set.

        Raises ``CosError`` on failure.
        """
        host = self.bucket_query_host
        headers = self.gen_common_headers()
        headers["Host"] = host
        headers = self.headers_with_auth("get", "/", None, headers)
        return await send_request(
            Method.GET, f"https://{host}/", headers=headers, transport=self.transport
        )