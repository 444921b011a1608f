"""Object storage client with every bucket, service and object operation."""

from __future__ import annotations

from .cos_bucket import BucketOperations
from .cos_objects import ObjectOperations
from .cos_service import ServiceOperations

__all__ = ["CosClient"]


class CosClient(BucketOperations, ServiceOperations, ObjectOperations):
    """Client for one bucket in one region, offering all operations.

    Example::

        client = CosClient("id", "key", None, "examplebucket-1250000000", "ap-guangzhou")
        await client.put_object("notes.txt", "notes.txt", "text/plain; charset=utf-8")
        await client.delete_object("notes.txt")
    """