"""Access control list headers for objects and buckets."""

from __future__ import annotations

from enum import Enum

__all__ = ["ObjectAcl", "BucketAcl", "AclHeader"]


class ObjectAcl(Enum):
    """Predefined object ACLs."""

    DEFAULT = "default"
    PRIVATE = "private"
    PUBLIC_READ = "public-read"
    AUTHENTICATED_READ = "authenticated-read"
    BUCKET_OWNER_READ = "bucket-owner-read"
    BUCKET_OWNER_FULL_CONTROL = "bucket-owner-full-control"


class BucketAcl(Enum):
    """Predefined bucket ACLs."""

    PRIVATE = "private"
    PUBLIC_READ = "publish-read"
    PUBLIC_READ_WRITE = "public-read-write"
    AUTHENTICATED_READ = "authenticated-read"


class AclHeader:
    """Collects ``x-cos-acl`` and ``x-cos-grant-*`` headers; inserts chain."""

    def __init__(self) -> None:
        self.headers: dict[str, str] = {}

    def _set(self, name: str, value: str) -> AclHeader:
        self.headers[name] = value
        return self

    def insert_object_acl(self, acl: ObjectAcl) -> AclHeader:
        return self._set("x-cos-acl", acl.value)

    def insert_grant_read(self, grantees: str) -> AclHeader:
        """Grant read, e.g. ``id="100000000001",id="100000000002"``."""
        return self._set("x-cos-grant-read", grantees)

    def insert_grant_read_acp(self, grantees: str) -> AclHeader:
        return self._set("x-cos-grant-read-acp", grantees)

    def insert_grant_write_acp(self, grantees: str) -> AclHeader:
        return self._set("x-cos-grant-write-acp", grantees)

    def insert_grant_full_control(self, grantees: str) -> AclHeader:
        return self._set("x-cos-grant-full-control", grantees)

    def insert_bucket_acl(self, acl: BucketAcl) -> AclHeader:
        return self._set("x-cos-acl", acl.value)

    def insert_bucket_grant_write(self, grantees: str) -> AclHeader:
        return self._set("x-cos-grant-write", grantees)