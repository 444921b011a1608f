"""Object-level operations: uploads, downloads, deletes and multipart uploads."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

from .cos_acl import AclHeader
from .cos_client import Client
from .cos_request import (
    CompleteMultipartUpload,
    CosError,
    ErrNo,
    Method,
    Part,
    Response,
    parse_initiate_result,
    send_request,
)

__all__ = ["ObjectOperations"]

# A trailing piece no larger than this is merged into the part before it.
MIN_TAIL_SIZE = 1024 * 1024


def _header(headers: Mapping[str, str], name: str) -> str | None:
    name = name.lower()
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


class ObjectOperations(Client):
    """Operations on objects in the client's bucket.

    Each operation returns a :class:`Response` and raises ``CosError`` on failure.
    """

    def _upload_headers(self, content_type: str, length: int) -> dict[str, str]:
        headers = self.gen_common_headers()
        headers["Content-Type"] = content_type
        headers["Content-Length"] = str(length)
        return headers

    async def _put_bytes(
        self,
        data: bytes,
        key: str,
        content_type: str,
        acl_header: AclHeader | None,
    ) -> Response:
        url_path = self.path_from_object_key(key)
        headers = self.headers_with_auth(
            "put", url_path, acl_header, self._upload_headers(content_type, len(data))
        )
        return await send_request(
            Method.PUT,
            self.full_url(url_path),
            headers=headers,
            body=data,
            transport=self.transport,
        )

    async def put_object(
        self,
        file_path: str | Path,
        key: str,
        content_type: str,
        acl_header: AclHeader | None = None,
    ) -> Response:
        """Upload a small local file as ``key``."""
        try:
            data = Path(file_path).read_bytes()
        except OSError as exc:
            raise CosError(ErrNo.IO, f"failed to open file: {file_path}, {exc}") from exc
        return await self._put_bytes(data, key, content_type, acl_header)

    async def put_big_object(
        self,
        file_path: str | Path,
        key: str,
        content_type: str,
        storage_class: str,
        acl_header: AclHeader | None = None,
        part_size: int = 100 * 1024 * 1024,
    ) -> Response:
        """Upload a large local file in parts of ``part_size`` bytes.

        A final piece of at most 1 MiB is sent together with the part before it.
        On failure after the upload has started, the upload is aborted.
        """
        if part_size <= 0:
            raise ValueError("part_size must be positive")
        try:
            handle = open(file_path, "rb")
        except OSError as exc:
            raise CosError(ErrNo.IO, f"failed to open file: {file_path}, {exc}") from exc
        with handle:
            try:
                file_size = Path(file_path).stat().st_size
            except OSError as exc:
                raise CosError(
                    ErrNo.IO, f"failed to read file size: {file_path}, {exc}"
                ) from exc
            started = await self.put_object_get_upload_id(
                key, content_type, storage_class, acl_header
            )
            upload_id = started.result.decode("utf-8", errors="replace")
            etag_map: dict[int, str] = {}
            part_number = 1
            while True:
                start = part_size * (part_number - 1)
                if start >= file_size:
                    try:
                        return await self.put_object_complete_part(key, etag_map, upload_id)
                    except CosError:
                        await self._abort_quietly(key, upload_id)
                        raise
                size = min(part_size, file_size - start)
                if file_size - size - start <= MIN_TAIL_SIZE:
                    size = file_size - start
                try:
                    handle.seek(start)
                    body = handle.read(size)
                except OSError as exc:
                    await self._abort_quietly(key, upload_id)
                    raise CosError(
                        ErrNo.IO, f"failed to read file: {file_path}, {exc}"
                    ) from exc
                if len(body) != size:
                    await self._abort_quietly(key, upload_id)
                    raise CosError(ErrNo.IO, f"failed to read file: {file_path}, short read")
                try:
                    resp = await self.put_object_part(
                        key, upload_id, part_number, body, content_type, acl_header
                    )
                except CosError:
                    await self._abort_quietly(key, upload_id)
                    raise
                etag = _header(resp.headers, "etag")
                if etag is None:
                    await self._abort_quietly(key, upload_id)
                    raise CosError(ErrNo.DECODE, f"part {part_number} response has no etag")
                etag_map[part_number] = etag
                part_number += 1

    async def _abort_quietly(self, key: str, upload_id: str) -> None:
        try:
            await self.abort_object_part(key, upload_id)
        except CosError:
            pass

    async def put_object_binary(
        self,
        data: bytes | bytearray | memoryview | str,
        key: str,
        content_type: str,
        acl_header: AclHeader | None = None,
    ) -> Response:
        """Upload in-memory ``data`` as ``key``."""
        if isinstance(data, str):
            payload = data.encode("utf-8")
        elif isinstance(data, (bytes, bytearray, memoryview)):
            payload = bytes(data)
        else:
            raise CosError(ErrNo.IO, "not an in-memory object")
        return await self._put_bytes(payload, key, content_type, acl_header)

    async def delete_object(self, key: str) -> Response:
        """Delete the object ``key``."""
        url_path = self.path_from_object_key(key)
        headers = self.headers_with_auth("delete", url_path)
        return await send_request(
            Method.DELETE, self.full_url(url_path), headers=headers, transport=self.transport
        )

    async def get_object_binary(self, key: str) -> Response:
        """Download ``key``; its content is in the response's ``result``."""
        url_path = self.path_from_object_key(key)
        headers = self.headers_with_auth("get", url_path)
        return await send_request(
            Method.GET, self.full_url(url_path), headers=headers, transport=self.transport
        )

    async def get_object(self, key: str, file_name: str | Path) -> Response:
        """Download ``key`` into the local file ``file_name``."""
        resp = await self.get_object_binary(key)
        try:
            Path(file_name).write_bytes(resp.result)
        except OSError as exc:
            raise CosError(ErrNo.OTHER, f"failed to write file: {exc}") from exc
        return Response.blank_success()

    async def put_object_get_upload_id(
        self,
        key: str,
        content_type: str,
        storage_class: str,
        acl_header: AclHeader | None = None,
    ) -> Response:
        """Start a multipart upload; the response's ``result`` holds the upload id."""
        query = {"uploads": ""}
        url_path = self.path_from_object_key(key)
        headers = self.gen_common_headers()
        headers["Content-Type"] = content_type
        headers["x-cos-storage-class"] = storage_class
        headers = self.headers_with_auth("post", url_path, acl_header, headers, query)
        resp = await send_request(
            Method.POST,
            self.full_url(url_path),
            query=query,
            headers=headers,
            transport=self.transport,
        )
        result = parse_initiate_result(resp.result)
        return Response(ErrNo.SUCCESS, "", result.upload_id)

    async def put_object_part(
        self,
        key: str,
        upload_id: str,
        part_number: int,
        body: bytes,
        content_type: str,
        acl_header: AclHeader | None = None,
    ) -> Response:
        """Upload one part of a multipart upload."""
        url_path = self.path_from_object_key(key)
        query = {"partNumber": str(part_number), "uploadId": upload_id}
        headers = self.headers_with_auth(
            "put",
            url_path,
            acl_header,
            self._upload_headers(content_type, len(body)),
            query,
        )
        return await send_request(
            Method.PUT,
            self.full_url(url_path),
            query=query,
            headers=headers,
            body=bytes(body),
            transport=self.transport,
        )

    async def put_object_complete_part(
        self, key: str, etag_map: Mapping[int, str], upload_id: str
    ) -> Response:
        """Complete a multipart upload from part numbers and their etags."""
        url_path = self.path_from_object_key(key)
        query = {"uploadId": upload_id}
        headers = self.gen_common_headers()
        headers["Content-Type"] = "application/xml"
        headers = self.headers_with_auth("post", url_path, None, headers, query)
        complete = CompleteMultipartUpload(
            [Part(number, etag_map[number]) for number in sorted(etag_map)]
        )
        return await send_request(
            Method.POST,
            self.full_url(url_path),
            query=query,
            headers=headers,
            body=complete.to_xml().encode("utf-8"),
            transport=self.transport,
        )

    async def abort_object_part(self, key: str, upload_id: str) -> Response:
        """Abandon a multipart upload and delete the parts already sent."""
        url_path = self.path_from_object_key(key)
        query = {"uploadId": upload_id}
        headers = self.headers_with_auth("delete", url_path, None, None, query)
        return await send_request(
            Method.DELETE,
            self.full_url(url_path),
            query=query,
            headers=headers,
            transport=self.transport,
        )