"""HTTP plumbing for the object storage service: responses, errors and XML bodies."""

from __future__ import annotations

import json as _json
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Mapping
from xml.sax.saxutils import escape

import httpx

__all__ = [
    "ErrNo",
    "Method",
    "Response",
    "CosError",
    "Part",
    "CompleteMultipartUpload",
    "InitiateMultipartUploadResult",
    "parse_initiate_result",
    "send_request",
]

REQUEST_TIMEOUT = 24 * 3600.0

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


class ErrNo(IntEnum):
    """Error codes carried by responses and errors."""

    SUCCESS = 0
    OTHER = 10000
    STATUS = 10001
    DECODE = 10002
    CONNECT = 10003
    ENCODE = 20001
    IO = 20002

    def __str__(self) -> str:
        return self.name


class Method(Enum):
    """HTTP request methods used by the service."""

    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"
    PUT = "PUT"
    HEAD = "HEAD"


@dataclass
class Response:
    """Outcome of a request: error code, message, body and response headers."""

    error_no: ErrNo = ErrNo.SUCCESS
    error_message: str = ""
    result: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.result, str):
            self.result = self.result.encode("utf-8")

    @classmethod
    def blank_success(cls) -> Response:
        """Return an empty successful response."""
        return cls()

    @property
    def ok(self) -> bool:
        return self.error_no == ErrNo.SUCCESS

    def __str__(self) -> str:
        body = self.result.decode("utf-8", errors="replace")
        return (
            f'{{"error_no": "{self.error_no}","error_message": "{self.error_message}",'
            f'"result": "{body}"}}'
        )


class CosError(Exception):
    """A failed request; keeps the error code, the body and the headers received."""

    def __init__(
        self,
        error_no: ErrNo,
        message: str,
        result: bytes | str = b"",
        headers: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.error_no = error_no
        self.message = message
        self.result = result.encode("utf-8") if isinstance(result, str) else bytes(result)
        self.headers = dict(headers or {})

    @property
    def response(self) -> Response:
        """The error as a :class:`Response`."""
        return Response(self.error_no, self.message, self.result, dict(self.headers))


@dataclass(frozen=True)
class Part:
    """One uploaded part of a multipart upload."""

    part_number: int
    etag: str


@dataclass
class CompleteMultipartUpload:
    """Body of the request that completes a multipart upload."""

    parts: list[Part] = field(default_factory=list)

    def to_xml(self) -> str:
        """Serialise to the XML document the service expects."""
        body = "".join(
            f"<Part><PartNumber>{part.part_number}</PartNumber>"
            f"<ETag>{escape(part.etag, _XML_ENTITIES)}</ETag></Part>"
            for part in self.parts
        )
        return f"<CompleteMultipartUpload>{body}</CompleteMultipartUpload>"


@dataclass(frozen=True)
class InitiateMultipartUploadResult:
    """Answer to the request that starts a multipart upload."""

    bucket: str
    key: str
    upload_id: str


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def parse_initiate_result(data: bytes | str) -> InitiateMultipartUploadResult:
    """Parse an ``InitiateMultipartUploadResult`` document; raise CosError(DECODE) if invalid."""
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise CosError(ErrNo.DECODE, str(exc)) from exc
    fields = {_local_name(child.tag): child.text or "" for child in root}
    missing = [name for name in ("Bucket", "Key", "UploadId") if name not in fields]
    if missing:
        raise CosError(ErrNo.DECODE, f"missing field `{missing[0]}`")
    return InitiateMultipartUploadResult(
        bucket=fields["Bucket"], key=fields["Key"], upload_id=fields["UploadId"]
    )


def _form_value(value: Any) -> str:
    return value if isinstance(value, str) else _json.dumps(value)


def _has_header(headers: Mapping[str, str], name: str) -> bool:
    return any(key.lower() == name for key in headers)


async def send_request(
    method: Method | str,
    url: str,
    *,
    query: Mapping[str, str] | None = None,
    headers: Mapping[str, str] | None = None,
    form: Mapping[str, Any] | None = None,
    json: Mapping[str, Any] | None = None,
    body: Any = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Response:
    """Send one request and return its response.

    A raw ``body`` takes precedence over ``json``, which takes precedence over ``form``.
    Raises :class:`CosError` on connection, decoding or HTTP status failures.
    """
    method = Method(method.upper()) if isinstance(method, str) else method
    request_headers = dict(headers or {})
    content: Any = None
    data: dict[str, str] | None = None
    if body is not None:
        content = body
    elif json is not None:
        content = _json.dumps(dict(json), separators=(",", ":")).encode("utf-8")
        if not _has_header(request_headers, "content-type"):
            request_headers["Content-Type"] = "application/json"
    elif form is not None:
        data = {key: _form_value(value) for key, value in form.items()}

    try:
        async with httpx.AsyncClient(transport=transport, timeout=REQUEST_TIMEOUT) as client:
            resp = await client.request(
                method.value,
                url,
                params=dict(query) if query is not None else None,
                headers=request_headers,
                content=content,
                data=data,
            )
    except httpx.ConnectError as exc:
        raise CosError(ErrNo.CONNECT, str(exc)) from exc
    except httpx.DecodingError as exc:
        raise CosError(ErrNo.DECODE, str(exc)) from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise CosError(ErrNo.OTHER, str(exc)) from exc

    response_headers = dict(resp.headers.multi_items())
    if 400 <= resp.status_code < 600:
        message = f"{resp.status_code} {resp.reason_phrase}".strip()
        raise CosError(ErrNo.STATUS, message, resp.content, response_headers)
    return Response(ErrNo.SUCCESS, "", resp.content, response_headers)