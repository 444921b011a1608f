"""Dynamic DNS records kept through the DNS management API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

import httpx

from .api_client import ApiClient, ApiError

__all__ = ["RecordListItem", "DescribeRecordListResponse", "Ddns"]

DNS_HOST = "dnspod.tencentcloudapi.com"
DNS_SERVICE = "dnspod"
RECORD_TYPE = "AAAA"

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordListItem:
    """One resolution record of a domain."""

    record_id: int
    value: str
    name: str
    type: str
    line: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RecordListItem:
        """Build a record from the API's PascalCase member names."""
        return cls(
            record_id=int(data["RecordId"]),
            value=str(data["Value"]),
            name=str(data["Name"]),
            type=str(data["Type"]),
            line=str(data["Line"]),
        )


@dataclass(frozen=True)
class DescribeRecordListResponse:
    """Answer to a record list query; ``record_list`` is None when the API sent none."""

    record_list: list[RecordListItem] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DescribeRecordListResponse:
        records = data.get("RecordList")
        if records is None:
            return cls(None)
        return cls([RecordListItem.from_dict(item) for item in records])


def _raise_on_error(response: Any) -> None:
    if not isinstance(response, Mapping):
        raise ApiError("response is not an object")
    error = response.get("Error")
    if error is not None:
        message = error.get("Message", "") if isinstance(error, Mapping) else str(error)
        raise ApiError(message)


class Ddns:
    """Reads and updates the AAAA record of one domain."""

    def __init__(
        self,
        secret_id: str,
        secret_key: str,
        domain: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.domain = domain
        self._client = ApiClient(
            secret_id, secret_key, DNS_HOST, DNS_SERVICE, transport=transport
        )

    async def query_record_list(self) -> DescribeRecordListResponse:
        """Return the domain's AAAA records; raise ApiError if the API reports an error."""
        response = await self._client.send(
            "DescribeRecordList", {"Domain": self.domain, "RecordType": RECORD_TYPE}
        )
        _raise_on_error(response)
        try:
            return DescribeRecordListResponse.from_dict(response)
        except (KeyError, TypeError, ValueError) as exc:
            raise ApiError(f"malformed record list: {exc}") from exc

    async def get_current_record(self) -> RecordListItem | None:
        """Return the last AAAA record of the domain, or None if it cannot be had."""
        try:
            result = await self.query_record_list()
        except ApiError as exc:
            log.warning("record query failed: %s", exc)
            return None
        if result.record_list is None:
            log.warning("record query returned no record list")
            return None
        return result.record_list[-1] if result.record_list else None

    async def change_record(self, record_item: RecordListItem, value: str) -> bool:
        """Point ``record_item`` at ``value``; raise ApiError if the API refuses."""
        response = await self._client.send(
            "ModifyRecord",
            {
                "Domain": self.domain,
                "RecordType": record_item.type,
                "RecordLine": record_item.line,
                "Value": value,
                "RecordId": record_item.record_id,
                "SubDomain": record_item.name,
            },
        )
        _raise_on_error(response)
        log.info("ddns record updated")
        return True