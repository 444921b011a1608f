"""Watches the host's public IPv6 address and keeps a DNS record pointing at it."""

from __future__ import annotations

import asyncio
import ipaddress
import logging
import time
from ipaddress import IPv6Address
from typing import Awaitable, Callable

import httpx

from .ddns import Ddns

__all__ = ["IpMonitor", "fetch_ip", "record_ip"]

IP_SERVICE_URL = "https://6.ipw.cn"
FALLBACK_IP = IPv6Address("::1")

log = logging.getLogger(__name__)


async def fetch_ip(
    url: str = IP_SERVICE_URL, transport: httpx.AsyncBaseTransport | None = None
) -> str:
    """Return the address text served at ``url``."""
    async with httpx.AsyncClient(transport=transport) as client:
        resp = await client.get(url)
    return resp.text.strip()


async def record_ip(ddns: Ddns) -> IPv6Address:
    """Return the address the domain's record points at, or ``::1`` if unknown."""
    item = await ddns.get_current_record()
    if item is None:
        return FALLBACK_IP
    try:
        return IPv6Address(item.value)
    except ValueError:
        return FALLBACK_IP


class IpMonitor:
    """Periodically compares the public address with the record and updates it."""

    def __init__(
        self,
        ddns: Ddns,
        current_ip: IPv6Address | str,
        *,
        check_frequency: float = 5.0,
        retry_delay: float = 10.0,
        ip_fetcher: Callable[[], Awaitable[str]] | None = None,
    ) -> None:
        self.ddns = ddns
        self.current_ip = IPv6Address(current_ip)
        self.last_time = time.time()
        self.check_frequency = check_frequency
        self.retry_delay = retry_delay
        self._ip_fetcher = ip_fetcher or fetch_ip

    async def check_ip(self) -> bool:
        """Fetch the public address and remember it; return False if it cannot be fetched."""
        try:
            text = await self._ip_fetcher()
        except (httpx.HTTPError, OSError) as exc:
            log.warning("could not fetch ip, check IPv6 connectivity: %s", exc)
            return False
        ip = ipaddress.IPv6Address(text.strip())
        if ip != self.current_ip:
            log.info("ip changed from %s to %s", self.current_ip, ip)
            self.current_ip = ip
            self.last_time = time.time()
        else:
            log.info("ip unchanged")
        return True

    async def sync_record(self) -> bool:
        """Point the record at the current address; return False if no record was found."""
        item = await self.ddns.get_current_record()
        if item is None:
            return False
        current = str(self.current_ip)
        if item.value != current:
            try:
                updated = await self.ddns.change_record(item, current)
            except Exception as exc:  # noqa: BLE001 - any failure is logged and retried later
                log.warning("record update failed: %s", exc)
            else:
                log.info("record update status: %s", updated)
        return True

    async def _retry(self, attempt: Callable[[], Awaitable[bool]]) -> None:
        failures = 0
        while not await attempt():
            failures += 1
            await asyncio.sleep(self.retry_delay)
            log.warning("check failed, retrying (attempt %d)", failures)

    async def run(self, iterations: int | None = None) -> None:
        """Check every ``check_frequency`` seconds; forever if ``iterations`` is None."""
        done = 0
        while iterations is None or done < iterations:
            await asyncio.sleep(self.check_frequency)
            await self._retry(self.check_ip)
            await self._retry(self.sync_record)
            done += 1