"""Credentials and connection profiles for the SMS API."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field

__all__ = ["HttpProfile", "ClientProfile", "Credential"]


@dataclass
class HttpProfile:
    """How requests are sent: method, timeout in seconds, scheme and endpoint."""

    req_method: str = "POST"
    req_timeout: int = 30
    scheme: str = "HTTPS"
    root_domain: str = ""
    end_point: str = "sms.tencentcloudapi.com"


@dataclass
class ClientProfile:
    """Client settings: HTTP profile, signing method, language and debug flag."""

    http_profile: HttpProfile = field(default_factory=HttpProfile)
    sign_method: str = "TC3-HMAC-SHA256"
    language: str = "zh-CN"
    disable_region_breaker: bool = True
    debug: bool = False

    def with_debug(self, debug: bool) -> ClientProfile:
        """Return a copy of this profile with ``debug`` set."""
        return dataclasses.replace(self, debug=debug)


@dataclass
class Credential:
    """Access key pair with an optional temporary session token."""

    secret_id: str = ""
    secret_key: str = field(default="", repr=False)
    token: str | None = field(default=None, repr=False)