"""Asyncio client for Tencent Cloud API 3.0 signing, object storage, DNSPod DDNS and SMS settings."""

__version__ = "0.0.1"