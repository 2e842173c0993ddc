"""IP geolocation with a primary and a fallback provider."""

import asyncio
import ipaddress
from functools import lru_cache
from typing import Optional, Mapping

import httpx

from recipe_finder.config import get_settings


def get_client_ip(headers: Mapping[str, str]) -> Optional[str]:
    """Client IP from proxy headers (X-Forwarded-For first entry, then X-Real-IP)."""
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = (headers.get("x-real-ip") or "").strip()
    return real_ip or None


def is_public_ip(ip: Optional[str]) -> bool:
    """False for missing, malformed, private, loopback and other non-routable addresses."""
    if not ip:
        return False
    try:
        addr = ipaddress.ip_address(ip)
    except ValueError:
        return False
    return not (
        addr.is_private
        or addr.is_loopback
        or addr.is_link_local
        or addr.is_reserved
        or addr.is_multicast
        or addr.is_unspecified
    )


def _valid_country_code(value) -> Optional[str]:
    if isinstance(value, str) and len(value.strip()) == 2 and value.strip().isalpha():
        return value.strip().upper()
    return None


class GeolocationService:
    """
    Resolve an IP to a two-letter country code.

    Primary: ip-api.com (no key needed)
    Fallback: ipapi.co (HTTPS, daily limit)
    """

    def __init__(
        self,
        primary_url: str = "http://ip-api.com/json",
        fallback_url: str = "https://ipapi.co",
        timeout: float = 3.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.primary_url = primary_url.rstrip("/")
        self.fallback_url = fallback_url.rstrip("/")
        self.timeout = timeout
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self):
        await self.client.aclose()

    async def _fetch_json(self, provider: str, url: str, params: Optional[dict] = None):
        """
        GET a provider URL and decode the JSON body.

        The whole call, body included, is capped at `self.timeout` seconds
        (httpx timeouts apply per read). Returns None on any failure.
        """

        async def fetch():
            response = await self.client.get(url, params=params)
            if response.status_code != 200:
                return None
            return response.json()

        try:
            return await asyncio.wait_for(fetch(), self.timeout)
        except asyncio.TimeoutError:
            print(f"⚠️ {provider} lookup timed out after {self.timeout}s")
            return None
        except (httpx.HTTPError, ValueError) as e:
            print(f"⚠️ {provider} lookup failed: {e}")
            return None

    async def get_country_code(self, ip: str) -> Optional[str]:
        """Country code for the IP, or None if neither provider knows it."""
        country = await self._lookup_primary(ip)
        if country:
            return country

        print(f"🔄 Primary geolocation failed for {ip}, trying fallback...")
        country = await self._lookup_fallback(ip)
        if not country:
            print(f"⚠️ Could not resolve country for {ip}")
        return country

    async def _lookup_primary(self, ip: str) -> Optional[str]:
        data = await self._fetch_json(
            "ip-api",
            f"{self.primary_url}/{ip}",
            params={"fields": "status,countryCode"},
        )
        if not isinstance(data, dict) or data.get("status") != "success":
            return None
        return _valid_country_code(data.get("countryCode"))

    async def _lookup_fallback(self, ip: str) -> Optional[str]:
        data = await self._fetch_json("ipapi.co", f"{self.fallback_url}/{ip}/json/")
        if not isinstance(data, dict):
            return None
        return _valid_country_code(data.get("country_code"))


@lru_cache
def get_geolocation_service() -> GeolocationService:
    """Get the shared geolocation service."""
    settings = get_settings()
    return GeolocationService(
        primary_url=settings.geo_primary_url,
        fallback_url=settings.geo_fallback_url,
        timeout=settings.geo_timeout,
    )
