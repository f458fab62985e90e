import time
from collections.abc import Sequence
from typing import Any

import dns.asyncresolver
import dns.exception
import httpx
from loguru import logger


class CatalogClientError(Exception):
    """Base error for every failure raised by the outbound HTTP client."""


class DNSResolutionError(CatalogClientError):
    def __init__(self, hostname: str, reason: str = ""):
        self.hostname = hostname
        self.reason = reason
        message = f"DNS resolution failed for {hostname}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UpstreamError(CatalogClientError):
    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"{message} ({url})")


class UpstreamRequestError(UpstreamError):
    """Transport level failure: timeout, refused connection, reset, etc."""


class UpstreamStatusError(UpstreamError):
    def __init__(self, url: str, status_code: int):
        self.status_code = status_code
        super().__init__(url, f"Upstream responded with status {status_code}")


def _describe(url: httpx.URL) -> str:
    # Query string is left out, it carries the api key
    return f"{url.scheme}://{url.host}{url.path}"


class PinnedResolver:
    """
    Resolves hostnames through a fixed set of public nameservers.

    Only A records are queried so every outbound connection uses IPv4.
    """

    def __init__(self, nameservers: Sequence[str], timeout: float = 10.0):
        self.nameservers = list(nameservers)
        self._resolver = dns.asyncresolver.Resolver(configure=False)
        self._resolver.nameservers = self.nameservers
        self._resolver.lifetime = timeout

    async def resolve(self, hostname: str) -> str:
        try:
            answer = await self._resolver.resolve(hostname, "A")
        except dns.exception.DNSException as e:
            raise DNSResolutionError(hostname, str(e) or type(e).__name__) from e

        for record in answer:
            return record.to_text()
        raise DNSResolutionError(hostname, "no A records")


class BaseClient:
    """
    Base asynchronous HTTP client with pinned DNS resolution and logging.

    Failures are surfaced as ``CatalogClientError`` subclasses. There is no retry
    logic here; callers decide whether a failed call is fatal.
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 10.0,
        headers: dict[str, str] | None = None,
        resolver: PinnedResolver | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.headers = headers or {}
        self.resolver = resolver
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx.AsyncClient instance."""
        if self._client is None or self._client.is_closed:
            # Binding to 0.0.0.0 keeps the pool on a single address family
            transport = self._transport or httpx.AsyncHTTPTransport(local_address="0.0.0.0")
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.headers,
                transport=transport,
                follow_redirects=False,
            )
        return self._client

    async def close(self):
        """Close the underlying HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _pin(self, request: httpx.Request) -> httpx.Request:
        """Point the request at the pinned address while keeping Host and SNI intact."""
        hostname = request.url.host
        address = await self.resolver.resolve(hostname)
        request.url = request.url.copy_with(host=address)
        request.headers["Host"] = hostname
        request.extensions["sni_hostname"] = hostname
        return request

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        client = await self.get_client()
        request = client.build_request(method, url, **kwargs)
        target = _describe(request.url)

        if self.resolver is not None:
            started = time.monotonic()
            try:
                request = await self._pin(request)
            except DNSResolutionError as e:
                logger.error(f"Request failed ({method} {target}): {e}")
                raise

            # DNS time counts against the same timeout as the HTTP exchange
            remaining = self.timeout - (time.monotonic() - started)
            if remaining <= 0:
                logger.error(f"Request failed ({method} {target}): timeout spent resolving host")
                raise UpstreamRequestError(target, "Timed out resolving host")
            request.extensions["timeout"] = httpx.Timeout(remaining).as_dict()

        try:
            response = await client.send(request)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            logger.error(f"Request failed ({method} {target}): status {e.response.status_code}")
            raise UpstreamStatusError(target, e.response.status_code) from e
        except httpx.RequestError as e:
            logger.error(f"Request failed ({method} {target}): {type(e).__name__} {e}")
            raise UpstreamRequestError(target, str(e) or type(e).__name__) from e

    async def get(self, url: str, params: dict[str, Any] | None = None, **kwargs) -> dict[str, Any]:
        """Perform a GET request and return the JSON response."""
        response = await self._request("GET", url, params=params, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamRequestError(_describe(response.request.url), "Invalid JSON body") from e
