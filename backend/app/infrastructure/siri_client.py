"""SIRI Client — forwards StopMonitoring requests through the static-IP proxy.

Invariants:
    - Every call goes through proxy_url; a client is never built without one
    - Timeout (default 30s) -> SiriTimeoutError (504); non-2xx -> SiriAPIError (502)
    - Other transport errors -> SiriProxyError (502)
    - Response body returned verbatim (raw XML, no parsing)
"""

import logging

import httpx

from app.core.errors import SiriAPIError, SiriProxyError, SiriTimeoutError

logger = logging.getLogger(__name__)

XML_HEADERS = {
    "Content-Type": "application/xml",
    "Accept": "application/xml",
}


class SiriClient:
    """POSTs SIRI XML to the Ministry endpoint via an HTTP(S) proxy."""

    def __init__(
        self,
        api_url: str,
        proxy_url: str,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = api_url
        self.proxy_url = proxy_url
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        # A mounted proxy transport would shadow an injected transport
        if self._transport is not None:
            return httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self._transport,
            )
        return httpx.AsyncClient(
            timeout=self.timeout_seconds, proxy=self.proxy_url,
        )

    async def post_xml(self, body: str) -> str:
        try:
            async with self._client() as client:
                response = await client.post(
                    self.api_url, content=body.encode("utf-8"), headers=XML_HEADERS,
                )
        except httpx.TimeoutException:
            logger.warning(f"SIRI API timeout after {self.timeout_seconds:g}s")
            raise SiriTimeoutError(self.timeout_seconds)
        except httpx.HTTPError as e:
            logger.error(f"SIRI proxy transport error: {e}")
            raise SiriProxyError(str(e) or type(e).__name__)

        if not response.is_success:
            logger.error(
                f"SIRI API error: {response.text[:500]}",
                extra={"upstream_status": response.status_code},
            )
            raise SiriAPIError(response.status_code)
        return response.text
