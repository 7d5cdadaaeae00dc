from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Dict, Optional

import httpx

from explorer.config import Settings
from explorer.errors import ErrorKind, ExplorerError

logger = logging.getLogger(__name__)

AUTH_HEADER = "project_id"


class BlockfrostClient:
    """
    Issues single GET requests against the Blockfrost API.

    The underlying httpx AsyncClient is created lazily and shared by every
    request made through this instance. There is no retry: each call maps to
    exactly one upstream request, and non-success responses are classified
    into ``ExplorerError`` kinds.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._lock = asyncio.Lock()

    def _api_key(self) -> str:
        api_key = self._settings.blockfrost_api_key
        if not api_key:
            raise ExplorerError(
                ErrorKind.CONFIGURATION,
                "Blockfrost API key is not configured",
                code="api_key_missing",
            )
        return api_key

    async def _get_client(self) -> httpx.AsyncClient:
        async with self._lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self._settings.base_url,
                    timeout=self._settings.blockfrost_timeout,
                    transport=self._transport,
                    headers={"Accept": "application/json"},
                )
            return self._client

    async def fetch(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET ``endpoint`` (relative to the API root) and return the decoded JSON.

        Raises:
            ExplorerError: configuration error when no API key is set (before
                any network call), or the classified upstream failure.
        """
        api_key = self._api_key()
        client = await self._get_client()
        started = time.perf_counter()

        try:
            response = await client.get(endpoint, params=params, headers={AUTH_HEADER: api_key})
        except httpx.TimeoutException as exc:
            logger.warning(
                "Blockfrost timed out after %.2fs for %s", time.perf_counter() - started, endpoint
            )
            raise ExplorerError(
                ErrorKind.TIMEOUT, "Blockfrost request timed out", code="upstream_timeout"
            ) from exc
        except httpx.RequestError as exc:
            logger.warning("Blockfrost request failed for %s: %s", endpoint, exc)
            raise ExplorerError(
                ErrorKind.UPSTREAM, "Blockfrost is unreachable", code="upstream_unreachable"
            ) from exc

        latency = time.perf_counter() - started
        if response.is_success:
            logger.debug("✅ %s %s (%.2fs)", response.status_code, endpoint, latency)
            try:
                return response.json()
            except ValueError as exc:
                raise ExplorerError(
                    ErrorKind.UPSTREAM,
                    "Blockfrost returned an invalid JSON body",
                    code="upstream_invalid_body",
                    upstream_status=response.status_code,
                ) from exc

        raise self._classify(response, endpoint)

    def _classify(self, response: httpx.Response, endpoint: str) -> ExplorerError:
        status = response.status_code
        message = _error_message(response)

        if status == 403:
            logger.error("Blockfrost authentication failed for %s: %s", endpoint, message)
            return ExplorerError(
                ErrorKind.UPSTREAM_AUTH, "Invalid Blockfrost API key", code="upstream_auth", upstream_status=403
            )
        if status == 404:
            logger.debug("⚠️ Blockfrost returned 404 for %s", endpoint)
            return ExplorerError(ErrorKind.NOT_FOUND, message or "Not found", upstream_status=404)
        if status == 429:
            logger.warning("Blockfrost rate limit hit for %s", endpoint)
            return ExplorerError(
                ErrorKind.RATE_LIMITED,
                message or "Blockfrost rate limit exceeded",
                code="upstream_rate_limited",
                upstream_status=429,
            )

        logger.warning("Blockfrost returned HTTP %s for %s: %s", status, endpoint, message)
        return ExplorerError(
            ErrorKind.UPSTREAM,
            message or "Blockfrost API error",
            code="upstream_error",
            upstream_status=status,
        )

    async def close(self) -> None:
        async with self._lock:
            client = self._client
            self._client = None
        if client is not None:
            await client.aclose()


def _error_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return response.text or None
    if isinstance(body, dict):
        return body.get("message") or body.get("error")
    return None
