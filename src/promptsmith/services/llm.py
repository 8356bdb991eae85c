"""Async client for the upstream chat service.

The upstream speaks a small ad-hoc protocol: ``POST /ai/chat`` with
``{model, prompt, stream: false}`` answers with one JSON object whose shape
varies (see ``normalizer``), and ``GET /ai/health`` reports ``{"status": "ok"}``.
Payloads are returned untouched; turning them into text is the normalizer's job.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from promptsmith.config import Settings
from promptsmith.exceptions import UpstreamError, UpstreamTimeoutError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpstreamHealth:
    connected: bool
    reason: str | None = None
    status_code: int | None = None
    error: str | None = None


class UpstreamClient:
    """Async client for the upstream ``/ai/chat`` endpoint."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._base_url = settings.ollama_api_url.rstrip("/")
        self._model = settings.upstream_model
        self._timeout = settings.resolve_generation_timeout()
        self._max_retries = settings.upstream_max_retries
        self._retry_delay = settings.upstream_retry_delay
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout, connect=10.0),
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def chat(self, prompt: str, *, timeout: float | None = None) -> dict[str, Any]:
        """Send a prompt upstream and return the decoded JSON payload.

        Timeouts are transient: the call is retried ``max_retries`` times with a
        fixed delay before giving up with ``UpstreamTimeoutError``. Any other
        failure is raised immediately as ``UpstreamError``.
        """
        max_attempts = 1 + self._max_retries

        for attempt in range(1, max_attempts + 1):
            try:
                return await self._do_chat(prompt, timeout=timeout)
            except httpx.TimeoutException as e:
                if attempt >= max_attempts:
                    logger.warning("Upstream timed out after %d attempts", max_attempts)
                    raise UpstreamTimeoutError(
                        f"API request timed out after {max_attempts} attempts"
                    ) from e
                logger.warning(
                    "Upstream attempt %d/%d timed out, retry in %.1fs",
                    attempt,
                    max_attempts,
                    self._retry_delay,
                )
                await asyncio.sleep(self._retry_delay)

        raise UpstreamTimeoutError("API request timed out")  # pragma: no cover

    async def _do_chat(self, prompt: str, *, timeout: float | None = None) -> dict[str, Any]:
        """Execute a single chat request (no retry logic)."""
        payload = {"model": self._model, "prompt": prompt, "stream": False}
        request_timeout = (
            httpx.Timeout(timeout, connect=10.0) if timeout is not None else httpx.USE_CLIENT_DEFAULT
        )

        try:
            response = await self._client.post(
                f"{self._base_url}/ai/chat",
                json=payload,
                timeout=request_timeout,
            )
        except httpx.TimeoutException:
            raise
        except httpx.HTTPError as e:
            logger.warning("Upstream request failed: %s", e)
            raise UpstreamError(str(e) or type(e).__name__) from e

        if not response.is_success:
            logger.warning("API responded with status: %d", response.status_code)
            raise UpstreamError(
                f"API responded with status: {response.status_code}",
                status=response.status_code,
            )

        # ValueError covers both malformed JSON and bodies that are not UTF-8
        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(
                f"API returned invalid JSON: {response.content[:100]!r}",
                status=response.status_code,
            ) from e

        logger.info("API response: %s...", json.dumps(data, ensure_ascii=False)[:200])
        return data

    async def check_health(self, timeout: float = 5.0) -> UpstreamHealth:
        """Probe ``/ai/health``. Never raises."""
        try:
            response = await self._client.get(
                f"{self._base_url}/ai/health",
                timeout=httpx.Timeout(timeout),
            )
        except httpx.HTTPError as e:
            logger.info("Health check error: %s", e)
            return UpstreamHealth(connected=False, error=str(e) or type(e).__name__)

        if not response.is_success:
            return UpstreamHealth(connected=False, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError:
            return UpstreamHealth(connected=False, error="Failed to parse response")

        logger.info("Health check response: %s", data)
        if isinstance(data, dict) and data.get("status") == "ok":
            return UpstreamHealth(connected=True)
        return UpstreamHealth(connected=False, reason="Invalid response format")

    async def close(self) -> None:
        await self._client.aclose()
