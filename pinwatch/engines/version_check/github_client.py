"""Async GitHub API client for latest-release lookups, with rate-limit handling and retries."""

from __future__ import annotations

import asyncio
import os
import time

import httpx
import structlog

from pinwatch.exceptions import ReleaseLookupError

log = structlog.get_logger("pinwatch.engine")

DEFAULT_API_URL = "https://api.github.com"

_MAX_RETRIES = 3
_RETRY_BASE_DELAY = 1.0  # seconds
_DEFAULT_TIMEOUT = 30.0


class RateLimitError(Exception):
    """Raised when GitHub rate limit is exhausted and we need to wait."""

    def __init__(self, retry_after: int) -> None:
        self.retry_after = retry_after
        super().__init__(f"rate limit exceeded, retry after {retry_after}s")


class GitHubClient:
    """Thin async wrapper around the GitHub releases API."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = _DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        resolved_url = base_url or os.environ.get("PINWATCH_GITHUB_API_URL") or DEFAULT_API_URL
        headers: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        self._client = httpx.AsyncClient(
            base_url=resolved_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    # ── lifecycle ──────────────────────────────────────────────────────────

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> GitHubClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # ── public ─────────────────────────────────────────────────────────────

    async def get_latest_release(self, owner: str, project: str) -> str | None:
        """Return the ``name`` of the latest published release of *owner/project*.

        Returns ``None`` when the repository has no release (HTTP 404) or the
        release has no name.  Any other failure (transport error, non-JSON
        body, unexpected payload shape) raises :class:`ReleaseLookupError`.
        """
        slug = f"{owner}/{project}"
        try:
            response = await self._request_with_retry(f"/repos/{owner}/{project}/releases/latest")
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status == 404:
                log.info("github.no_release", repo=slug)
                return None
            raise ReleaseLookupError(slug, f"HTTP {status}") from exc
        except RateLimitError as exc:
            raise ReleaseLookupError(slug, str(exc)) from exc
        except httpx.HTTPError as exc:
            raise ReleaseLookupError(slug, f"{type(exc).__name__}: {exc}") from exc

        self._note_rate_limit(response)

        try:
            payload = response.json()
        except ValueError as exc:
            raise ReleaseLookupError(slug, f"unable to parse response body: {exc}") from exc

        if not isinstance(payload, dict):
            raise ReleaseLookupError(
                slug, f"expected a JSON object, got {type(payload).__name__}"
            )

        name = payload.get("name")
        if name is None or name == "":
            return None
        if not isinstance(name, str):
            raise ReleaseLookupError(
                slug, f"release name should be a string, got {type(name).__name__}"
            )
        return name

    # ── internal ───────────────────────────────────────────────────────────

    async def _request_with_retry(self, url: str) -> httpx.Response:
        """GET with exponential backoff on 5xx, 403 rate-limit, and timeout errors."""
        last_exc: Exception | None = None
        for attempt in range(_MAX_RETRIES):
            try:
                resp = await self._client.get(url)

                # 403 with rate-limit headers → sleep and retry
                if resp.status_code == 403 and self._is_rate_limited(resp):
                    wait = self._get_rate_limit_wait(resp)
                    log.warning(
                        "github.rate_limit",
                        url=url,
                        wait_seconds=wait,
                        attempt=attempt + 1,
                        max_retries=_MAX_RETRIES,
                    )
                    await asyncio.sleep(wait)
                    last_exc = RateLimitError(wait)
                    continue

                if resp.status_code < 500:
                    resp.raise_for_status()
                    return resp

                log.warning(
                    "github.server_error",
                    url=url,
                    status=resp.status_code,
                    attempt=attempt + 1,
                    max_retries=_MAX_RETRIES,
                )
                last_exc = httpx.HTTPStatusError(
                    f"{resp.status_code}", request=resp.request, response=resp
                )
            except httpx.TimeoutException as exc:
                log.warning(
                    "github.timeout",
                    url=url,
                    attempt=attempt + 1,
                    max_retries=_MAX_RETRIES,
                )
                last_exc = exc

            if attempt < _MAX_RETRIES - 1:
                delay = _RETRY_BASE_DELAY * (2**attempt)
                await asyncio.sleep(delay)

        raise last_exc  # type: ignore[misc]

    def _note_rate_limit(self, response: httpx.Response) -> None:
        """Log when the rate limit is spent; the next request handles the wait."""
        remaining = self._parse_header_int(response.headers.get("X-RateLimit-Remaining"))
        if remaining is not None and remaining == 0:
            log.warning(
                "github.rate_limit_exhausted",
                reset_in_seconds=self._get_rate_limit_wait(response),
            )

    @staticmethod
    def _is_rate_limited(response: httpx.Response) -> bool:
        remaining = response.headers.get("X-RateLimit-Remaining")
        if remaining is not None:
            try:
                return int(remaining) == 0
            except (ValueError, TypeError):
                pass
        # Secondary (abuse) limits only send Retry-After
        return "Retry-After" in response.headers

    @staticmethod
    def _get_rate_limit_wait(response: httpx.Response) -> int:
        """Seconds to wait, from Retry-After or X-RateLimit-Reset."""
        retry_after = response.headers.get("Retry-After")
        if retry_after is not None:
            try:
                return max(int(retry_after), 1)
            except (ValueError, TypeError):
                pass
        reset_ts = response.headers.get("X-RateLimit-Reset")
        if reset_ts is not None:
            try:
                return max(int(reset_ts) - int(time.time()), 1)
            except (ValueError, TypeError):
                pass
        return 60

    @staticmethod
    def _parse_header_int(value: str | None) -> int | None:
        if value is None:
            return None
        try:
            return int(value)
        except (ValueError, TypeError):
            return None
