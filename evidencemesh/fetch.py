# evidencemesh/fetch.py
"""GET with rate-limit awareness and 429 retries."""

import asyncio
import logging
from collections.abc import Mapping

import httpx

logger = logging.getLogger(__name__)

REMAINING_HEADER = "x-ratelimit-remaining"
RETRY_AFTER_HEADER = "retry-after"
DEFAULT_RETRY_AFTER = 3


class NetworkError(Exception):
    """Transport or HTTP failure that was not recovered by retrying."""

    def __init__(self, message: str, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


def _header_int(headers: httpx.Headers, name: str) -> int | None:
    value = headers.get(name)
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


async def fetch_with_retry(
    client: httpx.AsyncClient,
    url: str,
    max_retries: int = 3,
    *,
    params: Mapping[str, str | int] | None = None,
    headers: Mapping[str, str] | None = None,
) -> httpx.Response:
    """GET url, retrying on 429 up to max_retries times.

    A 429 waits for the server's retry-after (default 3 seconds) plus one
    second before the next attempt. A successful response that reports an
    exhausted quota together with a retry-after delays the return by the
    same amount, so the caller's next request lands in a fresh window.

    Raises:
        NetworkError: on any other HTTP error status, on a transport failure,
            or once the retry budget is spent.
    """
    retries_left = max_retries
    while True:
        try:
            response = await client.get(url, params=params, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 429 and retries_left > 0:
                wait = _header_int(e.response.headers, RETRY_AFTER_HEADER)
                if wait is None:
                    wait = DEFAULT_RETRY_AFTER
                logger.warning(
                    "Rate limited (429) on %s, retrying in %d seconds (%d retries left)",
                    url,
                    wait + 1,
                    retries_left,
                )
                await asyncio.sleep(wait + 1)
                retries_left -= 1
                continue
            if status == 429:
                logger.error("Rate limited on %s after %d retries", url, max_retries)
            raise NetworkError(f"HTTP {status} from {url}", url, status) from e
        except httpx.RequestError as e:
            raise NetworkError(f"Request to {url} failed: {e}", url) from e

        remaining = _header_int(response.headers, REMAINING_HEADER)
        retry_after = _header_int(response.headers, RETRY_AFTER_HEADER)
        if remaining == 0 and retry_after is not None:
            logger.warning("Rate limit quota exhausted, sleeping for %d seconds", retry_after + 1)
            await asyncio.sleep(retry_after + 1)
        return response
