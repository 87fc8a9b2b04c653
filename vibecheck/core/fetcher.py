"""HTTP fetcher for upstream Farcaster profile records."""

import asyncio
from dataclasses import dataclass

import httpx

from vibecheck.config import VibeCheckConfig
from vibecheck.core.fields import PROVENANCE_KEY, TRUSTED_PROVENANCE
from vibecheck.exceptions import FetchError, UpstreamAuthError
from vibecheck.logging import get_logger

_log = get_logger("fetcher")


@dataclass
class FetchResult:
    """Result of an upstream fetch. A failed fetch carries no record."""

    record: dict | None
    success: bool
    error: str | None = None
    source: str | None = None


def _should_retry(error: Exception) -> bool:
    """Timeouts, transport errors and 5xx are transient; 4xx are not."""
    if isinstance(error, (httpx.TimeoutException, httpx.TransportError)):
        return True
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code >= 500
    return False


async def _get_json(
    client: httpx.AsyncClient,
    url: str,
    params: dict,
    headers: dict | None = None,
    max_retries: int = 3,
    backoff_base: float = 2.0,
) -> dict:
    """
    GET a JSON document with exponential backoff on transient failures.

    Raises:
        UpstreamAuthError: On 401/403
        FetchError: On non-retryable errors or when retries are exhausted
    """
    attempts = max_retries + 1
    for attempt in range(1, attempts + 1):
        try:
            response = await client.get(url, params=params, headers=headers)
            if response.status_code in (401, 403):
                raise UpstreamAuthError(f"Upstream rejected credentials (HTTP {response.status_code})")
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            if not _should_retry(e) or attempt == attempts:
                raise FetchError(f"GET {url} failed: {e}") from e
            delay = backoff_base ** (attempt - 1)
            _log.warning("fetch_retry", url=url, attempt=attempt, delay_s=delay, error=str(e))
            await asyncio.sleep(delay)
        except ValueError as e:
            raise FetchError(f"GET {url} returned invalid JSON: {e}") from e
        else:
            if not isinstance(data, dict):
                raise FetchError(f"GET {url} returned {type(data).__name__}, expected an object")
            return data

    raise FetchError(f"GET {url} failed after {attempts} attempts")


async def fetch_neynar_user(
    client: httpx.AsyncClient,
    fid: int,
    config: VibeCheckConfig,
) -> dict | None:
    """
    Fetch a user from the Neynar bulk user endpoint.

    Records from this endpoint are tagged with the trusted provenance marker.
    """
    data = await _get_json(
        client,
        f"{config.neynar_base_url}/v2/farcaster/user/bulk",
        params={"fids": fid},
        headers={"api_key": config.neynar_api_key, "accept": "application/json"},
        max_retries=config.max_retries if config.retry_enabled else 0,
        backoff_base=config.retry_backoff_base,
    )
    users = data.get("users") or []
    if not users or not isinstance(users[0], dict):
        return None
    return {**users[0], PROVENANCE_KEY: TRUSTED_PROVENANCE}


async def fetch_hub_user(
    client: httpx.AsyncClient,
    fid: int,
    config: VibeCheckConfig,
) -> dict | None:
    """Fetch a user from the public hub. Hub records carry no score."""
    data = await _get_json(
        client,
        f"{config.hub_base_url}/v1/farcaster/user-by-fid",
        params={"fid": fid},
        headers={"accept": "application/json"},
        max_retries=config.max_retries if config.retry_enabled else 0,
        backoff_base=config.retry_backoff_base,
    )
    result = data.get("result")
    user = result.get("user") if isinstance(result, dict) else None
    return user if isinstance(user, dict) else None


async def fetch_user_record(
    fid: int,
    config: VibeCheckConfig | None = None,
    client: httpx.AsyncClient | None = None,
) -> FetchResult:
    """
    Fetch the raw profile record for a user id.

    Tries Neynar when an API key is configured, then falls back to the hub.

    Args:
        fid: Farcaster user id
        config: VibeCheckConfig instance, uses defaults if None
        client: Optional shared httpx client

    Returns:
        FetchResult with the raw record, or record=None on failure
    """
    config = config or VibeCheckConfig()

    if client is None:
        async with httpx.AsyncClient(timeout=config.request_timeout_s) as owned:
            return await fetch_user_record(fid, config, owned)

    errors: list[str] = []

    if config.neynar_api_key:
        try:
            record = await fetch_neynar_user(client, fid, config)
            if record is not None:
                return FetchResult(record=record, success=True, source="neynar")
            errors.append("neynar: user not found")
        except FetchError as e:
            _log.warning("neynar_fetch_failed", fid=fid, error=str(e))
            errors.append(f"neynar: {e}")
    else:
        _log.info("neynar_api_key_missing", fid=fid)

    try:
        record = await fetch_hub_user(client, fid, config)
        if record is not None:
            return FetchResult(record=record, success=True, source="hub")
        errors.append("hub: user not found")
    except FetchError as e:
        _log.warning("hub_fetch_failed", fid=fid, error=str(e))
        errors.append(f"hub: {e}")

    return FetchResult(record=None, success=False, error="; ".join(errors))
