"""Shared GET-and-decode helper for the provider clients."""

from __future__ import annotations

from typing import Any, Mapping

import httpx
import structlog

from subscout.domain.exceptions import (
    ProviderAuthError,
    ProviderError,
    ProviderRateLimitedError,
)

log = structlog.get_logger(__name__)


async def get_json(
    http: httpx.AsyncClient,
    url: str,
    *,
    provider: str,
    params: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
) -> Any:
    """GET *url* and return the decoded JSON body.

    Raises:
        ProviderAuthError: 401 or 403.
        ProviderRateLimitedError: 429.
        ProviderError: any other non-2xx status, transport error or
            undecodable body.
    """
    try:
        resp = await http.get(url, params=params, headers=headers)
    except httpx.HTTPError as exc:
        log.warning("provider_network_error", provider=provider, url=url, error=str(exc))
        raise ProviderError(provider, f"request failed: {exc}") from exc

    status = resp.status_code
    if status in (401, 403):
        log.error("provider_auth_rejected", provider=provider, status=status)
        raise ProviderAuthError(provider, "credentials rejected", status_code=status)
    if status == 429:
        log.warning("provider_rate_limited", provider=provider)
        raise ProviderRateLimitedError(provider, "rate limited", status_code=status)
    if not resp.is_success:
        log.warning("provider_http_error", provider=provider, url=url, status=status)
        raise ProviderError(provider, f"unexpected status {status}", status_code=status)

    try:
        return resp.json()
    except ValueError as exc:
        raise ProviderError(provider, "response is not valid JSON", status_code=status) from exc
