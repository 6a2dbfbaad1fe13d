"""Composition root: builds the resolver and its collaborators from config."""

from __future__ import annotations

from contextlib import AsyncExitStack, asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator

import httpx
import structlog

from subscout.application.use_cases.resolve_identity import IdentityResolver
from subscout.application.use_cases.scan_directory import ScanDirectoryUseCase
from subscout.domain.ports.cache import CachePort
from subscout.infrastructure.cache.cache_factory import create_cache
from subscout.infrastructure.config.schema import AppConfig
from subscout.infrastructure.imdb.suggest import ImdbSuggestClient
from subscout.infrastructure.media.languages import default_language_table
from subscout.infrastructure.opensubtitles.client import HttpxOpenSubtitlesClient
from subscout.infrastructure.trakt.client import HttpxTraktClient

log = structlog.get_logger(__name__)


@dataclass
class Services:
    """Wired components for one process run."""

    config: AppConfig
    cache: CachePort
    http_client: httpx.AsyncClient
    resolver: IdentityResolver
    scanner: ScanDirectoryUseCase


def build_resolver(
    config: AppConfig, *, http_client: httpx.AsyncClient, cache: CachePort
) -> IdentityResolver:
    """Create the resolver with every provider the config enables."""
    features = None
    if config.opensubtitles_api_key:
        features = HttpxOpenSubtitlesClient(
            api_key=config.opensubtitles_api_key,
            user_agent=config.http_user_agent,
            http_client=http_client,
            cache=cache,
            base_url=config.opensubtitles_base_url,
        )

    catalog = None
    if config.trakt_client_id:
        catalog = HttpxTraktClient(
            client_id=config.trakt_client_id,
            http_client=http_client,
            cache=cache,
            base_url=config.trakt_base_url,
        )

    suggestions = None
    if config.imdb_suggestions_enabled:
        suggestions = ImdbSuggestClient(
            http_client=http_client,
            cache=cache,
            base_url=config.imdb_base_url,
        )

    log.info(
        "providers_configured",
        opensubtitles=features is not None,
        trakt=catalog is not None,
        imdb_suggest=suggestions is not None,
    )
    return IdentityResolver(
        features=features,
        catalog=catalog,
        suggestions=suggestions,
        languages=default_language_table(),
    )


@asynccontextmanager
async def build_services(config: AppConfig) -> AsyncIterator[Services]:
    """Open the cache and HTTP client, yield the wired services, close both.

    Order: cache, HTTP client, provider clients, use cases. Whatever was
    opened is closed again, in reverse order, even if a later step fails.
    """
    async with AsyncExitStack() as stack:
        cache = await stack.enter_async_context(
            create_cache(
                "diskcache" if config.cache_enabled else "null",
                directory=config.cache_dir,
                ttl_seconds=config.cache_ttl_seconds,
            )
        )
        http_client = await stack.enter_async_context(
            httpx.AsyncClient(
                timeout=httpx.Timeout(config.http_timeout_seconds),
                headers={"User-Agent": config.http_user_agent},
                follow_redirects=True,
            )
        )
        stack.callback(log.debug, "services_closed")

        resolver = build_resolver(config, http_client=http_client, cache=cache)
        yield Services(
            config=config,
            cache=cache,
            http_client=http_client,
            resolver=resolver,
            scanner=ScanDirectoryUseCase(
                resolver, pair_timeout=config.resolve_timeout_seconds
            ),
        )
