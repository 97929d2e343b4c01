"""Search manager coordinating registry searches across providers."""

import asyncio
import logging
from typing import Any, Dict, List

from ..models.base import RegistryKind
from ..models.package import SearchOutcome
from .base import DEFAULT_LIMIT, DEFAULT_TIMEOUT, BaseRegistryProvider
from .deno_provider import DenoRegistryProvider
from .detector import detect_registry
from .jsr_provider import JsrRegistryProvider
from .npm_provider import NpmRegistryProvider

logger = logging.getLogger(__name__)


class SearchManager:
    """Routes searches to one registry or fans out to all of them."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        """Initialize search manager with all providers."""
        self.providers: Dict[RegistryKind, BaseRegistryProvider] = {
            RegistryKind.NPM: NpmRegistryProvider(timeout=timeout),
            RegistryKind.JSR: JsrRegistryProvider(timeout=timeout),
            RegistryKind.DENO: DenoRegistryProvider(timeout=timeout),
        }

    def get_provider(self, registry: Any) -> BaseRegistryProvider:
        """Provider for a registry; unknown or unrecognised values use npm."""
        kind = RegistryKind.parse(registry)
        return self.providers.get(kind, self.providers[RegistryKind.NPM])

    async def search(
        self,
        query: str,
        limit: int = DEFAULT_LIMIT,
        registry: Any = None,
    ) -> SearchOutcome:
        """Search one registry, auto-detected from the query unless given.

        Args:
            query: Package name or search text
            limit: Maximum results
            registry: Explicit registry, bypasses detection

        Returns:
            Search outcome for the chosen registry
        """
        kind = RegistryKind.parse(registry) or detect_registry(query)
        logger.debug(f"Routing search '{query}' to {kind.value}")
        return await self.search_registry(kind, query, limit)

    async def search_registry(
        self,
        registry: Any,
        query: str,
        limit: int = DEFAULT_LIMIT,
    ) -> SearchOutcome:
        return await self.get_provider(registry).search(query, limit)

    async def search_all(self, query: str, limit: int = DEFAULT_LIMIT) -> List[SearchOutcome]:
        """Search npm, JSR and Deno concurrently.

        Always returns three outcomes in that order. A provider that fails,
        or raises unexpectedly, yields an error outcome for its registry
        without affecting the others.
        """
        logger.info(f"Searching all registries (query='{query}', limit={limit})")
        kinds = [RegistryKind.NPM, RegistryKind.JSR, RegistryKind.DENO]

        results = await asyncio.gather(
            *(self.providers[kind].search(query, limit) for kind in kinds),
            return_exceptions=True,
        )

        outcomes: List[SearchOutcome] = []
        for kind, result in zip(kinds, results):
            if isinstance(result, BaseException):
                logger.error(f"Search error from {kind.value}: {result}")
                outcomes.append(SearchOutcome(
                    query=query, registry=kind, packages=[], error=str(result) or type(result).__name__,
                ))
                continue
            outcomes.append(result)

        return outcomes

