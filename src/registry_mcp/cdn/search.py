"""Package search across CDN providers.

cdnjs has its own search API. unpkg, jsDelivr, Skypack and esm.sh mirror the
npm namespace and have none, so they share one npm search request shape and
only differ in how result URLs are built.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from ..clients.exceptions import RegistryError
from ..clients.fetch import fetch_json
from ..models.cdn import CDNPackage, CDNProvider, CDNSearchResult
from ..registries.base import DEFAULT_LIMIT, DEFAULT_TIMEOUT, UpstreamModel, parse_items
from ..registries.detector import get_registry_info
from ..registries.npm_provider import NpmSearchObject

logger = logging.getLogger(__name__)

CDNJS_SEARCH_URL = "https://api.cdnjs.com/libraries"
CDNJS_LIBRARY_URL = "https://cdnjs.cloudflare.com/ajax/libs/{name}/{version}/"


class CdnjsLibrary(UpstreamModel):
    name: Optional[str] = None
    latest: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None


class BaseCDNSearch(ABC):
    """One CDN provider's package search."""

    provider: CDNProvider

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        self.timeout = timeout

    @property
    def label(self) -> str:
        return f"{self.provider.value} search"

    @abstractmethod
    async def fetch(self, query: str, limit: int) -> Tuple[List[CDNPackage], Optional[int]]:
        pass

    async def search(self, query: str, limit: int = DEFAULT_LIMIT) -> CDNSearchResult:
        """Search the provider; upstream failures are returned, never raised."""
        try:
            packages, total = await self.fetch(query, limit)
        except (RegistryError, ValueError, TypeError) as e:
            logger.warning(f"{self.label} failed for query='{query}': {e}")
            return CDNSearchResult(provider=self.provider, query=query, error=str(e))

        return CDNSearchResult(
            provider=self.provider, query=query, packages=packages, total=total
        )


class CdnjsSearch(BaseCDNSearch):
    provider = CDNProvider.CDNJS

    async def fetch(self, query: str, limit: int) -> Tuple[List[CDNPackage], Optional[int]]:
        data = await fetch_json(
            CDNJS_SEARCH_URL,
            params={"search": query, "fields": "version,description", "limit": limit},
            timeout=self.timeout,
            label="CDNJS search",
        )
        data = data if isinstance(data, dict) else {}

        packages = []
        for lib in parse_items(data.get("results"), CdnjsLibrary):
            if not lib.name:
                continue
            version = lib.latest or lib.version or "unknown"
            packages.append(CDNPackage(
                name=lib.name,
                version=version,
                description=lib.description,
                url=CDNJS_LIBRARY_URL.format(name=lib.name, version=version),
            ))
        return packages, data.get("total")


class NpmProxyCDNSearch(BaseCDNSearch):
    """Search a CDN that serves the npm namespace by searching npm itself."""

    def __init__(
        self,
        provider: CDNProvider,
        url_template: str,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        super().__init__(timeout=timeout)
        self.provider = provider
        self.url_template = url_template

    async def fetch(self, query: str, limit: int) -> Tuple[List[CDNPackage], Optional[int]]:
        data = await fetch_json(
            get_registry_info("npm").search_url,
            params={"text": query, "size": limit},
            timeout=self.timeout,
            label=self.label,
        )
        data = data if isinstance(data, dict) else {}

        packages = []
        for obj in parse_items(data.get("objects"), NpmSearchObject):
            pkg = obj.package
            if pkg is None or not pkg.name:
                continue
            version = pkg.version or "latest"
            packages.append(CDNPackage(
                name=pkg.name,
                version=version,
                description=pkg.description,
                url=self.url_template.format(name=pkg.name, version=version),
            ))
        return packages, data.get("total")


NPM_PROXY_URL_TEMPLATES: Dict[CDNProvider, str] = {
    CDNProvider.UNPKG: "https://unpkg.com/{name}@{version}",
    CDNProvider.JSDELIVR: "https://cdn.jsdelivr.net/npm/{name}@{version}",
    CDNProvider.SKYPACK: "https://cdn.skypack.dev/{name}@{version}",
    CDNProvider.ESM_SH: "https://esm.sh/{name}@{version}",
}

# Order of results returned by search_all()
SEARCHABLE_PROVIDERS: List[CDNProvider] = [
    CDNProvider.CDNJS,
    CDNProvider.UNPKG,
    CDNProvider.JSDELIVR,
    CDNProvider.SKYPACK,
    CDNProvider.ESM_SH,
]


class CDNSearchManager:
    """Routes CDN searches and fans out to every searchable provider."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        self.searchers: Dict[CDNProvider, BaseCDNSearch] = {
            CDNProvider.CDNJS: CdnjsSearch(timeout=timeout),
        }
        for provider, template in NPM_PROXY_URL_TEMPLATES.items():
            self.searchers[provider] = NpmProxyCDNSearch(provider, template, timeout=timeout)

    def get_searcher(self, provider: Any) -> BaseCDNSearch:
        """Raises ValueError for providers without search support."""
        try:
            kind = CDNProvider(str(provider).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown CDN provider: {provider}") from None
        if kind not in self.searchers:
            raise ValueError(f"Search is not supported for CDN provider: {kind.value}")
        return self.searchers[kind]

    async def search(self, provider: Any, query: str, limit: int = DEFAULT_LIMIT) -> CDNSearchResult:
        return await self.get_searcher(provider).search(query, limit)

    async def search_all(self, query: str, limit: int = DEFAULT_LIMIT) -> List[CDNSearchResult]:
        """Search all five providers concurrently, in SEARCHABLE_PROVIDERS order."""
        logger.info(f"Searching all CDNs (query='{query}', limit={limit})")
        results = await asyncio.gather(
            *(self.searchers[p].search(query, limit) for p in SEARCHABLE_PROVIDERS),
            return_exceptions=True,
        )

        outcomes: List[CDNSearchResult] = []
        for provider, result in zip(SEARCHABLE_PROVIDERS, results):
            if isinstance(result, BaseException):
                logger.error(f"CDN search error from {provider.value}: {result}")
                outcomes.append(CDNSearchResult(
                    provider=provider, query=query, error=str(result) or type(result).__name__,
                ))
                continue
            outcomes.append(result)
        return outcomes
