"""CDN import URLs and CDN package search."""

from .imports import generate_cdn_imports
from .search import (
    SEARCHABLE_PROVIDERS,
    CDNSearchManager,
    CdnjsSearch,
    NpmProxyCDNSearch,
)

__all__ = [
    "SEARCHABLE_PROVIDERS",
    "CDNSearchManager",
    "CdnjsSearch",
    "NpmProxyCDNSearch",
    "generate_cdn_imports",
]
