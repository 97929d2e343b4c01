"""Package registry detection and search."""

from .base import BaseRegistryProvider
from .deno_provider import DenoRegistryProvider
from .detector import (
    REGISTRY_CATALOG,
    RegistryInfo,
    detect_registry,
    get_registry_info,
    resolve_registry,
)
from .jsr_provider import JsrRegistryProvider
from .manager import SearchManager
from .npm_provider import NpmRegistryProvider

__all__ = [
    "BaseRegistryProvider",
    "DenoRegistryProvider",
    "JsrRegistryProvider",
    "NpmRegistryProvider",
    "REGISTRY_CATALOG",
    "RegistryInfo",
    "SearchManager",
    "detect_registry",
    "get_registry_info",
    "resolve_registry",
]
