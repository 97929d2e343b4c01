"""Vulnerability check.

No public advisory API is queried. For npm the package's existence is
confirmed; every registry returns an empty finding list. Run ``npm audit``
after installing for real advisory data.
"""

import logging
from typing import Any

from ..clients.exceptions import RegistryError
from ..models.base import RegistryKind
from ..models.security import VulnerabilityResult
from ..registries.base import DEFAULT_TIMEOUT
from ..registries.detector import resolve_registry
from ..registries.npm_provider import NpmRegistryProvider

logger = logging.getLogger(__name__)


class VulnerabilityChecker:
    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        self.npm = NpmRegistryProvider(timeout=timeout)

    async def check_vulnerabilities(
        self,
        package_name: str,
        registry: Any = None,
    ) -> VulnerabilityResult:
        kind = resolve_registry(package_name, registry)

        if kind in (RegistryKind.NPM, RegistryKind.UNKNOWN):
            try:
                await self.npm.get_package_document(package_name)
            except RegistryError as e:
                logger.warning(f"Vulnerability check failed for {package_name}: {e}")
                return VulnerabilityResult(
                    package_name=package_name,
                    registry=RegistryKind.NPM,
                    error=f"Package not found: {package_name}",
                )
            return VulnerabilityResult(package_name=package_name, registry=RegistryKind.NPM)

        # JSR and Deno publish no advisory feed
        return VulnerabilityResult(package_name=package_name, registry=kind)
