"""Bundle size lookup via the bundlephobia API (npm packages only)."""

import asyncio
import logging
from typing import Any, Optional

from pydantic import Field

from ..clients.exceptions import RegistryError, RegistryTimeoutError
from ..clients.fetch import fetch_json
from ..models.base import RegistryKind
from ..models.security import BundleSize, BundleSizeInfo
from ..registries.base import UpstreamModel
from ..registries.detector import resolve_registry

logger = logging.getLogger(__name__)

BUNDLEPHOBIA_SIZE_URL = "https://bundlephobia.com/api/size"
DEFAULT_BUNDLE_SIZE_TIMEOUT = 15.0


class BundlephobiaSize(UpstreamModel):
    version: Optional[str] = None
    size: Optional[int] = Field(None, description="Minified bytes")
    gzip: Optional[int] = None
    brotli: Optional[int] = None


class BundleSizeInspector:
    def __init__(self, timeout: float = DEFAULT_BUNDLE_SIZE_TIMEOUT):
        self.timeout = timeout

    async def get_bundle_size(
        self,
        package_name: str,
        version: Optional[str] = None,
        registry: Any = None,
    ) -> BundleSizeInfo:
        """Minified, gzip and brotli sizes for an npm package.

        JSR and Deno are not attempted. A request that exceeds the timeout is
        abandoned and reported with its own message; the timeout bounds the
        whole request, not just each socket operation.
        """
        kind = resolve_registry(package_name, registry)
        if kind not in (RegistryKind.NPM, RegistryKind.UNKNOWN):
            return BundleSizeInfo(
                package=package_name,
                version=version or "unknown",
                registry=kind,
                error="Bundle size checking not available for JSR/Deno packages",
            )

        spec = f"{package_name}@{version}" if version else package_name
        try:
            data = await asyncio.wait_for(
                fetch_json(
                    BUNDLEPHOBIA_SIZE_URL,
                    params={"package": spec},
                    timeout=self.timeout,
                    label="Bundle size request",
                ),
                timeout=self.timeout,
            )
            size = BundlephobiaSize.model_validate(data if isinstance(data, dict) else {})
        except (RegistryTimeoutError, asyncio.TimeoutError):
            logger.warning(f"Bundle size lookup for {spec} timed out")
            return self._failed(
                package_name,
                version,
                f"Bundle size request timed out after {self.timeout:g} seconds",
            )
        except (RegistryError, ValueError) as e:
            logger.warning(f"Bundle size lookup for {spec} failed: {e}")
            return self._failed(package_name, version, str(e))

        return BundleSizeInfo(
            package=package_name,
            version=size.version or version or "latest",
            registry=RegistryKind.NPM,
            size=BundleSize(
                minified=size.size or 0,
                minified_gzipped=size.gzip or 0,
                minified_brotli=size.brotli or None,
            ),
        )

    @staticmethod
    def _failed(package_name: str, version: Optional[str], message: str) -> BundleSizeInfo:
        return BundleSizeInfo(
            package=package_name,
            version=version or "unknown",
            registry=RegistryKind.NPM,
            error=message,
        )
