"""JSR (jsr.io) search provider."""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import Field

from ..clients.fetch import fetch_json
from ..models.base import RegistryKind
from ..models.package import PackageSummary
from .base import BaseRegistryProvider, UpstreamModel, clean_keywords, parse_items

JSR_API_URL = "https://jsr.io/api/packages"


class JsrPackage(UpstreamModel):
    scope: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    latest_version: Optional[str] = Field(None, alias="latestVersion")
    updated_at: Optional[str] = Field(None, alias="updatedAt")
    keywords: Optional[List[Any]] = None

    @property
    def full_name(self) -> str:
        name = self.name or ""
        return f"@{self.scope}/{name}" if self.scope else name


def split_jsr_name(package_name: str) -> Tuple[str, str]:
    """Split ``@scope/name`` (or ``jsr:@scope/name``) into scope and name."""
    if package_name.startswith("jsr:"):
        package_name = package_name[len("jsr:"):]
    parts = package_name.replace("@", "", 1).split("/")
    scope = parts[0]
    name = parts[1] if len(parts) > 1 and parts[1] else parts[0]
    return scope, name


class JsrRegistryProvider(BaseRegistryProvider):
    """Search packages on jsr.io."""

    kind = RegistryKind.JSR
    label = "JSR"

    def search_params(self, query: str, limit: int) -> Dict[str, Any]:
        return {"q": query, "limit": limit}

    def parse_results(self, data: Any) -> Tuple[List[PackageSummary], Optional[int]]:
        data = data if isinstance(data, dict) else {}
        info = self.info
        packages = []

        for pkg in parse_items(data.get("items"), JsrPackage):
            full_name = pkg.full_name
            if not full_name:
                continue
            packages.append(PackageSummary(
                name=full_name,
                version=pkg.latest_version,
                description=pkg.description,
                keywords=clean_keywords(pkg.keywords),
                registry=self.kind,
                registry_url=info.package_url(full_name),
                published_at=pkg.updated_at,
            ))

        return packages, data.get("total")

    async def get_package(self, scope: str, name: str) -> Dict[str, Any]:
        data = await fetch_json(
            f"{JSR_API_URL}/{scope}/{name}",
            timeout=self.timeout,
            label="JSR package fetch",
        )
        return data if isinstance(data, dict) else {}

    async def get_package_version(self, scope: str, name: str, version: str) -> Dict[str, Any]:
        data = await fetch_json(
            f"{JSR_API_URL}/{scope}/{name}/{version}",
            timeout=self.timeout,
            label="JSR version fetch",
        )
        return data if isinstance(data, dict) else {}
