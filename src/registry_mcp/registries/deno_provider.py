"""Deno third-party module search provider."""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import Field

from ..models.base import RegistryKind
from ..models.package import PackageSummary
from .base import BaseRegistryProvider, UpstreamModel, parse_items


class DenoModule(UpstreamModel):
    name: Optional[str] = None
    description: Optional[str] = None
    latest_version: Optional[str] = Field(None, alias="latestVersion")
    owner: Optional[str] = None
    repository: Optional[Any] = None
    homepage: Optional[str] = None
    updated_at: Optional[str] = Field(None, alias="updatedAt")
    star_count: Optional[int] = Field(None, alias="starCount")


class DenoRegistryProvider(BaseRegistryProvider):
    """Search modules on the deno.land/x index."""

    kind = RegistryKind.DENO
    label = "Deno"

    def search_params(self, query: str, limit: int) -> Dict[str, Any]:
        return {"query": query, "limit": limit}

    def parse_results(self, data: Any) -> Tuple[List[PackageSummary], Optional[int]]:
        data = data if isinstance(data, dict) else {}
        info = self.info
        packages = []

        for module in parse_items(data.get("data"), DenoModule):
            if not module.name:
                continue
            packages.append(PackageSummary(
                name=module.name,
                version=module.latest_version,
                description=module.description,
                author=module.owner,
                repository=module.repository if isinstance(module.repository, str) else None,
                homepage=module.homepage,
                registry=self.kind,
                registry_url=info.package_url(module.name),
                published_at=module.updated_at,
                downloads=module.star_count,
            ))

        return packages, data.get("total")
