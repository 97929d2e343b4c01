"""npm registry search provider."""

import logging
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import quote

from pydantic import Field

from ..clients.fetch import fetch_json
from ..models.base import RegistryKind
from ..models.package import PackageSummary
from .base import BaseRegistryProvider, UpstreamModel, clean_keywords, parse_items

logger = logging.getLogger(__name__)

NPM_REGISTRY_URL = "https://registry.npmjs.org"


class NpmPerson(UpstreamModel):
    name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None


class NpmRepository(UpstreamModel):
    type: Optional[str] = None
    url: Optional[str] = None


class NpmLinks(UpstreamModel):
    npm: Optional[str] = None
    homepage: Optional[str] = None
    repository: Optional[str] = None
    bugs: Optional[str] = None


class NpmDownloads(UpstreamModel):
    total: Optional[int] = None
    monthly: Optional[int] = None
    weekly: Optional[int] = None


class NpmSearchPackage(UpstreamModel):
    name: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None
    author: Optional[Union[NpmPerson, str]] = None
    publisher: Optional[NpmPerson] = None
    license: Optional[Union[str, Dict[str, Any]]] = None
    links: Optional[NpmLinks] = None
    repository: Optional[Union[NpmRepository, str]] = None
    homepage: Optional[str] = None
    keywords: Optional[List[Any]] = None
    date: Optional[str] = None
    downloads: Optional[NpmDownloads] = None
    dependencies: Optional[Dict[str, str]] = None


class NpmSearchObject(UpstreamModel):
    package: Optional[NpmSearchPackage] = None
    downloads: Optional[NpmDownloads] = None


class NpmVersionManifest(UpstreamModel):
    """One entry of a package document's ``versions`` map.

    Dependency blocks are kept loose; consumers coerce them to name -> range.
    """

    name: Optional[str] = None
    version: Optional[str] = None
    dependencies: Any = None
    dev_dependencies: Any = Field(None, alias="devDependencies")
    peer_dependencies: Any = Field(None, alias="peerDependencies")
    optional_dependencies: Any = Field(None, alias="optionalDependencies")


class NpmPackageDocument(UpstreamModel):
    name: Optional[str] = None
    dist_tags: Optional[Dict[str, Any]] = Field(None, alias="dist-tags")
    versions: Optional[Dict[str, Any]] = None


def _author_name(pkg: NpmSearchPackage) -> Optional[str]:
    if isinstance(pkg.author, str):
        return pkg.author or None
    if pkg.author and pkg.author.name:
        return pkg.author.name
    if pkg.publisher:
        return pkg.publisher.username
    return None


def _license_name(value: Union[str, Dict[str, Any], None]) -> Optional[str]:
    if isinstance(value, dict):
        return value.get("type")
    return value


def _repository_url(pkg: NpmSearchPackage) -> Optional[str]:
    if pkg.links and pkg.links.repository:
        return pkg.links.repository
    if isinstance(pkg.repository, str):
        return pkg.repository
    if pkg.repository:
        return pkg.repository.url
    return None


def _download_count(obj: NpmSearchObject) -> int:
    pkg_downloads = obj.package.downloads if obj.package else None
    if pkg_downloads and pkg_downloads.total:
        return pkg_downloads.total
    # Newer search responses report downloads next to the package
    if obj.downloads:
        return obj.downloads.total or obj.downloads.monthly or 0
    return 0


def package_document_url(package_name: str) -> str:
    """Full metadata document URL for a package (scoped names encoded)."""
    return f"{NPM_REGISTRY_URL}/{quote(package_name, safe='')}"


class NpmRegistryProvider(BaseRegistryProvider):
    """Search packages on registry.npmjs.org."""

    kind = RegistryKind.NPM
    label = "npm"

    def search_params(self, query: str, limit: int) -> Dict[str, Any]:
        return {"text": query, "size": limit}

    def parse_results(self, data: Any) -> Tuple[List[PackageSummary], Optional[int]]:
        data = data if isinstance(data, dict) else {}
        info = self.info
        packages = []

        for obj in parse_items(data.get("objects"), NpmSearchObject):
            pkg = obj.package
            if pkg is None or not pkg.name:
                continue
            packages.append(PackageSummary(
                name=pkg.name,
                version=pkg.version,
                description=pkg.description,
                author=_author_name(pkg),
                license=_license_name(pkg.license),
                repository=_repository_url(pkg),
                homepage=(pkg.links.npm if pkg.links and pkg.links.npm else pkg.homepage),
                keywords=clean_keywords(pkg.keywords),
                registry=self.kind,
                registry_url=info.package_url(pkg.name),
                published_at=pkg.date,
                downloads=_download_count(obj),
                dependencies=pkg.dependencies,
            ))

        return packages, data.get("total")

    async def get_package_document(self, package_name: str) -> Dict[str, Any]:
        """Fetch the full registry metadata document for a package.

        Raises:
            RegistryError: Propagated from fetch_json().
        """
        data = await fetch_json(
            package_document_url(package_name),
            timeout=self.timeout,
            label="Package fetch",
        )
        return data if isinstance(data, dict) else {}
