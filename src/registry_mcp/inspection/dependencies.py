"""First-level dependency inspection.

Only the requested package's own manifest is read. Nothing is resolved
recursively, so every count here is a first-level count.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from ..clients.exceptions import RegistryError, RegistryNotFoundError
from ..models.base import RegistryKind
from ..models.dependency import (
    DependencyAnalysis,
    DependencyNode,
    DependencyTree,
    PeerDependencyInfo,
)
from ..registries.base import DEFAULT_TIMEOUT
from ..registries.detector import resolve_registry
from ..registries.jsr_provider import JsrRegistryProvider, split_jsr_name
from ..registries.npm_provider import (
    NpmPackageDocument,
    NpmRegistryProvider,
    NpmVersionManifest,
)

logger = logging.getLogger(__name__)

NPM_LIKE = (RegistryKind.NPM, RegistryKind.UNKNOWN)


def _mapping(value: Any) -> Dict[str, str]:
    """Coerce a manifest dependency block to a name -> range mapping."""
    if not isinstance(value, dict):
        return {}
    return {str(k): str(v) for k, v in value.items()}


def _leaves(value: Any) -> Optional[List[DependencyNode]]:
    deps = _mapping(value)
    if not deps:
        return None
    return [DependencyNode(name=name, version=ver) for name, ver in deps.items()]


def select_version(
    document: Any, version: Optional[str] = None
) -> Tuple[str, NpmVersionManifest]:
    """Pick a version manifest from an npm package document.

    Uses the requested version, else the ``latest`` dist-tag, else the last
    published version key.

    Raises:
        RegistryNotFoundError: If the document has no such version.
        RegistryError: If the document or manifest has the wrong shape.
    """
    try:
        doc = NpmPackageDocument.model_validate(document)
    except ValidationError as e:
        raise RegistryError(
            f"Invalid package document: {e.error_count()} validation error(s)"
        ) from e

    versions = doc.versions or {}
    latest = (doc.dist_tags or {}).get("latest")
    selected = version or (latest if isinstance(latest, str) else None)
    if not selected and versions:
        selected = list(versions)[-1]

    raw = versions.get(selected) if selected else None
    if not isinstance(raw, dict):
        raise RegistryNotFoundError(
            f"Version {selected or 'latest'} not found for {doc.name or 'package'}"
        )
    try:
        return selected, NpmVersionManifest.model_validate(raw)
    except ValidationError as e:
        raise RegistryError(
            f"Invalid manifest for version {selected}: {e.error_count()} validation error(s)"
        ) from e


class DependencyInspector:
    """Reads dependency blocks from registry metadata."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        self.npm = NpmRegistryProvider(timeout=timeout)
        self.jsr = JsrRegistryProvider(timeout=timeout)

    async def get_dependency_tree(
        self,
        package_name: str,
        version: Optional[str] = None,
        registry: Any = None,
    ) -> DependencyTree:
        """Return the package's first-level dependency node.

        On failure, or for registries without a metadata API, the node still
        reports the requested name and ``version or "unknown"``.
        """
        kind = resolve_registry(package_name, registry)
        if kind not in NPM_LIKE:
            return DependencyTree(
                root=package_name,
                registry=kind,
                tree=DependencyNode(name=package_name, version=version or "unknown"),
                error=f"Dependency tree not fully supported for {kind.value}",
            )

        try:
            document = await self.npm.get_package_document(package_name)
            selected, manifest = select_version(document, version)
        except RegistryError as e:
            logger.warning(f"Dependency tree failed for {package_name}: {e}")
            return DependencyTree(
                root=package_name,
                registry=RegistryKind.NPM,
                tree=DependencyNode(name=package_name, version=version or "unknown"),
                error=str(e),
            )

        peer = _mapping(manifest.peer_dependencies)
        optional = _mapping(manifest.optional_dependencies)
        tree = DependencyNode(
            name=manifest.name or package_name,
            version=manifest.version or selected,
            dependencies=_leaves(manifest.dependencies),
            dev_dependencies=_leaves(manifest.dev_dependencies),
            peer_dependencies=peer or None,
            optional_dependencies=optional or None,
        )
        return DependencyTree(root=package_name, registry=RegistryKind.NPM, tree=tree)

    async def get_peer_dependencies(
        self,
        package_name: str,
        registry: Any = None,
    ) -> PeerDependencyInfo:
        """Peer dependencies of the latest version.

        JSR needs two lookups (package, then its latest version); if either
        fails the mapping is empty.
        """
        kind = resolve_registry(package_name, registry)

        try:
            if kind in NPM_LIKE:
                document = await self.npm.get_package_document(package_name)
                _, manifest = select_version(document)
                return PeerDependencyInfo(
                    package=package_name,
                    registry=RegistryKind.NPM,
                    peer_dependencies=_mapping(manifest.peer_dependencies),
                )

            if kind == RegistryKind.JSR:
                scope, name = split_jsr_name(package_name)
                summary = await self.jsr.get_package(scope, name)
                latest = summary.get("latestVersion")
                if latest:
                    try:
                        version_data = await self.jsr.get_package_version(scope, name, latest)
                    except RegistryError as e:
                        logger.debug(f"JSR version lookup failed for {package_name}: {e}")
                    else:
                        return PeerDependencyInfo(
                            package=package_name,
                            registry=kind,
                            peer_dependencies=_mapping(version_data.get("peerDependencies")),
                        )
        except RegistryError as e:
            logger.warning(f"Peer dependency lookup failed for {package_name}: {e}")
            return PeerDependencyInfo(package=package_name, registry=kind, error=str(e))

        return PeerDependencyInfo(package=package_name, registry=kind)

    async def analyze_dependencies(
        self,
        package_name: str,
        registry: Any = None,
    ) -> DependencyAnalysis:
        """Count first-level dependencies by kind (npm only)."""
        kind = resolve_registry(package_name, registry)
        if kind not in NPM_LIKE:
            return DependencyAnalysis(
                package=package_name,
                registry=kind,
                error=f"Dependency analysis not fully supported for {kind.value}",
            )

        try:
            document = await self.npm.get_package_document(package_name)
            _, manifest = select_version(document)
        except RegistryError as e:
            logger.warning(f"Dependency analysis failed for {package_name}: {e}")
            return DependencyAnalysis(
                package=package_name, registry=RegistryKind.NPM, error=str(e)
            )

        direct = len(_mapping(manifest.dependencies))
        dev = len(_mapping(manifest.dev_dependencies))
        peer = len(_mapping(manifest.peer_dependencies))
        optional = len(_mapping(manifest.optional_dependencies))

        return DependencyAnalysis(
            package=package_name,
            registry=RegistryKind.NPM,
            total_dependencies=direct + dev + peer + optional,
            direct_dependencies=direct,
            dev_dependencies=dev,
            peer_dependencies=peer,
            optional_dependencies=optional,
        )
