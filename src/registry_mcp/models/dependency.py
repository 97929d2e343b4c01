"""Dependency inspection models."""

from typing import Dict, List, Optional

from pydantic import Field

from .base import RegistryKind, ResultModel


class DependencyNode(ResultModel):
    """A package and its first-level dependencies.

    Nested nodes in ``dependencies`` and ``dev_dependencies`` are leaves
    carrying only name and version range; nothing below them is fetched.
    """

    name: str
    version: str
    dependencies: Optional[List["DependencyNode"]] = None
    dev_dependencies: Optional[List["DependencyNode"]] = None
    peer_dependencies: Optional[Dict[str, str]] = None
    optional_dependencies: Optional[Dict[str, str]] = None


class DependencyTree(ResultModel):
    """Dependency tree lookup result."""

    root: str
    registry: RegistryKind
    tree: DependencyNode
    error: Optional[str] = None


class PeerDependencyInfo(ResultModel):
    """Peer dependencies of the latest version of a package."""

    package: str
    registry: RegistryKind
    peer_dependencies: Dict[str, str] = Field(default_factory=dict)
    error: Optional[str] = None


class LargestDependency(ResultModel):
    name: str
    size: int


class DependencyAnalysis(ResultModel):
    """First-level dependency counts.

    ``total_dependencies`` is the sum of the four first-level counts,
    not a transitive count.
    """

    package: str
    registry: RegistryKind
    total_dependencies: int = 0
    direct_dependencies: int = 0
    dev_dependencies: int = 0
    peer_dependencies: int = 0
    optional_dependencies: int = 0
    has_vulnerabilities: bool = False
    largest_dependencies: List[LargestDependency] = Field(default_factory=list)
    error: Optional[str] = None


DependencyNode.model_rebuild()
