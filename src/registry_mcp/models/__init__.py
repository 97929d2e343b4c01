"""Result models for Registry MCP."""

from .base import RegistryKind, ResultModel
from .package import PackageSummary, RegistryDetection, SearchOutcome
from .dependency import (
    DependencyAnalysis,
    DependencyNode,
    DependencyTree,
    LargestDependency,
    PeerDependencyInfo,
)
from .security import (
    BundleSize,
    BundleSizeInfo,
    Vulnerability,
    VulnerabilityResult,
    VulnerabilitySummary,
)
from .cdn import CDNImport, CDNInfo, CDNPackage, CDNProvider, CDNSearchResult
from .command import (
    CommandOptions,
    CommandResult,
    InstallOptions,
    RemoveOptions,
    UpdateOptions,
)

__all__ = [
    "RegistryKind",
    "ResultModel",
    "PackageSummary",
    "RegistryDetection",
    "SearchOutcome",
    "DependencyAnalysis",
    "DependencyNode",
    "DependencyTree",
    "LargestDependency",
    "PeerDependencyInfo",
    "BundleSize",
    "BundleSizeInfo",
    "Vulnerability",
    "VulnerabilityResult",
    "VulnerabilitySummary",
    "CDNImport",
    "CDNInfo",
    "CDNPackage",
    "CDNProvider",
    "CDNSearchResult",
    "CommandOptions",
    "CommandResult",
    "InstallOptions",
    "RemoveOptions",
    "UpdateOptions",
]
