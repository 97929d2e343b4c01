"""Normalized package search models."""

from typing import Dict, List, Optional

from pydantic import Field

from .base import RegistryKind, ResultModel


class PackageSummary(ResultModel):
    """One package as returned by a registry search."""

    name: str = Field(..., description="Package name, unique within one result set")
    version: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    license: Optional[str] = None
    repository: Optional[str] = None
    homepage: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    registry: RegistryKind
    registry_url: Optional[str] = Field(None, description="Registry package page")
    published_at: Optional[str] = None
    downloads: Optional[int] = Field(None, description="Download or star count")
    dependencies: Optional[Dict[str, str]] = None


class SearchOutcome(ResultModel):
    """Result of one registry search.

    Packages keep the upstream relevance order. When ``error`` is set the
    package list is empty and ``total`` is unset.
    """

    query: str
    registry: RegistryKind
    packages: List[PackageSummary] = Field(default_factory=list)
    total: Optional[int] = None
    error: Optional[str] = None


class RegistryDetection(ResultModel):
    """Result of registry auto-detection for a package name."""

    package_name: str
    registry: RegistryKind
