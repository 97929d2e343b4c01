"""Vulnerability and bundle size models."""

from typing import Any, List, Literal, Optional

from pydantic import Field, field_validator

from .base import RegistryKind, ResultModel

Severity = Literal["low", "moderate", "high", "critical"]


def map_severity(severity: Any) -> Severity:
    """Normalize an upstream severity label; unrecognised labels become low."""
    s = str(severity or "").lower()
    if s in ("critical", "crit"):
        return "critical"
    if s == "high":
        return "high"
    if s in ("moderate", "mod", "medium"):
        return "moderate"
    return "low"


class Vulnerability(ResultModel):
    """A single advisory affecting a package."""

    id: str
    package: str
    title: str
    severity: Severity
    description: Optional[str] = None
    affected_versions: Optional[str] = None
    patched_versions: Optional[str] = None
    url: Optional[str] = None

    @field_validator("severity", mode="before")
    @classmethod
    def normalize_severity(cls, v):
        return map_severity(v)


class VulnerabilitySummary(ResultModel):
    """Severity-bucketed counts."""

    total: int = 0
    critical: int = 0
    high: int = 0
    moderate: int = 0
    low: int = 0

    @classmethod
    def from_findings(cls, findings: List[Vulnerability]) -> "VulnerabilitySummary":
        counts = {"critical": 0, "high": 0, "moderate": 0, "low": 0}
        for finding in findings:
            counts[finding.severity] += 1
        return cls(total=len(findings), **counts)


class VulnerabilityResult(ResultModel):
    package_name: str
    registry: RegistryKind
    vulnerabilities: List[Vulnerability] = Field(default_factory=list)
    summary: VulnerabilitySummary = Field(default_factory=VulnerabilitySummary)
    error: Optional[str] = None


class BundleSize(ResultModel):
    """Byte counts reported by the bundle-size service."""

    minified: int = 0
    minified_gzipped: int = 0
    minified_brotli: Optional[int] = None


class BundleSizeInfo(ResultModel):
    package: str
    version: str
    registry: RegistryKind
    size: BundleSize = Field(default_factory=BundleSize)
    error: Optional[str] = None
