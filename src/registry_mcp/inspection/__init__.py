"""Per-package inspection: dependencies, vulnerabilities, bundle size."""

from .bundle_size import BundleSizeInspector
from .dependencies import DependencyInspector
from .vulnerabilities import VulnerabilityChecker

__all__ = ["BundleSizeInspector", "DependencyInspector", "VulnerabilityChecker"]
