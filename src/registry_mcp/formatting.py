"""Human-readable rendering of result models.

Presentation only: these functions never fetch or mutate anything. The
server always returns their output next to the structured payload.
"""

from typing import Iterable, List

from .models.cdn import CDNImport, CDNInfo, CDNSearchResult
from .models.command import CommandResult
from .models.dependency import (
    DependencyAnalysis,
    DependencyNode,
    DependencyTree,
    PeerDependencyInfo,
)
from .models.package import RegistryDetection, SearchOutcome
from .models.security import BundleSizeInfo, VulnerabilityResult
from .registries.detector import RegistryInfo

REGISTRY_EMOJI = {
    "npm": "📦",
    "jsr": "📚",
    "deno": "🦕",
    "unknown": "❓",
}

CDN_EMOJI = {
    "unpkg": "📦",
    "jsdelivr": "⚡",
    "cdnjs": "☁️",
    "skypack": "🚀",
    "esm.sh": "✨",
    "deno.land": "🦕",
    "jsr.io": "📚",
}

SEVERITY_EMOJI = {
    "critical": "🔴",
    "high": "🟠",
    "moderate": "🟡",
    "low": "🟢",
}

SIZE_UNITS = ["B", "KB", "MB", "GB"]


def _value(enum_or_str) -> str:
    return getattr(enum_or_str, "value", enum_or_str)


def format_size(num_bytes: int) -> str:
    """Base-1024 size with two decimals, e.g. ``1.00 KB``."""
    if not num_bytes or num_bytes <= 0:
        return "0 B"
    value = float(num_bytes)
    unit = 0
    while value >= 1024 and unit < len(SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{value:.2f} {SIZE_UNITS[unit]}"


def format_search_result(result: SearchOutcome) -> str:
    registry = _value(result.registry)
    if result.error:
        return f"❌ Error searching {registry}: {result.error}"

    emoji = REGISTRY_EMOJI.get(registry, "📦")
    lines = [f"{emoji} **{registry.upper()}** Results", f'Query: "{result.query}"']
    if result.total is not None:
        lines.append(f"Total: {result.total} packages")
    lines.append("")

    for index, pkg in enumerate(result.packages, start=1):
        header = f"**{index}. {pkg.name}**"
        if pkg.version:
            header += f" @{pkg.version}"
        lines.append(header)
        if pkg.description:
            lines.append(f"   {pkg.description}")
        if pkg.registry_url:
            lines.append(f"   🔗 {pkg.registry_url}")
        if pkg.downloads:
            lines.append(f"   📥 {pkg.downloads:,} downloads")
        lines.append("")

    return "\n".join(lines)


def format_search_results(results: Iterable[SearchOutcome]) -> str:
    return "\n\n".join(format_search_result(r) for r in results)


def _format_cdn_import(imp: CDNImport) -> List[str]:
    provider = _value(imp.provider)
    kind = imp.type.upper() + (" (minified)" if imp.minified else "")
    lines = [
        f"{CDN_EMOJI.get(provider, '🌐')} **{provider}**",
        f"   URL: `{imp.url}`",
        f"   Type: {kind}",
    ]
    if imp.description:
        lines.append(f"   {imp.description}")
    return lines


def format_cdn_imports(info: CDNInfo) -> str:
    lines = [f"🌐 **CDN Imports for {info.package_name}**"]
    if info.version:
        lines.append(f"Version: {info.version}")
    lines.append(f"Registry: {_value(info.registry)}")
    lines.append("")

    if info.recommended:
        lines.append("⭐ **Recommended:**")
        lines.extend(_format_cdn_import(info.recommended))
        lines.append("")

    lines.append("📋 **All Available CDN Imports:**")
    lines.append("")
    for index, imp in enumerate(info.imports, start=1):
        first, *rest = _format_cdn_import(imp)
        lines.append(f"{index}. {first}")
        lines.extend(rest)

    return "\n".join(lines)


def format_cdn_search_result(result: CDNSearchResult) -> str:
    provider = _value(result.provider)
    emoji = CDN_EMOJI.get(provider, "🌐")
    if result.error:
        return f"❌ Error searching {provider}: {result.error}"

    lines = [f"{emoji} **{provider}** Results", f'Query: "{result.query}"']
    if result.total is not None:
        lines.append(f"Total: {result.total} packages")
    lines.append("")
    for index, pkg in enumerate(result.packages, start=1):
        lines.append(f"**{index}. {pkg.name}** @{pkg.version}")
        if pkg.description:
            lines.append(f"   {pkg.description}")
        lines.append(f"   🔗 {pkg.url}")
        lines.append("")
    return "\n".join(lines)


def format_cdn_search_results(results: Iterable[CDNSearchResult]) -> str:
    return "\n\n".join(format_cdn_search_result(r) for r in results)


def format_bundle_size(info: BundleSizeInfo) -> str:
    if info.error:
        return f"❌ Error: {info.error}"

    lines = [f"📦 **Bundle Size for {info.package}**"]
    if info.version:
        lines.append(f"Version: {info.version}")
    lines.append("")
    lines.append(f"Minified: {format_size(info.size.minified)}")
    lines.append(f"Gzipped: {format_size(info.size.minified_gzipped)}")
    if info.size.minified_brotli:
        lines.append(f"Brotli: {format_size(info.size.minified_brotli)}")
    return "\n".join(lines)


def format_vulnerabilities(result: VulnerabilityResult) -> str:
    lines = [
        f"🔒 **Security Check for {result.package_name}**",
        f"Registry: {_value(result.registry)}",
        "",
    ]

    if result.error:
        lines.append(f"⚠️ {result.error}")
        return "\n".join(lines)

    summary = result.summary
    if summary.total == 0:
        lines.append("✅ No known vulnerabilities found!")
        return "\n".join(lines)

    lines.extend([
        f"⚠️ **Found {summary.total} vulnerability/vulnerabilities:**",
        f"   🔴 Critical: {summary.critical}",
        f"   🟠 High: {summary.high}",
        f"   🟡 Moderate: {summary.moderate}",
        f"   🟢 Low: {summary.low}",
        "",
    ])

    if result.vulnerabilities:
        lines.append("**Details:**")
        lines.append("")
        for index, vuln in enumerate(result.vulnerabilities, start=1):
            lines.append(f"{index}. {SEVERITY_EMOJI.get(vuln.severity, '⚪')} **{vuln.title}**")
            lines.append(f"   Package: {vuln.package}")
            if vuln.affected_versions:
                lines.append(f"   Affected: {vuln.affected_versions}")
            if vuln.patched_versions:
                lines.append(f"   Patched: {vuln.patched_versions}")
            if vuln.url:
                lines.append(f"   🔗 {vuln.url}")
            lines.append("")

    return "\n".join(lines)


def format_command(result: CommandResult) -> str:
    if not result.success:
        return f"❌ {result.message}: {result.error}"
    emoji = REGISTRY_EMOJI.get(result.registry, "📦")
    return f"{emoji} {result.message}\n\n```sh\n{result.command}\n```"


def _format_mapping(title: str, mapping) -> List[str]:
    if not mapping:
        return []
    lines = [f"**{title}** ({len(mapping)}):"]
    lines.extend(f"   • {name}: {version}" for name, version in mapping.items())
    return lines


def _format_nodes(title: str, nodes: List[DependencyNode]) -> List[str]:
    if not nodes:
        return []
    return _format_mapping(title, {node.name: node.version for node in nodes})


def format_dependency_tree(result: DependencyTree) -> str:
    tree = result.tree
    lines = [
        f"🌳 **Dependencies of {tree.name}@{tree.version}**",
        f"Registry: {_value(result.registry)}",
        "",
    ]
    if result.error:
        lines.append(f"❌ Error: {result.error}")
        return "\n".join(lines)

    sections = (
        _format_nodes("Dependencies", tree.dependencies)
        + _format_nodes("Dev dependencies", tree.dev_dependencies)
        + _format_mapping("Peer dependencies", tree.peer_dependencies)
        + _format_mapping("Optional dependencies", tree.optional_dependencies)
    )
    lines.extend(sections or ["No dependencies declared."])
    return "\n".join(lines)


def format_peer_dependencies(result: PeerDependencyInfo) -> str:
    lines = [
        f"🤝 **Peer Dependencies for {result.package}**",
        f"Registry: {_value(result.registry)}",
        "",
    ]
    if result.error:
        lines.append(f"❌ Error: {result.error}")
    elif result.peer_dependencies:
        lines.extend(_format_mapping("Peer dependencies", result.peer_dependencies))
    else:
        lines.append("No peer dependencies.")
    return "\n".join(lines)


def format_dependency_analysis(result: DependencyAnalysis) -> str:
    lines = [
        f"📊 **Dependency Analysis for {result.package}**",
        f"Registry: {_value(result.registry)}",
        "",
    ]
    if result.error:
        lines.append(f"❌ Error: {result.error}")
        return "\n".join(lines)

    lines.extend([
        f"Direct: {result.direct_dependencies}",
        f"Dev: {result.dev_dependencies}",
        f"Peer: {result.peer_dependencies}",
        f"Optional: {result.optional_dependencies}",
        f"Total (first level): {result.total_dependencies}",
    ])
    return "\n".join(lines)


def format_registry_detection(result: RegistryDetection) -> str:
    registry = _value(result.registry)
    return f"{REGISTRY_EMOJI.get(registry, '📦')} {result.package_name} → {registry}"


def format_registry_info(info: RegistryInfo) -> str:
    lines = [f"**{info.name}**"]
    if info.url:
        lines.append(f"URL: {info.url}")
    if info.search_url:
        lines.append(f"Search API: {info.search_url}")
    if info.package_url_template:
        lines.append(f"Package page: {info.package_url_template}")
    return "\n".join(lines)
