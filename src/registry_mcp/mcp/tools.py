"""Tool definitions exposed over MCP."""

from typing import Any, Dict, List

from mcp import types

REGISTRY_VALUES = ["npm", "jsr", "deno"]
CDN_SEARCH_VALUES = ["all", "cdnjs", "unpkg", "jsdelivr", "skypack", "esm.sh"]

DEFAULT_LIMIT = 20
MAX_LIMIT = 250


def _string(description: str, **extra: Any) -> Dict[str, Any]:
    return {"type": "string", "description": description, **extra}


def _limit(description: str = "Maximum number of results (default: 20)") -> Dict[str, Any]:
    return {
        "type": "integer",
        "minimum": 1,
        "maximum": MAX_LIMIT,
        "default": DEFAULT_LIMIT,
        "description": description,
    }


def _registry(description: str = "Registry (auto-detected when omitted)") -> Dict[str, Any]:
    return _string(description, enum=REGISTRY_VALUES + ["unknown"])


PACKAGE_NAME = _string("Package name, e.g. lodash or @std/path")
VERSION = _string("Package version (latest when omitted)")
WORKSPACE = _string("Directory to run the command in")
QUERY = _string("Package name or search query")


def _tool(name: str, description: str, properties: Dict[str, Any], required: List[str] = ()) -> types.Tool:
    schema: Dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = list(required)
    return types.Tool(name=name, description=description, inputSchema=schema)


TOOL_DEFINITIONS: List[types.Tool] = [
    _tool(
        "search_packages",
        "Search for packages across npm, JSR, and Deno registries. "
        "Auto-detects the appropriate registry based on the query.",
        {"query": QUERY, "limit": _limit()},
        ["query"],
    ),
    _tool(
        "search_all_registries",
        "Search across all registries (npm, JSR, Deno) simultaneously and return combined results.",
        {"query": QUERY, "limit": _limit("Maximum number of results per registry (default: 20)")},
        ["query"],
    ),
    _tool(
        "search_npm",
        "Search the npm registry specifically.",
        {"query": QUERY, "limit": _limit()},
        ["query"],
    ),
    _tool(
        "search_jsr",
        "Search the JSR (JavaScript Registry) specifically.",
        {"query": QUERY, "limit": _limit()},
        ["query"],
    ),
    _tool(
        "search_deno",
        "Search the Deno registry specifically.",
        {"query": QUERY, "limit": _limit()},
        ["query"],
    ),
    _tool(
        "detect_registry",
        "Detect which registry a package name belongs to (npm, jsr, deno, or unknown).",
        {"packageName": _string("Package name to detect registry for")},
        ["packageName"],
    ),
    _tool(
        "get_registry_info",
        "Get metadata about a registry including URLs and search endpoints.",
        {"registry": _string("Registry type", enum=REGISTRY_VALUES + ["unknown"])},
        ["registry"],
    ),
    _tool(
        "check_bundle_size",
        "Get minified, gzipped and brotli bundle sizes for an npm package.",
        {"packageName": PACKAGE_NAME, "version": VERSION, "registry": _registry()},
        ["packageName"],
    ),
    _tool(
        "check_vuln",
        "Check a package for known vulnerabilities.",
        {"packageName": PACKAGE_NAME, "registry": _registry()},
        ["packageName"],
    ),
    _tool(
        "install",
        "Generate the command that installs a package with the right package manager.",
        {
            "packageName": PACKAGE_NAME,
            "version": VERSION,
            "dev": {"type": "boolean", "description": "Install as a dev dependency", "default": False},
            "registry": _registry(),
            "workspace": WORKSPACE,
        },
        ["packageName"],
    ),
    _tool(
        "remove",
        "Generate the command that removes a package.",
        {"packageName": PACKAGE_NAME, "registry": _registry(), "workspace": WORKSPACE},
        ["packageName"],
    ),
    _tool(
        "update",
        "Generate the command that updates one package, or all packages when none is given.",
        {
            "packageName": _string("Package to update (all when omitted)"),
            "registry": _registry(),
            "latest": {"type": "boolean", "description": "Update to the latest version", "default": False},
            "workspace": WORKSPACE,
        },
    ),
    _tool(
        "check_outdated",
        "Generate the command that lists outdated dependencies.",
        {"registry": _registry("Registry (default: npm)"), "workspace": WORKSPACE},
    ),
    _tool(
        "peer_deps",
        "Get the peer dependencies of a package.",
        {"packageName": PACKAGE_NAME, "registry": _registry()},
        ["packageName"],
    ),
    _tool(
        "dependency_tree",
        "Get the direct, dev, peer and optional dependencies of a package version.",
        {"packageName": PACKAGE_NAME, "version": VERSION, "registry": _registry()},
        ["packageName"],
    ),
    _tool(
        "analyze_dependency",
        "Count a package's first-level dependencies by kind.",
        {"packageName": PACKAGE_NAME, "registry": _registry()},
        ["packageName"],
    ),
    _tool(
        "ci",
        "Generate the clean-install command used in CI.",
        {"registry": _registry("Registry (default: npm)"), "workspace": WORKSPACE},
    ),
    _tool(
        "get_cdn_imports",
        "Generate CDN import URLs (unpkg, jsDelivr, Skypack, esm.sh, jsr.io, deno.land) for a package.",
        {"packageName": PACKAGE_NAME, "version": VERSION, "registry": _registry()},
        ["packageName"],
    ),
    _tool(
        "search_cdn",
        "Search packages on CDN providers.",
        {
            "query": QUERY,
            "provider": _string("CDN provider (default: all)", enum=CDN_SEARCH_VALUES, default="all"),
            "limit": _limit(),
        },
        ["query"],
    ),
]

TOOL_NAMES = [tool.name for tool in TOOL_DEFINITIONS]
