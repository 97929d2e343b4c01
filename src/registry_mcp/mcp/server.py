"""MCP server exposing the registry tools."""

import asyncio
import json
import logging
import uuid
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server
from pydantic import ValidationError

from .. import formatting
from ..cdn.imports import generate_cdn_imports
from ..cdn.search import CDNSearchManager
from ..clients.exceptions import ToolError
from ..clients.http_client import close_http_client
from ..config import Settings, get_settings
from ..inspection.bundle_size import BundleSizeInspector
from ..inspection.dependencies import DependencyInspector
from ..inspection.vulnerabilities import VulnerabilityChecker
from ..models.base import RegistryKind
from ..models.command import InstallOptions, RemoveOptions, UpdateOptions
from ..models.package import RegistryDetection
from ..observability.logging import clear_log_context, configure_logging, set_log_context
from ..package_manager import commands
from ..registries.detector import detect_registry, get_registry_info
from ..registries.manager import SearchManager
from .tools import DEFAULT_LIMIT, MAX_LIMIT, TOOL_DEFINITIONS

logger = logging.getLogger(__name__)

ToolOutput = Tuple[str, Any]
ToolHandler = Callable[[Dict[str, Any]], Awaitable[ToolOutput]]


def _payload(value: Any) -> Any:
    if isinstance(value, list):
        return [_payload(v) for v in value]
    return value.to_payload()


class RegistryMCPServer:
    """Registry tools served over the MCP low-level server.

    Every tool produces a formatted text rendering and the raw structured
    record; both are returned together.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.default_registry: Optional[RegistryKind] = self.settings.default_registry

        timeout = self.settings.http_timeout
        self.search_manager = SearchManager(timeout=timeout)
        self.cdn_search = CDNSearchManager(timeout=timeout)
        self.dependencies = DependencyInspector(timeout=timeout)
        self.vulnerabilities = VulnerabilityChecker(timeout=timeout)
        self.bundle_size = BundleSizeInspector(timeout=self.settings.bundle_size_timeout)

        self.server = Server("registry-mcp")
        self._handlers: Dict[str, ToolHandler] = {
            "search_packages": self._search_packages,
            "search_all_registries": self._search_all_registries,
            "search_npm": self._search_npm,
            "search_jsr": self._search_jsr,
            "search_deno": self._search_deno,
            "detect_registry": self._detect_registry,
            "get_registry_info": self._get_registry_info,
            "check_bundle_size": self._check_bundle_size,
            "check_vuln": self._check_vuln,
            "install": self._install,
            "remove": self._remove,
            "update": self._update,
            "check_outdated": self._check_outdated,
            "peer_deps": self._peer_deps,
            "dependency_tree": self._dependency_tree,
            "analyze_dependency": self._analyze_dependency,
            "ci": self._ci,
            "get_cdn_imports": self._get_cdn_imports,
            "search_cdn": self._search_cdn,
        }
        self._setup_handlers()

    def _setup_handlers(self):
        """Set up MCP protocol handlers."""

        @self.server.list_tools()
        async def handle_list_tools() -> List[types.Tool]:
            return TOOL_DEFINITIONS

        @self.server.call_tool()
        async def handle_call_tool(
            name: str, arguments: Optional[Dict[str, Any]] = None
        ) -> Tuple[List[types.TextContent], Dict[str, Any]]:
            """Handle tool calls.

            Raising here makes the SDK return an error envelope whose text is
            the exception message.
            """
            text, payload = await self.call_tool(name, arguments or {})
            return (
                [
                    types.TextContent(type="text", text=text),
                    types.TextContent(type="text", text=json.dumps(payload, indent=2)),
                ],
                {"result": payload},
            )

    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> ToolOutput:
        """Run a tool and return (formatted text, structured payload).

        Raises:
            ToolError: With an ``Error: <message>`` text for unknown tools,
                invalid arguments or unexpected failures.
        """
        set_log_context(tool_name=name, request_id=uuid.uuid4().hex[:8])
        try:
            handler = self._handlers.get(name)
            if handler is None:
                raise ToolError(f"Unknown tool: {name}")

            logger.info(f"Tool call: {name}")
            return await handler(arguments)
        except ToolError as e:
            logger.warning(f"Tool call rejected: {e}")
            raise ToolError(f"Error: {e}") from e
        except ValidationError as e:
            logger.warning(f"Invalid arguments for {name}: {e}")
            raise ToolError(f"Error: Invalid arguments: {e.error_count()} validation error(s)") from e
        except Exception as e:
            logger.error(f"Tool execution failed: {name} - {str(e)}", exc_info=True)
            raise ToolError(f"Error: {e}") from e
        finally:
            clear_log_context()

    # ------------------------------------------------------------------
    # Argument helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _require(arguments: Dict[str, Any], key: str) -> str:
        value = arguments.get(key)
        if not isinstance(value, str) or not value.strip():
            raise ToolError(f"Missing required argument: {key}")
        return value.strip()

    @staticmethod
    def _limit(arguments: Dict[str, Any]) -> int:
        raw = arguments.get("limit")
        if raw is None:
            return DEFAULT_LIMIT
        try:
            limit = int(raw)
        except (TypeError, ValueError):
            raise ToolError(f"Invalid limit: {raw!r}") from None
        return min(max(limit, 1), MAX_LIMIT)

    def _registry(self, arguments: Dict[str, Any]) -> Optional[str]:
        """Explicit registry argument, else the configured default, else None."""
        registry = arguments.get("registry") or self.default_registry
        if isinstance(registry, RegistryKind):
            return registry.value
        return registry

    # ------------------------------------------------------------------
    # Tool handler implementations
    # ------------------------------------------------------------------

    async def _search_packages(self, arguments: Dict[str, Any]) -> ToolOutput:
        result = await self.search_manager.search(
            self._require(arguments, "query"),
            self._limit(arguments),
            registry=self.default_registry,
        )
        return formatting.format_search_result(result), result.to_payload()

    async def _search_all_registries(self, arguments: Dict[str, Any]) -> ToolOutput:
        results = await self.search_manager.search_all(
            self._require(arguments, "query"), self._limit(arguments)
        )
        return formatting.format_search_results(results), _payload(results)

    async def _search_single(self, kind: RegistryKind, arguments: Dict[str, Any]) -> ToolOutput:
        result = await self.search_manager.search_registry(
            kind, self._require(arguments, "query"), self._limit(arguments)
        )
        return formatting.format_search_result(result), result.to_payload()

    async def _search_npm(self, arguments: Dict[str, Any]) -> ToolOutput:
        return await self._search_single(RegistryKind.NPM, arguments)

    async def _search_jsr(self, arguments: Dict[str, Any]) -> ToolOutput:
        return await self._search_single(RegistryKind.JSR, arguments)

    async def _search_deno(self, arguments: Dict[str, Any]) -> ToolOutput:
        return await self._search_single(RegistryKind.DENO, arguments)

    async def _detect_registry(self, arguments: Dict[str, Any]) -> ToolOutput:
        package_name = self._require(arguments, "packageName")
        result = RegistryDetection(
            package_name=package_name, registry=detect_registry(package_name)
        )
        return formatting.format_registry_detection(result), result.to_payload()

    async def _get_registry_info(self, arguments: Dict[str, Any]) -> ToolOutput:
        registry = self._require(arguments, "registry")
        if RegistryKind.parse(registry) is None:
            raise ToolError(f"Unknown registry: {registry}")
        info = get_registry_info(registry)
        return formatting.format_registry_info(info), info.to_payload()

    async def _check_bundle_size(self, arguments: Dict[str, Any]) -> ToolOutput:
        result = await self.bundle_size.get_bundle_size(
            self._require(arguments, "packageName"),
            arguments.get("version"),
            self._registry(arguments),
        )
        return formatting.format_bundle_size(result), result.to_payload()

    async def _check_vuln(self, arguments: Dict[str, Any]) -> ToolOutput:
        result = await self.vulnerabilities.check_vulnerabilities(
            self._require(arguments, "packageName"), self._registry(arguments)
        )
        return formatting.format_vulnerabilities(result), result.to_payload()

    async def _install(self, arguments: Dict[str, Any]) -> ToolOutput:
        options = InstallOptions(
            package_name=self._require(arguments, "packageName"),
            version=arguments.get("version"),
            dev=bool(arguments.get("dev", False)),
            registry=self._registry(arguments),
            workspace=arguments.get("workspace"),
        )
        result = commands.get_install_command(options)
        return formatting.format_command(result), result.to_payload()

    async def _remove(self, arguments: Dict[str, Any]) -> ToolOutput:
        options = RemoveOptions(
            package_name=self._require(arguments, "packageName"),
            registry=self._registry(arguments),
            workspace=arguments.get("workspace"),
        )
        result = commands.get_remove_command(options)
        return formatting.format_command(result), result.to_payload()

    async def _update(self, arguments: Dict[str, Any]) -> ToolOutput:
        options = UpdateOptions(
            package_name=arguments.get("packageName") or None,
            registry=self._registry(arguments),
            latest=bool(arguments.get("latest", False)),
            workspace=arguments.get("workspace"),
        )
        result = commands.get_update_command(options)
        return formatting.format_command(result), result.to_payload()

    async def _check_outdated(self, arguments: Dict[str, Any]) -> ToolOutput:
        result = commands.get_outdated_command(
            self._registry(arguments), arguments.get("workspace")
        )
        return formatting.format_command(result), result.to_payload()

    async def _ci(self, arguments: Dict[str, Any]) -> ToolOutput:
        result = commands.get_ci_command(
            self._registry(arguments), arguments.get("workspace")
        )
        return formatting.format_command(result), result.to_payload()

    async def _peer_deps(self, arguments: Dict[str, Any]) -> ToolOutput:
        result = await self.dependencies.get_peer_dependencies(
            self._require(arguments, "packageName"), self._registry(arguments)
        )
        return formatting.format_peer_dependencies(result), result.to_payload()

    async def _dependency_tree(self, arguments: Dict[str, Any]) -> ToolOutput:
        result = await self.dependencies.get_dependency_tree(
            self._require(arguments, "packageName"),
            arguments.get("version"),
            self._registry(arguments),
        )
        return formatting.format_dependency_tree(result), result.to_payload()

    async def _analyze_dependency(self, arguments: Dict[str, Any]) -> ToolOutput:
        result = await self.dependencies.analyze_dependencies(
            self._require(arguments, "packageName"), self._registry(arguments)
        )
        return formatting.format_dependency_analysis(result), result.to_payload()

    async def _get_cdn_imports(self, arguments: Dict[str, Any]) -> ToolOutput:
        result = generate_cdn_imports(
            self._require(arguments, "packageName"),
            arguments.get("version"),
            self._registry(arguments),
        )
        return formatting.format_cdn_imports(result), result.to_payload()

    async def _search_cdn(self, arguments: Dict[str, Any]) -> ToolOutput:
        query = self._require(arguments, "query")
        limit = self._limit(arguments)
        provider = (arguments.get("provider") or "all").strip().lower()

        if provider == "all":
            results = await self.cdn_search.search_all(query, limit)
            return formatting.format_cdn_search_results(results), _payload(results)

        try:
            searcher = self.cdn_search.get_searcher(provider)
        except ValueError as e:
            raise ToolError(str(e)) from e
        result = await searcher.search(query, limit)
        return formatting.format_cdn_search_result(result), result.to_payload()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def run_stdio(self):
        """Serve over stdin/stdout until the client disconnects."""
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )


async def serve(settings: Optional[Settings] = None):
    server = RegistryMCPServer(settings)
    default = server.default_registry.value if server.default_registry else "auto-detect"
    logger.info(f"Starting registry MCP server (default registry: {default})")
    try:
        await server.run_stdio()
    finally:
        await close_http_client()


def main():
    """Console entry point for the stdio server."""
    settings = get_settings()
    configure_logging(
        environment=settings.environment,
        log_level=settings.get_log_level(),
    )
    asyncio.run(serve(settings))


if __name__ == "__main__":
    main()
