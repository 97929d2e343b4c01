"""Test dependency, vulnerability and bundle size inspection."""

import asyncio

import httpx
import pytest

from registry_mcp.clients.exceptions import RegistryError, RegistryNotFoundError
from registry_mcp.inspection.bundle_size import BundleSizeInspector
from registry_mcp.inspection.dependencies import DependencyInspector, select_version
from registry_mcp.inspection.vulnerabilities import VulnerabilityChecker
from registry_mcp.models.base import RegistryKind

pytestmark = pytest.mark.asyncio


REACT_DOM_DOCUMENT = {
    "name": "react-dom",
    "dist-tags": {"latest": "18.3.1"},
    "versions": {
        "18.2.0": {
            "name": "react-dom",
            "version": "18.2.0",
            "dependencies": {"loose-envify": "^1.1.0"},
        },
        "18.3.1": {
            "name": "react-dom",
            "version": "18.3.1",
            "dependencies": {"loose-envify": "^1.1.0", "scheduler": "^0.23.2"},
            "devDependencies": {"jest": "^29.0.0"},
            "peerDependencies": {"react": "^18.3.1"},
            "optionalDependencies": {"fsevents": "^2.3.0"},
        },
    },
}

NPM_DOC_KEY = "registry.npmjs.org/react-dom"


class TestSelectVersion:
    """Test select_version helper."""

    async def test_latest_tag(self):
        selected, manifest = select_version(REACT_DOM_DOCUMENT)
        assert selected == "18.3.1"
        assert manifest.version == "18.3.1"
        assert manifest.peer_dependencies == {"react": "^18.3.1"}

    async def test_requested_version(self):
        selected, _ = select_version(REACT_DOM_DOCUMENT, "18.2.0")
        assert selected == "18.2.0"

    async def test_missing_version_raises(self):
        with pytest.raises(RegistryNotFoundError):
            select_version(REACT_DOM_DOCUMENT, "1.0.0")

    async def test_non_string_latest_falls_back_to_last_version(self):
        document = dict(REACT_DOM_DOCUMENT, **{"dist-tags": {"latest": ["18.2.0"]}})

        selected, _ = select_version(document)

        assert selected == "18.3.1"

    async def test_malformed_dist_tags_raises_registry_error(self):
        with pytest.raises(RegistryError, match="Invalid package document"):
            select_version({"name": "lodash", "dist-tags": "oops", "versions": {}})

    async def test_non_object_document_raises_registry_error(self):
        with pytest.raises(RegistryError, match="Invalid package document"):
            select_version(["not", "a", "document"])


class TestDependencyInspector:
    """Test DependencyInspector class."""

    async def test_dependency_tree_reads_latest(self, route_http):
        route_http({NPM_DOC_KEY: REACT_DOM_DOCUMENT})

        result = await DependencyInspector().get_dependency_tree("react-dom")

        assert result.error is None
        tree = result.tree
        assert tree.name == "react-dom"
        assert tree.version == "18.3.1"
        assert {(d.name, d.version) for d in tree.dependencies} == {
            ("loose-envify", "^1.1.0"),
            ("scheduler", "^0.23.2"),
        }
        assert [d.name for d in tree.dev_dependencies] == ["jest"]
        assert tree.peer_dependencies == {"react": "^18.3.1"}
        assert tree.optional_dependencies == {"fsevents": "^2.3.0"}

    async def test_dependency_tree_not_found_keeps_name_and_version(self, route_http):
        route_http({})

        result = await DependencyInspector().get_dependency_tree("no-such-pkg", "1.2.3")

        assert result.tree.name == "no-such-pkg"
        assert result.tree.version == "1.2.3"
        assert result.tree.dependencies is None
        assert result.error == "Package fetch failed: Not Found"

    async def test_dependency_tree_unknown_version(self, route_http):
        route_http({})

        result = await DependencyInspector().get_dependency_tree("no-such-pkg")

        assert result.tree.version == "unknown"

    async def test_dependency_tree_malformed_document(self, route_http):
        route_http({"registry.npmjs.org/lodash": {"dist-tags": "oops", "versions": {}}})

        result = await DependencyInspector().get_dependency_tree("lodash")

        assert result.tree.name == "lodash"
        assert result.tree.version == "unknown"
        assert result.error.startswith("Invalid package document")

    async def test_dependency_tree_unsupported_for_jsr(self, mock_http):
        requests = mock_http(lambda request: httpx.Response(500))

        result = await DependencyInspector().get_dependency_tree("@std/path")

        assert result.registry == RegistryKind.JSR
        assert result.error == "Dependency tree not fully supported for jsr"
        assert result.tree.name == "@std/path"
        assert requests == []

    async def test_peer_dependencies_npm(self, route_http):
        route_http({NPM_DOC_KEY: REACT_DOM_DOCUMENT})

        result = await DependencyInspector().get_peer_dependencies("react-dom")

        assert result.peer_dependencies == {"react": "^18.3.1"}
        assert result.error is None

    async def test_peer_dependencies_jsr_two_lookups(self, route_http):
        requests = route_http({
            "jsr.io/api/packages/std/path": {"latestVersion": "1.0.8"},
            "jsr.io/api/packages/std/path/1.0.8": {"peerDependencies": {"@std/fs": "^1.0.0"}},
        })

        result = await DependencyInspector().get_peer_dependencies("@std/path")

        assert result.registry == RegistryKind.JSR
        assert result.peer_dependencies == {"@std/fs": "^1.0.0"}
        assert len(requests) == 2

    async def test_peer_dependencies_jsr_version_failure_is_empty(self, route_http):
        route_http({"jsr.io/api/packages/std/path": {"latestVersion": "1.0.8"}})

        result = await DependencyInspector().get_peer_dependencies("@std/path")

        assert result.peer_dependencies == {}
        assert result.error is None

    async def test_peer_dependencies_jsr_package_failure(self, route_http):
        route_http({})

        result = await DependencyInspector().get_peer_dependencies("@std/path")

        assert result.peer_dependencies == {}
        assert "Not Found" in result.error

    async def test_analyze_dependencies_counts_first_level(self, route_http):
        route_http({NPM_DOC_KEY: REACT_DOM_DOCUMENT})

        result = await DependencyInspector().analyze_dependencies("react-dom")

        assert result.direct_dependencies == 2
        assert result.dev_dependencies == 1
        assert result.peer_dependencies == 1
        assert result.optional_dependencies == 1
        assert result.total_dependencies == 5
        assert result.has_vulnerabilities is False

    async def test_analyze_dependencies_non_string_latest(self, route_http):
        route_http({"registry.npmjs.org/lodash": {"name": "lodash", "dist-tags": {"latest": ["1"]}, "versions": {}}})

        result = await DependencyInspector().analyze_dependencies("lodash")

        assert result.total_dependencies == 0
        assert result.error == "Version latest not found for lodash"

    async def test_peer_dependencies_malformed_versions(self, route_http):
        route_http({"registry.npmjs.org/lodash": {"dist-tags": {"latest": "1.0.0"}, "versions": []}})

        result = await DependencyInspector().get_peer_dependencies("lodash")

        assert result.peer_dependencies == {}
        assert result.error.startswith("Invalid package document")

    async def test_analyze_dependencies_unsupported_for_deno(self):
        result = await DependencyInspector().analyze_dependencies("oak", registry="deno")

        assert result.total_dependencies == 0
        assert result.error == "Dependency analysis not fully supported for deno"


class TestVulnerabilityChecker:
    """Test VulnerabilityChecker class."""

    async def test_existing_npm_package_has_no_findings(self, route_http):
        route_http({NPM_DOC_KEY: REACT_DOM_DOCUMENT})

        result = await VulnerabilityChecker().check_vulnerabilities("react-dom")

        assert result.error is None
        assert result.vulnerabilities == []
        assert result.summary.total == 0

    async def test_missing_npm_package(self, route_http):
        route_http({})

        result = await VulnerabilityChecker().check_vulnerabilities("no-such-pkg")

        assert result.error == "Package not found: no-such-pkg"
        assert result.vulnerabilities == []

    async def test_jsr_is_not_fetched(self, mock_http):
        requests = mock_http(lambda request: httpx.Response(500))

        result = await VulnerabilityChecker().check_vulnerabilities("@std/path")

        assert result.registry == RegistryKind.JSR
        assert result.error is None
        assert requests == []


class TestBundleSizeInspector:
    """Test BundleSizeInspector class."""

    async def test_sizes_are_mapped(self, mock_http):
        body = {"name": "lodash", "version": "4.17.21", "size": 71515, "gzip": 25209, "brotli": 22000}
        requests = mock_http(lambda request: httpx.Response(200, json=body))

        result = await BundleSizeInspector().get_bundle_size("lodash", "4.17.21")

        assert result.error is None
        assert result.version == "4.17.21"
        assert result.size.minified == 71515
        assert result.size.minified_gzipped == 25209
        assert result.size.minified_brotli == 22000
        assert requests[0].url.params["package"] == "lodash@4.17.21"

    async def test_timeout_message(self, mock_http):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        mock_http(handler)

        result = await BundleSizeInspector().get_bundle_size("lodash")

        assert result.error == "Bundle size request timed out after 15 seconds"
        assert result.size.minified == 0

    async def test_deadline_bounds_whole_request(self, mock_http):
        async def handler(request):
            await asyncio.sleep(1)
            return httpx.Response(200, json={"size": 1})

        mock_http(handler)

        result = await BundleSizeInspector(timeout=0.05).get_bundle_size("lodash")

        assert result.error == "Bundle size request timed out after 0.05 seconds"
        assert result.size.minified == 0

    async def test_http_error(self, mock_http):
        mock_http(lambda request: httpx.Response(404))

        result = await BundleSizeInspector().get_bundle_size("no-such-pkg")

        assert result.error == "Bundle size request failed: Not Found"
        assert result.version == "unknown"

    async def test_not_available_for_jsr(self):
        result = await BundleSizeInspector().get_bundle_size("@std/path")

        assert result.registry == RegistryKind.JSR
        assert result.error == "Bundle size checking not available for JSR/Deno packages"
        assert result.size.minified == 0
