"""Test npm, JSR and Deno search providers."""

import logging

import httpx
import pytest

from registry_mcp.clients.exceptions import RegistryNotFoundError
from registry_mcp.models.base import RegistryKind
from registry_mcp.registries.deno_provider import DenoRegistryProvider
from registry_mcp.registries.jsr_provider import JsrRegistryProvider, split_jsr_name
from registry_mcp.registries.npm_provider import NpmRegistryProvider, package_document_url

pytestmark = pytest.mark.asyncio


NPM_SEARCH_RESPONSE = {
    "objects": [
        {
            "package": {
                "name": "lodash",
                "version": "4.17.21",
                "description": "Lodash modular utilities.",
                "author": {"name": "John-David Dalton"},
                "license": "MIT",
                "links": {
                    "npm": "https://www.npmjs.com/package/lodash",
                    "repository": "https://github.com/lodash/lodash",
                },
                "keywords": ["modules", "stdlib", "util"],
                "date": "2021-02-20T15:42:16.891Z",
            },
            "downloads": {"monthly": 250000000, "weekly": 60000000},
        },
        {
            "package": {
                "name": "lodash-es",
                "version": "4.17.21",
                "publisher": {"username": "jdalton"},
                "license": {"type": "MIT"},
                "repository": {"type": "git", "url": "git+https://github.com/lodash/lodash.git"},
                "downloads": {"total": 42},
            },
        },
        {"package": {"description": "no name, skipped"}},
        "not-an-object",
    ],
    "total": 1234,
}


class TestNpmRegistryProvider:
    """Test NpmRegistryProvider class."""

    async def test_search_maps_fields(self, mock_http):
        requests = mock_http(lambda request: httpx.Response(200, json=NPM_SEARCH_RESPONSE))

        result = await NpmRegistryProvider().search("lodash", 5)

        assert result.error is None
        assert result.registry == RegistryKind.NPM
        assert result.total == 1234
        assert [p.name for p in result.packages] == ["lodash", "lodash-es"]

        first = result.packages[0]
        assert first.version == "4.17.21"
        assert first.author == "John-David Dalton"
        assert first.license == "MIT"
        assert first.repository == "https://github.com/lodash/lodash"
        assert first.homepage == "https://www.npmjs.com/package/lodash"
        assert first.registry_url == "https://www.npmjs.com/package/lodash"
        assert first.keywords == ["modules", "stdlib", "util"]
        assert first.downloads == 250000000

        second = result.packages[1]
        assert second.author == "jdalton"
        assert second.license == "MIT"
        assert second.repository == "git+https://github.com/lodash/lodash.git"
        assert second.downloads == 42

        request = requests[0]
        assert request.url.host == "registry.npmjs.org"
        assert request.url.params["text"] == "lodash"
        assert request.url.params["size"] == "5"

    async def test_query_is_url_encoded(self, mock_http):
        requests = mock_http(lambda request: httpx.Response(200, json={"objects": []}))

        await NpmRegistryProvider().search("react hooks&more", 20)

        assert requests[0].url.params["text"] == "react hooks&more"

    async def test_non_2xx_is_captured(self, mock_http):
        mock_http(lambda request: httpx.Response(503, text="down"))

        result = await NpmRegistryProvider().search("lodash")

        assert result.packages == []
        assert result.total is None
        assert result.error == "npm search failed: Service Unavailable"

    async def test_failure_is_logged(self, mock_http, caplog):
        mock_http(lambda request: httpx.Response(503))

        with caplog.at_level(logging.WARNING, logger="registry_mcp.registries.base"):
            await NpmRegistryProvider().search("lodash")

        assert "npm search failed for 'lodash': npm search failed: Service Unavailable" in caplog.messages

    async def test_transport_error_is_captured(self, mock_http):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        mock_http(handler)

        result = await NpmRegistryProvider().search("lodash")

        assert result.packages == []
        assert "connection refused" in result.error

    async def test_timeout_is_captured(self, mock_http):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        mock_http(handler)

        result = await NpmRegistryProvider(timeout=2).search("lodash")

        assert result.error == "npm search timed out after 2 seconds"

    async def test_invalid_json_is_captured(self, mock_http):
        mock_http(lambda request: httpx.Response(200, text="<html>"))

        result = await NpmRegistryProvider().search("lodash")

        assert result.error == "npm search returned invalid JSON"

    async def test_missing_package_document_raises_not_found(self, route_http):
        route_http({})

        with pytest.raises(RegistryNotFoundError) as exc_info:
            await NpmRegistryProvider().get_package_document("no-such-pkg")

        assert exc_info.value.status_code == 404
        assert str(exc_info.value) == "Package fetch failed: Not Found"
        assert "Not found" in exc_info.value.response_body
        assert not hasattr(exc_info.value, "registry")

    async def test_package_document_url_encodes_scope(self):
        assert package_document_url("@types/node") == "https://registry.npmjs.org/%40types%2Fnode"


class TestJsrRegistryProvider:
    """Test JsrRegistryProvider class."""

    async def test_search_maps_fields(self, mock_http):
        body = {
            "items": [
                {
                    "scope": "std",
                    "name": "path",
                    "description": "Path utilities",
                    "latestVersion": "1.0.8",
                    "updatedAt": "2024-11-01T00:00:00Z",
                },
                {"description": "missing name"},
            ],
            "total": 1,
        }
        requests = mock_http(lambda request: httpx.Response(200, json=body))

        result = await JsrRegistryProvider().search("path", 10)

        assert result.error is None
        assert len(result.packages) == 1
        pkg = result.packages[0]
        assert pkg.name == "@std/path"
        assert pkg.version == "1.0.8"
        assert pkg.registry == RegistryKind.JSR
        assert pkg.registry_url == "https://jsr.io/@std/path"
        assert pkg.published_at == "2024-11-01T00:00:00Z"
        assert requests[0].url.params["q"] == "path"
        assert requests[0].url.params["limit"] == "10"

    async def test_non_2xx_is_captured(self, mock_http):
        mock_http(lambda request: httpx.Response(500))

        result = await JsrRegistryProvider().search("path")

        assert result.packages == []
        assert "Internal Server Error" in result.error

    async def test_split_jsr_name(self):
        assert split_jsr_name("@std/path") == ("std", "path")
        assert split_jsr_name("jsr:@std/fs") == ("std", "fs")


class TestDenoRegistryProvider:
    """Test DenoRegistryProvider class."""

    async def test_search_maps_fields(self, mock_http):
        body = {
            "data": [
                {
                    "name": "oak",
                    "description": "A middleware framework",
                    "latestVersion": "v12.6.1",
                    "owner": "oakserver",
                    "starCount": 5000,
                }
            ],
            "total": 1,
        }
        requests = mock_http(lambda request: httpx.Response(200, json=body))

        result = await DenoRegistryProvider().search("oak", 3)

        pkg = result.packages[0]
        assert pkg.name == "oak"
        assert pkg.version == "v12.6.1"
        assert pkg.author == "oakserver"
        assert pkg.downloads == 5000
        assert pkg.registry_url == "https://deno.land/x/oak"
        assert requests[0].url.params["query"] == "oak"
        assert requests[0].url.params["limit"] == "3"

    async def test_transport_error_is_captured(self, mock_http):
        def handler(request):
            raise httpx.ConnectError("dns failure", request=request)

        mock_http(handler)

        result = await DenoRegistryProvider().search("oak")

        assert result.registry == RegistryKind.DENO
        assert result.packages == []
        assert "dns failure" in result.error
