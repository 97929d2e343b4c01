"""Test CDN import generation and CDN search."""

from unittest.mock import AsyncMock

import httpx
import pytest

from registry_mcp.cdn.imports import generate_cdn_imports
from registry_mcp.cdn.search import CDNSearchManager, SEARCHABLE_PROVIDERS
from registry_mcp.models.base import RegistryKind
from registry_mcp.models.cdn import CDNProvider


class TestGenerateCdnImports:
    """Test generate_cdn_imports function."""

    def test_npm_emits_ten_entries_in_order(self):
        info = generate_cdn_imports("lodash", "4.17.21")

        assert info.registry == RegistryKind.NPM
        assert info.version == "4.17.21"
        assert [i.provider for i in info.imports] == (
            [CDNProvider.UNPKG] * 3
            + [CDNProvider.JSDELIVR] * 3
            + [CDNProvider.SKYPACK] * 2
            + [CDNProvider.ESM_SH] * 2
        )
        assert info.imports[0].url == "https://unpkg.com/lodash@4.17.21"
        assert info.imports[4].url == "https://cdn.jsdelivr.net/npm/lodash@4.17.21/+esm"
        assert info.imports[9].url == "https://esm.sh/lodash@4.17.21?bundle"

    def test_npm_recommends_skypack(self):
        info = generate_cdn_imports("lodash")

        assert info.version == "latest"
        assert info.recommended.provider == CDNProvider.SKYPACK
        assert info.recommended.url == "https://cdn.skypack.dev/lodash"

    def test_jsr_strips_leading_at(self):
        info = generate_cdn_imports("@std/path", "1.0.8")

        assert info.registry == RegistryKind.JSR
        assert [i.url for i in info.imports] == [
            "https://jsr.io/std/path@1.0.8",
            "https://esm.sh/jsr/std/path@1.0.8",
        ]
        assert info.recommended.provider == CDNProvider.JSR_IO

    def test_deno_url_is_kept_verbatim(self):
        url = "https://deno.land/x/oak@v12.6.1/mod.ts"
        info = generate_cdn_imports(url)

        assert info.registry == RegistryKind.DENO
        assert info.imports[0].provider == CDNProvider.DENO_LAND
        assert info.imports[0].url == url
        assert info.imports[1].provider == CDNProvider.ESM_SH
        assert info.recommended.provider == CDNProvider.DENO_LAND

    def test_deno_name_falls_back_to_first_entry(self):
        info = generate_cdn_imports("oak", registry="deno")

        assert len(info.imports) == 1
        assert info.recommended == info.imports[0]

    def test_payload_is_camel_case(self):
        payload = generate_cdn_imports("lodash").to_payload()
        assert payload["packageName"] == "lodash"
        assert payload["recommended"]["provider"] == "skypack"


NPM_SEARCH = {
    "objects": [{"package": {"name": "react", "version": "18.3.1", "description": "UI"}}],
    "total": 1,
}


@pytest.mark.asyncio
class TestCDNSearchManager:
    """Test CDNSearchManager class."""

    async def test_cdnjs_search(self, mock_http):
        body = {
            "results": [{"name": "react", "latest": "18.3.1", "description": "UI"}],
            "total": 1,
        }
        requests = mock_http(lambda request: httpx.Response(200, json=body))

        result = await CDNSearchManager().search("cdnjs", "react", 5)

        assert result.error is None
        assert result.packages[0].url == "https://cdnjs.cloudflare.com/ajax/libs/react/18.3.1/"
        assert requests[0].url.params["search"] == "react"
        assert requests[0].url.params["limit"] == "5"

    async def test_npm_proxy_search_builds_provider_urls(self, mock_http):
        mock_http(lambda request: httpx.Response(200, json=NPM_SEARCH))
        manager = CDNSearchManager()

        unpkg = await manager.search("unpkg", "react")
        esm = await manager.search("esm.sh", "react")

        assert unpkg.provider == CDNProvider.UNPKG
        assert unpkg.packages[0].url == "https://unpkg.com/react@18.3.1"
        assert esm.packages[0].url == "https://esm.sh/react@18.3.1"

    async def test_search_all_returns_five_with_isolation(self, mock_http):
        def handler(request):
            if request.url.host == "api.cdnjs.com":
                return httpx.Response(500)
            return httpx.Response(200, json=NPM_SEARCH)

        mock_http(handler)

        results = await CDNSearchManager().search_all("react")

        assert [r.provider for r in results] == SEARCHABLE_PROVIDERS
        assert results[0].error == "CDNJS search failed: Internal Server Error"
        assert all(r.error is None for r in results[1:])

    async def test_search_all_survives_unexpected_exception(self):
        manager = CDNSearchManager()
        manager.searchers[CDNProvider.SKYPACK].search = AsyncMock(side_effect=RuntimeError("boom"))
        for provider in SEARCHABLE_PROVIDERS:
            if provider != CDNProvider.SKYPACK:
                manager.searchers[provider].fetch = AsyncMock(return_value=([], 0))

        results = await manager.search_all("react")

        assert len(results) == 5
        assert results[3].provider == CDNProvider.SKYPACK
        assert results[3].error == "boom"

    async def test_unsupported_provider(self):
        with pytest.raises(ValueError, match="not supported"):
            CDNSearchManager().get_searcher("deno.land")

    async def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unknown CDN provider"):
            CDNSearchManager().get_searcher("fastly")
