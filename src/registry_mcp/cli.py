"""Command line interface for registry search and detection."""

import asyncio
import json
from typing import Any, Awaitable

import typer

from .clients.http_client import close_http_client
from .config import get_settings
from .mcp.server import serve as serve_stdio
from .observability.logging import configure_logging
from .registries.detector import detect_registry, get_registry_info
from .registries.manager import SearchManager

app = typer.Typer(
    name="registry-mcp",
    no_args_is_help=True,
    help="Search npm, JSR and Deno registries and detect package registries.",
)

LIMIT_OPTION = typer.Option(20, "--limit", "-l", min=1, max=250, help="Maximum number of results.")


def _emit(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


async def _with_client(call: Awaitable[Any]) -> Any:
    try:
        return await call
    finally:
        await close_http_client()


def _run(call: Awaitable[Any]) -> Any:
    """Run a coroutine; any failure exits with status 1."""
    try:
        return asyncio.run(_with_client(call))
    except Exception as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)


def _manager() -> SearchManager:
    return SearchManager(timeout=get_settings().http_timeout)


@app.callback()
def main() -> None:
    settings = get_settings()
    configure_logging(environment=settings.environment, log_level=settings.get_log_level())


@app.command()
def search(query: str, limit: int = LIMIT_OPTION) -> None:
    """Auto-detect the registry and search it."""
    result = _run(_manager().search(query, limit, registry=get_settings().default_registry))
    _emit(result.to_payload())


@app.command("search-all")
def search_all(query: str, limit: int = LIMIT_OPTION) -> None:
    """Search all registries."""
    results = _run(_manager().search_all(query, limit))
    _emit([r.to_payload() for r in results])


@app.command("search-npm")
def search_npm(query: str, limit: int = LIMIT_OPTION) -> None:
    """Search npm only."""
    _emit(_run(_manager().search_registry("npm", query, limit)).to_payload())


@app.command("search-jsr")
def search_jsr(query: str, limit: int = LIMIT_OPTION) -> None:
    """Search JSR only."""
    _emit(_run(_manager().search_registry("jsr", query, limit)).to_payload())


@app.command("search-deno")
def search_deno(query: str, limit: int = LIMIT_OPTION) -> None:
    """Search Deno only."""
    _emit(_run(_manager().search_registry("deno", query, limit)).to_payload())


@app.command()
def detect(package: str) -> None:
    """Detect which registry a package belongs to."""
    registry = detect_registry(package)
    _emit({
        "package": package,
        "registry": registry.value,
        "info": get_registry_info(registry).to_payload(),
    })


@app.command()
def serve() -> None:
    """Start the MCP server on stdio."""
    asyncio.run(serve_stdio(get_settings()))


if __name__ == "__main__":
    app()
