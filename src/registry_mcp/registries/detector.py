"""Registry auto-detection and the static registry catalog."""

from typing import Any, Dict, Optional

from pydantic import BaseModel

from ..models.base import RegistryKind


def detect_registry(package_name: Optional[str]) -> RegistryKind:
    """Guess which registry a package name belongs to.

    Rules are checked in order and the first match wins:

    1. ``@scope/name`` (exactly one slash) -> jsr
    2. contains ``deno.land`` or ``nest.land``, or is an http(s) URL -> deno
    3. ``jsr:`` prefix -> jsr
    4. ``npm:`` prefix -> npm
    5. anything else -> npm

    Scoped npm packages such as ``@types/node`` also match rule 1 and are
    reported as jsr. Callers that know better pass an explicit registry.
    """
    name = package_name or ""

    if name.startswith("@") and "/" in name:
        parts = name.split("/")
        if len(parts) == 2 and parts[0].startswith("@"):
            return RegistryKind.JSR

    if (
        "deno.land" in name
        or "nest.land" in name
        or name.startswith("https://")
        or name.startswith("http://")
    ):
        return RegistryKind.DENO

    if name.startswith("jsr:"):
        return RegistryKind.JSR

    if name.startswith("npm:"):
        return RegistryKind.NPM

    return RegistryKind.NPM


def resolve_registry(
    package_name: Optional[str],
    registry: Any = None,
) -> RegistryKind:
    """Explicit registry if it parses, otherwise the detected one."""
    return RegistryKind.parse(registry) or detect_registry(package_name)


class RegistryInfo(BaseModel):
    """Endpoint metadata for one registry."""

    name: str
    url: str
    search_url: str
    package_url_template: str = ""

    def package_url(self, name: str) -> str:
        """Registry page for a package; empty when the registry has none."""
        if not self.package_url_template:
            return ""
        return self.package_url_template.format(name=name)

    def to_payload(self) -> Dict[str, str]:
        return {
            "name": self.name,
            "url": self.url,
            "searchUrl": self.search_url,
            "packageUrlTemplate": self.package_url_template,
        }


REGISTRY_CATALOG: Dict[RegistryKind, RegistryInfo] = {
    RegistryKind.NPM: RegistryInfo(
        name="npm",
        url="https://www.npmjs.com",
        search_url="https://registry.npmjs.org/-/v1/search",
        package_url_template="https://www.npmjs.com/package/{name}",
    ),
    RegistryKind.JSR: RegistryInfo(
        name="JSR",
        url="https://jsr.io",
        search_url="https://jsr.io/api/packages",
        package_url_template="https://jsr.io/{name}",
    ),
    RegistryKind.DENO: RegistryInfo(
        name="Deno",
        url="https://deno.land",
        search_url="https://api.deno.com/v2/modules",
        package_url_template="https://deno.land/x/{name}",
    ),
    RegistryKind.UNKNOWN: RegistryInfo(
        name="Unknown",
        url="",
        search_url="",
    ),
}


def get_registry_info(registry: Any) -> RegistryInfo:
    """Look up catalog metadata; unrecognised values map to the unknown entry."""
    kind = RegistryKind.parse(registry) or RegistryKind.UNKNOWN
    return REGISTRY_CATALOG[kind]
