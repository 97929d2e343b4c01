"""CDN import URL generation.

Pure string templating; no CDN is contacted.
"""

from typing import Any, List, NamedTuple, Optional

from ..models.base import RegistryKind
from ..models.cdn import CDNImport, CDNInfo, CDNProvider
from ..registries.detector import resolve_registry


class ImportTemplate(NamedTuple):
    provider: CDNProvider
    url: str
    type: str
    minified: bool
    description: str


# Fixed order: unpkg x3, jsdelivr x3, skypack x2, esm.sh x2
NPM_TEMPLATES: List[ImportTemplate] = [
    ImportTemplate(CDNProvider.UNPKG, "https://unpkg.com/{pkg}", "esm", False,
                   "Fast, global CDN for npm packages"),
    ImportTemplate(CDNProvider.UNPKG, "https://unpkg.com/{pkg}?module", "esm", False,
                   "ESM module from unpkg"),
    ImportTemplate(CDNProvider.UNPKG, "https://unpkg.com/{pkg}/dist/index.min.js", "umd", True,
                   "Minified UMD bundle from unpkg"),
    ImportTemplate(CDNProvider.JSDELIVR, "https://cdn.jsdelivr.net/npm/{pkg}", "esm", False,
                   "Fast, reliable CDN with npm support"),
    ImportTemplate(CDNProvider.JSDELIVR, "https://cdn.jsdelivr.net/npm/{pkg}/+esm", "esm", False,
                   "ESM module from jsDelivr"),
    ImportTemplate(CDNProvider.JSDELIVR, "https://cdn.jsdelivr.net/npm/{pkg}/dist/index.min.js", "umd", True,
                   "Minified bundle from jsDelivr"),
    ImportTemplate(CDNProvider.SKYPACK, "https://cdn.skypack.dev/{pkg}", "esm", True,
                   "Optimized ESM packages with automatic bundling"),
    ImportTemplate(CDNProvider.SKYPACK, "https://cdn.skypack.dev/pin/{pkg}", "esm", True,
                   "Pinned version from Skypack (stable)"),
    ImportTemplate(CDNProvider.ESM_SH, "https://esm.sh/{pkg}", "esm", True,
                   "Fast ESM CDN with TypeScript support"),
    ImportTemplate(CDNProvider.ESM_SH, "https://esm.sh/{pkg}?bundle", "esm", True,
                   "Bundled ESM from esm.sh"),
]

JSR_TEMPLATES: List[ImportTemplate] = [
    ImportTemplate(CDNProvider.JSR_IO, "https://jsr.io/{path}@{ver}", "esm", False,
                   "Direct JSR CDN import"),
    ImportTemplate(CDNProvider.ESM_SH, "https://esm.sh/jsr/{path}@{ver}", "esm", True,
                   "JSR package via esm.sh"),
]


def _render(template: ImportTemplate, **values: str) -> CDNImport:
    return CDNImport(
        provider=template.provider,
        url=template.url.format(**values),
        type=template.type,
        minified=template.minified,
        description=template.description,
    )


def _recommend(kind: RegistryKind, imports: List[CDNImport]) -> Optional[CDNImport]:
    if kind in (RegistryKind.NPM, RegistryKind.UNKNOWN):
        preferred = (CDNProvider.SKYPACK, CDNProvider.ESM_SH)
    elif kind == RegistryKind.JSR:
        preferred = (CDNProvider.JSR_IO,)
    else:
        preferred = (CDNProvider.DENO_LAND,)

    for imp in imports:
        if imp.provider in preferred:
            return imp
    return imports[0] if imports else None


def generate_cdn_imports(
    package_name: str,
    version: Optional[str] = None,
    registry: Any = None,
) -> CDNInfo:
    """Build the CDN import URLs for a package plus a recommended pick."""
    kind = resolve_registry(package_name, registry)
    ver = version or "latest"
    imports: List[CDNImport] = []

    if kind in (RegistryKind.NPM, RegistryKind.UNKNOWN):
        pkg = f"{package_name}@{version}" if version else package_name
        imports = [_render(t, pkg=pkg) for t in NPM_TEMPLATES]

    elif kind == RegistryKind.JSR:
        path = package_name[1:] if package_name.startswith("@") else package_name
        imports = [_render(t, path=path, ver=ver) for t in JSR_TEMPLATES]

    elif kind == RegistryKind.DENO:
        if package_name.startswith("https://deno.land"):
            imports.append(CDNImport(
                provider=CDNProvider.DENO_LAND,
                url=package_name,
                type="esm",
                minified=False,
                description="Direct Deno.land import",
            ))
        imports.append(CDNImport(
            provider=CDNProvider.ESM_SH,
            url=f"https://esm.sh/{package_name}",
            type="esm",
            minified=True,
            description="Deno package via esm.sh",
        ))

    return CDNInfo(
        package_name=package_name,
        version=ver,
        registry=kind,
        imports=imports,
        recommended=_recommend(kind, imports),
    )
