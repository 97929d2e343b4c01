"""CDN import and CDN search models."""

import enum
from typing import List, Literal, Optional

from pydantic import Field

from .base import RegistryKind, ResultModel


class CDNProvider(str, enum.Enum):
    """Content delivery networks that serve importable packages."""

    UNPKG = "unpkg"
    JSDELIVR = "jsdelivr"
    CDNJS = "cdnjs"
    SKYPACK = "skypack"
    ESM_SH = "esm.sh"
    DENO_LAND = "deno.land"
    JSR_IO = "jsr.io"


ModuleFormat = Literal["esm", "umd", "cjs", "iife"]


class CDNImport(ResultModel):
    """A ready-to-use import URL on one CDN."""

    provider: CDNProvider
    url: str
    type: ModuleFormat
    minified: bool = False
    description: str = ""


class CDNInfo(ResultModel):
    package_name: str
    version: Optional[str] = None
    registry: RegistryKind
    imports: List[CDNImport] = Field(default_factory=list)
    recommended: Optional[CDNImport] = None


class CDNPackage(ResultModel):
    name: str
    version: str
    description: Optional[str] = None
    url: str


class CDNSearchResult(ResultModel):
    """Search result for one CDN provider."""

    provider: CDNProvider
    query: str
    packages: List[CDNPackage] = Field(default_factory=list)
    total: Optional[int] = None
    error: Optional[str] = None
