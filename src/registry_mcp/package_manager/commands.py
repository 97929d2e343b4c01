"""Package manager command synthesis.

Every function returns the literal shell command a user would run. Nothing
is executed and no shell is inspected.
"""

import logging
from typing import Optional, Union

from ..models.base import RegistryKind
from ..models.command import CommandResult, InstallOptions, RemoveOptions, UpdateOptions
from ..registries.detector import detect_registry

logger = logging.getLogger(__name__)

DENO_CI_COMMAND = "deno cache --reload deps.ts || deno cache --reload import_map.json"

RegistryArg = Union[RegistryKind, str, None]


class UnsupportedRegistryError(ValueError):
    pass


def _normalize(registry: RegistryArg) -> str:
    if isinstance(registry, RegistryKind):
        return registry.value
    return str(registry).strip().lower()


def _resolve(registry: RegistryArg, package_name: Optional[str], auto_detect: bool) -> str:
    if registry:
        return _normalize(registry)
    if package_name and auto_detect:
        return detect_registry(package_name).value
    return RegistryKind.NPM.value


def _in_workspace(command: str, workspace: Optional[str]) -> str:
    if workspace:
        return f"cd {workspace} && {command}"
    return command


def _build(verb: str, registry: str, workspace: Optional[str], render) -> CommandResult:
    try:
        command = _in_workspace(render(), workspace)
    except UnsupportedRegistryError as e:
        logger.debug(f"{verb} command rejected: {e}")
        return CommandResult(
            success=False,
            message=f"Failed to generate {verb.lower()} command",
            registry=registry,
            error=str(e),
        )
    return CommandResult(
        success=True,
        message=f"{verb} command generated for {registry}",
        registry=registry,
        command=command,
    )


def _unsupported(registry: str) -> UnsupportedRegistryError:
    return UnsupportedRegistryError(f"Unsupported registry: {registry}")


def get_install_command(options: InstallOptions, auto_detect: bool = True) -> CommandResult:
    """``npm install`` for npm, ``deno add`` for JSR and Deno.

    The ``--dev`` flag is only emitted for JSR; the Deno path ignores it.
    """
    registry = _resolve(options.registry, options.package_name, auto_detect)
    version = f"@{options.version}" if options.version else ""

    def render() -> str:
        if registry in ("npm", "unknown"):
            flag = " --save-dev" if options.dev else " --save"
            return f"npm install {options.package_name}{version}{flag}"
        if registry == "jsr":
            command = f"deno add {options.package_name}{version}"
            return f"{command} --dev" if options.dev else command
        if registry == "deno":
            return f"deno add {options.package_name}{version}"
        raise _unsupported(registry)

    return _build("Install", registry, options.workspace, render)


def get_remove_command(options: RemoveOptions, auto_detect: bool = True) -> CommandResult:
    registry = _resolve(options.registry, options.package_name, auto_detect)

    def render() -> str:
        if registry in ("npm", "unknown"):
            return f"npm uninstall {options.package_name}"
        if registry in ("jsr", "deno"):
            return f"deno remove {options.package_name}"
        raise _unsupported(registry)

    return _build("Remove", registry, options.workspace, render)


def get_update_command(options: Optional[UpdateOptions] = None, auto_detect: bool = True) -> CommandResult:
    """Update one package or all of them.

    Detection only runs when a package name is given. ``--latest`` is only
    emitted on the npm path.
    """
    options = options or UpdateOptions()
    registry = _resolve(options.registry, options.package_name, auto_detect)

    def render() -> str:
        if registry in ("npm", "unknown"):
            latest = " --latest" if options.latest else ""
            if options.package_name:
                return f"npm update {options.package_name}{latest}"
            return f"npm update{latest}"
        if registry in ("jsr", "deno"):
            if options.package_name:
                return f"deno update {options.package_name}"
            return "deno update"
        raise _unsupported(registry)

    return _build("Update", registry, options.workspace, render)


def get_ci_command(registry: RegistryArg = None, workspace: Optional[str] = None) -> CommandResult:
    reg = _resolve(registry, None, False)

    def render() -> str:
        if reg in ("npm", "unknown"):
            return "npm ci"
        if reg in ("jsr", "deno"):
            return DENO_CI_COMMAND
        raise _unsupported(reg)

    return _build("CI", reg, workspace, render)


def get_outdated_command(registry: RegistryArg = None, workspace: Optional[str] = None) -> CommandResult:
    reg = _resolve(registry, None, False)

    def render() -> str:
        if reg in ("npm", "unknown"):
            return "npm outdated --json"
        if reg in ("jsr", "deno"):
            return "deno outdated --json"
        raise _unsupported(reg)

    return _build("Outdated", reg, workspace, render)
