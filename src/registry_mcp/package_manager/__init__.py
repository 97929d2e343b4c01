"""Install/remove/update/ci/outdated command synthesis."""

from .commands import (
    DENO_CI_COMMAND,
    get_ci_command,
    get_install_command,
    get_outdated_command,
    get_remove_command,
    get_update_command,
)

__all__ = [
    "DENO_CI_COMMAND",
    "get_ci_command",
    "get_install_command",
    "get_outdated_command",
    "get_remove_command",
    "get_update_command",
]
