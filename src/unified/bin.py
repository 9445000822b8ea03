# bin.py
# Binary name resolution.
#
# Downstream packages invoke tools through namespaced aliases installed
# alongside this package ("unified.eslint", "unified.jest", ...). The
# package's own package-scripts file invokes the plain binaries instead,
# since the aliases point back at itself.

from __future__ import annotations

from typing import Callable

BIN_PREFIX = "unified"


def resolve_bin(name: str, *, self_build: bool = False) -> str:
    """
    Return the executable name to use for `name`.

    Args:
        name: Logical tool name (e.g. "eslint")
        self_build: True when the scripts are being generated for this
            package itself rather than for a consumer

    Returns:
        `name` unchanged for a self-build, otherwise "unified.<name>"
    """
    if self_build:
        return name
    return f"{BIN_PREFIX}.{name}"


def make_resolver(self_build: bool = False) -> Callable[[str], str]:
    """Bind resolve_bin to one invocation context."""
    def resolve(name: str) -> str:
        return resolve_bin(name, self_build=self_build)

    return resolve
