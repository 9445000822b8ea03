# constants.py
# Path, extension and tool-name configuration consumed by the script builder.
# Paths can be overridden from the environment so a consumer package with a
# non-standard layout does not need to pass anything in code.

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Tuple


def _extensions_from_env(default: Tuple[str, ...]) -> Tuple[str, ...]:
    raw = os.environ.get("UNIFIED_EXTENSIONS")
    if not raw:
        return default
    exts = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        exts.append(part if part.startswith(".") else f".{part}")
    return tuple(exts) or default


SRC_DIR = "src"
OUT_DIR = "dist"
EXTENSIONS_WITH_DOT = (".ts", ".tsx", ".js", ".jsx", ".json")

# Task runner used to re-enter user-defined hooks by name.
TASK_RUNNER = "nps"

# Process runner the Concurrent combinator renders into.
CONCURRENTLY_BIN = "concurrently"

DEFAULT_LOG_LEVEL = "warn"

# File looked up in the working directory by the CLI.
SCRIPTS_FILE = "package-scripts.py"


@dataclass(frozen=True)
class Tools:
    """Logical names of the external binaries the generated scripts invoke."""
    linter: str = "eslint"
    test_runner: str = "jest"
    transpiler: str = "babel"
    type_checker: str = "ttsc"
    deps_checker: str = "npm-check"
    deleter: str = "del"
    versioner: str = "standard-version"


@dataclass(frozen=True)
class Paths:
    """
    Opaque path configuration for a package.

    src_dir / out_dir are passed through to the tools as-is; extensions
    always carry their leading dot. Fields left unset are read from the
    environment when the instance is created.
    """
    src_dir: str = field(default_factory=lambda: os.environ.get("UNIFIED_SRC_DIR", SRC_DIR))
    out_dir: str = field(default_factory=lambda: os.environ.get("UNIFIED_OUT_DIR", OUT_DIR))
    extensions: Tuple[str, ...] = field(default_factory=lambda: _extensions_from_env(EXTENSIONS_WITH_DOT))

    @property
    def lint_extensions(self) -> str:
        # eslint does not lint JSON sources
        return ",".join(e for e in self.extensions if e != ".json")
