# loader.py
from __future__ import annotations

import runpy
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Optional

from .builder import build
from .constants import SCRIPTS_FILE


def find_scripts_file(cwd: str | Path = ".") -> Optional[Path]:
    """Return <cwd>/package-scripts.py if it exists."""
    candidate = Path(cwd) / SCRIPTS_FILE
    if candidate.is_file():
        return candidate
    return None


def load_package_scripts(path: str | Path, *, self_build: Optional[bool] = None) -> Dict[str, Any]:
    """
    Load a package-scripts file and build its tree.

    The file must define one of:
      - scripts(ctx) -> dict   (called with a ScriptContext)
      - scripts = {...}
      - SCRIPTS = {...}

    It may also set SELF_BUILD = True, which is how this package's own
    package-scripts file asks for unprefixed binaries. An explicit
    `self_build` argument takes precedence over SELF_BUILD.

    Returns:
      The merged {"scripts": ..., "options": ...} tree
    """
    scripts_path = Path(path).expanduser().resolve()
    if not scripts_path.exists():
        raise FileNotFoundError(f"Package scripts file not found: {scripts_path}")
    if scripts_path.suffix != ".py":
        raise ValueError(f"Package scripts must be a .py file, got: {scripts_path.name}")

    module_name = f"unified_scripts_{scripts_path.stem.replace('-', '_')}"
    globals_dict = runpy.run_path(str(scripts_path), run_name=module_name)

    if "scripts" in globals_dict:
        user_input = globals_dict["scripts"]
    else:
        user_input = globals_dict.get("SCRIPTS")

    if user_input is not None and not (callable(user_input) or isinstance(user_input, Mapping)):
        raise TypeError(
            "Package scripts must define `scripts` as a function taking the "
            "context, or as a dict. Got: " + type(user_input).__name__
        )

    if self_build is None:
        self_build = bool(globals_dict.get("SELF_BUILD", False))
    return build(user_input, self_build=self_build)
