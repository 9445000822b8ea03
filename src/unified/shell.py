# shell.py
# Shell composition helpers: build command strings that run other commands
# one after another (series) or all at once (concurrent).
#
# Nothing here executes anything. The strings are handed to an external task
# runner, which runs them through a shell.

from __future__ import annotations

import shlex
import sys
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from .constants import CONCURRENTLY_BIN, TASK_RUNNER


# ---------------------------------------------------------------------
# Series
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class Series:
    """
    Fail-fast sequence of commands.

    Steps may be None; those are optional steps that were not selected
    (e.g. a hook the user did not define) and are dropped before rendering.
    """
    steps: Tuple[Optional[str], ...]

    def present(self) -> list[str]:
        return [s for s in self.steps if s]

    def render(self) -> str:
        steps = self.present()
        if not steps:
            raise ValueError("series() needs at least one step")
        return " && ".join(steps)

    def __str__(self) -> str:
        return self.render()


def series(*steps: Optional[str]) -> str:
    """series("a", None, "b") -> "a && b" """
    return Series(tuple(steps)).render()


# ---------------------------------------------------------------------
# Concurrent
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class Concurrent:
    """Labelled commands started together; all of them must succeed."""
    commands: Tuple[Tuple[str, str], ...]
    binary: str = CONCURRENTLY_BIN

    @classmethod
    def of(cls, commands: Mapping[str, str]) -> "Concurrent":
        return cls(tuple((str(k), v) for k, v in commands.items()))

    def render(self) -> str:
        if not self.commands:
            raise ValueError("concurrent() needs at least one command")
        names = ",".join(name for name, _ in self.commands)
        flags = [
            "--kill-others-on-fail",
            '--prefix "[{name}]"',
            f'--names "{names}"',
            *(shlex.quote(cmd) for _, cmd in self.commands),
        ]
        return f"{self.binary} {' '.join(flags)}"

    def __str__(self) -> str:
        return self.render()


def concurrent(commands: Mapping[str, str]) -> str:
    """concurrent({"lint": "...", "test": "..."}) -> one concurrently call"""
    return Concurrent.of(commands).render()


# ---------------------------------------------------------------------
# Hooks
# ---------------------------------------------------------------------

def hook(name: str) -> str:
    """Command that runs the user-defined task `name` through the task runner."""
    return f"{TASK_RUNNER} {name}"


def quote(value: str) -> str:
    """Quote a single shell argument."""
    return shlex.quote(value)


# ---------------------------------------------------------------------
# File and environment helpers
# ---------------------------------------------------------------------
# Cross-platform replacements for rm -rf, mkdir -p, cp and VAR=x, each a
# binary the consumer package installs. `args` is passed through verbatim.

def rimraf(args: str) -> str:
    return f"rimraf {args}"


def mkdirp(args: str) -> str:
    return f"mkdirp {args}"


def copy(args: str) -> str:
    """copy('"src/**/*.json" dist') -> glob-aware copy via cpy"""
    return f"cpy {args}"


def ncp(args: str) -> str:
    return f"ncp {args}"


def cross_env(args: str) -> str:
    """cross_env("NODE_ENV=production webpack")"""
    return f"cross-env {args}"


def if_windows(script: str, alt_script: str = "") -> str:
    """`script` when the scripts are generated on Windows, else `alt_script`."""
    return script if sys.platform == "win32" else alt_script


def if_not_windows(script: str, alt_script: str = "") -> str:
    return alt_script if sys.platform == "win32" else script


__all__ = [
    "Series",
    "Concurrent",
    "series",
    "concurrent",
    "hook",
    "quote",
    "rimraf",
    "mkdirp",
    "copy",
    "ncp",
    "cross_env",
    "if_windows",
    "if_not_windows",
]
