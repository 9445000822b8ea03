# errors.py
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ScriptsError(Exception):
    """
    Structured error with enough context for clean CLI output.

    The builder itself never raises these; they come from loading a
    package-scripts file or looking up a task in a rendered tree.
    """
    kind: str
    message: str
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        lines = [f"{self.kind}: {self.message}"]
        for k, v in self.details.items():
            lines.append(f"{k}={v}")
        return "\n".join(lines)


class TaskNotFound(ScriptsError):
    def __init__(self, name: str, known: list[str] | None = None):
        details = {"known": ", ".join(known)} if known else {}
        super().__init__(kind="task_not_found", message=f"no task named {name!r}", details=details)
        self.name = name
