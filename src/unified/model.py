# model.py
# Task descriptors are plain dicts so the rendered tree can be merged with a
# user tree and dumped as-is. These helpers only build and walk them.
from __future__ import annotations

from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from .errors import TaskNotFound

TaskDescriptor = Dict[str, Any]
ScriptTree = Dict[str, TaskDescriptor]

# Keys of a descriptor that are never sub-tasks.
_META_KEYS = ("description", "script")


def task(description: str, script: str) -> TaskDescriptor:
    """Leaf descriptor: one command string."""
    return {"description": description, "script": script}


def group(description: Optional[str] = None, **children: TaskDescriptor) -> TaskDescriptor:
    """Group descriptor: named variants, `default` being the one run by bare name."""
    if not children:
        raise ValueError("group() needs at least one child task")
    node: TaskDescriptor = {}
    if description is not None:
        node["description"] = description
    node.update(children)
    return node


def is_leaf(node: Any) -> bool:
    return isinstance(node, Mapping) and "script" in node


def _children(node: Mapping[str, Any]) -> Iterator[Tuple[str, Any]]:
    for key, value in node.items():
        if key in _META_KEYS:
            continue
        if isinstance(value, (Mapping, str)):
            yield key, value


def iter_tasks(scripts: Mapping[str, Any], prefix: str = "") -> Iterator[Tuple[str, TaskDescriptor]]:
    """
    Yield (dotted_name, descriptor) for every runnable task, in tree order.

    A bare string value counts as a task with no description.
    """
    for key, node in scripts.items():
        name = f"{prefix}{key}"
        if isinstance(node, str):
            yield name, {"script": node}
            continue
        if not isinstance(node, Mapping):
            continue
        if is_leaf(node):
            yield name, dict(node)
        yield from iter_tasks(dict(_children(node)), prefix=f"{name}.")


def find_task(scripts: Mapping[str, Any], dotted_name: str) -> TaskDescriptor:
    """
    Look up a task by dotted name ("build.watch").

    A group resolves to its `default` child, so "build" means "build.default".
    """
    node: Any = scripts
    for segment in dotted_name.split("."):
        if not isinstance(node, Mapping) or segment not in node or segment in _META_KEYS:
            raise TaskNotFound(dotted_name, known=[n for n, _ in iter_tasks(scripts)])
        node = node[segment]

    if isinstance(node, str):
        return {"script": node}
    if isinstance(node, Mapping) and not is_leaf(node) and "default" in node:
        node = node["default"]
        if isinstance(node, str):
            return {"script": node}
    if not is_leaf(node):
        raise TaskNotFound(dotted_name, known=[n for n, _ in iter_tasks(scripts)])
    return dict(node)
