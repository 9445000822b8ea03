from .bin import BIN_PREFIX, resolve_bin, make_resolver
from .builder import ScriptContext, build, default_scripts
from .merge import deep_merge, merge_all
from .model import find_task, iter_tasks
from .shell import concurrent, series
from .errors import ScriptsError, TaskNotFound

__all__ = [
    "BIN_PREFIX",
    "resolve_bin",
    "make_resolver",
    "ScriptContext",
    "build",
    "default_scripts",
    "deep_merge",
    "merge_all",
    "find_task",
    "iter_tasks",
    "concurrent",
    "series",
    "ScriptsError",
    "TaskNotFound",
]
