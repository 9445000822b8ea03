# merge.py
from __future__ import annotations

import copy
from typing import Any, Mapping


def deep_merge(left: Any, right: Any) -> Any:
    """
    Merge `right` into `left` without mutating either.

    - both mappings -> merge key by key, recursively
    - otherwise     -> `right` wins (lists included, they are not concatenated)
    """
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        out = {k: copy.deepcopy(v) for k, v in left.items()}
        for key, value in right.items():
            if key in out:
                out[key] = deep_merge(out[key], value)
            else:
                out[key] = copy.deepcopy(value)
        return out
    return copy.deepcopy(right)


def merge_all(*trees: Any) -> Any:
    """Fold deep_merge over `trees`, later trees winning."""
    result: Any = {}
    for tree in trees:
        result = deep_merge(result, tree)
    return result
