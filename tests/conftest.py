from __future__ import annotations

import pytest

from unified.constants import Paths


@pytest.fixture
def paths() -> Paths:
    """Fixed layout so rendered commands do not depend on the environment."""
    return Paths(src_dir="src", out_dir="dist", extensions=(".ts", ".tsx", ".js", ".jsx", ".json"))
