# package-scripts.py
# Scripts for unified itself. The tools are invoked by their plain names here,
# since the unified.* aliases are what this package installs for consumers.
from __future__ import annotations

SELF_BUILD = True


def scripts(ctx):
    return {
        "scripts": {
            # Refuse to cut a release with failing tests.
            "prebump": {
                "description": "Run the test suite before versioning.",
                "script": ctx.utils.series(f"{ctx.bin('jest')} --ci"),
            },
        },
        "options": {
            "logLevel": "info",
        },
    }
