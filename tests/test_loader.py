from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from unified.builder import build
from unified.loader import find_scripts_file, load_package_scripts


def _write(tmp_path: Path, body: str, name: str = "package-scripts.py") -> Path:
    path = tmp_path / name
    path.write_text(textwrap.dedent(body))
    return path


def test_find_scripts_file(tmp_path):
    assert find_scripts_file(tmp_path) is None
    path = _write(tmp_path, "SCRIPTS = {}\n")
    assert find_scripts_file(tmp_path) == path


def test_load_callable(tmp_path):
    path = _write(tmp_path, """\
        def scripts(ctx):
            return {"scripts": {"prebuild": {"script": ctx.bin("del") + " tmp"}}}
    """)
    tree = load_package_scripts(path)
    assert tree["scripts"]["prebuild"]["script"] == "unified.del tmp"
    assert tree["scripts"]["build"]["default"]["script"].startswith("nps prebuild && ")


def test_load_mapping(tmp_path):
    path = _write(tmp_path, """\
        SCRIPTS = {"options": {"logLevel": "error"}}
    """)
    assert load_package_scripts(path)["options"] == {"logLevel": "error"}


def test_load_without_definitions_gives_defaults(tmp_path):
    path = _write(tmp_path, "X = 1\n")
    assert load_package_scripts(path) == build()


def test_self_build_flag_in_file(tmp_path):
    path = _write(tmp_path, "SELF_BUILD = True\n")
    assert load_package_scripts(path)["scripts"]["test"]["default"]["script"] == "jest"


def test_self_build_argument(tmp_path):
    path = _write(tmp_path, "SCRIPTS = {}\n")
    assert load_package_scripts(path, self_build=True) == build(self_build=True)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_package_scripts(tmp_path / "nope.py")


def test_non_python_file(tmp_path):
    path = _write(tmp_path, "{}", name="scripts.json")
    with pytest.raises(ValueError):
        load_package_scripts(path)


def test_wrong_type(tmp_path):
    path = _write(tmp_path, "scripts = ['lint']\n")
    with pytest.raises(TypeError):
        load_package_scripts(path)


def test_errors_in_user_function_propagate(tmp_path):
    path = _write(tmp_path, """\
        def scripts(ctx):
            raise RuntimeError("broken config")
    """)
    with pytest.raises(RuntimeError, match="broken config"):
        load_package_scripts(path)


def test_own_package_scripts_loads():
    path = Path(__file__).resolve().parents[1] / "package-scripts.py"
    tree = load_package_scripts(path)
    assert tree["options"]["logLevel"] == "info"
    bump = tree["scripts"]["bump"]["default"]["script"]
    assert bump.startswith("nps prebump && ")
    assert "unified." not in bump


def test_explicit_self_build_false_beats_file(tmp_path):
    path = _write(tmp_path, "SELF_BUILD = True\n")
    tree = load_package_scripts(path, self_build=False)
    assert tree["scripts"]["test"]["default"]["script"] == "unified.jest"
