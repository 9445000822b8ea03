# builder.py
# Builds the default script tree for a package and merges the user's tree
# over it.
from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Any, Callable, Dict, Mapping, Optional

from . import shell
from .bin import make_resolver
from .constants import DEFAULT_LOG_LEVEL, Paths, Tools
from .merge import merge_all
from .model import ScriptTree, group, task
from .shell import concurrent, hook, series

HOOKS = ("prebuild", "postbuild", "prebump", "postbump")


@dataclass(frozen=True)
class ScriptContext:
    """
    What a user-supplied callable receives.

    utils: the unified.shell module (series, concurrent, hook, rimraf, ...)
    bin:   resolver for tool names in the current build context
    """
    utils: ModuleType
    bin: Callable[[str], str]


# ---------------------------------------------------------------------
# Input normalization
# ---------------------------------------------------------------------

def normalize_user_input(user_input: Any, context: ScriptContext) -> Dict[str, Any]:
    """
    Turn whatever the user passed into a user tree.

    A callable is invoked with the context; anything it raises propagates.
    """
    if callable(user_input):
        user_tree = user_input(context)
    else:
        user_tree = user_input

    if isinstance(user_tree, Mapping):
        return dict(user_tree)
    return {}


def _is_set(value: Any) -> bool:
    # None, "", False and 0 mean "not defined"; an empty task ({}) still counts.
    if value is None or value is False or isinstance(value, str) and not value:
        return False
    if isinstance(value, (int, float)) and value == 0:
        return False
    return True


def defined_hooks(user_tree: Mapping[str, Any]) -> frozenset[str]:
    """
    Hook names defined at the root of the user's `scripts`.

    Nested definitions (scripts.build.prebuild) are not hooks.
    """
    scripts = user_tree.get("scripts")
    if not isinstance(scripts, Mapping):
        return frozenset()
    return frozenset(name for name in HOOKS if name in scripts and _is_set(scripts[name]))


# ---------------------------------------------------------------------
# Default tree
# ---------------------------------------------------------------------

class _DefaultScripts:
    """One pass of default-tree construction for a given context."""

    def __init__(self, bin: Callable[[str], str], hooks: frozenset[str], paths: Paths, tools: Tools):
        self.bin = bin
        self.hooks = hooks
        self.paths = paths
        self.tools = tools

    def _hook(self, name: str) -> Optional[str]:
        return hook(name) if name in self.hooks else None

    # ----- Misc --------------------------------------------------------------

    def check_deps(self) -> Dict[str, Any]:
        return task(
            "Check for newer versions of installed dependencies.",
            f"{self.tools.deps_checker} --skip-unused || true",
        )

    def lint(self) -> Dict[str, Any]:
        eslint = " ".join([
            self.bin(self.tools.linter),
            self.paths.src_dir,
            f"--ext {self.paths.lint_extensions}",
            "--format=node_modules/eslint-codeframe-formatter",
        ])
        return group(
            default=task("Lint the project.", eslint),
            fix=task("Lint the project and automatically fix all fixable errors.", f"{eslint} --fix"),
        )

    # ----- Testing -----------------------------------------------------------

    def test(self) -> Dict[str, Any]:
        jest = self.bin(self.tools.test_runner)
        return group(
            default=task("Run unit tests.", jest),
            watch=task("Run unit tests in watch mode.", f"{jest} --watch"),
            coverage=task("Run unit tests and generate a coverage report.", f"{jest} --coverage"),
        )

    # ----- Building ----------------------------------------------------------

    @property
    def babel(self) -> str:
        out_dir = self.paths.out_dir
        return " ".join([
            f"{self.bin(self.tools.transpiler)} {self.paths.src_dir}",
            f'--extensions="{",".join(self.paths.extensions)}"',
            '--ignore="**/*.d.ts"',
            f'--out-dir="{out_dir}"',
            "--copy-files",
            "--source-maps=true",
            "--delete-dir-on-start",
        ])

    @property
    def tsc(self) -> str:
        return f"{self.bin(self.tools.type_checker)} --pretty"

    @property
    def post_build(self) -> str:
        # The transpiler's --ignore is unreliable with several patterns, so
        # test files are removed from the output afterwards.
        out_dir = self.paths.out_dir
        return f'{self.bin(self.tools.deleter)} "{out_dir}/**/*.spec.*" "{out_dir}/**/*.test.*"'

    def type_check(self) -> Dict[str, Any]:
        # Only needed where the project is transpiled by something other
        # than the transpiler CLI (e.g. a bundler) and types are checked apart.
        return task("Type-check the project.", f"{self.tsc} --noEmit")

    def build(self, lint_script: str) -> Dict[str, Any]:
        default = series(
            self._hook("prebuild"),
            concurrent({
                "lint": lint_script,
                "babel": self.babel,
                "tsc": f"{self.tsc} --emitDeclarationOnly",
            }),
            self.post_build,
            self._hook("postbuild"),
        )
        # watch never finishes, so there is no cleanup and no postbuild
        watch = series(
            self._hook("prebuild"),
            concurrent({
                "tsc": f"{self.tsc} --emitDeclarationOnly --preserveWatchOutput --watch",
                "babel": f"{self.babel} --watch --verbose",
            }),
        )
        return group(
            default=task("Build the project.", default),
            watch=task("Continuously build the project.", watch),
        )

    # ----- Versioning --------------------------------------------------------

    def bump(self, build_script: str) -> Dict[str, Any]:
        versioner = self.bin(self.tools.versioner)

        def release(*flags: str) -> str:
            return series(
                self._hook("prebump"),
                build_script,
                " ".join([versioner, *flags]),
                self._hook("postbump"),
            )

        return group(
            default=task("Generates a change log and tagged commit for a release.", release()),
            beta=task(
                "Generates a change log and tagged commit for a beta release.",
                release("--prerelease=beta"),
            ),
            first=task(
                "Generates a change log and tagged commit for a project's first release.",
                release("--first-release"),
            ),
        )

    # ----- Life Cycles -------------------------------------------------------

    def prepare(self, build_script: str, test_script: str) -> Dict[str, Any]:
        return task(
            'Runs after "npm install" to ensure the package compiles correctly.',
            series(build_script, f"{test_script} --passWithNoTests"),
        )

    def tree(self) -> ScriptTree:
        scripts: ScriptTree = {}
        scripts["checkDeps"] = self.check_deps()
        scripts["lint"] = self.lint()
        scripts["test"] = self.test()
        scripts["typeCheck"] = self.type_check()
        scripts["build"] = self.build(scripts["lint"]["default"]["script"])
        build_script = scripts["build"]["default"]["script"]
        scripts["bump"] = self.bump(build_script)
        scripts["prepare"] = self.prepare(build_script, scripts["test"]["default"]["script"])
        return scripts


def default_scripts(
    *,
    self_build: bool = False,
    hooks: frozenset[str] = frozenset(),
    paths: Optional[Paths] = None,
    tools: Optional[Tools] = None,
) -> ScriptTree:
    """The generated tree alone, before the user tree is merged in."""
    return _DefaultScripts(
        bin=make_resolver(self_build),
        hooks=hooks,
        paths=paths or Paths(),
        tools=tools or Tools(),
    ).tree()


# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------

def build(
    user_input: Any = None,
    *,
    self_build: bool = False,
    paths: Optional[Paths] = None,
    tools: Optional[Tools] = None,
) -> Dict[str, Any]:
    """
    Build the full package-scripts tree.

    Args:
        user_input: a callable taking a ScriptContext and returning a user
            tree, a user tree mapping, or None
        self_build: True when generating scripts for this package itself;
            tools are then invoked without the "unified." prefix
        paths: source/output layout (defaults from unified.constants)
        tools: external binary names

    Returns:
        {"scripts": {...}, "options": {"logLevel": ...}} with the user tree
        deep-merged over it
    """
    context = ScriptContext(utils=shell, bin=make_resolver(self_build))
    user_tree = normalize_user_input(user_input, context)

    scripts = default_scripts(
        self_build=self_build,
        hooks=defined_hooks(user_tree),
        paths=paths,
        tools=tools,
    )

    return merge_all(
        {
            "scripts": scripts,
            "options": {"logLevel": DEFAULT_LOG_LEVEL},
        },
        user_tree,
    )
