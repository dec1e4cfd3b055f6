"""
launcher.py
-----------
Resolves the classpath for a REPL session and hands over to ``java``.

Steps, all inside one temporary working directory:
    1. ``clojure -Sverbose -Spath``  -> cp_file -> basis file
    2. classpath of the default Clojure dependency
    3. classpath of the requested dependencies
    4. default + launcher + requested classpaths joined
Then the CLI version is checked (warning only) and the process is replaced
by the REPL.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
import tempfile
from typing import Callable, ContextManager, Sequence

from common.app_setup import print_warning

from .classpath import ClasspathComposer
from .config import Settings
from .deps_map import DepsMapBuilder, default_deps
from .errors import SpecifierParseError
from .git import GitRefResolver
from .models import DependencyDescriptor, LaunchPlan
from .registry import MavenRegistry
from .resolver import ClojureResolver
from .specifiers import parse_dep_args
from .versions import at_least

logger = logging.getLogger(__name__)


def exec_launch_plan(plan: LaunchPlan) -> None:
    """Replace the current process with ``plan``. Does not return on success."""
    logger.info("Launching %s", plan.argv)
    sys.stdout.flush()
    sys.stderr.flush()
    if os.name == "posix":
        os.execvp(plan.executable, plan.argv)
    # No exec on this platform: run the child and exit with its status.
    proc = subprocess.run(plan.argv, check=False)
    sys.exit(proc.returncode)


def cli_version_warning(minimum: str, current: str) -> str | None:
    """Warning text when the installed clojure CLI is older than ``minimum``."""
    if at_least(minimum, current):
        return None
    return (
        "Adding (additional) libraries to this REPL-session via ':deps/try some/lib' won't work "
        f"as it requires Clojure CLI version >= {minimum} (current: {current})."
    )


class LaunchOrchestrator:
    """
    Drives parsing, resolution and launch for one invocation.

    Args:
        settings (Settings): launcher configuration.
        resolver (ClojureResolver): runs the clojure CLI.
        composer (ClasspathComposer): carries the launcher classpath.
        deps_builder (DepsMapBuilder): pins requested deps to versions/shas.
        tempdir_factory: context manager factory yielding a scratch directory.
        exec_plan: called with the final LaunchPlan; replaces the process.
    """
    def __init__(
        self,
        settings: Settings,
        resolver: ClojureResolver,
        composer: ClasspathComposer,
        deps_builder: DepsMapBuilder,
        tempdir_factory: Callable[[], ContextManager[str]] = tempfile.TemporaryDirectory,
        exec_plan: Callable[[LaunchPlan], None] = exec_launch_plan,
    ):
        self.settings = settings
        self.resolver = resolver
        self.composer = composer
        self.deps_builder = deps_builder
        self.tempdir_factory = tempdir_factory
        self.exec_plan = exec_plan

    def parse(self, args: Sequence[str]) -> list[DependencyDescriptor]:
        result = parse_dep_args(args)
        if not result.ok:
            raise SpecifierParseError(result.error or "Invalid dependency arguments")
        return list(result.deps or [])

    def build_plan(self, requested: Sequence[DependencyDescriptor]) -> LaunchPlan:
        """Resolve everything needed for the launch. The scratch directory is gone when this returns."""
        with self.tempdir_factory() as tmp:
            logger.debug("Resolving in %s", tmp)
            basis_file = self.composer.basis_file(self.resolver.verbose_resolve(tmp))
            default_cp = self.resolver.resolve_classpath(tmp, default_deps(self.settings.default_clojure_version))
            requested_cp = self.resolver.resolve_classpath(tmp, self.deps_builder.build(requested))
            classpath = self.composer.compose_with_launcher(default_cp, requested_cp)
        logger.debug("Composed classpath: %s", classpath)
        return LaunchPlan(
            executable=self.settings.java_command,
            classpath=classpath,
            basis_file=basis_file,
            entry_namespace=self.settings.entry_namespace,
        )

    def check_cli_version(self) -> None:
        warning = cli_version_warning(self.settings.minimum_cli_version, self.resolver.cli_version())
        if warning:
            print_warning(warning)

    def run(self, args: Sequence[str]) -> None:
        """Parse ``args``, resolve, and launch. Raises DepsTryError on any fatal problem."""
        try:
            plan = self.build_plan(self.parse(args))
        finally:
            self.deps_builder.close()
        self.check_cli_version()
        self.exec_plan(plan)


def build_orchestrator(settings: Settings, launcher_classpath: str) -> LaunchOrchestrator:
    """Wire the real collaborators."""
    return LaunchOrchestrator(
        settings=settings,
        resolver=ClojureResolver(settings.clojure_command),
        composer=ClasspathComposer(launcher_classpath),
        deps_builder=DepsMapBuilder(
            git=GitRefResolver(settings.git_command),
            registry=MavenRegistry(timeout=settings.registry_timeout),
        ),
    )
