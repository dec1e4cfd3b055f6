"""
resolver.py
-----------
Calls into the clojure CLI tool, which does the actual dependency resolution.

    clojure -Spath -Sdeps '{:deps {...}}'   classpath for a deps map
    clojure -Sverbose -Spath                diagnostics incl. the cp_file location
    clojure --version                       installed CLI version
"""

from __future__ import annotations

import logging
import os
import subprocess

from .errors import ResolverInvocationError
from .models import DepsMap

logger = logging.getLogger(__name__)


class ClojureResolver:
    """
    Thin wrapper around the ``clojure`` executable.

    Args:
        clojure_command (str): executable name or path of the clojure CLI.
    """
    def __init__(self, clojure_command: str = "clojure"):
        self.clojure_command = clojure_command

    def _run(self, args: list[str], work_dir: str | os.PathLike | None = None) -> str:
        cmd = [self.clojure_command, *args]
        logger.debug("Running %s in %s", cmd, work_dir)
        try:
            proc = subprocess.run(cmd, cwd=work_dir, capture_output=True, text=True, check=False)
        except OSError as exc:
            raise ResolverInvocationError(f"Failed to run {self.clojure_command}: {exc}", log=True) from exc
        if proc.returncode != 0:
            detail = proc.stderr.strip() or proc.stdout.strip()
            raise ResolverInvocationError(
                f"{' '.join(cmd)} exited with code {proc.returncode}:\n{detail}",
                returncode=proc.returncode,
                log=True,
            )
        return proc.stdout

    def resolve_classpath(self, work_dir: str | os.PathLike, deps: DepsMap) -> str:
        """Classpath for ``deps`` on top of the project found in ``work_dir``."""
        return self._run(["-Spath", "-Sdeps", deps.to_edn()], work_dir).strip()

    def verbose_resolve(self, work_dir: str | os.PathLike) -> str:
        return self._run(["-Sverbose", "-Spath"], work_dir)

    def cli_version(self) -> str:
        """Last token of ``clojure --version``, e.g. ``1.11.1.1273``."""
        output = self._run(["--version"]).strip()
        return output.split()[-1] if output else ""
