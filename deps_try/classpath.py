"""Combines resolver output into the classpath the REPL is started with."""

from __future__ import annotations

import os
from typing import Iterable

from .errors import MetadataExtractionError

CP_FILE_MARKER = "cp_file"


def extract_cp_file(verbose_output: str) -> str | None:
    """
    Path of the cp file named in ``clojure -Sverbose`` output, e.g. from a line
    ``cp_file = /home/me/.clojure/.cpcache/2939.cp``. None when no such line exists.
    """
    for line in verbose_output.splitlines():
        if CP_FILE_MARKER in line and "=" in line:
            return line.split("=", 1)[1].strip()
    return None


def derive_basis_path(cp_file: str) -> str:
    """``.../2939.cp`` -> ``.../2939.basis``"""
    if not cp_file.endswith(".cp"):
        raise MetadataExtractionError(f"Expected a .cp file from the resolver, got {cp_file!r}")
    return cp_file[: -len(".cp")] + ".basis"


class ClasspathComposer:
    """
    Joins classpaths with the platform separator.

    ``launcher_classpath`` is the classpath deps-try itself was started with
    (holding the REPL entry namespace), captured once at startup.
    """
    def __init__(self, launcher_classpath: str = "", separator: str = os.pathsep):
        self.launcher_classpath = launcher_classpath
        self.separator = separator

    def compose(self, parts: Iterable[str]) -> str:
        """Join non-empty ``parts`` in order; duplicate entries are kept (first one wins at runtime)."""
        return self.separator.join(part for part in parts if part)

    def compose_with_launcher(self, default_cp: str, requested_cp: str) -> str:
        return self.compose([default_cp, self.launcher_classpath, requested_cp])

    def basis_file(self, verbose_output: str) -> str:
        cp_file = extract_cp_file(verbose_output)
        if cp_file is None:
            raise MetadataExtractionError(
                f"No '{CP_FILE_MARKER}' entry in the output of 'clojure -Sverbose -Spath'.", log=True
            )
        return derive_basis_path(cp_file)
