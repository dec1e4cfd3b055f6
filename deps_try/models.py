"""Pydantic models for dependency descriptors and resolver input."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from . import edn


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# descriptors produced by the specifier parser


class MavenCoordinate(_Frozen):
    """A ``group/artifact`` from Clojars or Maven Central."""

    kind: Literal["maven"] = "maven"
    group: str
    artifact: str
    version: str | None = None

    @property
    def lib(self) -> str:
        return f"{self.group}/{self.artifact}"


class SourceForgeRef(_Frozen):
    """A library fetched from a git host, optionally pinned to a branch, tag or sha."""

    kind: Literal["git"] = "git"
    lib: str
    url: str
    revision: str | None = None


class LocalPath(_Frozen):
    """A local project directory containing a ``deps.edn``."""

    kind: Literal["local"] = "local"
    lib: str
    path: str


DependencyDescriptor = Union[MavenCoordinate, SourceForgeRef, LocalPath]


class ParseResult(_Frozen):
    """Either the parsed descriptors or an error message, never both."""

    deps: list[DependencyDescriptor] | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> ParseResult:
        if (self.deps is None) == (self.error is None):
            raise ValueError("ParseResult needs exactly one of 'deps' or 'error'")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None


# ---------------------------------------------------------------------------
# resolver input


class MavenVersion(_Frozen):
    kind: Literal["mvn"] = "mvn"
    version: str

    def to_edn_map(self) -> dict:
        return {edn.Keyword("mvn/version"): self.version}


class GitRevision(_Frozen):
    kind: Literal["git"] = "git"
    url: str
    sha: str

    def to_edn_map(self) -> dict:
        return {edn.Keyword("git/url"): self.url, edn.Keyword("git/sha"): self.sha}


class LocalRoot(_Frozen):
    kind: Literal["local"] = "local"
    root: str

    def to_edn_map(self) -> dict:
        return {edn.Keyword("local/root"): self.root}


CoordinateSpec = Union[MavenVersion, GitRevision, LocalRoot]


class DepsMap(_Frozen):
    """Mapping of library coordinate to how the resolver should obtain it."""

    deps: dict[str, CoordinateSpec] = Field(default_factory=dict)

    def to_edn(self) -> str:
        """Render as ``{:deps {lib {...}}}``, the form ``clojure -Sdeps`` expects."""
        deps = {edn.Symbol(lib): spec.to_edn_map() for lib, spec in self.deps.items()}
        return edn.encode({edn.Keyword("deps"): deps})


# ---------------------------------------------------------------------------
# launch


class CliCommand(Enum):
    VERSION = "version"
    HELP = "help"
    LAUNCH = "launch"

    @classmethod
    def from_args(cls, args: Sequence[str]) -> CliCommand:
        first = args[0] if args else None
        if first in ("-v", "--version", "version"):
            return cls.VERSION
        if first in ("-h", "--help", "help"):
            return cls.HELP
        return cls.LAUNCH


@dataclass(frozen=True)
class LaunchPlan:
    """Final runtime invocation: ``java -classpath ... -Dclojure.basis=... clojure.main -m <ns>``."""

    executable: str
    classpath: str
    basis_file: str
    entry_namespace: str

    @property
    def argv(self) -> list[str]:
        return [
            self.executable,
            "-classpath",
            self.classpath,
            f"-Dclojure.basis={self.basis_file}",
            "clojure.main",
            "-m",
            self.entry_namespace,
        ]


__all__ = [
    "CliCommand",
    "CoordinateSpec",
    "DependencyDescriptor",
    "DepsMap",
    "GitRevision",
    "LaunchPlan",
    "LocalPath",
    "LocalRoot",
    "MavenCoordinate",
    "MavenVersion",
    "ParseResult",
    "SourceForgeRef",
]
