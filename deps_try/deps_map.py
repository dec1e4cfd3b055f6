"""Builds the resolver's deps map from parsed descriptors."""

from __future__ import annotations

import logging
from typing import Iterable

from .git import GitRefResolver
from .models import (
    CoordinateSpec,
    DependencyDescriptor,
    DepsMap,
    GitRevision,
    LocalPath,
    LocalRoot,
    MavenCoordinate,
    MavenVersion,
    SourceForgeRef,
)
from .registry import MavenRegistry

logger = logging.getLogger(__name__)


class DepsMapBuilder:
    """Pins every descriptor to something the resolver accepts: a version, a sha or a root."""

    def __init__(self, git: GitRefResolver, registry: MavenRegistry):
        self.git = git
        self.registry = registry

    def spec_for(self, dep: DependencyDescriptor) -> CoordinateSpec:
        if isinstance(dep, MavenCoordinate):
            version = dep.version or self.registry.latest_version(dep.group, dep.artifact)
            return MavenVersion(version=version)
        if isinstance(dep, SourceForgeRef):
            return GitRevision(url=dep.url, sha=self.git.resolve(dep.url, dep.revision))
        if isinstance(dep, LocalPath):
            return LocalRoot(root=dep.path)
        raise TypeError(f"Unsupported dependency descriptor: {dep!r}")

    def build(self, deps: Iterable[DependencyDescriptor]) -> DepsMap:
        deps_map = DepsMap(deps={dep.lib: self.spec_for(dep) for dep in deps})
        logger.info("Requested deps: %s", deps_map.to_edn())
        return deps_map

    def close(self):
        self.registry.close()


def default_deps(clojure_version: str) -> DepsMap:
    """The Clojure version every REPL starts with."""
    return DepsMap(deps={"org.clojure/clojure": MavenVersion(version=clojure_version)})
