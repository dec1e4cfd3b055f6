"""
specifiers.py
-------------
Turns command-line tokens into dependency descriptors.

Supported notations:
    maven   metosin/malli, org.clojure/cache
    git     com.github.user/project, ht.sr.~user/project (infer notation)
            https://github.com/user/project, git@gitlab.com:user/project.git
    local   ., ~/projects/my-project, ./path/to/project (must contain deps.edn)

A token that is not itself a dependency name and directly follows a maven or
git dependency is taken as its version (maven) or branch/tag/sha (git). After a
git dependency, a token that looks like a maven name (feature/x) is a branch.
"""

from __future__ import annotations

import logging
import os
import re
from typing import Sequence

from .errors import SpecifierParseError
from .models import DependencyDescriptor, LocalPath, MavenCoordinate, ParseResult, SourceForgeRef

logger = logging.getLogger(__name__)

URL_RE = re.compile(r"^(?:https?|ssh|git)://(?:[^@/]+@)?(?P<host>[^/:]+)(?::\d+)?/(?P<path>.+?)(?:\.git)?/?$")
SCP_RE = re.compile(r"^[\w.\-]+@(?P<host>[^:/]+):(?P<path>.+?)(?:\.git)?/?$")
MAVEN_RE = re.compile(r"^(?P<group>[\w.\-]+)/(?P<artifact>[\w.\-]+)$")
INFER_RE = re.compile(r"^(?P<prefix>[a-z]+\.[a-z]+)\.(?P<user>[^/]+)/(?P<project>[\w.\-]+)$")

# infer-notation prefix -> git host
INFER_HOSTS = {
    "io.github": "github.com",
    "com.github": "github.com",
    "io.gitlab": "gitlab.com",
    "com.gitlab": "gitlab.com",
    "io.bitbucket": "bitbucket.org",
    "org.bitbucket": "bitbucket.org",
    "ht.sr": "git.sr.ht",
}


def _is_local_path(token: str) -> bool:
    return token in (".", "..") or token.startswith(("/", "./", "../", "~"))


def _lib_for_url(host: str, path: str) -> str:
    """``github.com`` + ``user/project`` -> ``com.github.user/project``."""
    segments = [s for s in path.split("/") if s]
    if len(segments) < 2:
        raise SpecifierParseError(f"Git URL needs a user and a project: {host}/{path}")
    group = ".".join([*reversed(host.split(".")), *segments[:-1]])
    return f"{group}/{segments[-1]}"


def _parse_git_url(token: str) -> SourceForgeRef | None:
    match = URL_RE.match(token) or SCP_RE.match(token)
    if match is None:
        return None
    return SourceForgeRef(lib=_lib_for_url(match["host"], match["path"]), url=token)


def _parse_infer_notation(token: str) -> SourceForgeRef | None:
    match = INFER_RE.match(token)
    if match is None or match["prefix"] not in INFER_HOSTS:
        return None
    host = INFER_HOSTS[match["prefix"]]
    if host == "git.sr.ht":
        url = f"https://{host}/{match['user']}/{match['project']}"
    else:
        url = f"https://{host}/{match['user']}/{match['project']}.git"
    return SourceForgeRef(lib=token, url=url)


def _parse_maven(token: str) -> MavenCoordinate | None:
    match = MAVEN_RE.match(token)
    if match is None:
        return None
    return MavenCoordinate(group=match["group"], artifact=match["artifact"])


def _parse_local(token: str, taken: set[str]) -> LocalPath:
    path = os.path.abspath(os.path.expanduser(token))
    if not os.path.isfile(os.path.join(path, "deps.edn")):
        raise SpecifierParseError(f"Local dependency '{token}' is not a directory containing a deps.edn")
    name = re.sub(r"[^\w.\-]", "-", os.path.basename(path.rstrip(os.sep))) or "root"
    lib, n = f"local/{name}", 1
    while lib in taken:
        n += 1
        lib = f"local/{name}-{n}"
    return LocalPath(lib=lib, path=path)


def _parse_name(token: str, taken: set[str]) -> DependencyDescriptor | None:
    """Descriptor for ``token`` if it names a dependency, else None."""
    if _is_local_path(token):
        return _parse_local(token, taken)
    return _parse_git_url(token) or _parse_infer_notation(token) or _parse_maven(token)


def _with_version(dep: DependencyDescriptor, version: str) -> DependencyDescriptor:
    if isinstance(dep, MavenCoordinate):
        return dep.model_copy(update={"version": version})
    if isinstance(dep, SourceForgeRef):
        return dep.model_copy(update={"revision": version})
    raise SpecifierParseError(f"Local dependency '{dep.path}' does not take a version (got '{version}')")


def _is_revision_for(dep: DependencyDescriptor, token: str) -> bool:
    """Git revisions may contain slashes (feature/x), so only another git or local name ends one."""
    if not isinstance(dep, SourceForgeRef) or _is_local_path(token):
        return False
    return _parse_git_url(token) is None and _parse_infer_notation(token) is None


def parse_dep_args(args: Sequence[str]) -> ParseResult:
    """Parse ``args`` into descriptors, or an error message on the first bad token."""
    deps: list[DependencyDescriptor] = []
    taken: set[str] = set()
    versioned = True  # no dependency is waiting for a version yet
    try:
        for token in args:
            if deps and not versioned and _is_revision_for(deps[-1], token):
                deps[-1] = _with_version(deps[-1], token)
                versioned = True
                continue
            dep = _parse_name(token, taken)
            if dep is not None:
                deps.append(dep)
                taken.add(dep.lib)
                versioned = False
            elif deps and not versioned:
                deps[-1] = _with_version(deps[-1], token)
                versioned = True
            else:
                raise SpecifierParseError(
                    f"Don't know how to handle '{token}'. See 'deps-try --help' for supported dependency notations."
                )
    except SpecifierParseError as exc:
        logger.debug("Failed to parse %r: %s", list(args), exc)
        return ParseResult(error=exc.message)
    logger.debug("Parsed %r into %r", list(args), deps)
    return ParseResult(deps=deps)
