"""Resolves git branches and tags to commit shas with ``git ls-remote``."""

from __future__ import annotations

import logging
import re
import subprocess

from .errors import GitRefError

logger = logging.getLogger(__name__)

FULL_SHA_RE = re.compile(r"^[0-9a-f]{40}$")


class GitRefResolver:
    def __init__(self, git_command: str = "git"):
        self.git_command = git_command

    def _ls_remote(self, url: str, ref: str) -> str:
        cmd = [self.git_command, "ls-remote", url, ref]
        logger.debug("Running %s", cmd)
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as exc:
            raise GitRefError(f"Failed to run {self.git_command}: {exc}", log=True) from exc
        if proc.returncode != 0:
            raise GitRefError(f"git ls-remote {url} failed: {proc.stderr.strip()}", returncode=proc.returncode, log=True)
        return proc.stdout

    def resolve(self, url: str, revision: str | None = None) -> str:
        """
        Commit sha for ``revision`` (branch or tag) of ``url``; the default branch when None.
        Full 40-character shas are returned without contacting the remote.
        """
        if revision and FULL_SHA_RE.match(revision.lower()):
            return revision.lower()
        ref = revision or "HEAD"
        refs: dict[str, str] = {}
        for line in self._ls_remote(url, ref).splitlines():
            sha, _, name = line.partition("\t")
            if sha and name:
                refs[name.strip()] = sha.strip()
        # ls-remote matches on the name tail, so refs/heads/old/main also answers "main".
        # Same lookup order as git rev-parse; a peeled tag points at the commit itself.
        candidates = [f"{ref}^{{}}", ref, f"refs/tags/{ref}^{{}}", f"refs/tags/{ref}", f"refs/heads/{ref}"]
        sha = next((refs[name] for name in candidates if name in refs), None)
        if sha is None:
            raise GitRefError(f"Could not find branch or tag '{ref}' in {url}.")
        logger.info("Resolved %s %s to %s", url, ref, sha)
        return sha
