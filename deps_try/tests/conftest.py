import contextlib
import os

import pytest

from deps_try.classpath import ClasspathComposer
from deps_try.config import Settings
from deps_try.deps_map import DepsMapBuilder
from deps_try.errors import ResolverInvocationError
from deps_try.launcher import LaunchOrchestrator


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep tests away from the user's config, log file and color settings."""
    monkeypatch.setenv("DEPS_TRY_CONFIG", str(tmp_path / "no-such-config.yaml"))
    monkeypatch.setenv("DEPS_TRY_LOGFILE", str(tmp_path / "log.txt"))
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("TERM", raising=False)
    for key in list(os.environ):
        if key.startswith("DEPS_TRY_") and key not in ("DEPS_TRY_CONFIG", "DEPS_TRY_LOGFILE"):
            monkeypatch.delenv(key)


class FakeResolver:
    """Stands in for the clojure CLI; records every call."""

    def __init__(self, cli_version="1.11.1.1273", fail_on=None):
        self.calls = []
        self._cli_version = cli_version
        self.fail_on = fail_on

    def _record(self, name, *args):
        self.calls.append((name, *args))
        if self.fail_on == name:
            raise ResolverInvocationError(f"{name} failed", returncode=3)

    def verbose_resolve(self, work_dir):
        self._record("verbose", work_dir)
        return "version = 1.11.1.1273\ncp_file = /home/me/.clojure/.cpcache/42.cp\nbasis = ...\n"

    def resolve_classpath(self, work_dir, deps):
        self._record("path", work_dir, deps)
        if "org.clojure/clojure" in deps.deps:
            return "/m2/clojure.jar"
        return os.pathsep.join(f"/m2/{lib}.jar" for lib in deps.deps)

    def cli_version(self):
        self._record("version")
        return self._cli_version

    def count(self, name):
        return sum(1 for call in self.calls if call[0] == name)


class FakeGit:
    def __init__(self):
        self.calls = []

    def resolve(self, url, revision=None):
        self.calls.append((url, revision))
        return "a" * 40


class FakeRegistry:
    def __init__(self, version="1.2.3"):
        self.calls = []
        self.version = version
        self.closed = False

    def latest_version(self, group, artifact):
        self.calls.append((group, artifact))
        return self.version

    def close(self):
        self.closed = True


class FakeTempDirs:
    """tempdir factory counting how often a directory was handed out and released."""

    def __init__(self, base):
        self.base = base
        self.entered = 0
        self.exited = 0

    @contextlib.contextmanager
    def __call__(self):
        self.entered += 1
        path = self.base / f"tmp{self.entered}"
        path.mkdir()
        try:
            yield str(path)
        finally:
            path.rmdir()
            self.exited += 1


class RecordingExec:
    def __init__(self):
        self.plans = []

    def __call__(self, plan):
        self.plans.append(plan)


@pytest.fixture
def fake_resolver():
    return FakeResolver()


@pytest.fixture
def fake_git():
    return FakeGit()


@pytest.fixture
def fake_registry():
    return FakeRegistry()


@pytest.fixture
def tempdirs(tmp_path):
    return FakeTempDirs(tmp_path)


@pytest.fixture
def recording_exec():
    return RecordingExec()


@pytest.fixture
def make_orchestrator(fake_resolver, fake_git, fake_registry, tempdirs, recording_exec):
    def _make(resolver=None, launcher_classpath="/opt/deps-try/src", **settings):
        return LaunchOrchestrator(
            settings=Settings(**settings),
            resolver=resolver or fake_resolver,
            composer=ClasspathComposer(launcher_classpath),
            deps_builder=DepsMapBuilder(git=fake_git, registry=fake_registry),
            tempdir_factory=tempdirs,
            exec_plan=recording_exec,
        )
    return _make


@pytest.fixture
def make_resolver():
    return FakeResolver
