import subprocess

import pytest
from typer.testing import CliRunner

from deps_try import cli
from deps_try.cli import app

runner = CliRunner()


@pytest.fixture
def wired(monkeypatch, make_orchestrator):
    """Route the CLI to an orchestrator built from fakes; returns the list of build calls."""
    built = []

    def fake_build(settings, launcher_classpath):
        built.append((settings, launcher_classpath))
        return make_orchestrator(launcher_classpath=launcher_classpath, **settings.model_dump())

    monkeypatch.setattr(cli, "build_orchestrator", fake_build)
    return built


@pytest.mark.parametrize("flag", ["-h", "--help", "help"])
def test_help(wired, fake_resolver, flag):
    """Help is printed by the launcher itself and never resolves anything."""
    result = runner.invoke(app, [flag])
    print(result.output)
    assert result.exit_code == 0
    assert "Usage:" in result.output
    assert "deps-try metosin/malli 0.9.2" in result.output
    assert wired == []
    assert fake_resolver.calls == []


@pytest.mark.parametrize("flag", ["-v", "--version", "version"])
def test_version(wired, monkeypatch, flag):
    monkeypatch.setattr(cli, "read_version", lambda: ("deps-try", "0.1.0"))
    result = runner.invoke(app, [flag])
    assert result.exit_code == 0
    assert result.output.strip() == "deps-try 0.1.0"
    assert wired == []


def test_read_version_from_package_metadata(monkeypatch):
    monkeypatch.setattr(cli.metadata, "version", lambda name: "1.2.3")
    assert cli.read_version() == ("deps-try", "1.2.3")


def test_read_version_from_git_checkout(monkeypatch):
    def not_installed(name):
        raise cli.metadata.PackageNotFoundError(name)

    monkeypatch.setattr(cli.metadata, "version", not_installed)
    monkeypatch.setattr(
        cli.subprocess, "run",
        lambda cmd, **kwargs: subprocess.CompletedProcess(cmd, 0, stdout="v0.3.0-2-gabc1234\n", stderr=""),
    )
    assert cli.read_version() == ("deps-try-dev", "v0.3.0-2-gabc1234")


def test_launch(wired, fake_resolver, recording_exec):
    result = runner.invoke(app, ["metosin/malli", "0.9.2"])
    print(result.output)
    assert result.exit_code == 0
    assert fake_resolver.count("path") == 2
    [plan] = recording_exec.plans
    assert plan.argv[0] == "java"
    assert "-Dclojure.basis=/home/me/.clojure/.cpcache/42.basis" in plan.argv


def test_launcher_classpath_is_passed_through(wired, monkeypatch, recording_exec):
    monkeypatch.setattr(cli, "LAUNCHER_CLASSPATH", "/captured/at/startup")
    result = runner.invoke(app, [])
    assert result.exit_code == 0
    assert wired[0][1] == "/captured/at/startup"
    assert "/captured/at/startup" in recording_exec.plans[0].classpath


def test_parse_error_exits_1(wired, fake_resolver, tempdirs, recording_exec):
    result = runner.invoke(app, ["malli"])
    print(result.output)
    assert result.exit_code == 1
    assert "Don't know how to handle 'malli'" in result.output
    assert fake_resolver.calls == []
    assert tempdirs.entered == 0
    assert recording_exec.plans == []


def test_error_label_without_color(wired, monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    result = runner.invoke(app, ["malli"])
    assert result.exit_code == 1
    assert "ERROR: Don't know how to handle 'malli'" in result.output


def test_resolver_failure_exit_code(wired, monkeypatch, make_orchestrator, make_resolver, tempdirs, recording_exec):
    failing = make_resolver(fail_on="path")
    monkeypatch.setattr(cli, "build_orchestrator", lambda settings, cp: make_orchestrator(resolver=failing))
    result = runner.invoke(app, ["metosin/malli", "0.9.2"])
    assert result.exit_code == 3
    assert "path failed" in result.output
    assert tempdirs.entered == tempdirs.exited == 1
    assert recording_exec.plans == []


def test_invalid_configuration(wired, monkeypatch):
    monkeypatch.setenv("DEPS_TRY_LOGLEVEL", "LOUD")
    result = runner.invoke(app, ["metosin/malli"])
    assert result.exit_code == 1
    assert "Invalid deps-try configuration" in result.output
    assert wired == []


def test_log_file_is_written(wired, tmp_path):
    runner.invoke(app, ["metosin/malli", "0.9.2"])
    log = (tmp_path / "log.txt").read_text()
    assert "Requested deps: {:deps {metosin/malli" in log
