"""
This file is the entry point for the 'deps-try' command-line tool.
Run 'deps-try [dep-name [dep-version] ...]' in your shell to start a REPL.
"""

import subprocess
from importlib import metadata
from pathlib import Path
from typing import List, Optional

import typer

from common.app_setup import print_error, setup_logging

from .config import capture_launcher_classpath, load_settings
from .errors import DepsTryError
from .launcher import build_orchestrator
from .models import CliCommand

# Read before anything can touch the environment.
LAUNCHER_CLASSPATH = capture_launcher_classpath()

PACKAGE_NAME = "deps-try"
REPO_ROOT = Path(__file__).resolve().parent.parent

USAGE = """Usage:
  deps-try [dep-name [dep-version] [dep2-name ...] ...]

Supported dep-name types:
- maven
  e.g. `metosin/malli`, `org.clojure/cache`.
- git
  - infer-notation, e.g. `com.github.user/project`, `ht.sr.~user/project`.
  - url, e.g. `https://github.com/user/project`, `https://anything.org/user/project.git`.
- local
  - path to project containing `deps.edn`, e.g. `.`, `~/projects/my-project`, `./path/to/project`.

Examples:
# A REPL using the latest Clojure version
$ deps-try

# A REPL with specific dependencies (latest version implied)
$ deps-try metosin/malli criterium/criterium

# ...specific version
$ deps-try metosin/malli 0.9.2

# Dependency from GitHub/GitLab/SourceHut (gets you the latest SHA from the default branch)
$ deps-try https://github.com/metosin/malli

# ...a specific branch/tag/SHA
$ deps-try https://github.com/metosin/malli some-branch-tag-or-sha

# ...using the 'infer' notation, e.g.
# com.github.<user>/<project>, com.gitlab.<user>/<project>, ht.sr.~<user>/<project>
$ deps-try com.github.metosin/malli

# A local project
$ deps-try . ~/some/project ../some/other/project

During a REPL-session:
# add additional dependencies
user=> :deps/try dev.weavejester/medley "~/some/project"

# see help for all options
user=> :repl/help
"""

app = typer.Typer(add_completion=False)


def read_version() -> tuple[str, str]:
    """(binary name, version). Falls back to ``git describe`` for a source checkout."""
    try:
        return PACKAGE_NAME, metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        pass
    try:
        proc = subprocess.run(
            ["git", "--git-dir", str(REPO_ROOT / ".git"), "describe", "--tags"],
            capture_output=True, text=True, check=False,
        )
    except OSError:
        return f"{PACKAGE_NAME}-dev", "unknown"
    return f"{PACKAGE_NAME}-dev", proc.stdout.strip() or "unknown"


def print_usage():
    typer.echo(USAGE, nl=False)


def print_version():
    name, version = read_version()
    typer.echo(f"{name} {version}")


@app.command(
    add_help_option=False,
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
)
def main(args: Optional[List[str]] = typer.Argument(None, help="Dependencies to load, each optionally followed by a version.")):
    """Start a Clojure REPL with the given dependencies on the classpath."""
    args = list(args or [])
    command = CliCommand.from_args(args)
    if command is CliCommand.VERSION:
        print_version()
        return
    if command is CliCommand.HELP:
        print_usage()
        return

    try:
        settings = load_settings()
        setup_logging(app_name=PACKAGE_NAME, loglevel=settings.loglevel_number, logfile=settings.logfile)
        build_orchestrator(settings, LAUNCHER_CLASSPATH).run(args)
    except DepsTryError as e:
        print_error(e.message)
        raise typer.Exit(e.returncode or 1)


def run():
    app()


if __name__ == "__main__":
    run()
