"""Start a Clojure REPL with libraries named on the command line."""

from .classpath import ClasspathComposer, derive_basis_path, extract_cp_file
from .launcher import LaunchOrchestrator
from .models import CliCommand, DepsMap, LaunchPlan, ParseResult
from .specifiers import parse_dep_args
from .versions import at_least, parse_version

__all__ = [
    "ClasspathComposer",
    "CliCommand",
    "DepsMap",
    "LaunchOrchestrator",
    "LaunchPlan",
    "ParseResult",
    "at_least",
    "derive_basis_path",
    "extract_cp_file",
    "parse_dep_args",
    "parse_version",
]
