"""Exceptions raised by the deps-try launcher."""

import logging

mylogger = logging.getLogger(__name__)


class DepsTryError(Exception):
    """Base error. ``returncode`` is the exit status the CLI terminates with."""
    def __init__(self, message="A deps-try error occurred", returncode: int = 1, log=False):
        self.message = message
        self.returncode = returncode
        super().__init__(self.message)
        if log:
            mylogger.error(message)


class SpecifierParseError(DepsTryError):
    """A command-line token could not be read as a dependency."""


class ResolverInvocationError(DepsTryError):
    """The clojure CLI tool is missing or exited non-zero."""


class MetadataExtractionError(DepsTryError):
    """The resolver output did not point at a usable cp/basis file."""


class VersionParseError(DepsTryError):
    """A version string does not have four numeric groups."""


class GitRefError(DepsTryError):
    """A git revision could not be resolved to a commit sha."""


class RegistryLookupError(DepsTryError):
    """No latest version could be found for a Maven coordinate."""


class ConfigError(DepsTryError):
    """Invalid launcher configuration."""
