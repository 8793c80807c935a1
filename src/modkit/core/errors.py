"""Exception types raised by modkit.

Filesystem failures are not wrapped: ``OSError`` and its subclasses propagate
as-is.
"""


class ModkitError(Exception):
    """Base class for all modkit errors."""


class DepError(ModkitError):
    """A dependency specifier could not be resolved."""

    def __init__(self, dependency, message=None):
        self.dependency = dependency
        super().__init__(message or f"Error resolving dependency '{dependency}'")


class DependencyFormatError(DepError):
    def __init__(self, dependency):
        super().__init__(dependency, f"Dependency '{dependency}' is not formatted like 'author-name-version'")


class DependencyNotFoundError(DepError):
    def __init__(self, dependency):
        super().__init__(dependency, f"Dependency '{dependency}' was not found in the package index")


class MissingFileError(ModkitError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"Missing file {path}")


class ModParseError(ModkitError, ValueError):
    """A JSON, relaxed-JSON or text metadata file could not be read or parsed."""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        where = f" {path}" if path is not None else ""
        super().__init__(f"Error parsing{where}: {reason}")


class DownloadError(ModkitError):
    def __init__(self, url, reason):
        self.url = url
        super().__init__(f"Error downloading {url}: {reason}")


class UnknownError(ModkitError):
    """Anything not otherwise classified; carries a free-form message."""
