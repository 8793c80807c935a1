"""Scoped staging directory that is always removed when its block exits."""
import logging
import os
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


class TempDir:
    """Owns one directory tree and deletes it on release.

    Use it as a context manager so release happens on every exit path::

        with TempDir.create(mods_dir / ".staging") as staging:
            archive.extractall(staging)

    The handle stands in for its path: it supports ``os.fspath``, ``/``
    joining and any read-only ``pathlib.Path`` attribute. A failed removal is
    logged and never raised.
    """

    def __init__(self, path):
        self.path = Path(path)
        self._released = False

    @classmethod
    def create(cls, path) -> "TempDir":
        """Create ``path`` and any missing parents; fine if it already is a directory."""
        Path(path).mkdir(parents=True, exist_ok=True)
        return cls(path)

    def release(self):
        if self._released:
            return
        self._released = True
        try:
            shutil.rmtree(self.path)
        except OSError as e:
            logger.error("Error removing temp directory at '%s': %s", self.path, e)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False

    def __fspath__(self):
        return os.fspath(self.path)

    def __truediv__(self, other):
        return self.path / other

    def __getattr__(self, name):
        # Only reached for attributes TempDir itself lacks
        try:
            path = self.__dict__['path']
        except KeyError:
            raise AttributeError(name) from None
        return getattr(path, name)

    def __str__(self):
        return str(self.path)

    def __repr__(self):
        return f"TempDir({str(self.path)!r})"
