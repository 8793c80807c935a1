"""Dependency string resolution against the package index."""
import logging
from typing import Iterable, List, Sequence

from .constants import BASE_FRAMEWORK_NAME
from .errors import DependencyFormatError, DependencyNotFoundError
from ..model_types import Mod

logger = logging.getLogger(__name__)


def parse_dep_name(dep: str) -> str:
    """Return the package name of a Thunderstore dependency string.

    Specifiers look like ``author-name-version`` and are split on ``-``; the
    name is always the second field. Authors or names containing ``-`` are
    not disambiguated.
    """
    parts = dep.split('-')
    if len(parts) < 3 or not parts[1]:
        raise DependencyFormatError(dep)
    return parts[1]


def resolve_deps(deps: Iterable[str], index: Sequence[Mod]) -> List[Mod]:
    """Return copies of the index entries named by ``deps``, in ``deps`` order.

    The ``Northstar`` dependency (any casing) is implicit and skipped. Matching
    against the index is case-sensitive and the first match wins.

    Raises:
        DependencyFormatError: a specifier isn't formatted like ``author-name-version``
        DependencyNotFoundError: a specifier names a package missing from the index
    """
    valid = []
    for dep in deps:
        dep_name = parse_dep_name(dep)

        if dep_name.lower() == BASE_FRAMEWORK_NAME:
            logger.debug("Skip unfiltered Northstar dependency")
            continue

        match = next((mod for mod in index if mod.name == dep_name), None)
        if match is None:
            raise DependencyNotFoundError(dep)
        valid.append(match.copy())
    return valid
