"""Thunderstore package index client."""
import logging
from dataclasses import replace
from typing import Iterable, List

import requests

from .constants import PACKAGE_INDEX_URL, REQUEST_TIMEOUT
from .errors import ModParseError
from ..model_types import InstalledMod, Mod
from ..utils.mod_utils import compare_versions

logger = logging.getLogger(__name__)


def get_package_index(url: str = PACKAGE_INDEX_URL) -> List[Mod]:
    """Fetch the Northstar package list and convert it into Mod entries.

    Raises:
        requests.exceptions.RequestException: network or HTTP failure
        ModParseError: the response isn't a list of package listings
    """
    response = requests.get(url, timeout=REQUEST_TIMEOUT)
    response.raise_for_status()

    try:
        listings = response.json()
        index = [Mod.from_listing(listing) for listing in listings]
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        raise ModParseError(url, e) from e

    logger.debug("Fetched %d packages from %s", len(index), url)
    return index


def mark_installed(index: Iterable[Mod], installed: Iterable[InstalledMod]) -> List[Mod]:
    """Copy of ``index`` with ``installed``/``upgradable`` set from what is on disk.

    Installed mods are matched by manifest name and Thunderstore author.
    """
    on_disk = {}
    for mod in installed:
        key = (mod.manifest.get('name'), mod.author.strip())
        on_disk[key] = mod.version

    marked = []
    for entry in index:
        installed_version = on_disk.get((entry.name, entry.author))
        if installed_version is None:
            marked.append(entry)
            continue
        marked.append(replace(
            entry,
            installed=True,
            upgradable=compare_versions(entry.latest, installed_version) > 0,
        ))
    return marked
