"""Installed mod discovery.

Each mod folder carries three metadata files:

* ``mod.json`` - Northstar mod descriptor, relaxed JSON (comments, trailing commas)
* ``manifest.json`` - Thunderstore manifest, strict JSON
* ``thunderstore_author.txt`` - plain text, the whole content is the author

A folder without one of them is not reported at all. A folder whose file is
present but unreadable is reported as a per-folder error, so one broken mod
never hides the others.
"""
import json
import logging
from pathlib import Path
from typing import List, Optional

import json5

from .constants import MOD_JSON_FILE, MANIFEST_FILE, AUTHOR_FILE
from .errors import ModParseError
from ..model_types import InstalledMod, ScanResult

logger = logging.getLogger(__name__)


class _Missing(Exception):
    pass


def _read_text(path: Path) -> str:
    if not path.exists():
        raise _Missing()
    try:
        return path.read_bytes().decode('utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise ModParseError(path, e) from e


def _load_mod_json(path: Path) -> dict:
    raw = _read_text(path)
    try:
        parsed = json5.loads(raw)
    except (ValueError, RecursionError) as e:
        raise ModParseError(path, e) from e
    if not isinstance(parsed, dict):
        raise ModParseError(path, "not a JSON object")
    return parsed


def _load_manifest(path: Path) -> dict:
    raw = _read_text(path)
    try:
        parsed = json.loads(raw)
    except (json.JSONDecodeError, RecursionError) as e:
        raise ModParseError(path, e) from e
    if not isinstance(parsed, dict):
        raise ModParseError(path, "not a JSON object")
    return parsed


def read_installed_mod(folder: Path) -> Optional[InstalledMod]:
    """Build an InstalledMod from ``folder``.

    Returns None when any of the three files is absent.

    Raises:
        ModParseError: a file is present but can't be read or parsed
    """
    try:
        mod_json = _load_mod_json(folder / MOD_JSON_FILE)
        manifest = _load_manifest(folder / MANIFEST_FILE)
        author = _read_text(folder / AUTHOR_FILE)
    except _Missing:
        return None
    return InstalledMod(manifest=manifest, mod_json=mod_json, author=author, path=folder)


def find_mods(dir) -> List[ScanResult]:
    """Search the children of ``dir`` (one level deep) for installed mods.

    Returns one ScanResult per child folder that holds a ``mod.json``, in
    directory enumeration order.

    Raises:
        OSError: ``dir`` doesn't exist, is a broken symlink or can't be listed
    """
    res = []
    dir = Path(dir).resolve(strict=True)
    logger.debug("Finding mods in '%s'", dir)
    for child in dir.iterdir():
        if not child.is_dir():
            logger.debug("Skipping file %s", child)
            continue
        if not (child / MOD_JSON_FILE).exists():
            continue

        try:
            mod = read_installed_mod(child)
        except ModParseError as e:
            logger.warning("%s", e)
            res.append(ScanResult(child, None, e))
            continue

        if mod is None:
            logger.debug("Skipping %s: incomplete mod metadata", child)
            continue
        res.append(ScanResult(child, mod, None))

    return res


def installed_mods(dir) -> List[InstalledMod]:
    """Only the successfully read mods of ``find_mods``."""
    return [result.mod for result in find_mods(dir) if result.ok]
