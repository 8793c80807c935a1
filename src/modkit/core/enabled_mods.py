"""Loading ``enabledmods.json`` from a profile's mods directory."""
import json
import logging
from pathlib import Path

from .constants import ENABLED_MODS_FILE
from .errors import MissingFileError, ModParseError
from ..model_types import EnabledMods

logger = logging.getLogger(__name__)


def get_enabled_mods(dir) -> EnabledMods:
    """Get ``enabledmods.json`` from the given directory, if it exists.

    The returned EnabledMods remembers the resolved file path, so ``save()``
    writes back to where it was loaded from.

    Raises:
        OSError: the path cannot be resolved (missing, broken symlink)
        MissingFileError: there is no ``enabledmods.json`` in the directory
        ModParseError: the file is not a JSON object of booleans
    """
    path = Path(dir).resolve(strict=True) / ENABLED_MODS_FILE
    if not path.exists():
        raise MissingFileError(path)

    try:
        raw = path.read_bytes().decode('utf-8')
        mods = EnabledMods.from_dict(json.loads(raw))
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
        raise ModParseError(path, e) from e
    except ModParseError as e:
        raise ModParseError(path, e.reason) from e

    mods.set_path(path)
    logger.debug("Loaded %d entries from %s", len(mods.mods), path)
    return mods


def get_or_create_enabled_mods(dir) -> EnabledMods:
    """Like ``get_enabled_mods`` but starts from the core mods when the file is missing."""
    try:
        return get_enabled_mods(dir)
    except MissingFileError as e:
        logger.info("No %s in %s, starting with core mods", ENABLED_MODS_FILE, dir)
        return EnabledMods.default_with_path(e.path)
