"""Toolkit for managing Northstar (Titanfall 2) mods.

Basic usage::

    from io import BytesIO
    from modkit import ModInstaller, get_package_index

    index = get_package_index()
    mod = next(m for m in index if m.name == "server_utilities")
    latest = mod.get_latest()
    archive = BytesIO()
    installer = ModInstaller()
    installer.download(archive, latest.url)
    installer.install_mod(latest.full_name, archive, "R2Northstar/mods")
"""

from .core.api import get_package_index
from .core.constants import CORE_MODS, TITANFALL_STEAM_ID, TITANFALL_ORIGIN_IDS
from .core.enabled_mods import get_enabled_mods, get_or_create_enabled_mods
from .core.errors import (
    ModkitError, DepError, DependencyFormatError, DependencyNotFoundError,
    MissingFileError, ModParseError, DownloadError, UnknownError,
)
from .core.installer import ModInstaller
from .core.resolver import resolve_deps
from .core.scanner import find_mods
from .core.temp_dir import TempDir
from .model_types import EnabledMods, InstalledMod, Mod, ModVersion, ScanResult
from .utils.path_validator import steam_dir, steam_libraries, titanfall
from .utils.proton import download_ns_proton, install_ns_proton, latest_release

__all__ = [
    'get_package_index', 'get_enabled_mods', 'get_or_create_enabled_mods', 'resolve_deps', 'find_mods',
    'ModInstaller', 'TempDir',
    'Mod', 'ModVersion', 'InstalledMod', 'EnabledMods', 'ScanResult',
    'ModkitError', 'DepError', 'DependencyFormatError', 'DependencyNotFoundError',
    'MissingFileError', 'ModParseError', 'DownloadError', 'UnknownError',
    'steam_dir', 'steam_libraries', 'titanfall',
    'download_ns_proton', 'install_ns_proton', 'latest_release',
    'CORE_MODS', 'TITANFALL_STEAM_ID', 'TITANFALL_ORIGIN_IDS',
]
