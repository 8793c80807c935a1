"""Type definitions for catalog entries, installed mods and the enabled-mods state."""
import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Optional

from .core.config_manager import atomic_save_json
from .core.constants import CORE_MODS_DISPLAY
from .core.errors import ModParseError, UnknownError


@dataclass(frozen=True)
class ModVersion:
    """One published version of a package."""
    name: str
    full_name: str
    version: str
    url: str
    desc: str
    deps: List[str] = field(default_factory=list)
    installed: bool = False
    global_: bool = False
    file_size: int = 0

    def file_size_string(self) -> str:
        if self.file_size / 1_000_000 >= 1.0:
            return f"{self.file_size / 1_048_576:.2f} MB"
        return f"{self.file_size / 1024:.2f} KB"


@dataclass(frozen=True)
class Mod:
    """A package known to the Thunderstore catalog.

    ``global_`` maps to the catalog's ``global`` flag (installed outside the
    per-profile mods directory).
    """
    name: str
    author: str
    latest: str
    upgradable: bool = False
    global_: bool = False
    installed: bool = False
    versions: Dict[str, ModVersion] = field(default_factory=dict)

    def get_latest(self) -> Optional[ModVersion]:
        return self.versions.get(self.latest)

    def get_version(self, version: str) -> Optional[ModVersion]:
        return self.versions.get(version)

    def copy(self) -> "Mod":
        return replace(self, versions=dict(self.versions))

    @classmethod
    def from_listing(cls, listing: Dict[str, Any]) -> "Mod":
        """Build a Mod from one entry of the Thunderstore package list.

        Thunderstore lists versions newest first, so the first one is ``latest``.
        """
        versions = {}
        for raw in listing.get('versions', []):
            version = ModVersion(
                name=raw['name'],
                full_name=raw['full_name'],
                version=raw['version_number'],
                url=raw['download_url'],
                desc=raw.get('description', ''),
                deps=list(raw.get('dependencies', [])),
                file_size=raw.get('file_size', 0),
            )
            versions[version.version] = version

        raw_versions = listing.get('versions') or [{}]
        return cls(
            name=listing['name'],
            author=listing['owner'],
            latest=raw_versions[0].get('version_number', ''),
            versions=versions,
        )


@dataclass
class InstalledMod:
    """A mod present on disk, assembled from its three metadata files."""
    manifest: Dict[str, Any]
    mod_json: Dict[str, Any]
    author: str
    path: Path

    @property
    def name(self) -> str:
        return self.mod_json.get('Name') or self.manifest.get('name') or self.path.name

    @property
    def version(self) -> Optional[str]:
        return self.manifest.get('version_number') or self.mod_json.get('Version')

    @property
    def dependencies(self) -> List[str]:
        return list(self.manifest.get('dependencies', []))


class ScanResult(NamedTuple):
    """Outcome of scanning one child directory: either ``mod`` or ``error`` is set."""
    path: Path
    mod: Optional[InstalledMod]
    error: Optional[Exception]

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class EnabledMods:
    """Contents of ``enabledmods.json``: mod name -> enabled flag.

    The file path is remembered after loading so the set can be written back
    to the same place; it is never part of the serialized document.
    """
    mods: Dict[str, bool] = field(default_factory=dict)
    _path: Optional[Path] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EnabledMods":
        if not isinstance(data, dict):
            raise ModParseError(None, "enabled mods document is not a JSON object")
        mods = {}
        for name, enabled in data.items():
            if not isinstance(enabled, bool):
                raise ModParseError(None, f"value for '{name}' is not a boolean")
            mods[name] = enabled
        return cls(mods=mods)

    @classmethod
    def default_with_path(cls, path) -> "EnabledMods":
        """Core mods enabled, bound to ``path``."""
        enabled = cls(mods={name: True for name in CORE_MODS_DISPLAY})
        enabled.set_path(path)
        return enabled

    def to_dict(self) -> Dict[str, bool]:
        return dict(self.mods)

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def set_path(self, path) -> None:
        self._path = Path(path) if path is not None else None

    def is_enabled(self, name: str) -> bool:
        return self.mods.get(name, False)

    def set(self, name: str, enabled: bool) -> None:
        self.mods[name] = enabled

    def enable(self, name: str) -> None:
        self.set(name, True)

    def disable(self, name: str) -> None:
        self.set(name, False)

    def enabled_names(self) -> List[str]:
        return [name for name, enabled in self.mods.items() if enabled]

    def save(self) -> None:
        """Write back to the remembered path."""
        if self._path is None:
            raise UnknownError("EnabledMods has no path set, use save_with_path()")
        self.save_with_path(self._path)

    def save_with_path(self, path) -> None:
        atomic_save_json(Path(path), self.to_dict(), indent=4)

    def __str__(self):
        return json.dumps(self.to_dict(), indent=4)
