"""Steam and Titanfall 2 installation path detection.

Not finding something is a normal outcome and returns None.
"""
import os
import platform
import re
from pathlib import Path
from typing import List, Optional

from ..core.constants import TITANFALL_STEAM_ID


def _candidate_steam_dirs() -> List[Path]:
    system = platform.system()

    if system == "Windows":
        return [
            Path(os.environ.get("ProgramFiles(x86)", r"C:\Program Files (x86)")) / "Steam",
            Path(os.environ.get("ProgramFiles", r"C:\Program Files")) / "Steam",
        ]
    elif system == "Darwin":
        return [Path.home() / "Library" / "Application Support" / "Steam"]
    return [
        Path.home() / ".steam" / "steam",
        Path.home() / ".local" / "share" / "Steam",
        Path.home() / ".var" / "app" / "com.valvesoftware.Steam" / ".local" / "share" / "Steam",
    ]


def steam_dir() -> Optional[Path]:
    """Locate the Steam installation by OS."""
    for path in _candidate_steam_dirs():
        if (path / "steamapps").is_dir():
            return path
    return None


def steam_libraries(steam_root=None) -> Optional[List[Path]]:
    """Library folders from ``steamapps/libraryfolders.vdf``, Steam's own dir first."""
    root = Path(steam_root) if steam_root else steam_dir()
    if root is None:
        return None

    libraries = [root]
    vdf = root / "steamapps" / "libraryfolders.vdf"
    try:
        content = vdf.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError):
        return libraries

    for match in re.finditer(r'"path"\s+"([^"]+)"', content):
        path = Path(match.group(1).replace('\\\\', '\\'))
        if path not in libraries:
            libraries.append(path)
    return libraries


def titanfall(steam_root=None) -> Optional[Path]:
    """Titanfall 2 install directory from its app manifest in any library."""
    for library in steam_libraries(steam_root) or []:
        manifest = library / "steamapps" / f"appmanifest_{TITANFALL_STEAM_ID}.acf"
        if not manifest.is_file():
            continue
        try:
            content = manifest.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError):
            continue
        match = re.search(r'"installdir"\s+"([^"]+)"', content, re.IGNORECASE)
        if match:
            path = library / "steamapps" / "common" / match.group(1)
            if path.is_dir():
                return path
    return None


def validate(path) -> bool:
    """Check that ``path`` looks like a Titanfall 2 install."""
    if not path:
        return False
    path_obj = Path(path)
    if not path_obj.is_dir():
        return False
    return (path_obj / "Titanfall2.exe").exists() or (path_obj / "gameversion.txt").exists()
