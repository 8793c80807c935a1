import logging
import os
import shutil
import zipfile
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import requests

from .constants import (
    REQUEST_TIMEOUT, CHUNK_SIZE, MAX_RETRIES, RETRY_DELAY, BACKOFF_MULTIPLIER,
    MOD_JSON_FILE, MANIFEST_FILE, AUTHOR_FILE,
)
from .errors import DependencyFormatError, DownloadError, MissingFileError, UnknownError
from .resolver import resolve_deps
from .temp_dir import TempDir
from ..model_types import Mod, ModVersion
from ..utils.log_utils import logger_callback
from ..utils.error_messages import suggest_fix_for_error, get_user_friendly_error
from ..utils.mod_utils import split_full_name
from ..utils.network_utils import retry_with_backoff
from ..utils.symbols import LogSymbols


logger = logging.getLogger(__name__)


class ModInstaller:
    """Downloads Thunderstore packages and installs them into a mods directory.

    Every extraction happens in a TempDir staging folder next to the target,
    so a failed install never leaves half-copied files behind.
    """

    def __init__(self, log_callback=None, max_retries=MAX_RETRIES, retry_delay=RETRY_DELAY):
        self.log = log_callback or logger_callback(logger)
        self.max_retries = max_retries
        self.retry_delay = retry_delay

    def _report(self, error):
        error_type = suggest_fix_for_error(error)
        if error_type:
            self.log(f"\n{get_user_friendly_error(error_type)}", error=True)

    # ------------------------------------------------------------------
    # Download
    # ------------------------------------------------------------------

    def download(self, output, url: str) -> int:
        """Stream ``url`` into the writable binary ``output``. Returns bytes written."""
        return self.download_with_progress(output, url)

    def download_with_progress(self, output, url: str,
                               callback: Optional[Callable[[int, int, int], None]] = None) -> int:
        """Like ``download`` but calls ``callback(delta, current, total)`` after each chunk.

        ``total`` is 0 when the server sends no Content-Length. Retries restart
        from the sink's initial position, so a non-seekable sink gets one attempt.
        """
        try:
            start = output.tell() if output.seekable() else None
        except (AttributeError, OSError):
            start = None

        def attempt_download():
            if start is not None:
                output.seek(start)
                output.truncate()
            response = requests.get(url, stream=True, timeout=REQUEST_TIMEOUT)
            response.raise_for_status()

            total = int(response.headers.get('Content-Length', 0) or 0)
            written = 0
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    output.write(chunk)
                    written += len(chunk)
                    if callback:
                        callback(len(chunk), written, total)
            return written

        retries = self.max_retries if start is not None else 1
        try:
            written = retry_with_backoff(attempt_download, max_retries=retries,
                                         delay=self.retry_delay, backoff=BACKOFF_MULTIPLIER)
        except requests.exceptions.RequestException as e:
            self.log(f"  {LogSymbols.ERROR} Download failed after {retries} attempt(s): {type(e).__name__}", error=True)
            self._report(e)
            raise DownloadError(url, e) from e

        self.log(f"  Downloaded {written} bytes from {url}", debug=True)
        return written

    # ------------------------------------------------------------------
    # Install
    # ------------------------------------------------------------------

    def _extract_zip(self, zip_ref: zipfile.ZipFile, dest: Path):
        dest_resolved = Path(dest).resolve()
        for member in zip_ref.namelist():
            member_path = (Path(dest) / member).resolve()
            try:
                member_path.relative_to(dest_resolved)
            except ValueError:
                self.log(f"  {LogSymbols.ERROR} Security: Attempted path traversal detected in archive (blocked)", error=True)
                raise UnknownError(f"Blocked path traversal in archive: {member}")
        zip_ref.extractall(dest)

    def install_mod(self, full_name: str, archive, target_dir) -> List[Path]:
        """Install the Thunderstore package ``archive`` (path or binary file) into ``target_dir``.

        Every ``mods/<Mod>`` folder of the package that has a ``mod.json`` is
        copied to ``target_dir/<Mod>`` together with the package manifest and
        a ``thunderstore_author.txt``. Existing folders are replaced.

        Returns the installed mod folders.
        """
        parts = split_full_name(full_name)
        if parts is None:
            raise DependencyFormatError(full_name)
        author = parts[0]

        target_dir = Path(target_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        self.log(f"  Installing {full_name}...")

        installed = []
        try:
            with zipfile.ZipFile(archive) as zip_ref, \
                    TempDir.create(target_dir / f".staging-{full_name}") as staging:
                self._extract_zip(zip_ref, staging)

                manifest = staging / MANIFEST_FILE
                if not manifest.is_file():
                    raise MissingFileError(Path(full_name) / MANIFEST_FILE)
                mods_root = staging / "mods"
                if not mods_root.is_dir():
                    raise MissingFileError(Path(full_name) / "mods")

                prepared = []
                for mod_dir in sorted(mods_root.iterdir()):
                    if not (mod_dir / MOD_JSON_FILE).is_file():
                        self.log(f"  Skipping {mod_dir.name}: no {MOD_JSON_FILE}", debug=True)
                        continue
                    shutil.copy2(manifest, mod_dir / MANIFEST_FILE)
                    (mod_dir / AUTHOR_FILE).write_bytes(author.encode('utf-8'))
                    prepared.append(mod_dir)

                if prepared:
                    installed = self._promote(prepared, target_dir, staging / ".replaced")
        except (zipfile.BadZipFile, OSError) as e:
            self.log(f"  {LogSymbols.ERROR} Installation of {full_name} failed: {e}", error=True)
            self._report(e)
            raise

        if not installed:
            raise UnknownError(f"Package {full_name} contains no mods")

        self.log(f"  {LogSymbols.SUCCESS} {full_name} installed ({len(installed)} mod(s))")
        return installed

    def _promote(self, prepared: List[Path], target_dir: Path, backups: Path) -> List[Path]:
        """Move staged mod folders into ``target_dir`` by rename.

        Replaced folders are parked in ``backups`` until every mod is in place;
        on failure the new folders are removed and the old ones restored.
        """
        backups.mkdir()
        promoted = []
        try:
            for mod_dir in prepared:
                dest = target_dir / mod_dir.name
                if dest.exists():
                    self.log(f"  {LogSymbols.TRASH} Removing old version: {dest.name}", info=True)
                    os.replace(dest, backups / mod_dir.name)
                os.replace(mod_dir, dest)
                promoted.append(dest)
        except OSError:
            for dest in promoted:
                shutil.rmtree(dest, ignore_errors=True)
            for old in backups.iterdir():
                os.replace(old, target_dir / old.name)
            raise
        return promoted

    def install_with_sanity(self, full_name: str, archive, target_dir,
                            sanity_check: Callable[[object], bool]) -> List[Path]:
        """``install_mod`` guarded by ``sanity_check(archive)``.

        Nothing under ``target_dir`` is touched unless the check returns a
        truthy value. Exceptions raised by the check propagate unchanged.
        """
        if not sanity_check(archive):
            self.log(f"  {LogSymbols.ERROR} Sanity check failed for {full_name}", error=True)
            raise UnknownError(f"Sanity check failed for {full_name}")
        if hasattr(archive, 'seek'):
            archive.seek(0)
        return self.install_mod(full_name, archive, target_dir)

    def install_northstar(self, archive, game_path) -> Path:
        """Install a Northstar release zip into the game directory.

        The release keeps its files under ``Northstar/``; that prefix is
        stripped. Existing files are overwritten.
        """
        game_path = Path(game_path)
        if not game_path.is_dir():
            raise MissingFileError(game_path)
        self.log("  Installing Northstar...")

        try:
            with zipfile.ZipFile(archive) as zip_ref, \
                    TempDir.create(game_path / ".staging-northstar") as staging:
                self._extract_zip(zip_ref, staging)
                payload = staging / "Northstar"
                if not payload.is_dir():
                    payload = staging.path
                for item in payload.iterdir():
                    dest = game_path / item.name
                    if item.is_dir():
                        shutil.copytree(item, dest, dirs_exist_ok=True)
                    else:
                        shutil.copy2(item, dest)
        except (zipfile.BadZipFile, OSError) as e:
            self.log(f"  {LogSymbols.ERROR} Northstar installation failed: {e}", error=True)
            self._report(e)
            raise

        self.log(f"  {LogSymbols.SUCCESS} Northstar installed to {game_path}")
        return game_path

    def install_package(self, version: ModVersion, index: Sequence[Mod], target_dir) -> List[Path]:
        """Download and install ``version`` and its direct dependencies.

        Dependencies are resolved against ``index`` first, so nothing is
        downloaded when one of them is unknown.
        """
        to_install = []
        for dep in resolve_deps(version.deps, index):
            latest = dep.get_latest()
            if latest is None:
                raise UnknownError(f"Package {dep.name} has no version {dep.latest}")
            to_install.append(latest)
        to_install.append(version)

        target_dir = Path(target_dir)
        installed = []
        with TempDir.create(target_dir / ".downloads") as downloads:
            for item in to_install:
                archive_path = downloads / f"{item.full_name}.zip"
                self.log(f"  Downloading {item.full_name} ({item.file_size_string()})...")
                with open(archive_path, 'wb') as f:
                    self.download(f, item.url)
                installed.extend(self.install_mod(item.full_name, archive_path, target_dir))
        return installed

    def uninstall(self, paths) -> List[Path]:
        """Remove installed mod folders. Returns the folders actually removed."""
        removed = []
        for path in paths:
            path = Path(path)
            if not path.is_dir():
                self.log(f"  {LogSymbols.INFO} Not installed: {path}", info=True)
                continue
            shutil.rmtree(path)
            self.log(f"  {LogSymbols.TRASH} Removed {path.name}", info=True)
            removed.append(path)
        return removed
