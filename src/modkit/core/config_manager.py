"""User preferences and JSON persistence with atomic writes to prevent corruption."""
import json
import logging
import os
import tempfile
from pathlib import Path

from .constants import PREFS_FILE, DEFAULT_PROFILE

logger = logging.getLogger(__name__)


def atomic_save_json(file_path: Path, data, indent=2, ensure_ascii=False):
    """Atomic write: temp file + replace so a crash never leaves a truncated file."""
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    temp_fd, temp_path = tempfile.mkstemp(
        dir=file_path.parent,
        prefix=f'.tmp_{file_path.stem}_',
        suffix='.json'
    )
    try:
        with os.fdopen(temp_fd, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=indent, ensure_ascii=ensure_ascii)
        os.replace(temp_path, file_path)
    except Exception:
        if os.path.exists(temp_path):
            os.unlink(temp_path)
        raise


class ConfigManager:
    """Loads and saves user preferences (game path, profile)."""

    def __init__(self, prefs_file=None, log_callback=None):
        self.prefs_file = Path(prefs_file) if prefs_file else PREFS_FILE
        self.log_callback = log_callback

    def _log(self, message, **kwargs):
        if self.log_callback:
            self.log_callback(message, **kwargs)

    def load_preferences(self):
        """Load user preferences, empty dict if missing or corrupt."""
        if self.prefs_file.exists():
            try:
                with open(self.prefs_file, 'r', encoding='utf-8') as f:
                    prefs = json.load(f)
                if isinstance(prefs, dict):
                    return prefs
                self._log(f"Ignoring preferences: {self.prefs_file.name} is not a JSON object", error=True)
            except (json.JSONDecodeError, IOError) as e:
                logger.warning("Could not load %s: %s", self.prefs_file, e)
                self._log(f"Error loading preferences: {e}", error=True)
        return {}

    def save_preferences(self, prefs):
        """Save preferences atomically."""
        try:
            atomic_save_json(self.prefs_file, prefs)
        except OSError as e:
            logger.error("Could not save %s: %s", self.prefs_file, e)
            self._log(f"Error saving {self.prefs_file.name}: {e}", error=True)
            return False
        return True

    def get_game_path(self):
        path = self.load_preferences().get('game_path')
        return Path(path) if path else None

    def set_game_path(self, path):
        prefs = self.load_preferences()
        prefs['game_path'] = str(path)
        return self.save_preferences(prefs)

    def get_profile(self):
        return self.load_preferences().get('profile') or DEFAULT_PROFILE

    def get_mods_dir(self, game_path=None):
        """``<game>/<profile>/mods`` for the configured (or given) game path."""
        game_path = Path(game_path) if game_path else self.get_game_path()
        if game_path is None:
            return None
        return game_path / self.get_profile() / "mods"
