import io
import logging
import tarfile

import pytest
import requests

from modkit.core.config_manager import ConfigManager, atomic_save_json
from modkit.core.errors import DependencyNotFoundError, UnknownError
from modkit.core.installer import ModInstaller
from modkit.utils import path_validator, proton
from modkit.utils.error_messages import get_user_friendly_error, suggest_fix_for_error
from modkit.utils.log_utils import logger_callback, setup_file_logging
from modkit.utils.mod_utils import compare_versions, split_full_name


# ============================================================================
# Steam / Titanfall 2 path detection
# ============================================================================

def make_steam(tmp_path):
    root = tmp_path / "Steam"
    (root / "steamapps").mkdir(parents=True)
    library = tmp_path / "Library2"
    (library / "steamapps" / "common" / "Titanfall2").mkdir(parents=True)
    (root / "steamapps" / "libraryfolders.vdf").write_text(
        '"libraryfolders"\n{\n'
        f'\t"0"\n\t{{\n\t\t"path"\t\t"{root}"\n\t}}\n'
        f'\t"1"\n\t{{\n\t\t"path"\t\t"{library}"\n\t}}\n'
        '}\n'
    )
    (library / "steamapps" / "appmanifest_1237970.acf").write_text(
        '"AppState"\n{\n\t"appid"\t\t"1237970"\n\t"installdir"\t\t"Titanfall2"\n}\n'
    )
    return root, library


def test_steam_libraries(tmp_path):
    root, library = make_steam(tmp_path)
    assert path_validator.steam_libraries(root) == [root, library]


def test_titanfall_found_in_second_library(tmp_path):
    root, library = make_steam(tmp_path)
    assert path_validator.titanfall(root) == library / "steamapps" / "common" / "Titanfall2"


def test_titanfall_not_installed(tmp_path):
    root = tmp_path / "Steam"
    (root / "steamapps").mkdir(parents=True)
    assert path_validator.titanfall(root) is None


def test_steam_dir_not_found(tmp_path, monkeypatch):
    monkeypatch.setattr(path_validator, "_candidate_steam_dirs", lambda: [tmp_path / "nope"])
    assert path_validator.steam_dir() is None
    assert path_validator.steam_libraries() is None
    assert path_validator.titanfall() is None


def test_steam_dir_found(tmp_path, monkeypatch):
    root, _ = make_steam(tmp_path)
    monkeypatch.setattr(path_validator, "_candidate_steam_dirs", lambda: [tmp_path / "nope", root])
    assert path_validator.steam_dir() == root


def test_validate_game_path(tmp_path):
    assert not path_validator.validate(tmp_path)
    (tmp_path / "Titanfall2.exe").write_text("")
    assert path_validator.validate(tmp_path)
    assert not path_validator.validate(None)


# ============================================================================
# NorthstarProton
# ============================================================================

class RedirectResp:
    def __init__(self, url):
        self.url = url
    def raise_for_status(self):
        return None


def test_latest_release(monkeypatch):
    monkeypatch.setattr(
        "modkit.utils.proton.requests.get",
        lambda url, timeout=30, allow_redirects=True: RedirectResp(
            "https://github.com/cyrv6737/NorthstarProton/releases/tag/v8-28"),
    )
    assert proton.latest_release() == "v8-28"


def test_latest_release_malformed(monkeypatch):
    monkeypatch.setattr(
        "modkit.utils.proton.requests.get",
        lambda url, timeout=30, allow_redirects=True: RedirectResp(url),
    )
    with pytest.raises(UnknownError):
        proton.latest_release()


def test_release_url():
    assert proton.release_url("v8-28") == (
        "https://github.com/cyrv6737/NorthstarProton/releases/"
        "download/v8-28/NorthstarProton-8-28.tar.gz"
    )


def test_download_ns_proton(monkeypatch):
    class FakeResp:
        headers = {}
        def iter_content(self, chunk_size=8192):
            yield b"tarball"
        def raise_for_status(self):
            return None
    requested = []

    def fake_get(url, stream=True, timeout=30):
        requested.append(url)
        return FakeResp()
    monkeypatch.setattr("modkit.core.installer.requests.get", fake_get)

    output = io.BytesIO()
    assert proton.download_ns_proton("v8-28", output, ModInstaller()) == 7
    assert requested == [proton.release_url("v8-28")]


def make_tarball(files):
    bio = io.BytesIO()
    with tarfile.open(fileobj=bio, mode="w:gz") as tar:
        for name, content in files.items():
            data = content.encode()
            info = tarfile.TarInfo(name)
            info.size = len(data)
            tar.addfile(info, io.BytesIO(data))
    bio.seek(0)
    return bio


def test_install_ns_proton(tmp_path):
    archive = make_tarball({"NorthstarProton-8-28/proton": "#!/bin/sh"})

    proton.install_ns_proton(archive, tmp_path / "compatibilitytools.d")

    assert (tmp_path / "compatibilitytools.d" / "NorthstarProton-8-28" / "proton").read_text() == "#!/bin/sh"


def test_install_ns_proton_blocks_traversal(tmp_path):
    archive = make_tarball({"../escape.sh": "x"})

    with pytest.raises(UnknownError):
        proton.install_ns_proton(archive, tmp_path / "dest")
    assert not (tmp_path / "escape.sh").exists()


# ============================================================================
# Preferences
# ============================================================================

def test_preferences_roundtrip(tmp_path):
    cm = ConfigManager(prefs_file=tmp_path / "config" / "prefs.json")

    assert cm.load_preferences() == {}
    assert cm.set_game_path(tmp_path / "Titanfall2")
    assert cm.get_game_path() == tmp_path / "Titanfall2"
    assert cm.get_profile() == "R2Northstar"
    assert cm.get_mods_dir() == tmp_path / "Titanfall2" / "R2Northstar" / "mods"


def test_corrupt_preferences(tmp_path):
    prefs = tmp_path / "prefs.json"
    prefs.write_text("{ broken")
    messages = []

    cm = ConfigManager(prefs_file=prefs, log_callback=lambda msg, **kw: messages.append(msg))

    assert cm.load_preferences() == {}
    assert cm.get_mods_dir() is None
    assert any("Error loading preferences" in m for m in messages)


def test_atomic_save_leaves_no_temp_files(tmp_path):
    target = tmp_path / "data.json"
    atomic_save_json(target, {"a": 1})
    atomic_save_json(target, {"a": 2})

    assert target.read_text(encoding="utf-8").replace(" ", "").replace("\n", "") == '{"a":2}'
    assert [p.name for p in tmp_path.iterdir()] == ["data.json"]


# ============================================================================
# Error messages, logging, helpers
# ============================================================================

def test_suggest_fix_for_error():
    assert suggest_fix_for_error(requests.exceptions.Timeout()) == 'network_timeout'
    assert suggest_fix_for_error(DependencyNotFoundError("a-b-1.0.0")) == 'dependency_missing'
    assert suggest_fix_for_error(PermissionError()) == 'permission_denied'
    assert suggest_fix_for_error(OSError("No space left on device")) == 'disk_space'
    assert suggest_fix_for_error(ValueError()) is None


def test_user_friendly_error_default():
    assert "Technical details: boom" in get_user_friendly_error("unknown", "boom")


def test_setup_file_logging(tmp_path):
    log_file = tmp_path / "logs" / "modkit.log"
    handler = setup_file_logging(log_file)
    try:
        log = logger_callback(logging.getLogger("modkit.test"))
        log("hello")
        log("bad thing", error=True)
        handler.flush()
    finally:
        logging.getLogger("modkit").removeHandler(handler)
        logging.getLogger("modkit").setLevel(logging.NOTSET)
        handler.close()

    content = log_file.read_text(encoding="utf-8")
    assert "INFO: hello" in content
    assert "ERROR: bad thing" in content


def test_compare_versions():
    assert compare_versions("1.10.0", "1.9.0") == 1
    assert compare_versions("v1.0.0", "1.0.0") == 0
    assert compare_versions("1.0", "1.0.1") == -1


def test_split_full_name():
    assert split_full_name("Foo-Bar-1.0.0") == ("Foo", "Bar", "1.0.0")
    assert split_full_name("FooBar") is None
