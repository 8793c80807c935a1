from pathlib import Path

import pytest
import requests

from modkit.core.api import get_package_index, mark_installed
from modkit.core.errors import ModParseError
from modkit.model_types import InstalledMod, Mod

LISTING = [
    {
        "name": "server_utilities",
        "owner": "Fifty",
        "full_name": "Fifty-server_utilities",
        "versions": [
            {
                "name": "server_utilities",
                "full_name": "Fifty-server_utilities-2.1.0",
                "description": "Utilities for servers",
                "version_number": "2.1.0",
                "dependencies": ["northstar-Northstar-1.9.0"],
                "download_url": "https://thunderstore.io/package/download/Fifty/server_utilities/2.1.0/",
                "file_size": 2_500_000,
            },
            {
                "name": "server_utilities",
                "full_name": "Fifty-server_utilities-2.0.0",
                "description": "Utilities for servers",
                "version_number": "2.0.0",
                "dependencies": [],
                "download_url": "https://thunderstore.io/package/download/Fifty/server_utilities/2.0.0/",
                "file_size": 2048,
            },
        ],
    }
]


class FakeResp:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code
    def json(self):
        return self.payload
    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"HTTP {self.status_code}", response=self)


def test_get_package_index(monkeypatch):
    monkeypatch.setattr("modkit.core.api.requests.get", lambda url, timeout=30: FakeResp(LISTING))

    index = get_package_index()

    assert len(index) == 1
    mod = index[0]
    assert mod.name == "server_utilities"
    assert mod.author == "Fifty"
    assert mod.latest == "2.1.0"
    assert set(mod.versions) == {"2.1.0", "2.0.0"}
    latest = mod.get_latest()
    assert latest.full_name == "Fifty-server_utilities-2.1.0"
    assert latest.deps == ["northstar-Northstar-1.9.0"]
    assert latest.file_size_string() == "2.38 MB"
    assert mod.get_version("2.0.0").file_size_string() == "2.00 KB"


def test_get_package_index_http_error(monkeypatch):
    monkeypatch.setattr("modkit.core.api.requests.get", lambda url, timeout=30: FakeResp([], 503))

    with pytest.raises(requests.exceptions.HTTPError):
        get_package_index()


def test_get_package_index_malformed(monkeypatch):
    monkeypatch.setattr("modkit.core.api.requests.get",
                        lambda url, timeout=30: FakeResp({"detail": "oops"}))

    with pytest.raises(ModParseError):
        get_package_index()


def test_mark_installed():
    index = [
        Mod(name="server_utilities", author="Fifty", latest="2.1.0"),
        Mod(name="other", author="Someone", latest="1.0.0"),
    ]
    on_disk = [InstalledMod(
        manifest={"name": "server_utilities", "version_number": "2.0.0"},
        mod_json={"Name": "Fifty.ServerUtilities"},
        author="Fifty\n",
        path=Path("mods/Fifty.ServerUtilities"),
    )]

    marked = mark_installed(index, on_disk)

    assert marked[0].installed and marked[0].upgradable
    assert not marked[1].installed
    assert not index[0].installed
