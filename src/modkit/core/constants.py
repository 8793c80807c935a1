# -*- coding: utf-8 -*-
"""Application constants: paths, network settings, game identifiers and file names."""
import os
from pathlib import Path


# User data directory (override with MODKIT_HOME)
BASE_DIR = Path(os.environ.get("MODKIT_HOME", Path.home() / ".modkit"))

# Paths
PREFS_FILE = BASE_DIR / "prefs.json"
LOG_FILE = BASE_DIR / "modkit.log"

# Network timeouts & download
REQUEST_TIMEOUT = 30
CHUNK_SIZE = 8192

# Retry & backoff
MAX_RETRIES = 3
RETRY_DELAY = 2
BACKOFF_MULTIPLIER = 2

# Remote endpoints
PACKAGE_INDEX_URL = "https://northstar.thunderstore.io/c/northstar/api/v1/package/"
NS_PROTON_BASE_URL = "https://github.com/cyrv6737/NorthstarProton/releases/"

# Game identifiers
TITANFALL_STEAM_ID = 1237970
TITANFALL_ORIGIN_IDS = ("Origin.OFR.50.0001452", "Origin.OFR.50.0001456")
DEFAULT_PROFILE = "R2Northstar"

# Base framework: implicit dependency of every mod, never resolved explicitly
BASE_FRAMEWORK_NAME = "northstar"

CORE_MODS = (
    "northstar.custom",
    "northstar.customservers",
    "northstar.client",
)
# Casing Northstar itself writes into enabledmods.json
CORE_MODS_DISPLAY = (
    "Northstar.Custom",
    "Northstar.CustomServers",
    "Northstar.Client",
)

# Per-mod metadata files
MOD_JSON_FILE = "mod.json"
MANIFEST_FILE = "manifest.json"
AUTHOR_FILE = "thunderstore_author.txt"
ENABLED_MODS_FILE = "enabledmods.json"
