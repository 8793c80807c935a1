"""Mod resolution, installed-mod discovery, enabled-mods state and installation."""
