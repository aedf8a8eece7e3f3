"""Builders turning configuration into providers and encryption secrets."""
