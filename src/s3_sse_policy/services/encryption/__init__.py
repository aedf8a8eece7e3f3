"""Encryption methods, secrets and request parameter factories."""
