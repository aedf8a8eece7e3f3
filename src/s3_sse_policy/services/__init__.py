"""Storage and encryption services."""
