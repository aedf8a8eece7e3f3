"""Storage provider interfaces."""
