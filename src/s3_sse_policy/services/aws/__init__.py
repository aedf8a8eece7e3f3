"""AWS S3 client and request models."""
