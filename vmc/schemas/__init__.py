"""Packaged JSON schema resources."""
