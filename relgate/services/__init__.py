"""Adapters for the build system and the release host."""
