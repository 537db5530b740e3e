"""Bundled sample icon registry."""
