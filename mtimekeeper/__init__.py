"""Snapshot file modification times and restore them onto unchanged content."""
