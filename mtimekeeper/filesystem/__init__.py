"""Filesystem path helpers."""
