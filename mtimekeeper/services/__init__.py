"""Content fingerprinting, snapshot and restore services."""
