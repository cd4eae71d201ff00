"""Checksum engine: hashing, artifact naming, reconciliation, change detection."""
