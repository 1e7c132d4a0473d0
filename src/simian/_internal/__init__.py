"""Internal helpers for simian. Not covered by versioning policy."""
