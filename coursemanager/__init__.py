"""Course Manager: JSON-backed course and instructor records."""
