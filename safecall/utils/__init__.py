"""Package-level helpers that are not part of the call path."""
