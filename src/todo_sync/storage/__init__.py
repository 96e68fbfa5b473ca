"""Local persistence of the entries list (JSON blob store keyed by a configured key)."""
