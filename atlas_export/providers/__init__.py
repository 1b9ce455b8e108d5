"""Concrete adapters for the interfaces in ``atlas_export.interfaces``."""
