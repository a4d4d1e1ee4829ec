"""HTTP adapter over the catalogue services."""
