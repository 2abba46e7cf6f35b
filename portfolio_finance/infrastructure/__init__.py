"""Infrastructure adapters: database, cache and store health."""
