"""Search registry: binds persisted entity types to a full-text index and resolves hits."""
