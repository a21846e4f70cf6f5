"""Application layer: type registry, hit resolution, DTOs, and ports."""
