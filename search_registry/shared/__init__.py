"""Shared utilities: telemetry (logging and tracing)."""
