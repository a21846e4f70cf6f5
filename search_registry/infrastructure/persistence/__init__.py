"""Persistence: async engine, session factory, and searchable repositories."""
