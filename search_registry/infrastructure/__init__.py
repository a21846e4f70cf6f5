"""Infrastructure layer: SQLAlchemy persistence adapters."""
