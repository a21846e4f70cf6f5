"""Application interfaces (ports): repository protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from search_registry.infrastructure.
"""

from search_registry.application.interfaces.repositories import (
    IRepositoryFactory,
    ISearchableRepository,
)

__all__ = ["IRepositoryFactory", "ISearchableRepository"]
