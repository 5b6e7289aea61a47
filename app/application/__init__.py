"""Application layer: DTOs, interfaces, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories).
"""

from app.application.interfaces import ITagAssociationStore
from app.application.use_cases.search import TagSearchService

__all__ = [
    "ITagAssociationStore",
    "TagSearchService",
]
