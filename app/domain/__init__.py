"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import TagMatchMode
from app.domain.exceptions import (
    PostSearchException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    TagStoreUnavailableException,
    ValidationException,
)

__all__ = [
    "PostSearchException",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "TagMatchMode",
    "TagStoreUnavailableException",
    "ValidationException",
]
