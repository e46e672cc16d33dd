"""
API layer for the Briki marketplace core.
"""

from .routes import router
from .schemas import FilterRequest, SortRequest, SearchRequest, ContextRequest, HealthResponse

__all__ = [
    "router",
    "FilterRequest",
    "SortRequest",
    "SearchRequest",
    "ContextRequest",
    "HealthResponse",
]
