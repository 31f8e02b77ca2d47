"""
Application common module.

Contains base classes for the application layer:
- UnitOfWork: Transaction boundary port
- Pagination / PaginatedResult: Paging for list queries
- retry_on_concurrency: Bounded retry for ConcurrencyError
"""

from .pagination import PaginatedResult, Pagination
from .retry import retry_on_concurrency
from .unit_of_work import UnitOfWork

__all__ = [
    "PaginatedResult",
    "Pagination",
    "UnitOfWork",
    "retry_on_concurrency",
]
