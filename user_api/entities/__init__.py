"""Entities module with an entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model returned to API clients
- table.py: Database persistence model
- repository.py: Data access layer
- requests.py: Request and query DTOs bound from HTTP input
"""

from .user import User, UserRepository, UserTable

__all__ = [
    "User",
    "UserTable",
    "UserRepository",
]
