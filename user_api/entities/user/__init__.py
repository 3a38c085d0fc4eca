"""User entity module.

This module contains all User-related classes organized by responsibility:
- User: Domain entity returned to clients
- UserTable: Database persistence model
- UserRepository: Data access layer
- CreateUserRequest, UpdateUserRequest, GetUsersQuery: request DTOs
"""

from .entity import User, UserPage
from .repository import UserRepository
from .requests import CreateUserRequest, GetUsersQuery, UpdateUserRequest
from .table import UserTable

__all__ = [
    "User",
    "UserPage",
    "UserTable",
    "UserRepository",
    "CreateUserRequest",
    "UpdateUserRequest",
    "GetUsersQuery",
]
