"""User API.

A FastAPI service exposing CRUD operations for a single User resource backed
by a relational store through SQLModel.
"""

__version__ = "0.1.0"
