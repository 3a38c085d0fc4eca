"""Test configuration and fixtures for user-api."""

from tests.fixtures import *  # noqa: F401,F403
