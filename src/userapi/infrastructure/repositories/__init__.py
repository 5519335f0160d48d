"""Repositories encapsulating SQL for each table."""

from userapi.infrastructure.repositories.users import UserRepository

__all__ = ["UserRepository"]
