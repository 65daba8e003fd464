"""ORM models exposed by the SimpleTodo application."""
from .task import Task

__all__ = ["Task"]
