"""Domain entities."""

from .task import UNASSIGNED_USER_NAME, UNKNOWN_USER_NAME, Task, parse_deadline
from .user import User

__all__ = [
    "Task",
    "User",
    "UNASSIGNED_USER_NAME",
    "UNKNOWN_USER_NAME",
    "parse_deadline",
]
