from . import home, tasks, users

__all__ = ["home", "tasks", "users"]
