from .assignment_synchronizer import AssignmentSynchronizer, ReconcileReport
from .query_translator import ListQuery
from .task_service import TaskService
from .user_service import UserService

__all__ = [
    "AssignmentSynchronizer",
    "ReconcileReport",
    "ListQuery",
    "TaskService",
    "UserService",
]
