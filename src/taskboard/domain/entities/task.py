import datetime
from dataclasses import dataclass, field
from typing import Any

UNASSIGNED_USER_NAME = "unassigned"
"""assignedUserName of a task with no assignee."""

UNKNOWN_USER_NAME = "unknown"
"""assignedUserName of a task whose assignee id could not be resolved."""


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC)


def parse_deadline(value: Any) -> datetime.datetime | None:
    """Parse a client supplied deadline.

    Accepts datetimes, ISO-8601 strings and epoch milliseconds. Returns None
    when the value is absent or cannot be parsed.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime.datetime):
        return value if value.tzinfo else value.replace(tzinfo=datetime.UTC)
    if isinstance(value, int | float):
        try:
            return datetime.datetime.fromtimestamp(value / 1000, tz=datetime.UTC)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str) and value.strip():
        try:
            parsed = datetime.datetime.fromisoformat(value.strip())
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=datetime.UTC)
    return None


@dataclass
class Task:
    """A unit of work, optionally assigned to a User.

    ``assigned_user_name`` caches the assignee's name at the time of the last
    synchronization; it is not a live reference.
    """

    name: str
    description: str = ""
    deadline: datetime.datetime = field(default_factory=_utcnow)
    completed: bool = False
    assigned_user: str = ""
    assigned_user_name: str = UNASSIGNED_USER_NAME
    date_created: datetime.datetime = field(default_factory=_utcnow)
    id: str | None = None

    @property
    def is_assigned(self) -> bool:
        return bool(self.assigned_user)

    def to_document(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "deadline": self.deadline,
            "completed": self.completed,
            "assignedUser": self.assigned_user,
            "assignedUserName": self.assigned_user_name,
            "dateCreated": self.date_created,
        }

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Task":
        return cls(
            id=str(document["_id"]) if document.get("_id") is not None else None,
            name=document.get("name", ""),
            description=document.get("description") or "",
            deadline=document.get("deadline") or _utcnow(),
            completed=bool(document.get("completed", False)),
            assigned_user=document.get("assignedUser") or "",
            assigned_user_name=document.get("assignedUserName") or UNASSIGNED_USER_NAME,
            date_created=document.get("dateCreated") or _utcnow(),
        )
