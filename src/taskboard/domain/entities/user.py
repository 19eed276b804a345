import datetime
from dataclasses import dataclass, field
from typing import Any


@dataclass
class User:
    """A person tasks can be assigned to.

    ``pending_tasks`` is a denormalized list of Task ids (as strings) kept
    loosely in sync with ``Task.assigned_user``.
    """

    name: str
    email: str
    pending_tasks: list[str] = field(default_factory=list)
    date_created: datetime.datetime = field(default_factory=lambda: datetime.datetime.now(datetime.UTC))
    id: str | None = None

    def to_document(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "pendingTasks": list(self.pending_tasks),
            "dateCreated": self.date_created,
        }

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "User":
        return cls(
            id=str(document["_id"]) if document.get("_id") is not None else None,
            name=document.get("name", ""),
            email=document.get("email", ""),
            pending_tasks=[str(task_id) for task_id in document.get("pendingTasks") or []],
            date_created=document.get("dateCreated") or datetime.datetime.now(datetime.UTC),
        )
