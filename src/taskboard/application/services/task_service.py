"""CRUD over the tasks collection."""

import logging
from typing import Any

from taskboard.application.services.assignment_synchronizer import AssignmentSynchronizer
from taskboard.application.services.query_translator import ListQuery
from taskboard.domain.entities import UNASSIGNED_USER_NAME, UNKNOWN_USER_NAME, Task, parse_deadline
from taskboard.domain.exceptions import InvalidArgumentError, NotFoundError
from taskboard.domain.identifiers import is_valid_id, to_object_id
from taskboard.domain.repositories import DocumentCollection
from taskboard.domain.repositories.document_collection import Document
from taskboard.observability import tasks_created, tasks_deleted

log = logging.getLogger(__name__)


def _assignee(value: Any) -> str:
    return "" if value is None else str(value).strip()


class TaskService:
    """Tasks: list, get, create, partial update and delete.

    Assignment changes are propagated to the owning users' ``pendingTasks``.
    """

    def __init__(self, tasks: DocumentCollection, synchronizer: AssignmentSynchronizer):
        self.tasks = tasks
        self.synchronizer = synchronizer

    async def list_async(self, query: ListQuery) -> list[Document] | int:
        """Returns the matching tasks, or only their count when ``query.count`` is set."""
        if query.count:
            return await self.tasks.count_async(query.filter)
        return await self.tasks.find_async(query.filter, query.projection, query.sort, query.skip, query.limit)

    async def get_async(self, task_id: str, projection: Document | None = None) -> Document:
        self._validate_id(task_id)
        document = await self.tasks.get_async(task_id, projection)
        if document is None:
            raise NotFoundError("Task", task_id)
        return document

    async def create_async(self, data: dict[str, Any]) -> Document:
        """Creates a task; a missing or unparseable deadline defaults to now.

        ``assignedUserName`` starts as the client's value, else ``"unknown"``
        for an assigned task and ``"unassigned"`` otherwise, and is replaced by
        the assignee's name once the user is resolved.
        """
        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgumentError("Missing required field: name")

        assigned_user = _assignee(data.get("assignedUser"))
        task = Task(
            name=name,
            description=data.get("description") or "",
            completed=bool(data.get("completed", False)),
            assigned_user=assigned_user,
            assigned_user_name=data.get("assignedUserName") or (UNKNOWN_USER_NAME if assigned_user else UNASSIGNED_USER_NAME),
        )
        deadline = parse_deadline(data.get("deadline"))
        if deadline is not None:
            task.deadline = deadline

        document = await self.tasks.insert_async(task.to_document())
        tasks_created.add(1, {"assigned": task.is_assigned})
        log.info(f"Created task '{document['_id']}'")

        task = await self.synchronizer.on_task_created_async(Task.from_document(document))
        return self._to_document(task)

    async def update_async(self, task_id: str, data: dict[str, Any]) -> Document:
        """Applies the provided fields only, then moves the task between users if its assignee changed."""
        previous = Task.from_document(await self.get_async(task_id))

        changes: Document = {}
        if "name" in data:
            if not isinstance(data["name"], str) or not data["name"].strip():
                raise InvalidArgumentError("name must be a non-empty string")
            changes["name"] = data["name"]
        if "description" in data:
            changes["description"] = data["description"] or ""
        if "deadline" in data:
            deadline = parse_deadline(data["deadline"])
            if deadline is None:
                raise InvalidArgumentError("Invalid deadline", details={"deadline": data["deadline"]})
            changes["deadline"] = deadline
        if "completed" in data:
            changes["completed"] = bool(data["completed"])
        if "assignedUser" in data:
            changes["assignedUser"] = _assignee(data["assignedUser"])
        if "assignedUserName" in data:
            changes["assignedUserName"] = data["assignedUserName"] or UNASSIGNED_USER_NAME

        document = await self.tasks.update_async(task_id, changes)
        if document is None:
            raise NotFoundError("Task", task_id)
        log.info(f"Updated task '{task_id}' ({', '.join(changes) or 'no changes'})")

        task = Task.from_document(document)
        task = await self.synchronizer.on_task_updated_async(
            task, previous.assigned_user, task.assigned_user, keep_name=bool(data.get("assignedUserName"))
        )
        return self._to_document(task)

    async def delete_async(self, task_id: str) -> Document:
        self._validate_id(task_id)
        document = await self.tasks.remove_async(task_id)
        if document is None:
            raise NotFoundError("Task", task_id)
        tasks_deleted.add(1)
        log.info(f"Deleted task '{task_id}'")
        await self.synchronizer.on_task_deleted_async(Task.from_document(document))
        return document

    def _to_document(self, task: Task) -> Document:
        return {"_id": to_object_id(task.id), **task.to_document()}

    def _validate_id(self, task_id: str) -> None:
        if not is_valid_id(task_id):
            raise InvalidArgumentError("Invalid task id", details={"id": task_id})
