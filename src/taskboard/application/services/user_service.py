"""CRUD over the users collection."""

import logging
from typing import Any

from taskboard.application.services.assignment_synchronizer import AssignmentSynchronizer
from taskboard.application.services.query_translator import ListQuery
from taskboard.domain.entities import User
from taskboard.domain.exceptions import InvalidArgumentError, NotFoundError
from taskboard.domain.identifiers import is_valid_id, to_object_id
from taskboard.domain.repositories import DocumentCollection
from taskboard.domain.repositories.document_collection import Document
from taskboard.observability import users_created, users_deleted

log = logging.getLogger(__name__)


def _pending_tasks(value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise InvalidArgumentError("pendingTasks must be a list of task ids")
    return [str(task_id) for task_id in value]


def _required_text(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        return None
    return value


class UserService:
    """Users: list, get, create, partial update and delete.

    ``pendingTasks`` changes made through an update are propagated to the
    tasks collection; deleting a user unassigns its tasks.
    """

    def __init__(self, users: DocumentCollection, synchronizer: AssignmentSynchronizer):
        self.users = users
        self.synchronizer = synchronizer

    async def list_async(self, query: ListQuery) -> list[Document] | int:
        """Returns the matching users, or only their count when ``query.count`` is set."""
        if query.count:
            return await self.users.count_async(query.filter)
        return await self.users.find_async(query.filter, query.projection, query.sort, query.skip, query.limit)

    async def get_async(self, user_id: str, projection: Document | None = None) -> Document:
        self._validate_id(user_id)
        document = await self.users.get_async(user_id, projection)
        if document is None:
            raise NotFoundError("User", user_id)
        return document

    async def create_async(self, data: dict[str, Any]) -> Document:
        name = _required_text(data, "name")
        email = _required_text(data, "email")
        if name is None or email is None:
            raise InvalidArgumentError("Missing required fields: name and email")
        if await self.users.find_one_async({"email": email}) is not None:
            raise InvalidArgumentError("Email already exists", details={"email": email})

        user = User(name=name, email=email, pending_tasks=_pending_tasks(data.get("pendingTasks")))
        document = await self.users.insert_async(user.to_document())
        users_created.add(1)
        log.info(f"Created user '{document['_id']}' <{email}>")
        return document

    async def update_async(self, user_id: str, data: dict[str, Any]) -> Document:
        """Applies the provided fields only; a new ``pendingTasks`` list re-assigns tasks."""
        previous = User.from_document(await self.get_async(user_id))

        changes: Document = {}
        if "name" in data:
            if _required_text(data, "name") is None:
                raise InvalidArgumentError("name must be a non-empty string")
            changes["name"] = data["name"]
        if "email" in data:
            email = _required_text(data, "email")
            if email is None:
                raise InvalidArgumentError("email must be a non-empty string")
            if email != previous.email and await self.users.find_one_async({"email": email, "_id": {"$ne": to_object_id(user_id)}}) is not None:
                raise InvalidArgumentError("Email already exists", details={"email": email})
            changes["email"] = email
        if "pendingTasks" in data:
            changes["pendingTasks"] = _pending_tasks(data["pendingTasks"])

        document = await self.users.update_async(user_id, changes)
        if document is None:
            raise NotFoundError("User", user_id)
        log.info(f"Updated user '{user_id}' ({', '.join(changes) or 'no changes'})")

        if "pendingTasks" in changes:
            await self.synchronizer.on_user_updated_async(User.from_document(document), previous.pending_tasks, changes["pendingTasks"])
        return document

    async def delete_async(self, user_id: str) -> Document:
        self._validate_id(user_id)
        document = await self.users.remove_async(user_id)
        if document is None:
            raise NotFoundError("User", user_id)
        users_deleted.add(1)
        log.info(f"Deleted user '{user_id}'")
        await self.synchronizer.on_user_deleted_async(User.from_document(document))
        return document

    def _validate_id(self, user_id: str) -> None:
        if not is_valid_id(user_id):
            raise InvalidArgumentError("Invalid user id", details={"id": user_id})
