"""Application layer tests for UserService."""

from unittest.mock import MagicMock

import pytest
from bson import ObjectId

from taskboard.application.services import AssignmentSynchronizer, ListQuery, TaskService, UserService
from taskboard.domain.entities import UNASSIGNED_USER_NAME
from taskboard.domain.exceptions import InvalidArgumentError, NotFoundError
from taskboard.integration.repositories import InMemoryDocumentCollection
from tests.fixtures.factories import TaskFactory, UserFactory
from tests.fixtures.mixins import BaseTestCase


class TestCreateUser(BaseTestCase):
    """Test user creation."""

    @pytest.mark.asyncio
    async def test_create_user(self, user_service: UserService) -> None:
        # Act
        document = await user_service.create_async({"name": "Ann", "email": "a@x.com"})

        # Assert
        assert isinstance(document["_id"], ObjectId)
        self.assert_dict_contains(document, {"name": "Ann", "email": "a@x.com", "pendingTasks": []})
        assert "dateCreated" in document

    @pytest.mark.asyncio
    @pytest.mark.parametrize("data", [{}, {"name": "Ann"}, {"email": "a@x.com"}, {"name": "", "email": "a@x.com"}, {"name": "Ann", "email": "  "}])
    async def test_missing_required_fields(self, user_service: UserService, users: InMemoryDocumentCollection, data: dict) -> None:
        with pytest.raises(InvalidArgumentError):
            await user_service.create_async(data)

        assert await users.count_async() == 0

    @pytest.mark.asyncio
    async def test_duplicate_email_is_rejected(self, user_service: UserService, users: InMemoryDocumentCollection) -> None:
        # Arrange
        await user_service.create_async({"name": "Ann", "email": "a@x.com"})

        # Act
        with pytest.raises(InvalidArgumentError) as exc_info:
            await user_service.create_async({"name": "Another Ann", "email": "a@x.com"})

        # Assert
        assert exc_info.value.message == "Email already exists"
        assert await users.count_async() == 1

    @pytest.mark.asyncio
    async def test_pending_tasks_are_stored_as_given(self, user_service: UserService, tasks: InMemoryDocumentCollection) -> None:
        # Arrange
        task = await TaskFactory.insert_async(tasks)

        # Act
        document = await user_service.create_async({"name": "Ann", "email": "a@x.com", "pendingTasks": [task.id]})

        # Assert
        assert document["pendingTasks"] == [task.id]
        await self.assert_assignment(tasks, task.id, "", UNASSIGNED_USER_NAME)


class TestGetAndListUsers(BaseTestCase):
    """Test user reads."""

    @pytest.mark.asyncio
    async def test_get_user(self, user_service: UserService, users: InMemoryDocumentCollection) -> None:
        ann = await UserFactory.insert_async(users, name="Ann")

        document = await user_service.get_async(ann.id)

        assert str(document["_id"]) == ann.id

    @pytest.mark.asyncio
    async def test_get_user_with_projection(self, user_service: UserService, users: InMemoryDocumentCollection) -> None:
        ann = await UserFactory.insert_async(users, name="Ann")

        document = await user_service.get_async(ann.id, {"name": 1})

        assert set(document) == {"_id", "name"}

    @pytest.mark.asyncio
    async def test_invalid_id(self, user_service: UserService) -> None:
        with pytest.raises(InvalidArgumentError):
            await user_service.get_async("123")

    @pytest.mark.asyncio
    async def test_unknown_id(self, user_service: UserService) -> None:
        with pytest.raises(NotFoundError):
            await user_service.get_async(str(ObjectId()))

    @pytest.mark.asyncio
    async def test_list_users_is_unbounded_by_default(self, user_service: UserService, users: InMemoryDocumentCollection) -> None:
        for i in range(5):
            await UserFactory.insert_async(users, name=f"User {i}")

        documents = await user_service.list_async(ListQuery.parse())

        assert len(documents) == 5

    @pytest.mark.asyncio
    async def test_list_users_with_sort_skip_and_limit(self, user_service: UserService, users: InMemoryDocumentCollection) -> None:
        for name in ("Cid", "Ann", "Bob"):
            await UserFactory.insert_async(users, name=name)

        documents = await user_service.list_async(ListQuery.parse(sort="name", skip="1", limit="1"))

        assert [document["name"] for document in documents] == ["Bob"]

    @pytest.mark.asyncio
    async def test_count_ignores_other_parameters(self, user_service: UserService, users: InMemoryDocumentCollection) -> None:
        for name in ("Ann", "Ann", "Bob"):
            await UserFactory.insert_async(users, name=name)

        count = await user_service.list_async(ListQuery.parse(where='{"name": "Ann"}', limit="1", skip="5", count="true"))

        assert count == 2


class TestUpdateUser(BaseTestCase):
    """Test partial user updates."""

    @pytest.mark.asyncio
    async def test_only_provided_fields_change(self, user_service: UserService, users: InMemoryDocumentCollection) -> None:
        ann = await UserFactory.insert_async(users, name="Ann", email="a@x.com")

        document = await user_service.update_async(ann.id, {"name": "Annie"})

        self.assert_dict_contains(document, {"name": "Annie", "email": "a@x.com"})

    @pytest.mark.asyncio
    async def test_empty_name_is_rejected(self, user_service: UserService, users: InMemoryDocumentCollection) -> None:
        ann = await UserFactory.insert_async(users, name="Ann")

        with pytest.raises(InvalidArgumentError):
            await user_service.update_async(ann.id, {"name": ""})

    @pytest.mark.asyncio
    async def test_email_taken_by_another_user_is_rejected(self, user_service: UserService, users: InMemoryDocumentCollection) -> None:
        await UserFactory.insert_async(users, email="a@x.com")
        bob = await UserFactory.insert_async(users, email="b@x.com")

        with pytest.raises(InvalidArgumentError):
            await user_service.update_async(bob.id, {"email": "a@x.com"})

    @pytest.mark.asyncio
    async def test_keeping_own_email_is_allowed(self, user_service: UserService, users: InMemoryDocumentCollection) -> None:
        ann = await UserFactory.insert_async(users, email="a@x.com")

        document = await user_service.update_async(ann.id, {"email": "a@x.com"})

        assert document["email"] == "a@x.com"

    @pytest.mark.asyncio
    async def test_unknown_user(self, user_service: UserService) -> None:
        with pytest.raises(NotFoundError):
            await user_service.update_async(str(ObjectId()), {"name": "Ann"})

    @pytest.mark.asyncio
    async def test_pending_tasks_change_reassigns_tasks(
        self, user_service: UserService, users: InMemoryDocumentCollection, tasks: InMemoryDocumentCollection
    ) -> None:
        # Arrange
        ann = await UserFactory.insert_async(users, name="Ann")
        task = await TaskFactory.insert_async(tasks)

        # Act
        document = await user_service.update_async(ann.id, {"pendingTasks": [task.id]})

        # Assert
        assert document["pendingTasks"] == [task.id]
        await self.assert_assignment(tasks, task.id, ann.id, "Ann")

    @pytest.mark.asyncio
    async def test_rename_without_pending_tasks_does_not_touch_tasks(self, mock_users: MagicMock, mock_tasks: MagicMock) -> None:
        # Arrange
        ann = UserFactory.create(name="Ann")
        document = {"_id": ObjectId(ann.id), **ann.to_document()}
        mock_users.get_async = self.create_async_mock(return_value=document)
        mock_users.update_async = self.create_async_mock(return_value={**document, "name": "Annie"})
        service = UserService(mock_users, AssignmentSynchronizer(mock_users, mock_tasks))

        # Act
        await service.update_async(ann.id, {"name": "Annie"})

        # Assert
        mock_users.update_async.assert_awaited_once_with(ann.id, {"name": "Annie"})
        mock_tasks.get_async.assert_not_called()
        mock_tasks.update_async.assert_not_called()


class TestDeleteUser(BaseTestCase):
    """Test user deletion."""

    @pytest.mark.asyncio
    async def test_delete_user_unassigns_tasks(
        self, user_service: UserService, task_service: TaskService, users: InMemoryDocumentCollection, tasks: InMemoryDocumentCollection
    ) -> None:
        # Arrange
        ann = await UserFactory.insert_async(users, name="Ann")
        created = await task_service.create_async({"name": "Fix bug", "assignedUser": ann.id})

        # Act
        removed = await user_service.delete_async(ann.id)

        # Assert
        assert str(removed["_id"]) == ann.id
        assert removed["pendingTasks"] == [str(created["_id"])]
        assert await users.count_async() == 0
        await self.assert_assignment(tasks, str(created["_id"]), "", UNASSIGNED_USER_NAME)

    @pytest.mark.asyncio
    async def test_delete_unknown_user(self, user_service: UserService) -> None:
        with pytest.raises(NotFoundError):
            await user_service.delete_async(str(ObjectId()))

    @pytest.mark.asyncio
    async def test_delete_invalid_id(self, user_service: UserService) -> None:
        with pytest.raises(InvalidArgumentError):
            await user_service.delete_async("nope")
