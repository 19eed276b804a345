"""FastAPI dependencies wiring the services to the store collections."""

from typing import Annotated

from fastapi import Depends, Request

from taskboard.application.services import AssignmentSynchronizer, TaskService, UserService
from taskboard.application.settings import Settings
from taskboard.infrastructure import TASKS_COLLECTION, USERS_COLLECTION, get_collection


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_synchronizer() -> AssignmentSynchronizer:
    return AssignmentSynchronizer(get_collection(USERS_COLLECTION), get_collection(TASKS_COLLECTION))


def get_user_service(synchronizer: Annotated[AssignmentSynchronizer, Depends(get_synchronizer)]) -> UserService:
    return UserService(get_collection(USERS_COLLECTION), synchronizer)


def get_task_service(synchronizer: Annotated[AssignmentSynchronizer, Depends(get_synchronizer)]) -> TaskService:
    return TaskService(get_collection(TASKS_COLLECTION), synchronizer)


SettingsDep = Annotated[Settings, Depends(get_settings)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
