"""
Request schemas for the users and tasks endpoints.

Every field is optional so that the services can apply partial updates
(``model_dump(exclude_unset=True)``) and report missing required fields
with their own messages.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class UserBody(BaseModel):
    """Body of ``POST /api/users`` and ``PUT /api/users/{id}``."""

    model_config = ConfigDict(extra="ignore")

    name: Annotated[str | None, Field(description="Display name")] = None
    email: Annotated[str | None, Field(description="Unique email address")] = None
    pendingTasks: Annotated[list[str] | None, Field(description="Ids of the tasks assigned to the user")] = None


class TaskBody(BaseModel):
    """Body of ``POST /api/tasks`` and ``PUT /api/tasks/{id}``."""

    model_config = ConfigDict(extra="ignore")

    name: Annotated[str | None, Field(description="Task name")] = None
    description: str | None = None
    deadline: Annotated[int | float | str | None, Field(description="ISO-8601 timestamp or epoch milliseconds")] = None
    completed: bool | None = None
    assignedUser: Annotated[str | None, Field(description="Id of the assigned user, empty when unassigned")] = None
    assignedUserName: str | None = None
