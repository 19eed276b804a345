"""
Users Router

Endpoints:
- GET /api/users - List users (where, sort, select, skip, limit, count)
- GET /api/users/{user_id} - Get a user (select)
- POST /api/users - Create a user
- PUT /api/users/{user_id} - Partially update a user
- DELETE /api/users/{user_id} - Delete a user and unassign its tasks
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from taskboard.api.dependencies import UserServiceDep
from taskboard.api.responses import created, ok
from taskboard.api.schemas import UserBody
from taskboard.application.services import ListQuery
from taskboard.application.services.query_translator import parse_select

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", summary="List users")
async def list_users(
    service: UserServiceDep,
    where: str | None = None,
    sort: str | None = None,
    select: str | None = None,
    skip: str | None = None,
    limit: str | None = None,
    count: str | None = None,
) -> JSONResponse:
    query = ListQuery.parse(where, sort, select, skip, limit, count)
    result = await service.list_async(query)
    if query.count:
        return ok({"count": result})
    return ok(result)


@router.get("/{user_id}", summary="Get a user")
async def get_user(user_id: str, service: UserServiceDep, select: str | None = None) -> JSONResponse:
    return ok(await service.get_async(user_id, parse_select(select)))


@router.post("", status_code=201, summary="Create a user")
async def create_user(body: UserBody, service: UserServiceDep) -> JSONResponse:
    logger.info(f"Creating user <{body.email}>")
    return created(await service.create_async(body.model_dump(exclude_unset=True)))


@router.put("/{user_id}", summary="Update a user")
async def update_user(user_id: str, body: UserBody, service: UserServiceDep) -> JSONResponse:
    return ok(await service.update_async(user_id, body.model_dump(exclude_unset=True)))


@router.delete("/{user_id}", summary="Delete a user")
async def delete_user(user_id: str, service: UserServiceDep) -> JSONResponse:
    return ok(await service.delete_async(user_id))
