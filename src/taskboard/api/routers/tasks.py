"""
Tasks Router

Endpoints:
- GET /api/tasks - List tasks (where, sort, select, skip, limit, count)
- GET /api/tasks/{task_id} - Get a task (select)
- POST /api/tasks - Create a task
- PUT /api/tasks/{task_id} - Partially update a task
- DELETE /api/tasks/{task_id} - Delete a task
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from taskboard.api.dependencies import SettingsDep, TaskServiceDep
from taskboard.api.responses import created, ok
from taskboard.api.schemas import TaskBody
from taskboard.application.services import ListQuery
from taskboard.application.services.query_translator import parse_select

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", summary="List tasks")
async def list_tasks(
    service: TaskServiceDep,
    settings: SettingsDep,
    where: str | None = None,
    sort: str | None = None,
    select: str | None = None,
    skip: str | None = None,
    limit: str | None = None,
    count: str | None = None,
) -> JSONResponse:
    query = ListQuery.parse(
        where,
        sort,
        select,
        skip,
        limit,
        count,
        default_limit=settings.task_default_limit,
        max_limit=settings.task_max_limit,
    )
    result = await service.list_async(query)
    if query.count:
        return ok({"count": result})
    return ok(result)


@router.get("/{task_id}", summary="Get a task")
async def get_task(task_id: str, service: TaskServiceDep, select: str | None = None) -> JSONResponse:
    return ok(await service.get_async(task_id, parse_select(select)))


@router.post("", status_code=201, summary="Create a task")
async def create_task(body: TaskBody, service: TaskServiceDep) -> JSONResponse:
    logger.info(f"Creating task '{body.name}'")
    return created(await service.create_async(body.model_dump(exclude_unset=True)))


@router.put("/{task_id}", summary="Update a task")
async def update_task(task_id: str, body: TaskBody, service: TaskServiceDep) -> JSONResponse:
    return ok(await service.update_async(task_id, body.model_dump(exclude_unset=True)))


@router.delete("/{task_id}", summary="Delete a task")
async def delete_task(task_id: str, service: TaskServiceDep) -> JSONResponse:
    return ok(await service.delete_async(task_id))
