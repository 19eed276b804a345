"""Service banner and health check."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse, PlainTextResponse

from taskboard.api.dependencies import SettingsDep
from taskboard.api.responses import ok

router = APIRouter()


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def banner(settings: SettingsDep) -> str:
    return f"{settings.app_name} is running. Use /api/users and /api/tasks."


@router.get("/api/", summary="Health check")
async def health(settings: SettingsDep) -> JSONResponse:
    return ok({"service": f"{settings.app_name} running", "version": settings.app_version})
