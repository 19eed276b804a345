"""The ``{message, data}`` response envelope."""

import datetime
from typing import Any

from bson import ObjectId
from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def _isoformat(value: datetime.datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=datetime.UTC)
    return value.astimezone(datetime.UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


ENCODERS = {ObjectId: str, datetime.datetime: _isoformat}


def encode(data: Any) -> Any:
    """Make store documents JSON-safe: ObjectIds as strings, timestamps as ISO-8601."""
    return jsonable_encoder(data, custom_encoder=ENCODERS)


def envelope(message: str, data: Any = None, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, "data": encode(data)})


def ok(data: Any) -> JSONResponse:
    return envelope("OK", data)


def created(data: Any) -> JSONResponse:
    return envelope("Created", data, status.HTTP_201_CREATED)
