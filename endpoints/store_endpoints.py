# store_endpoints.py
from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from json_store import dumps_compact, loads_object
from persistence.audit import now_millis
from persistence.errors import (
    FileAlreadyExists,
    FileNotFound,
    InvalidKey,
    IOFailure,
    ParseError,
    StoreError,
    ValidationError,
)
from persistence.repositories import AsyncAuditedStore

router = APIRouter(tags=["store"])
logger = logging.getLogger(__name__)

# -------------------------------------------------------------------
# Failure kind -> HTTP status
# -------------------------------------------------------------------
STATUS_BY_ERROR: list[tuple[type[StoreError], int]] = [
    (ValidationError, 400),
    (InvalidKey, 400),
    (FileAlreadyExists, 400),
    (FileNotFound, 404),
    (ParseError, 500),
    (IOFailure, 500),
]

NOT_FOUND_HTML = """
<!doctype html>
<html>
  <head><meta charset="utf-8"><title>404 Not Found</title></head>
  <body>
    <h2>404 Not Found</h2>
    <p>There is nothing at this address.</p>
  </body>
</html>
""".strip()


class StatusRecord(BaseModel):
    up: bool
    owner: str
    timestamp: int


def status_for(exc: StoreError) -> int:
    for kind, status in STATUS_BY_ERROR:
        if isinstance(exc, kind):
            return status
    return 500


async def store_error_handler(request: Request, exc: StoreError) -> PlainTextResponse:
    status = status_for(exc)
    log = logger.warning if status >= 500 else logger.info
    log("STORE %s %s -> %s %s: %s", request.method, request.url.path, status, type(exc).__name__, exc.message)
    return PlainTextResponse(exc.message, status_code=status)


async def not_found_handler(request: Request, exc: StarletteHTTPException):
    # Unknown path, or known path with the wrong method: both are "not found".
    if exc.status_code in (404, 405):
        return HTMLResponse(NOT_FOUND_HTML, status_code=404)
    return await http_exception_handler(request, exc)


def _store(request: Request) -> AsyncAuditedStore:
    return request.app.state.store


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else dumps_compact(value)


# -------------------------------------------------------------------
# Service info
# -------------------------------------------------------------------
@router.get("/")
async def home() -> PlainTextResponse:
    return PlainTextResponse("Welcome to my server", headers={"My-custom-header": "This is a great API"})


@router.get("/status")
async def status(request: Request) -> JSONResponse:
    record = StatusRecord(up=True, owner=request.app.state.settings.owner, timestamp=now_millis())
    return JSONResponse(record.model_dump(mode="json"))


# -------------------------------------------------------------------
# Documents and keys
# -------------------------------------------------------------------
@router.patch("/set")
async def patch_set(
    request: Request,
    file: Optional[str] = None,
    key: Optional[str] = None,
    value: Optional[str] = None,
) -> PlainTextResponse:
    await _store(request).set(file, key, value)
    return PlainTextResponse("Value set")


@router.post("/write/{file}")
async def post_write(request: Request, file: str) -> PlainTextResponse:
    raw = await request.body()
    content: dict[str, Any] = {}
    if raw.strip():
        try:
            content = loads_object(raw.decode("utf-8"))
        except ValueError as e:
            raise ValidationError(f"Error creating file {file}: body must be a JSON object ({e})") from e
    await _store(request).create_file(file, content)
    return PlainTextResponse("File written", status_code=201)


@router.get("/get/{file}")
async def get_get(request: Request, file: str, key: Optional[str] = None) -> PlainTextResponse:
    value = await _store(request).get(file, key)
    return PlainTextResponse(_as_text(value))


@router.patch("/remove")
async def patch_remove(request: Request, file: Optional[str] = None, key: Optional[str] = None) -> PlainTextResponse:
    await _store(request).remove(file, key)
    return PlainTextResponse("Value removed")


@router.delete("/deleteFile/{file}")
async def delete_delete_file(request: Request, file: str) -> PlainTextResponse:
    await _store(request).delete_file(file)
    return PlainTextResponse("File deleted")


# -------------------------------------------------------------------
# Whole-store operations
# -------------------------------------------------------------------
@router.post("/merge")
async def post_merge(request: Request) -> PlainTextResponse:
    await _store(request).merge_data()
    return PlainTextResponse("Files merged")


@router.patch("/union")
async def patch_union(request: Request, fileA: Optional[str] = None, fileB: Optional[str] = None) -> JSONResponse:
    return JSONResponse(await _store(request).union(fileA, fileB))


@router.patch("/intersect")
async def patch_intersect(request: Request, fileA: Optional[str] = None, fileB: Optional[str] = None) -> JSONResponse:
    return JSONResponse(await _store(request).intersect(fileA, fileB))


@router.patch("/difference")
async def patch_difference(request: Request, fileA: Optional[str] = None, fileB: Optional[str] = None) -> JSONResponse:
    return JSONResponse(await _store(request).difference(fileA, fileB))
