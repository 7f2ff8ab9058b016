from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from dotenv import load_dotenv

from persistence.errors import StoreError
from persistence.repositories import AsyncAuditedStore, open_store
from settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    load_dotenv("local.env")

    from endpoints.store_endpoints import not_found_handler, router as store_router, store_error_handler

    if settings is None:
        settings = get_settings()

    app = FastAPI(title="JSON document store")
    app.state.settings = settings
    app.state.store = AsyncAuditedStore(
        open_store(
            settings.data_dir,
            settings.log_file,
            lock_documents=settings.lock_documents,
            set_policy=settings.set_policy,
        )
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if settings.debug_log_requests:

        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            response = await call_next(request)
            logger.debug("REQUEST %s %s -> %s", request.method, request.url, response.status_code)
            return response

    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(StarletteHTTPException, not_found_handler)

    app.include_router(store_router)

    return app
