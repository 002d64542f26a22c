# SPDX-FileCopyrightText: 2025-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: vendorhub
"""
FastAPI app for vendorhub.
Exposes the onboarding workflow and the admin dashboard over HTTP.
"""

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request, Response

from vendorhub import __version__
from vendorhub.api.dtos import (
    DraftInputDTO,
    LoginDTO,
    ManualLocationDTO,
    PayDTO,
    StatusUpdateDTO,
    WorkflowDTO,
)
from vendorhub.api.errors import register_error_handlers
from vendorhub.bootstrap import create_controller, create_store
from vendorhub.config import AppSettings, get_settings
from vendorhub.domain import list_plans
from vendorhub.logging import get_logger
from vendorhub.services import Screen, WorkflowController


def get_controller(request: Request) -> WorkflowController:
    return request.app.state.controller


def require_admin(controller: WorkflowController = Depends(get_controller)) -> WorkflowController:
    if not controller.state.admin_authenticated:
        raise HTTPException(status_code=403, detail="Admin session required")
    return controller


def _snapshot(controller: WorkflowController) -> WorkflowDTO:
    return WorkflowDTO.from_state(controller.state, controller.drain_notifications())


def _parse_filter(status: str) -> str:
    if status.strip().lower() not in ("", "all", "pending", "active", "suspended"):
        raise HTTPException(status_code=422, detail=f"Invalid status filter: {status}")
    return status


def create_app(
    settings: AppSettings | None = None,
    controller: WorkflowController | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Application settings (loaded from the environment if None)
        controller: Pre-built controller, mainly for tests

    Returns:
        The configured FastAPI application
    """
    settings = settings or get_settings()
    logger = get_logger("vendorhub.api")
    store = None
    if controller is None:
        store = create_store(settings, logger.bind(component="store"))
        controller = create_controller(settings, store=store)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("vendorhub API started", storage_backend=settings.storage_backend)
        yield
        close = getattr(store, "close", None)
        if close is not None:
            await close()
        logger.info("vendorhub API stopped")

    app = FastAPI(title="vendorhub", version=__version__, lifespan=lifespan)
    app.state.controller = controller
    app.state.settings = settings
    register_error_handlers(app, logger)

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.info(
            "HTTP Request",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            process_time_ms=round(process_time * 1000, 2),
        )
        return response

    # --- Catalog ---
    @app.get("/plans", tags=["plans"], response_model=list[dict])
    async def get_plans() -> list[dict[str, Any]]:
        return [plan.model_dump(mode="json") for plan in list_plans()]

    # --- Vendor workflow ---
    @app.get("/workflow", tags=["workflow"], response_model=WorkflowDTO)
    async def get_workflow(
        controller: WorkflowController = Depends(get_controller),
    ) -> WorkflowDTO:
        return _snapshot(controller)

    @app.post("/workflow/registration", tags=["workflow"], response_model=WorkflowDTO)
    async def start_registration(
        controller: WorkflowController = Depends(get_controller),
    ) -> WorkflowDTO:
        controller.start_registration()
        return _snapshot(controller)

    @app.patch("/workflow/draft", tags=["workflow"], response_model=WorkflowDTO)
    async def update_draft(
        data: DraftInputDTO,
        controller: WorkflowController = Depends(get_controller),
    ) -> WorkflowDTO:
        controller.update_draft(**data.to_fields()).unwrap()
        return _snapshot(controller)

    @app.post("/workflow/submit", tags=["workflow"], response_model=WorkflowDTO)
    async def submit_registration(
        data: DraftInputDTO | None = None,
        controller: WorkflowController = Depends(get_controller),
    ) -> WorkflowDTO:
        if data is not None:
            controller.update_draft(**data.to_fields()).unwrap()
        controller.submit().unwrap()
        return _snapshot(controller)

    @app.post("/workflow/location/auto", tags=["workflow"], response_model=WorkflowDTO)
    async def capture_location(
        controller: WorkflowController = Depends(get_controller),
    ) -> WorkflowDTO:
        (await controller.capture_location()).unwrap()
        return _snapshot(controller)

    @app.post("/workflow/location/manual", tags=["workflow"], response_model=WorkflowDTO)
    async def enter_location(
        data: ManualLocationDTO,
        controller: WorkflowController = Depends(get_controller),
    ) -> WorkflowDTO:
        controller.set_manual_location(data.latitude, data.longitude)
        return _snapshot(controller)

    @app.post("/workflow/back", tags=["workflow"], response_model=WorkflowDTO)
    async def back_to_registration(
        controller: WorkflowController = Depends(get_controller),
    ) -> WorkflowDTO:
        controller.back()
        return _snapshot(controller)

    @app.post("/workflow/pay", tags=["workflow"], response_model=WorkflowDTO)
    async def pay(
        data: PayDTO,
        controller: WorkflowController = Depends(get_controller),
    ) -> WorkflowDTO:
        (await controller.pay(data.plan)).unwrap()
        return _snapshot(controller)

    @app.post("/workflow/home", tags=["workflow"], response_model=WorkflowDTO)
    async def back_to_home(
        controller: WorkflowController = Depends(get_controller),
    ) -> WorkflowDTO:
        controller.back_to_home()
        return _snapshot(controller)

    # --- Admin ---
    @app.post("/admin/login", tags=["admin"], response_model=WorkflowDTO)
    async def admin_login(
        data: LoginDTO,
        controller: WorkflowController = Depends(get_controller),
    ) -> WorkflowDTO:
        if controller.screen is Screen.HOME:
            controller.start_admin_login()
        controller.login(data.username, data.password).unwrap()
        return _snapshot(controller)

    @app.post("/admin/logout", tags=["admin"], response_model=WorkflowDTO)
    async def admin_logout(controller: WorkflowController = Depends(require_admin)) -> WorkflowDTO:
        controller.logout()
        return _snapshot(controller)

    @app.get("/admin/vendors", tags=["admin"], response_model=list[dict])
    async def list_vendors(
        search: str = "",
        status: str = "all",
        controller: WorkflowController = Depends(require_admin),
    ) -> list[dict[str, Any]]:
        records = await controller.list_vendors(search, _parse_filter(status))
        return [record.to_storage() for record in records]

    @app.get("/admin/vendors/export", tags=["admin"])
    async def export_vendors(
        search: str = "",
        status: str = "all",
        controller: WorkflowController = Depends(require_admin),
    ) -> Response:
        content = await controller.export_vendors(search, _parse_filter(status))
        return Response(
            content=content,
            media_type="text/csv; charset=utf-8",
            headers={"Content-Disposition": f'attachment; filename="{settings.csv_filename}"'},
        )

    @app.get("/admin/vendors/{vendor_id}", tags=["admin"], response_model=dict)
    async def get_vendor(
        vendor_id: str,
        controller: WorkflowController = Depends(require_admin),
    ) -> dict[str, Any]:
        return (await controller.get_vendor(vendor_id)).to_storage()

    @app.patch("/admin/vendors/{vendor_id}/status", tags=["admin"], response_model=dict)
    async def update_vendor_status(
        vendor_id: str,
        data: StatusUpdateDTO,
        controller: WorkflowController = Depends(require_admin),
    ) -> dict[str, Any]:
        record = await controller.set_vendor_status(vendor_id, data.status)
        return record.to_storage()

    @app.get("/admin/stats", tags=["admin"], response_model=dict)
    async def vendor_stats(controller: WorkflowController = Depends(require_admin)) -> dict[str, int]:
        return (await controller.vendor_counts()).model_dump()

    return app
