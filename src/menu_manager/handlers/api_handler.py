"""FastAPI application for the menu REST API."""

import logging
from datetime import UTC, datetime
from http import HTTPStatus
from typing import Any, Union

from fastapi import APIRouter, Body, Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from menu_manager.models.menu_models import ErrorResponse, MenuItem, MenuItemDeleted
from menu_manager.services.menu_service import (
    REQUIRED_FIELDS_MESSAGE,
    MenuErrorKind,
    MenuResult,
    MenuService,
)

logger = logging.getLogger(__name__)

MENU_PATH_PREFIXES = ("/items", "/api/menu")

_ERROR_STATUS = {
    MenuErrorKind.VALIDATION_FAILED: (status.HTTP_400_BAD_REQUEST, "Validation failed"),
    MenuErrorKind.NOT_FOUND: (status.HTTP_404_NOT_FOUND, "Item not found"),
}

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


class HealthResponse(BaseModel):
    """Health check response model."""

    model_config = ConfigDict(populate_by_name=True)

    status: str
    service: str
    timestamp: str
    item_count: int = Field(..., alias="itemCount")


def error_response(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, message=message).model_dump(),
    )


def failure_response(result: MenuResult) -> JSONResponse:
    """Map a failed MenuResult onto its HTTP status and error body."""
    status_code, error = _ERROR_STATUS[result.error_kind]
    return error_response(status_code, error, result.error_message or error)


def get_menu_service(request: Request) -> MenuService:
    """Dependency returning the MenuService stored on the app."""
    service: MenuService = request.app.state.menu_service
    return service


router = APIRouter(tags=["Menu"])


@router.get("", response_model=list[MenuItem])
async def list_menu_items(
    category: str | None = None,
    menu_service: MenuService = Depends(get_menu_service),
) -> list[MenuItem]:
    """List all menu items in insertion order.

    Args:
        category: Optional category filter, case-insensitive exact match
    """
    return menu_service.list_items(category=category)


@router.get("/{item_id}", response_model=MenuItem, responses=_ERROR_RESPONSES)
async def get_menu_item(
    item_id: str,
    menu_service: MenuService = Depends(get_menu_service),
) -> Union[MenuItem, JSONResponse]:
    """Get a single menu item."""
    result = menu_service.get_item(item_id)
    if not result.success:
        return failure_response(result)
    return result.item


@router.post(
    "",
    response_model=MenuItem,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
)
async def create_menu_item(
    payload: dict[str, Any] = Body(...),
    menu_service: MenuService = Depends(get_menu_service),
) -> Union[MenuItem, JSONResponse]:
    """Create a menu item.

    name, description, price and category are required; available defaults
    to true.
    """
    result = menu_service.create_item(payload)
    if not result.success:
        return failure_response(result)
    return result.item


@router.put("/{item_id}", response_model=MenuItem, responses=_ERROR_RESPONSES)
async def update_menu_item(
    item_id: str,
    payload: dict[str, Any] = Body(...),
    menu_service: MenuService = Depends(get_menu_service),
) -> Union[MenuItem, JSONResponse]:
    """Partially update a menu item. Omitted fields are left unchanged."""
    result = menu_service.update_item(item_id, payload)
    if not result.success:
        return failure_response(result)
    return result.item


@router.delete("/{item_id}", response_model=MenuItemDeleted, responses=_ERROR_RESPONSES)
async def delete_menu_item(
    item_id: str,
    menu_service: MenuService = Depends(get_menu_service),
) -> Union[MenuItemDeleted, JSONResponse]:
    """Delete a menu item and return the removed record."""
    result = menu_service.delete_item(item_id)
    if not result.success:
        return failure_response(result)
    return MenuItemDeleted(item=result.item)


def create_app(menu_service: MenuService, cors_origins: list[str] | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        menu_service: Service mediating access to the menu store
        cors_origins: Origins allowed to call the API (defaults to all)

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Restaurant Menu API",
        description="CRUD API for restaurant menu items",
        version="1.0.0",
    )

    app.state.menu_service = menu_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins or ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next: Any) -> Any:
        logger.info(f"{request.method} {request.url.path}")
        return await call_next(request)

    @app.get("/api/health", response_model=HealthResponse, tags=["Health"])
    @app.get("/health", response_model=HealthResponse, tags=["Health"], include_in_schema=False)
    async def health_check() -> HealthResponse:
        """Health check endpoint.

        Returns:
            Health status with the current number of stored items
        """
        return HealthResponse(
            status="healthy",
            service="backend-api",
            timestamp=datetime.now(UTC).isoformat(),
            item_count=app.state.menu_service.item_count(),
        )

    canonical_prefix, *alias_prefixes = MENU_PATH_PREFIXES
    app.include_router(router, prefix=canonical_prefix)
    for prefix in alias_prefixes:
        app.include_router(router, prefix=prefix, include_in_schema=False)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # Missing or non-object JSON body
        logger.warning(f"Malformed request body for {request.method} {request.url.path}")
        return error_response(status.HTTP_400_BAD_REQUEST, "Validation failed", REQUIRED_FIELDS_MESSAGE)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return error_response(
                exc.status_code,
                "Not found",
                f"Route {request.method} {request.url.path} not found",
            )
        return error_response(exc.status_code, HTTPStatus(exc.status_code).phrase, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error for {request.method} {request.url.path}: {exc}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", str(exc)
        )

    return app
