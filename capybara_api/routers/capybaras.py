from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from capybara_api.domain.capybaras import (
    NAME_REQUIRED,
    NOT_FOUND,
    Capybara,
    CapybaraInput,
    NotFoundError,
    StorageError,
    ValidationError,
)
from capybara_api.services.capybara_service import CapybaraService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/capybaras", tags=["Capybaras"])

_NOT_FOUND_RESPONSE = {404: {"description": NOT_FOUND}}
_INVALID_RESPONSE = {400: {"description": "Invalid input"}}
# Bodies arrive raw and are decoded by the service; document the expected shape here.
_INPUT_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": CapybaraInput.model_json_schema()}},
    }
}


def get_capybara_service(request: Request) -> CapybaraService:
    svc = getattr(getattr(request.app, "state", None), "capybara_service", None)
    if not svc:
        raise RuntimeError("CapybaraService not configured")
    return svc


@router.get("", response_model=list[Capybara], summary="Returns the list of all capybaras")
def list_capybaras(svc: CapybaraService = Depends(get_capybara_service)):
    return svc.list_capybaras()


@router.get(
    "/{capybara_id}",
    response_model=Capybara,
    summary="Get a capybara by id",
    responses=_NOT_FOUND_RESPONSE,
)
def get_capybara(capybara_id: int, svc: CapybaraService = Depends(get_capybara_service)):
    return svc.get_capybara(capybara_id)


@router.post(
    "",
    response_model=Capybara,
    status_code=201,
    summary="Create a new capybara",
    responses=_INVALID_RESPONSE,
    openapi_extra=_INPUT_BODY,
)
def create_capybara(
    payload: Any = Body(None),
    svc: CapybaraService = Depends(get_capybara_service),
):
    return svc.create_capybara(payload)


@router.put(
    "/{capybara_id}",
    response_model=Capybara,
    summary="Update a capybara by id",
    responses={**_INVALID_RESPONSE, **_NOT_FOUND_RESPONSE},
    openapi_extra=_INPUT_BODY,
)
def update_capybara(
    capybara_id: int,
    payload: Any = Body(None),
    svc: CapybaraService = Depends(get_capybara_service),
):
    return svc.update_capybara(capybara_id, payload)


@router.delete(
    "/{capybara_id}",
    status_code=204,
    response_class=Response,
    summary="Delete a capybara by id",
    responses=_NOT_FOUND_RESPONSE,
)
def delete_capybara(capybara_id: int, svc: CapybaraService = Depends(get_capybara_service)):
    svc.delete_capybara(capybara_id)
    return Response(status_code=204)


# -------------------------- error mapping --------------------------
def _message_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"message": message}, status_code=status_code)


def _error_response(exc: Exception) -> JSONResponse:
    return JSONResponse({"error": str(exc) or type(exc).__name__}, status_code=500)


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return _message_response(exc.message, 400)


async def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return _message_response(exc.message, 404)


async def _storage_error(request: Request, exc: StorageError) -> JSONResponse:
    logger.exception("Storage error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error_response(exc)


async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error_response(exc)


async def _request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    # an id that is not an integer can never match a capybara
    if any(err.get("loc", ("",))[0] == "path" for err in exc.errors()):
        return _message_response(NOT_FOUND, 404)
    return _message_response(NAME_REQUIRED, 400)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(NotFoundError, _not_found)
    app.add_exception_handler(StorageError, _storage_error)
    app.add_exception_handler(RequestValidationError, _request_validation)
    app.add_exception_handler(Exception, _unexpected_error)
