"""Error messages and exception handlers.

Every error leaving the API has the body ``{"error": "<message>"}``.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

TITLE_REQUIRED = "Le titre est requis"
TITLE_EMPTY = "Le titre ne peut pas être vide"
TASK_NOT_FOUND = "Tâche non trouvée"
ROUTE_NOT_FOUND = "Route non trouvée"
INVALID_STATUS = "Statut invalide"
INVALID_PRIORITY = "Priorité invalide"
INVALID_REQUEST = "Requête invalide"
INTERNAL_ERROR = "Erreur serveur interne"

# Raised by the router itself, not by a route function.
_ROUTING_STATUSES = (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _is_routing_error(exc: StarletteHTTPException) -> bool:
    return (
        exc.status_code in _ROUTING_STATUSES
        and exc.detail == HTTPStatus(exc.status_code).phrase
    )


def _title_message(body: Any, method: str) -> str | None:
    """Return the title error for a raw JSON body, or None if the title is fine."""
    if not isinstance(body, dict):
        return None
    title = body.get("title")
    if method == "POST":
        if not isinstance(title, str) or not title.strip():
            return TITLE_REQUIRED
    elif title is not None and (not isinstance(title, str) or not title.strip()):
        return TITLE_EMPTY
    return None


def validation_message(errors: list[dict], method: str, body: Any = None) -> str:
    """Pick the client-facing message for a rejected request body.

    Title rules are checked first, on the raw body, so a missing or blank
    title is reported even when another field is also invalid. A bad title
    reads differently on create (title is required) and on update (title
    may not be blank). Otherwise the first offending field decides.
    """
    if any(error.get("type") == "json_invalid" for error in errors):
        return INVALID_REQUEST

    title_message = _title_message(body, method)
    if title_message is not None:
        return title_message

    for error in errors:
        loc = error.get("loc", ())
        field = loc[1] if len(loc) > 1 and loc[0] == "body" else None
        if field == "title":
            return TITLE_REQUIRED if method == "POST" else TITLE_EMPTY
        if field == "status":
            return INVALID_STATUS
        if field == "priority":
            return INVALID_PRIORITY
    return INVALID_REQUEST


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if _is_routing_error(exc):
        logger.debug("No route for %s %s", request.method, request.url.path)
        return error_response(status.HTTP_404_NOT_FOUND, ROUTE_NOT_FOUND)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = list(exc.errors())
    message = validation_message(errors, request.method, exc.body)
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, errors)
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
