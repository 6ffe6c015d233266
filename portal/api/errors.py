"""
Exception handlers translating failures into the response envelope.

Every error response has the shape
`{"success": false, "error": <kind>, "code": <code>, "message": <text>}`.
"""
import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

from portal.errors import ErrorKind, PortalError

logger = logging.getLogger(__name__)

_STATUS_KINDS = {
    400: ErrorKind.VALIDATION,
    401: ErrorKind.AUTH,
    403: ErrorKind.AUTH,
    404: ErrorKind.NOT_FOUND,
    409: ErrorKind.CONFLICT,
}


def error_response(status_code: int, kind: ErrorKind, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        {"success": False, "error": kind.value, "code": code, "message": message},
        status_code=status_code,
    )


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path"))
        parts.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


async def handle_portal_error(request: Request, exc: PortalError) -> JSONResponse:
    log = logger.warning if exc.status_code >= 500 else logger.info
    log(
        "request_failed: method=%s path=%s status=%s code=%s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.code,
    )
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _describe_validation_errors(exc)
    logger.info("request_invalid: method=%s path=%s detail=%s", request.method, request.url.path, message)
    return error_response(400, ErrorKind.VALIDATION, "INVALID_INPUT", message)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return error_response(404, ErrorKind.NOT_FOUND, "ROUTE_NOT_FOUND", "Route not found")
    if exc.status_code == 405:
        return error_response(405, ErrorKind.NOT_FOUND, "METHOD_NOT_ALLOWED", "Method not allowed")
    kind = _STATUS_KINDS.get(exc.status_code, ErrorKind.INTERNAL)
    return error_response(exc.status_code, kind, f"HTTP_{exc.status_code}", str(exc.detail))


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request_crashed: method=%s path=%s", request.method, request.url.path)
    return error_response(500, ErrorKind.INTERNAL, "INTERNAL_ERROR", "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PortalError, handle_portal_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected)
