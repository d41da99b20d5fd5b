# app/errors.py
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

# ---------------------------
# Error taxonomy
# ---------------------------
class ProductAPIError(Exception):
    """Base class for every failure the product API knows how to report."""
    status_code = 500
    name = "InternalServerError"

    def __init__(self, message: str = "An unexpected error occurred."):
        super().__init__(message)
        self.message = message


class ValidationError(ProductAPIError):
    status_code = 400
    name = "ValidationError"


class DuplicateProductError(ValidationError):
    """Name already taken (case-insensitive). Reported as a ValidationError."""

    def __init__(self, product_name: str):
        super().__init__(f"Product with name '{product_name}' already exists.")
        self.product_name = product_name


class UnauthorizedError(ProductAPIError):
    status_code = 401
    name = "UnauthorizedError"

    def __init__(self, message: str = "Unauthorized: Invalid or missing API key."):
        super().__init__(message)


class NotFoundError(ProductAPIError):
    status_code = 404
    name = "NotFoundError"


class ProductNotFoundError(NotFoundError):
    def __init__(self, product_id: str):
        super().__init__(f"Product with ID {product_id} not found.")
        self.product_id = product_id


# ---------------------------
# Response translation
# ---------------------------
_HTTP_ERROR_NAMES = {
    400: "BadRequestError",
    401: "UnauthorizedError",
    404: "NotFoundError",
    405: "MethodNotAllowedError",
}


def error_body(name: str, message: str) -> Dict[str, Any]:
    return {"status": "error", "name": name, "message": message}


def _error_response(status_code: int, name: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_body(name, message))


def register_error_handlers(app: FastAPI) -> None:
    """Install the handlers that turn every failure into `{status, name, message}`.

    This is the only place where status codes for failures are decided.
    """

    @app.exception_handler(ProductAPIError)
    async def handle_product_api_error(request: Request, exc: ProductAPIError) -> JSONResponse:
        logger.warning("%s %s failed: %s: %s", request.method, request.url.path, exc.name, exc.message)
        return _error_response(exc.status_code, exc.name, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"{location}: {first.get('msg', 'invalid request')}" if location else "Invalid request."
        logger.warning("%s %s rejected: %s", request.method, request.url.path, message)
        return _error_response(400, ValidationError.name, message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        name = _HTTP_ERROR_NAMES.get(exc.status_code, "HTTPError")
        logger.warning("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.detail)
        return _error_response(exc.status_code, name, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        # never leak internals to the client
        logger.exception("Unexpected error on %s %s: %s", request.method, request.url.path, type(exc).__name__)
        return _error_response(500, ProductAPIError.name, "An unexpected error occurred.")
