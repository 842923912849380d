"""
Ошибки приложения и их преобразование в HTTP-ответы.

Сервисы бросают наследников AppException; роутеры их не перехватывают,
ответ формирует обработчик, зарегистрированный в register_exception_handlers.
"""
from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException as StarletteHTTPException

from jotter.core.logging import get_logger

logger = get_logger(__name__)


class AppException(Exception):
    """Базовое исключение приложения"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Ресурс не найден или не принадлежит вызывающему"""

    def __init__(self, resource_type: str, resource_id: Optional[Any] = None):
        details = {"resource_type": resource_type}
        if resource_id is not None:
            details["resource_id"] = str(resource_id)
        super().__init__(
            f"{resource_type.replace('_', ' ').capitalize()} not found",
            status.HTTP_404_NOT_FOUND,
            details,
        )


class UnauthorizedError(AppException):
    """Ресурс существует, но принадлежит другому пользователю"""

    def __init__(self, message: str = "Unauthorized", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_403_FORBIDDEN, details)


class AuthenticationError(AppException):
    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)


class ValidationError(AppException):
    """Некорректные входные данные или недопустимый переход состояния"""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else None
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


def _error_body(request: Request, code: int, message: str, details: Optional[dict] = None) -> dict:
    body = {
        "success": False,
        "code": code,
        "message": message,
        "path": str(request.url.path),
    }
    if details:
        body["details"] = details
    return body


async def app_exception_handler(request: Request, exc: AppException):
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, exc.status_code, exc.message, exc.details),
        headers=headers,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info("Request validation failed on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(
            request,
            status.HTTP_400_BAD_REQUEST,
            "Request validation failed",
            {"validation_errors": jsonable_encoder(exc.errors())},
        ),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, exc.status_code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
