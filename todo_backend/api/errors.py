"""
Обработчики ошибок (Exception Handlers) для API.

Все ошибки уходят клиенту в одном формате ErrorResponse:
- AppError (NotFoundError, AlreadyExistsError, ValidationError_) -> свой status_code
- RequestValidationError (Pydantic, неверные path/body) -> 400
- всё остальное, включая ошибки SQLAlchemy -> 500 без внутренних деталей
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core.exceptions import AppError
from ..core.logging import get_logger
from .schemas import ErrorBody, ErrorDetail, ErrorResponse

logger = get_logger(__name__)


def _error_response(
    status_code: int, code: str, message: str, details: list[ErrorDetail] | None = None
) -> JSONResponse:
    body = ErrorResponse(error=ErrorBody(code=code, message=message, details=details))
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Доменные ошибки сервисного слоя."""
    logger.warning(
        "Request rejected",
        extra={"code": exc.code, "error": exc.message, "path": request.url.path},
    )

    details = None
    if exc.details:
        details = [ErrorDetail(field=d["field"], message=d["message"]) for d in exc.details]

    return _error_response(exc.status_code, exc.code, exc.message, details)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Ошибки валидации Pydantic.

    Pydantic отдаёт loc вида ["body", "title"] или ["path", "todo_id"],
    клиенту показываем только имя поля.
    """
    details = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        if len(loc) > 1 and loc[0] in ("body", "path", "query"):
            loc = loc[1:]
        details.append(
            ErrorDetail(field=".".join(loc) or "body", message=error.get("msg", "Invalid value"))
        )

    logger.warning(
        "Validation error",
        extra={"path": request.url.path, "fields": [d.field for d in details]},
    )

    return _error_response(
        status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", "Invalid request data", details
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Всё непойманное (например, ошибка хранилища) -> 500.

    Stack trace пишем в лог, клиенту его не показываем.
    """
    logger.error(
        f"Internal Error: {type(exc).__name__}: {exc}",
        extra={"path": request.url.path},
        exc_info=exc,
    )
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", "Internal server error"
    )


def register_error_handlers(app: FastAPI) -> None:
    """Подключить все обработчики к приложению (вызывается из main.py)."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)
