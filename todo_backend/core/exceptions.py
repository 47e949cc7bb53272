"""
Доменные исключения.

Сервисный слой бросает эти исключения, а API слой (api/errors.py)
превращает их в HTTP ответы единого формата:

    {"error": {"code": "NOT_FOUND", "message": "...", "details": null}}
"""


class AppError(Exception):
    """
    Базовый класс для всех ошибок приложения.

    Использование:
        raise AppError(code="CONFLICT", message="...", status_code=409)
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: list[dict] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class NotFoundError(AppError):
    """
    Ресурс не найден (404).

    Использование:
        raise NotFoundError("Todo", 123)
        # Сообщение: "Todo with id=123 not found"
    """

    def __init__(self, resource: str, resource_id: int | str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            code="NOT_FOUND",
            message=f"{resource} with id={resource_id} not found",
            status_code=404,
        )


class AlreadyExistsError(AppError):
    """
    Ресурс с таким значением уже существует (400).

    Использование:
        raise AlreadyExistsError("Tag", "title", "work")
    """

    def __init__(self, resource: str, field: str, value: str):
        super().__init__(
            code="ALREADY_EXISTS",
            message=f"{resource} with {field}='{value}' already exists",
            status_code=400,
            details=[{"field": field, "message": f"Value '{value}' is already in use"}],
        )


class ValidationError_(AppError):
    """
    Ошибка валидации бизнес-правил (400).

    Использование:
        raise ValidationError_("Title cannot be empty", field="title")
    """

    def __init__(self, message: str, field: str | None = None):
        details = [{"field": field, "message": message}] if field else None
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            status_code=400,
            details=details,
        )
