from fastapi import status


class LeadSyncError(Exception):
    """Базовая ошибка приложения, отдаётся клиенту как {success: false, error}."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class MissingFieldError(LeadSyncError):
    """Не передано обязательное поле запроса."""

    status_code = status.HTTP_400_BAD_REQUEST


class MappingNotFoundError(LeadSyncError):
    """Сопоставление для страницы не найдено."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Mapping not found") -> None:
        super().__init__(message)


class PageNotConfiguredError(LeadSyncError):
    """Синхронизация запрошена для страницы без сопоставления."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Page not configured. Please set up page-to-sheet mapping first.") -> None:
        super().__init__(message)


class GraphAPIError(LeadSyncError):
    """Ошибка Graph API; сообщение и код берутся из ответа без изменений."""

    def __init__(
        self,
        message: str,
        code: int | None = None,
        error_type: str | None = None,
        http_status: int | None = None,
        payload: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.error_type = error_type
        self.http_status = http_status
        self.payload = payload or {}
