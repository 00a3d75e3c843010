class AppError(Exception):
    credential_required = False

    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class NotFoundError(AppError):
    def __init__(self, resource: str, resource_id: str):
        super().__init__(f"{resource} '{resource_id}' not found", code="NOT_FOUND")


class LoadInProgressError(AppError):
    def __init__(self, message: str = "An analysis refresh is already running"):
        super().__init__(message, code="LOAD_IN_PROGRESS")


class MissingCredentialError(AppError):
    credential_required = True

    def __init__(self, message: str = "No API key found in any configured source"):
        super().__init__(message, code="MISSING_API_KEY")


class InvalidCredentialFormatError(AppError):
    credential_required = True

    def __init__(self, masked_prefix: str):
        self.masked_prefix = masked_prefix
        super().__init__(
            f"Invalid API key format. Received key starting with: '{masked_prefix}...'",
            code="INVALID_KEY_FORMAT",
        )


class TransportError(AppError):
    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message, code="TRANSPORT_ERROR")

    @property
    def credential_required(self) -> bool:  # type: ignore[override]
        return self.status_code in (400, 401, 403)


class EmptyResponseError(AppError):
    def __init__(self, message: str = "No data returned from the model"):
        super().__init__(message, code="EMPTY_RESPONSE")


class SchemaViolationError(AppError):
    def __init__(self, message: str, raw_error: Exception | None = None):
        self.raw_error = raw_error
        super().__init__(message, code="SCHEMA_VIOLATION")
