from pydantic import BaseModel


class ApiErrorResponse(BaseModel):
    code: str
    message: str
    details: dict | None = None
    trace_id: str | None = None


class ApiValidationErrorItem(BaseModel):
    field: str | None = None
    message: str
    type: str
    loc: list[str | int] | None = None
    input: object | None = None


class ApiValidationErrorDetails(BaseModel):
    errors: list[ApiValidationErrorItem]


class ApiValidationErrorResponse(ApiErrorResponse):
    details: ApiValidationErrorDetails | dict | None = None


ERROR_RESPONSES = {
    400: {"model": ApiValidationErrorResponse, "description": "Invalid input"},
    401: {"model": ApiErrorResponse, "description": "Authentication required"},
    403: {"model": ApiErrorResponse, "description": "Showroom scope violation"},
    404: {"model": ApiErrorResponse, "description": "Referenced record not found"},
    409: {"model": ApiErrorResponse, "description": "Conflict with current state"},
    500: {"model": ApiErrorResponse, "description": "Storage failure"},
}
