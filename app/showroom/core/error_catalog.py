from dataclasses import dataclass
from fastapi import status


@dataclass(frozen=True)
class ErrorDefinition:
    code: str
    message: str
    status_code: int


class ErrorCatalog:
    UNAUTHORIZED = ErrorDefinition("UNAUTHORIZED", "Authentication required", status.HTTP_401_UNAUTHORIZED)
    INVALID_TOKEN = ErrorDefinition("INVALID_TOKEN", "Invalid token", status.HTTP_401_UNAUTHORIZED)
    INVALID_CREDENTIALS = ErrorDefinition(
        "INVALID_CREDENTIALS",
        "Invalid credentials",
        status.HTTP_401_UNAUTHORIZED,
    )
    USER_INACTIVE = ErrorDefinition(
        "USER_INACTIVE",
        "User is inactive",
        status.HTTP_403_FORBIDDEN,
    )
    PERMISSION_DENIED = ErrorDefinition(
        "PERMISSION_DENIED",
        "Permission denied",
        status.HTTP_403_FORBIDDEN,
    )
    CROSS_TENANT_ACCESS_DENIED = ErrorDefinition(
        "CROSS_TENANT_ACCESS_DENIED",
        "Cross-showroom access denied",
        status.HTTP_403_FORBIDDEN,
    )
    SHOWROOM_SCOPE_MISMATCH = ErrorDefinition(
        "SHOWROOM_SCOPE_MISMATCH",
        "Vehicle does not belong to your showroom",
        status.HTTP_403_FORBIDDEN,
    )
    ADMIN_DELETE_FORBIDDEN = ErrorDefinition(
        "ADMIN_DELETE_FORBIDDEN",
        "Cannot delete admin users",
        status.HTTP_403_FORBIDDEN,
    )
    VEHICLE_NOT_FOUND = ErrorDefinition(
        "VEHICLE_NOT_FOUND",
        "Vehicle not found",
        status.HTTP_404_NOT_FOUND,
    )
    SHOWROOM_NOT_FOUND = ErrorDefinition(
        "SHOWROOM_NOT_FOUND",
        "Showroom not found",
        status.HTTP_404_NOT_FOUND,
    )
    USER_NOT_FOUND = ErrorDefinition(
        "USER_NOT_FOUND",
        "User not found",
        status.HTTP_404_NOT_FOUND,
    )
    SALE_NOT_FOUND = ErrorDefinition(
        "SALE_NOT_FOUND",
        "Sale not found",
        status.HTTP_404_NOT_FOUND,
    )
    VEHICLE_NOT_AVAILABLE = ErrorDefinition(
        "VEHICLE_NOT_AVAILABLE",
        "This vehicle is no longer available for sale",
        status.HTTP_409_CONFLICT,
    )
    DUPLICATE_VEHICLE = ErrorDefinition(
        "DUPLICATE_VEHICLE",
        "Vehicle with these details already exists",
        status.HTTP_409_CONFLICT,
    )
    USERNAME_TAKEN = ErrorDefinition(
        "USERNAME_TAKEN",
        "User already exists",
        status.HTTP_409_CONFLICT,
    )
    INVALID_VEHICLE_TYPE = ErrorDefinition(
        "INVALID_VEHICLE_TYPE",
        "Invalid vehicle type",
        status.HTTP_400_BAD_REQUEST,
    )
    INVALID_CNIC = ErrorDefinition(
        "INVALID_CNIC",
        "CNIC must be in format 12345-1234567-1",
        status.HTTP_400_BAD_REQUEST,
    )
    INVALID_PARTNER_CNIC = ErrorDefinition(
        "INVALID_PARTNER_CNIC",
        "Partner CNIC must be in format 12345-1234567-1",
        status.HTTP_400_BAD_REQUEST,
    )
    INVALID_PAYMENT_TERMS = ErrorDefinition(
        "INVALID_PAYMENT_TERMS",
        "Invalid installment terms",
        status.HTTP_400_BAD_REQUEST,
    )
    DB_UNAVAILABLE = ErrorDefinition(
        "DB_UNAVAILABLE",
        "Database unavailable",
        status.HTTP_503_SERVICE_UNAVAILABLE,
    )
    LOCK_TIMEOUT = ErrorDefinition(
        "LOCK_TIMEOUT",
        "Lock wait timeout",
        status.HTTP_409_CONFLICT,
    )
    VALIDATION_ERROR = ErrorDefinition(
        "VALIDATION_ERROR",
        "Validation error",
        status.HTTP_400_BAD_REQUEST,
    )
    STORAGE_FAILURE = ErrorDefinition(
        "STORAGE_FAILURE",
        "Storage failure, no changes were saved",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    INTERNAL_ERROR = ErrorDefinition(
        "INTERNAL_ERROR",
        "Internal server error",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    IDEMPOTENCY_KEY_REUSED_WITH_DIFFERENT_PAYLOAD = ErrorDefinition(
        "IDEMPOTENCY_KEY_REUSED_WITH_DIFFERENT_PAYLOAD",
        "Idempotency key reused with different payload",
        status.HTTP_409_CONFLICT,
    )
    IDEMPOTENCY_REQUEST_IN_PROGRESS = ErrorDefinition(
        "IDEMPOTENCY_REQUEST_IN_PROGRESS",
        "Idempotency request already in progress",
        status.HTTP_409_CONFLICT,
    )
    IDEMPOTENCY_REPLAY = ErrorDefinition(
        "IDEMPOTENCY_REPLAY",
        "Idempotent replay",
        status.HTTP_200_OK,
    )


class AppError(Exception):
    def __init__(self, error: ErrorDefinition, details: object | None = None):
        self.error = error
        self.details = details
        super().__init__(error.message)
