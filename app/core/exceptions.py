"""
Application error hierarchy.

Every error carries a machine-readable ``code`` which routes expose as the
error discriminator in the response body.
"""


class AppError(Exception):
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code

    def to_detail(self) -> dict:
        return {"code": self.code, "message": self.message}


class NotFoundError(AppError):
    code = "NOT_FOUND"


class StorageError(AppError):
    """The database reported a failure other than absence"""

    code = "STORAGE_FAILURE"


class ValidationError(AppError):
    code = "INVALID_REQUEST"


class AuthenticationError(AppError):
    code = "UNAUTHORIZED"


class PermissionDeniedError(AppError):
    code = "FORBIDDEN"


class ConfigurationError(AppError):
    code = "CONFIGURATION_ERROR"


class PaymentProviderError(AppError):
    code = "PAYMENT_PROVIDER_ERROR"
