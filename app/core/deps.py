from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from app.core.config import Settings, get_settings
from app.core.exceptions import (
    AppError,
    AuthenticationError,
    ConfigurationError,
    NotFoundError,
    PaymentProviderError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)
from app.services.auth import AuthService, AuthUser, extract_bearer_token

STATUS_BY_ERROR = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    PaymentProviderError: status.HTTP_502_BAD_GATEWAY,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def to_http_exception(error: AppError) -> HTTPException:
    """Translate an application error into an HTTP error with a code discriminator"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type, code in STATUS_BY_ERROR.items():
        if isinstance(error, error_type):
            status_code = code
            break
    return HTTPException(status_code=status_code, detail=error.to_detail())


def internal_error(error: Exception) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"code": "INTERNAL_ERROR", "message": f"Internal server error: {error}"},
    )


def get_auth_service(config: Settings = Depends(get_settings)) -> AuthService:
    return AuthService(config)


def get_current_user(
    authorization: Optional[str] = Header(None),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthUser:
    """Require a valid Supabase access token"""
    try:
        token = extract_bearer_token(authorization)
        return auth_service.get_user(token)
    except AppError as e:
        raise to_http_exception(e)


def get_optional_user(
    authorization: Optional[str] = Header(None),
    auth_service: AuthService = Depends(get_auth_service),
) -> Optional[AuthUser]:
    """The authenticated user when a token is sent, otherwise None"""
    if not authorization:
        return None
    return get_current_user(authorization, auth_service)


def require_admin_password(
    x_admin_password: Optional[str] = Header(None),
    auth_service: AuthService = Depends(get_auth_service),
) -> None:
    if not auth_service.check_admin_password(x_admin_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"code": "INVALID_ADMIN_PASSWORD", "message": "Invalid password"},
        )
