import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class PortalError(Exception):
    """포털 도메인 오류의 베이스 클래스"""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "요청을 처리할 수 없습니다."

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PortalError):
    """필수 필드 누락 또는 잘못된 값 (네트워크 호출 전에 검출)"""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "필수 필드가 누락되었습니다."


class NotFoundError(PortalError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "데이터를 찾을 수 없습니다."


class PermissionDeniedError(PortalError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "권한이 없습니다."


class AuthenticationError(PortalError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "로그인이 필요합니다."


class ConflictError(PortalError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "이미 처리 중인 요청입니다."


class ConfirmationRequiredError(PortalError):
    status_code = status.HTTP_428_PRECONDITION_REQUIRED
    default_message = "삭제를 확인해주세요."


class BackendError(PortalError):
    """데이터베이스/스토리지 계층에서 발생한 오류"""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "서버 처리 중 오류가 발생했습니다."


async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
    else:
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.status_code, exc.message)

    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PortalError, portal_error_handler)
