import logging
from fastapi import Request, HTTPException, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contract_api.app.platform.logging import request_id_ctx
from contract_api.app.platform import exceptions as domainex

logger = logging.getLogger(__name__)

# 도메인 예외 → (HTTP 상태, 오류 코드). 위에서부터 먼저 일치하는 항목을 쓴다.
DOMAIN_STATUS = (
    (domainex.ResourceNotFound, status.HTTP_404_NOT_FOUND, "NOT_FOUND"),
    (domainex.InvalidInput, status.HTTP_400_BAD_REQUEST, "INVALID_INPUT"),
    (domainex.PermissionDenied, status.HTTP_403_FORBIDDEN, "PERMISSION_DENIED"),
    (domainex.ServiceUnavailable, status.HTTP_503_SERVICE_UNAVAILABLE, "SERVICE_UNAVAILABLE"),
)


def error_envelope(message, code="BAD_REQUEST", details=None):
    return {
        "success": False,
        "error": {"code": code, "message": message, "details": details},
        "trace_id": request_id_ctx.get(),
    }


def domain_status(exc: domainex.DomainError) -> tuple[int, str]:
    for exc_type, http_status, code in DOMAIN_STATUS:
        if isinstance(exc, exc_type):
            return http_status, code
    return status.HTTP_400_BAD_REQUEST, "SERVICE_ERROR"


def _details(exc: domainex.DomainError) -> dict | None:
    # 예외가 들고 있는 식별 정보만 노출 (resource, service, index_name)
    details = {
        k: getattr(exc, k)
        for k in ("resource", "service", "index_name")
        if getattr(exc, k, None) is not None
    }
    return details or None


async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(exc.detail, code=f"HTTP_{exc.status_code}"),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_envelope(
            "Unprocessable Entity",
            code="VALIDATION_ERROR",
            details=jsonable_encoder(exc.errors()),
        ),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception path=%s", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_envelope("Internal server error", code="INTERNAL_ERROR"),
    )


async def domain_exception_handler(request: Request, exc: domainex.DomainError):
    """
    도메인/유즈케이스 예외를 HTTP로 매핑.
    외부 저장소 장애는 프로세스를 내리지 않고 요청 단위 503으로 응답한다.
    """
    http_status, code = domain_status(exc)
    log = logger.error if http_status >= 500 else logger.warning
    log("Domain error: %s (%s) path=%s", exc, code, request.url.path)
    return JSONResponse(
        status_code=http_status,
        content=error_envelope(str(exc), code=code, details=_details(exc)),
    )
