from fastapi import Header, HTTPException, status
from contract_api.app.platform.config import settings
from contract_api.app.platform.exceptions import PermissionDenied


def require_api_key(x_api_key: str = Header(None, alias="X-API-Key")):
    """
    관리자(정정) API 보호. API_KEY 가 설정되지 않은 배포에서는 기능 자체를 막는다.
    """
    if not settings.API_KEY:
        raise PermissionDenied("correction", "correction endpoints are disabled")
    if not x_api_key or x_api_key != settings.API_KEY:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key")
