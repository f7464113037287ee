# contract_api/app/platform/response.py
from typing import Any
from pydantic import BaseModel, Field
from contract_api.app.platform.logging import request_id_ctx


class ApiResponse(BaseModel):
    """
    공통 성공 응답
    """
    success: bool = Field(..., description="성공 여부")
    message: str = Field(..., description="결과 메시지")
    # 내부 구조는 엔드포인트마다 상이
    data: Any = Field(None, description="결과 데이터")
    trace_id: str | None = Field(None, description="요청 ID (X-Request-ID)")


def ok(data: Any = None, message: str = "ok") -> dict:
    """
    성공 응답 envelope.
    pydantic 모델은 JSON 호환 dict로 풀어서 싣는다.
    """
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json", by_alias=True)
    elif isinstance(data, list):
        data = [d.model_dump(mode="json", by_alias=True) if isinstance(d, BaseModel) else d for d in data]
    return {"success": True, "message": message, "data": data, "trace_id": request_id_ctx.get()}
