"""
어휘 정정 API 라우터 (관리자 전용, X-API-Key 필요).
"""

from typing import List

from fastapi import APIRouter, Body, Depends
from contract_api.app.api.deps import get_correction_service, CorrectionService
from contract_api.app.domain.models import CorrectionItem
from contract_api.app.domain.vocabulary import Vocabulary
from contract_api.app.platform.response import ApiResponse, ok
from contract_api.app.security.guards import require_api_key
import logging
logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/correction",
    tags=["correction"],
    dependencies=[Depends(require_api_key)],
)


@router.post(
    "/{vocabulary}",
    summary="raw 값 일괄 정정",
    description=(
        "`[{key, value}]` 목록을 순서대로 적용해 색인의 raw 값을 바꿉니다. "
        "resources 는 배열 원소 안의 부분 문자열을, contract_types/document_types 는 필드 전체를 바꿉니다. "
        "실패한 항목은 결과에 오류로 남고 앞선 항목은 되돌리지 않습니다."
    ),
    operation_id="correctVocabulary",
    response_model=ApiResponse,
    responses={
        401: {"description": "API 키 불일치"},
        403: {"description": "정정 기능 비활성"},
    },
)
def correct(
    vocabulary: Vocabulary,
    items: List[CorrectionItem] = Body(...),
    svc: CorrectionService = Depends(get_correction_service),
):
    logger.info("CorrectionRequest: %s items=%d", vocabulary.value, len(items))
    return ok(svc.apply(vocabulary, items), message="정정 완료")
