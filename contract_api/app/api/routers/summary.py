"""
통계 요약(집계) API 라우터.
"""

from fastapi import APIRouter, Depends, Path
from contract_api.app.api.deps import get_summary_service, SummaryService
from contract_api.app.platform.response import ApiResponse, ok

router = APIRouter(prefix="/summary", tags=["summary"])


@router.get(
    "",
    summary="패싯별 계약 통계",
    description="연도, 자원, 문서 유형, 지역, 기관, 회사, 주석 카테고리별 건수와 자원→연도 중첩 집계를 반환합니다.",
    operation_id="summarizeContracts",
    response_model=ApiResponse,
    responses={503: {"description": "검색 엔진 접근 불가"}},
)
def summary(svc: SummaryService = Depends(get_summary_service)):
    return ok(svc.summarize())


@router.get(
    "/year/province/{province_id}",
    summary="도별 연도 통계",
    operation_id="summarizeProvinceYears",
    response_model=ApiResponse,
)
def province_years(
    province_id: int = Path(..., description="도(아이막) id"),
    svc: SummaryService = Depends(get_summary_service),
):
    return ok(svc.summarize_by_province_year(province_id))
