"""
행정구역과 정적 페이지(소개/법령) 조회 API 라우터.
"""

from fastapi import APIRouter, Depends, Query
from contract_api.app.api.deps import get_lookup
from contract_api.app.domain.ports import LookupPort
from contract_api.app.platform.exceptions import ResourceNotFound
from contract_api.app.platform.response import ApiResponse, ok

router = APIRouter(tags=["lookup"])


@router.get(
    "/provinces",
    summary="도/군 목록",
    description="`province_id`가 없으면 도 목록, 있으면 해당 도의 군 목록을 반환합니다.",
    operation_id="listProvinces",
    response_model=ApiResponse,
)
def provinces(
    province_id: int | None = Query(None, description="상위 도 id"),
    lookup: LookupPort = Depends(get_lookup),
):
    return ok(lookup.provinces(province_id))


@router.get(
    "/provinces/all-units",
    summary="전체 행정구역 id → 이름",
    operation_id="listAllUnits",
    response_model=ApiResponse,
)
def all_units(lookup: LookupPort = Depends(get_lookup)):
    return ok(lookup.all_units())


@router.get("/page/{page_id}", summary="정적 페이지", operation_id="getPage", response_model=ApiResponse)
def page(page_id: int, locale: str = Query("mn"), lookup: LookupPort = Depends(get_lookup)):
    result = lookup.page(page_id, locale)
    if result is None:
        raise ResourceNotFound("page", f"page {page_id} ({locale}) not found")
    return ok(result)


@router.get("/law/{law_id}", summary="법령 페이지", operation_id="getLaw", response_model=ApiResponse)
def law(law_id: int, locale: str = Query("mn"), lookup: LookupPort = Depends(get_lookup)):
    result = lookup.law(law_id, locale)
    if result is None:
        raise ResourceNotFound("law", f"law {law_id} ({locale}) not found")
    return ok(result)
