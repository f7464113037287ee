"""
계약 단건 조회/다운로드 API 라우터.
"""

from typing import Literal

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
from contract_api.app.api.deps import (
    get_contract_service, get_export_service, ContractService, ExportService
)
from contract_api.app.api.routers.search import attachment
from contract_api.app.platform.config import settings
from contract_api.app.platform.response import ApiResponse, ok

router = APIRouter(tags=["contracts"])


@router.get(
    "/contracts/{contract_id}",
    summary="계약 메타데이터",
    operation_id="getContract",
    response_model=ApiResponse,
    responses={404: {"description": "계약 없음"}},
)
def get_contract(contract_id: str, svc: ContractService = Depends(get_contract_service)):
    return ok(svc.get_contract(contract_id))


@router.get(
    "/contracts/{contract_id}/text",
    summary="계약 본문",
    operation_id="getContractText",
    response_model=ApiResponse,
    responses={404: {"description": "계약 없음"}},
)
def get_text(contract_id: str, svc: ContractService = Depends(get_contract_service)):
    return ok(svc.get_text(contract_id))


@router.get(
    "/contracts/{contract_id}/annotations",
    summary="계약 주석",
    description="페이지별 주석 목록과, 같은 카테고리/텍스트로 묶은 그룹을 함께 반환합니다.",
    operation_id="getContractAnnotations",
    response_model=ApiResponse,
)
def get_annotations(contract_id: str, svc: ContractService = Depends(get_contract_service)):
    return ok(svc.annotations(contract_id))


@router.get(
    "/contracts/download/{contract_id}/{file_type}",
    summary="계약 파일 다운로드",
    description="`pdf`는 저장소의 원본 파일, `docx`는 본문으로 만든 문서를 내려줍니다.",
    operation_id="downloadContract",
    responses={404: {"description": "계약 또는 파일 없음"}},
)
def download(
    contract_id: str,
    file_type: Literal["pdf", "docx"],
    svc: ContractService = Depends(get_contract_service),
    exporter: ExportService = Depends(get_export_service),
):
    if file_type == "docx":
        return attachment(exporter.export_single(svc.get_master(contract_id)))
    path = svc.pdf_path(contract_id)
    return FileResponse(path, media_type="application/pdf", filename=path.name)


@router.get(
    "/contracts-latest",
    summary="최근 계약",
    operation_id="getLatestContracts",
    response_model=ApiResponse,
)
def latest(svc: ContractService = Depends(get_contract_service)):
    return ok(svc.latest(settings.LATEST_SIZE))


@router.get(
    "/metadata/{contract_id}",
    summary="미리보기 메타데이터(제목/설명)",
    operation_id="getContractPreview",
    response_model=ApiResponse,
)
def get_metadata(contract_id: str, svc: ContractService = Depends(get_contract_service)):
    return ok(svc.get_metadata(contract_id))
