"""
계약 검색 API 라우터.

download 파라미터가 있고 type 이 tsv/docx 이면 검색 결과를 파일로 내려준다.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from contract_api.app.api.deps import (
    get_search_service, get_export_service, SearchService, ExportService
)
from contract_api.app.domain.models import ExportArtifact, ExportFormat
from contract_api.app.domain.normalizer import normalize
from contract_api.app.platform.response import ApiResponse, ok
import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])


def attachment(artifact: ExportArtifact) -> Response:
    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'},
    )


def _export_format(value: str | None) -> ExportFormat | None:
    try:
        return ExportFormat(value)
    except ValueError:
        return None


@router.get(
    "",
    summary="계약 검색",
    description=(
        "전문 검색어(q)와 패싯 필터(year, resource, contract_type, document_type, "
        "province, district, company, government, annotation_category, annotated)로 "
        "계약을 검색합니다. 다중 값은 콤마로 구분합니다. "
        "`download`를 주고 `type=tsv|docx`로 요청하면 결과를 파일로 받습니다."
    ),
    operation_id="searchContracts",
    status_code=200,
    response_model=ApiResponse,
    responses={
        200: {
            "description": "검색 성공",
            "content": {
                "application/json": {
                    "examples": {
                        "basic": {
                            "summary": "기본 검색 예시",
                            "value": {
                                "success": True,
                                "message": "검색 성공",
                                "data": {
                                    "total": 2,
                                    "took": 12,
                                    "skipped": 0,
                                    "items": [
                                        {
                                            "id": "1042",
                                            "score": 3.2,
                                            "metadata": {
                                                "contract_name": "Gold mining agreement",
                                                "open_contracting_id": "ocds-591adf-1042",
                                                "resource": ["gold"],
                                            },
                                            "labels": {"resources": ["Алт"]},
                                        }
                                    ],
                                },
                                "trace_id": "c0a8...",
                            }
                        }
                    }
                }
            },
        },
        400: {"description": "잘못된 요청 값(size/from)"},
        503: {"description": "검색 엔진 접근 불가"},
    },
)
def search(
    request: Request,
    svc: SearchService = Depends(get_search_service),
    exporter: ExportService = Depends(get_export_service),
):
    raw = dict(request.query_params)
    params = normalize(raw)

    fmt = _export_format(raw.get("type"))
    if raw.get("download") and fmt is not None:
        logger.info("SearchExport: %s", fmt.value)
        return attachment(exporter.export_search(svc.hits(params), fmt))

    result = svc.search(params)
    return ok(result, message="검색 성공")
