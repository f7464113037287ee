"""
공개 저장소 파일 제공. 내보내기 파일의 메타데이터 링크가 이 경로를 가리킨다.
"""

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse
from contract_api.app.platform.config import settings
from contract_api.app.platform.exceptions import PermissionDenied, ResourceNotFound

router = APIRouter(prefix="/storage", tags=["storage"])


def resolve_storage_file(root: str, relative: str) -> Path:
    """
    저장소 루트 아래의 파일 경로. 루트 밖을 가리키면 PermissionDenied.
    """
    base = Path(root).resolve()
    target = (base / relative).resolve()
    if not target.is_relative_to(base):
        raise PermissionDenied("storage", f"path outside storage: {relative}")
    if not target.is_file():
        raise ResourceNotFound("file", f"{relative} not found")
    return target


@router.get("/{file_path:path}", summary="저장소 파일", operation_id="getStorageFile")
def storage_file(file_path: str):
    return FileResponse(resolve_storage_file(settings.STORAGE_PATH, file_path))
