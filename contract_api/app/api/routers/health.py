from fastapi import APIRouter, Depends
from opensearchpy import OpenSearch
from contract_api.app.api.deps import get_opensearch

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health(os: OpenSearch = Depends(get_opensearch)):
    """프로세스 생존 + 검색 엔진 ping 결과."""
    return {"ok": True, "opensearch": bool(os.ping())}
