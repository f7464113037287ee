# contract_api/app/domain/services/search_service.py
"""
SearchService
==============

계약 검색 유스케이스.

Flow:
    Normalizer → Compiler → IndexPort → Decoder → Shaper

- 도메인은 **Port(인터페이스)** 에만 의존합니다. (DIP)
- 구현체는 adapters 레이어에서 주입(의존성 주입; DI)합니다.

예시:
    svc = SearchService(searcher, index_name="contracts-master")
    result = svc.search(normalize({"q": "gold", "year": "2019,2020"}))
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Tuple

from contract_api.app.domain.compiler import compile_query
from contract_api.app.domain.decoder import decode_hits
from contract_api.app.domain.models import ContractHit, SearchParameters, SearchResult
from contract_api.app.domain.ports import IndexPort
from contract_api.app.domain.shaping import to_item

logger = logging.getLogger(__name__)


def total_hits(response: Dict[str, Any]) -> int:
    """hits.total 은 버전에 따라 정수 또는 {"value": n} 이다."""
    total = response.get("hits", {}).get("total", 0)
    if isinstance(total, dict):
        return int(total.get("value", 0))
    return int(total or 0)


class SearchService:

    def __init__(self, searcher: IndexPort, index_name: str) -> None:
        self._searcher = searcher
        self._index_name = index_name

    # ================= public API =================
    def search(self, params: SearchParameters) -> SearchResult:
        """
        검색 후 JSON 응답 형태로 돌려준다.
        Args:
            params: SearchParameters : 정규화된 검색 파라미터
        Returns:
            SearchResult: 전체 건수, 소요 시간, 표시 라벨이 붙은 계약 목록
        """
        response, hits, skipped = self._run(params)
        return SearchResult(
            total=total_hits(response),
            took=response.get("took"),
            items=[to_item(h) for h in hits],
            skipped=skipped,
        )

    def hits(self, params: SearchParameters) -> List[ContractHit]:
        """내보내기용: 디코딩된 hit 목록만 돌려준다."""
        _, hits, _ = self._run(params)
        return hits

    # ================= internals =================
    def _run(self, params: SearchParameters) -> Tuple[Dict[str, Any], List[ContractHit], int]:
        query = compile_query(params)
        logger.info(
            "service.search: q=%r filters=%d should=%d size=%d from=%d",
            params.q, len(query.filters), len(query.should), query.size, query.from_,
            extra={"index": self._index_name},
        )
        response = self._searcher.search(self._index_name, query.to_body())
        hits, failures = decode_hits(response.get("hits", {}).get("hits", []))
        return response, hits, len(failures)
