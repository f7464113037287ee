"""
ContractService
===============

계약 단건 조회 유스케이스.

- metadata 인덱스: 본문 없는 가벼운 메타데이터
- master 인덱스  : 본문(pdf_text_string)을 포함한 전체 문서
- annotations 인덱스: 계약 페이지별 주석
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

from contract_api.app.domain.decoder import decode_annotations, decode_hit, decode_hits
from contract_api.app.domain.models import (
    AnnotationList,
    ContractHit,
    ContractPreview,
    ContractText,
)
from contract_api.app.domain.ports import IndexPort
from contract_api.app.domain.services.search_service import total_hits
from contract_api.app.domain.shaping import group_annotations
from contract_api.app.domain.utils import collapse_whitespace, pdf_file_name
from contract_api.app.platform.exceptions import DecodeError, ResourceNotFound

logger = logging.getLogger(__name__)

ANNOTATION_LIMIT = 10000


class ContractService:

    def __init__(
        self,
        searcher: IndexPort,
        master_index: str,
        metadata_index: str,
        annotations_index: str,
        storage_path: str,
    ) -> None:
        """
        Args:
            searcher: IndexPort     : 색인 접근
            master_index: str       : 본문 포함 인덱스
            metadata_index: str     : 메타데이터 인덱스
            annotations_index: str  : 주석 인덱스
            storage_path: str       : 원본 PDF 저장 경로
        """
        self._searcher = searcher
        self._master_index = master_index
        self._metadata_index = metadata_index
        self._annotations_index = annotations_index
        self._storage_path = Path(storage_path)

    # ================= public API =================
    def get_contract(self, contract_id: str) -> ContractHit:
        """메타데이터 인덱스의 계약 1건."""
        return self._get(self._metadata_index, contract_id)

    def get_master(self, contract_id: str) -> ContractHit:
        """본문을 포함한 계약 1건."""
        return self._get(self._master_index, contract_id)

    def get_text(self, contract_id: str) -> ContractText:
        return ContractText(text=self.get_master(contract_id).text)

    def get_metadata(self, contract_id: str) -> ContractPreview:
        """
        미리보기/SEO 용 제목과 설명. 설명은 공백을 하나로 줄인 본문이다.
        """
        contract = self.get_master(contract_id)
        return ContractPreview(
            title=contract.metadata.contract_name,
            description=collapse_whitespace(contract.text or ""),
        )

    def latest(self, size: int) -> List[ContractHit]:
        """최근 생성된 계약 목록."""
        body = {
            "size": size,
            "sort": [
                "_score",
                {"created_at": {"order": "desc", "unmapped_type": "date"}},
            ],
            "query": {"match_all": {}},
        }
        response = self._searcher.search(self._metadata_index, body)
        hits, _ = decode_hits(response.get("hits", {}).get("hits", []))
        return hits

    def annotations(self, contract_id: str) -> AnnotationList:
        """
        계약의 모든 주석. id 오름차순, 카테고리+텍스트 기준 그룹을 함께 돌려준다.
        """
        body = {
            "query": {"term": {"contract_id": self._contract_key(contract_id)}},
            "size": ANNOTATION_LIMIT,
            "from": 0,
            "sort": [{"id.keyword": {"order": "asc"}}],
        }
        response = self._searcher.search(self._annotations_index, body)
        items, _ = decode_annotations(response.get("hits", {}).get("hits", []))
        return AnnotationList(
            total=total_hits(response),
            items=items,
            groups=group_annotations(items),
        )

    def pdf_path(self, contract_id: str) -> Path:
        """
        원본 PDF 경로: {storage_path}/{contract_id}/{file_url 끝의 *.pdf}
        """
        doc = self._raw(self._metadata_index, contract_id)
        source: Dict[str, Any] = doc.get("_source") or {}
        metadata = source.get("metadata") or {}
        file_name = pdf_file_name(metadata.get("file_url"))
        if file_name is None:
            raise ResourceNotFound("contract file", f"no pdf file for contract {contract_id}")
        folder = str(source.get("contract_id") or contract_id)
        path = self._storage_path / folder / file_name
        if not path.is_file():
            raise ResourceNotFound("contract file", f"pdf not found for contract {contract_id}")
        return path

    # ================= internals =================
    def _raw(self, index: str, contract_id: str) -> Dict[str, Any]:
        doc = self._searcher.get(index, contract_id)
        if doc is None:
            raise ResourceNotFound("contract", f"contract {contract_id} not found")
        return doc

    def _get(self, index: str, contract_id: str) -> ContractHit:
        doc = self._raw(index, contract_id)
        try:
            return decode_hit({"_id": contract_id, **doc})
        except DecodeError as e:
            # 단건 조회에서 형태가 깨진 문서는 없는 것으로 취급
            logger.warning("contract %s cannot be decoded: %s", contract_id, e, extra={"hit_id": contract_id})
            raise ResourceNotFound("contract", f"contract {contract_id} is malformed") from e

    @staticmethod
    def _contract_key(contract_id: str) -> int | str:
        # 주석 인덱스의 contract_id 는 숫자로 색인되어 있다
        return int(contract_id) if contract_id.isdigit() else contract_id
