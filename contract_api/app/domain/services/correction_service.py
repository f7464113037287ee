"""
CorrectionService
=================

어휘 정정: 잘못 입력된 raw 값을 색인 전체에서 일괄 치환한다(update-by-query + painless).

- resources      : 배열 원소 안에서 부분 문자열 치환
- contract_types : 필드 전체 덮어쓰기
- document_types : 필드 전체 덮어쓰기

트랜잭션은 없다. 항목 하나가 실패해도 앞서 적용된 항목은 되돌리지 않는다.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable

from contract_api.app.domain.models import CorrectionItem, CorrectionOutcome, CorrectionReport
from contract_api.app.domain.ports import IndexPort
from contract_api.app.domain.vocabulary import Vocabulary
from contract_api.app.platform.exceptions import DomainError

logger = logging.getLogger(__name__)

RESOURCE_SCRIPT = """
List resources = ctx._source.metadata.resource;
for (int i = 0; i < resources.size(); i++) {
    if (resources[i].contains(params.old_value)) {
        resources[i] = resources[i].replace(params.old_value, params.new_value);
    }
}
""".strip()

# vocabulary → (검색 필드, painless 스크립트)
_TARGETS: Dict[Vocabulary, tuple[str, str]] = {
    Vocabulary.resources: ("metadata.resource.keyword", RESOURCE_SCRIPT),
    Vocabulary.contract_types: (
        "metadata.contract_type_raw.keyword",
        "ctx._source.metadata.contract_type_raw = params.new_value",
    ),
    Vocabulary.document_types: (
        "metadata.document_type.keyword",
        "ctx._source.metadata.document_type = params.new_value",
    ),
}


class CorrectionService:

    def __init__(self, searcher: IndexPort, index_name: str) -> None:
        self._searcher = searcher
        self._index_name = index_name

    def correct(self, vocabulary: Vocabulary, old_raw: str, new_raw: str) -> int:
        """
        old_raw 값을 가진 모든 문서를 new_raw 로 바꾼다.
        Returns:
            int: 갱신된 문서 수 (0이면 해당 문서 없음, 오류 아님)
        """
        field, source = _TARGETS[vocabulary]
        query: Dict[str, Any] = {"term": {field: old_raw}}
        script: Dict[str, Any] = {
            "source": source,
            "lang": "painless",
            "params": {"old_value": old_raw, "new_value": new_raw},
        }
        updated = self._searcher.update_by_query(self._index_name, query, script)
        logger.info(
            "correction: %s %r -> %r updated=%d", vocabulary.value, old_raw, new_raw, updated,
            extra={"vocabulary": vocabulary.value, "updated": updated, "index": self._index_name},
        )
        return updated

    def apply(self, vocabulary: Vocabulary, items: Iterable[CorrectionItem]) -> CorrectionReport:
        """
        정정 목록을 순서대로 적용한다. 실패한 항목은 기록만 하고 다음 항목으로 넘어간다.
        """
        report = CorrectionReport(vocabulary=vocabulary.value)
        for item in items:
            outcome = CorrectionOutcome(key=item.key, value=item.value)
            try:
                outcome.updated = self.correct(vocabulary, item.key, item.value)
            except DomainError as e:
                logger.error("correction failed: %s %r: %s", vocabulary.value, item.key, e)
                outcome.error = str(e)
            report.items.append(outcome)
            report.updated += outcome.updated
        return report
