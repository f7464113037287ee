"""
OpenSearch 접근을 담당하는 IndexPort 구현체.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from opensearchpy import OpenSearch
from opensearchpy.exceptions import ConnectionError, NotFoundError, TransportError

from contract_api.app.domain.ports import IndexPort
from contract_api.app.platform.exceptions import IndexUnavailable, InvalidInput

logger = logging.getLogger(__name__)


class OpenSearchSearcher(IndexPort):

    def __init__(self, client: OpenSearch) -> None:
        self.client = client

    def search(self, index: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """
        Opensearch에 검색(집계 포함)을 수행하여 원본 응답을 반환한다.

        Args:
            index (str): 인덱스 이름
            body (Dict[str, Any]): 검색 쿼리 바디
        Returns:
            Dict[str, Any]: 검색 결과(hits, aggregations, took, timed_out)
        """
        try:
            response = self.client.search(index=index, body=body)
        except TransportError as e:
            raise self._translate(index, e) from e
        logger.debug("search: took=%sms", response.get("took"), extra={"index": index, "took_ms": response.get("took")})
        return response

    def get(self, index: str, doc_id: str) -> Dict[str, Any] | None:
        """
        문서 1건을 id로 가져온다. 없으면 None.
        """
        try:
            return self.client.get(index=index, id=doc_id)
        except NotFoundError:
            return None
        except TransportError as e:
            raise self._translate(index, e) from e

    def count(self, index: str) -> int:
        try:
            response = self.client.count(index=index)
        except TransportError as e:
            raise self._translate(index, e) from e
        return int(response.get("count", 0))

    def update_by_query(self, index: str, query: Dict[str, Any], script: Dict[str, Any]) -> int:
        """
        조건에 맞는 문서를 스크립트로 일괄 갱신한다.

        Returns:
            int: 갱신된 문서 수
        """
        body = {"query": query, "script": script}
        try:
            response = self.client.update_by_query(index=index, body=body, conflicts="proceed")
        except TransportError as e:
            raise self._translate(index, e) from e
        return int(response.get("updated", 0))

    @staticmethod
    def _translate(index: str, error: TransportError) -> IndexUnavailable | InvalidInput:
        """
        4xx(쿼리 거부)는 InvalidInput, 연결 실패와 5xx는 IndexUnavailable로 바꾼다.
        """
        status = error.status_code
        if isinstance(error, ConnectionError) or not isinstance(status, int) or status >= 500:
            logger.error("opensearch call failed: %s", error, extra={"index": index})
            return IndexUnavailable(index, str(error))
        logger.warning("opensearch rejected request: %s", error, extra={"index": index})
        return InvalidInput(f"query rejected by index '{index}': {error.error}")
