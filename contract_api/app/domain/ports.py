"""
도메인 포트(추상 인터페이스).

애플리케이션 서비스(유스케이스)는 아래 포트들(추상)에만 의존합니다.
구체 구현은 adapters 레이어에서 제공하고, FastAPI DI로 주입합니다.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Protocol, Sequence

from .models import ExportDocument, Page, Province


class IndexPort(Protocol):
    """
    문서 색인(OpenSearch) 접근.
    모든 호출은 1회만 시도하며, 접근 불가 시 IndexUnavailable 을 던진다.
    """

    def search(self, index: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """
        Returns:
            Dict[str, Any]: 원본 검색 응답(hits, aggregations, took ...)
        """
        ...

    def get(self, index: str, doc_id: str) -> Dict[str, Any] | None:
        """
        Returns:
            Dict[str, Any] | None: {"_id", "_source", ...} 또는 없으면 None
        """
        ...

    def count(self, index: str) -> int:
        ...

    def update_by_query(self, index: str, query: Dict[str, Any], script: Dict[str, Any]) -> int:
        """
        Returns:
            int: 갱신된 문서 수
        """
        ...


class LookupPort(Protocol):
    """행정구역/정적 페이지 조회(RDB). 접근 불가 시 LookupUnavailable."""

    def all_units(self) -> Dict[int, str]:
        """
        Returns:
            Dict[int, str]: 도/군 id → 이름
        """
        ...

    def provinces(self, parent_id: int | None = None) -> List[Province]:
        """parent_id가 없으면 도 목록, 있으면 해당 도의 군 목록."""
        ...

    def page(self, page_id: int, locale: str) -> Page | None:
        ...

    def law(self, law_id: int, locale: str) -> Page | None:
        ...


class TabularWriterPort(Protocol):
    """행 목록을 표 형식 파일로 쓴다."""

    def write(self, path: Path, header: Sequence[str], rows: Sequence[Sequence[str]]) -> Path:
        ...


class DocumentWriterPort(Protocol):
    """ExportDocument 를 문서 파일로 쓴다."""

    def write(self, path: Path, document: ExportDocument) -> Path:
        ...
