"""
SummaryService
==============

통계 요약(집계) 유스케이스.

- summarize(): 패싯별 terms 집계 + 자원→연도 중첩 집계 + 전체 건수
- summarize_by_province_year(): 도(province)로 먼저 거른 뒤 연도별 집계

terms 집계 크기는 AGG_SIZE(10,000)로 고정된 상한이다. 이보다 많은 고유 키는 잘린다.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from contract_api.app.domain.models import AggregationBucket, NestedBucket, Summary, YearCount
from contract_api.app.domain.ports import IndexPort

logger = logging.getLogger(__name__)

AGG_SIZE = 10000

# 집계 이름 → 필드
FACETS: Dict[str, str] = {
    "year_summary": "metadata.signature_year.keyword",
    "resource_summary": "metadata.resource.keyword",
    "document_summary": "metadata.document_type.keyword",
    "country_summary": "metadata.country_code.keyword",
    "provinces_summary": "metadata.provinces.province.keyword",
    "districts_summary": "metadata.provinces.district.keyword",
    "contract_type_summary": "metadata.contract_type.keyword",
    "government_summary": "metadata.government_entity.entity.keyword",
    "company_summary": "metadata.company_name.keyword",
    "annotations_summary": "annotations_category.keyword",
}

RESOURCE_BY_YEARS = "resource_by_years_summary"
SIGNATURE_YEARS = "signature_years"
PROVINCE_YEAR = "year_summary"
FILTERED_YEAR = "filtered_year"


def _terms(field: str) -> Dict[str, Any]:
    return {"terms": {"field": field, "size": AGG_SIZE}}


def _buckets(agg: Dict[str, Any] | None) -> List[AggregationBucket]:
    if not agg:
        return []
    return [
        AggregationBucket(key=b["key"], doc_count=b["doc_count"])
        for b in agg.get("buckets", [])
    ]


class SummaryService:

    def __init__(self, searcher: IndexPort, index_name: str) -> None:
        self._searcher = searcher
        self._index_name = index_name

    # ================= public API =================
    def summarize(self) -> Summary:
        """
        전체 계약에 대한 패싯 집계.
        Returns:
            Summary: aggs(패싯별 버킷), resource_by_years(2단계 버킷), count(전체 건수)
        """
        count = self._searcher.count(self._index_name)
        response = self._searcher.search(self._index_name, self._build_summary_body())
        aggs = response.get("aggregations", {})

        facets = {name: _buckets(aggs.get(name)) for name in FACETS}
        nested = [
            NestedBucket(
                key=b["key"],
                doc_count=b["doc_count"],
                buckets=_buckets(b.get(SIGNATURE_YEARS)),
            )
            for b in aggs.get(RESOURCE_BY_YEARS, {}).get("buckets", [])
        ]
        logger.info("service.summarize: count=%d", count, extra={"index": self._index_name, "total": count})
        return Summary(aggs=facets, resource_by_years=nested, count=count)

    def summarize_by_province_year(self, province_id: int) -> List[YearCount]:
        """
        특정 도의 연도별 계약 수. 도로 먼저 거른 뒤 연도로 집계한다.
        Args:
            province_id: int : 도 id
        Returns:
            List[YearCount]: 집계 버킷 순서 그대로
        """
        response = self._searcher.search(self._index_name, self._build_province_year_body(province_id))
        filtered = response.get("aggregations", {}).get(PROVINCE_YEAR, {})
        return [
            YearCount(year=b.key, count=b.doc_count)
            for b in _buckets(filtered.get(FILTERED_YEAR))
        ]

    # ================= query bodies =================
    def _build_summary_body(self) -> Dict[str, Any]:
        aggs: Dict[str, Any] = {name: _terms(field) for name, field in FACETS.items()}
        aggs[RESOURCE_BY_YEARS] = {
            **_terms("metadata.resource.keyword"),
            "aggs": {SIGNATURE_YEARS: _terms("metadata.signature_year.keyword")},
        }
        return {"size": 0, "aggs": aggs}

    def _build_province_year_body(self, province_id: int) -> Dict[str, Any]:
        return {
            "size": 0,
            "aggs": {
                PROVINCE_YEAR: {
                    "filter": {"term": {"metadata.provinces.province": province_id}},
                    "aggs": {FILTERED_YEAR: _terms("metadata.signature_year.keyword")},
                }
            },
        }
