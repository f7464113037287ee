"""
검색 쿼리 컴파일러.

SearchParameters → CompiledQuery
  1. 정확 일치 패싯 → filter 절 (AND, 점수 미반영)
  2. 주석 카테고리 → should 절 (OR, 최소 1개 일치)
  3. 전문 검색어(q) → must 절 (simple_query_string, 토큰 AND)
  4. q가 있을 때만 하이라이트
  5. 정렬: 지정 필드 또는 서명일 내림차순
  6. from/size 는 그대로 복사
"""

from __future__ import annotations

from typing import List

from contract_api.app.domain.models import (
    CompiledQuery,
    ExistsFilter,
    FullTextClause,
    HighlightSpec,
    PhraseClause,
    SearchParameters,
    SortField,
    SortSpec,
    TermsFilter,
)
from contract_api.app.domain.vocabulary import Vocabulary, to_raw

# 전문 검색 대상 필드
FULL_TEXT_FIELDS = (
    "metadata.contract_name",
    "metadata.project_title",
    "metadata.open_contracting_id",
    "metadata.country_code",
    "metadata.country_name",
    "metadata.resource",
    "metadata.resource_raw",
    "metadata.language",
    "metadata.company_name",
    "metadata.type_of_contract",
    "metadata.show_pdf_text",
    "metadata.category",
    "metadata_string",
    "pdf_text_string",
)

HIGHLIGHT_FIELDS = ("pdf_text_string", "metadata_string")

SORT_FIELDS = {
    SortField.country: "metadata.country_name.keyword",
    SortField.year: "metadata.signature_date",
    SortField.contract_name: "metadata.contract_name.keyword",
    SortField.resource: "metadata.resource_raw.keyword",
    SortField.contract_type: "metadata.contract_type.keyword",
}

DEFAULT_SORT = SortSpec(field="metadata.signature_date", ascending=False)

ANNOTATED_FIELD = "annotations_string"
ANNOTATION_CATEGORY_FIELD = "annotations_category"


def _filters(params: SearchParameters) -> List[TermsFilter | ExistsFilter]:
    filters: List[TermsFilter | ExistsFilter] = []

    if params.years:
        filters.append(TermsFilter(field="metadata.signature_year", values=params.years))
    if params.resources:
        filters.append(TermsFilter(field="metadata.resource", values=params.resources))
    if params.province:
        filters.append(TermsFilter(field="metadata.provinces.province", values=(params.province,)))
    if params.districts:
        filters.append(TermsFilter(field="metadata.provinces.district", values=params.districts))
    if params.document_types:
        raws = tuple(to_raw(Vocabulary.document_types, t) for t in params.document_types)
        filters.append(TermsFilter(field="metadata.document_type.keyword", values=raws))
    if params.contract_types:
        raws = tuple(to_raw(Vocabulary.contract_types, t) for t in params.contract_types)
        filters.append(TermsFilter(field="metadata.contract_type.keyword", values=raws))
    if params.government:
        filters.append(TermsFilter(field="metadata.government_entity.entity.keyword", values=(params.government,)))
    if params.company:
        filters.append(TermsFilter(field="metadata.company_name.keyword", values=(params.company,)))
    if params.annotated:
        filters.append(ExistsFilter(field=ANNOTATED_FIELD))

    return filters


def _sort(params: SearchParameters) -> SortSpec:
    if params.sort_by is None:
        return DEFAULT_SORT
    return SortSpec(field=SORT_FIELDS[params.sort_by], ascending=params.ascending)


def compile_query(params: SearchParameters) -> CompiledQuery:
    """
    검색 파라미터를 불리언 쿼리로 컴파일한다.
    Args:
        params: SearchParameters : 정규화된 검색 파라미터
    Returns:
        CompiledQuery: 불변 쿼리 트리 (직렬화는 to_body()에서)
    """
    should = tuple(
        PhraseClause(field=ANNOTATION_CATEGORY_FIELD, phrase=c)
        for c in params.annotation_categories
    )

    must = None
    highlight = None
    if params.q:
        must = FullTextClause(query=params.q, fields=FULL_TEXT_FIELDS, default_operator="AND")
        highlight = HighlightSpec(fields=HIGHLIGHT_FIELDS, fragment_size=50, number_of_fragments=2)

    return CompiledQuery(
        filters=tuple(_filters(params)),
        should=should,
        must=must,
        highlight=highlight,
        sort=_sort(params),
        size=params.size,
        from_=params.from_,
    )
