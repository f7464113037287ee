"""
도메인 모델 정의.

- SearchParameters: 정규화된 검색 파라미터(불변)
- CompiledQuery / *Clause: 검색 파라미터를 컴파일한 불리언 쿼리 트리(불변)
- ContractHit / ContractMetadata: 검색 결과 1건을 디코딩한 계약 문서
- Annotation / AnnotationGroup: 계약 페이지 위의 주석과 그 묶음
- AggregationBucket / NestedBucket / Summary: 집계 결과
- ExportDocument / ExportArtifact: 내보내기 결과

Pydantic v2 기반 모델이라 검증/직렬화가 용이합니다.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union
from datetime import datetime
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


JSONDict = dict[str, Any]


# ===================== 검색 파라미터 =====================

class SortField(str, Enum):
    """정렬 가능한 필드(화이트리스트)."""
    country = "country"
    year = "year"
    contract_name = "contract_name"
    resource = "resource"
    contract_type = "contract_type"


class SearchParameters(BaseModel):
    """
    정규화된 검색 파라미터.
    설정되지 않은 필터는 빈 튜플/None 이며, 컴파일 시 쿼리에서 완전히 빠진다.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    q: str = Field("", description="전문 검색어")
    years: tuple[int, ...] = Field((), description="서명 연도")
    resources: tuple[str, ...] = Field((), description="광물 자원(raw)")
    contract_types: tuple[str, ...] = Field((), description="계약 유형(표시 라벨)")
    document_types: tuple[str, ...] = Field((), description="문서 유형(표시 라벨)")
    annotation_categories: tuple[str, ...] = Field((), description="주석 카테고리")
    province: str | None = Field(None, description="도(아이막) id")
    districts: tuple[int, ...] = Field((), description="군(솜) id")
    company: str | None = Field(None, description="회사명")
    government: str | None = Field(None, description="정부 기관명")
    annotated: bool | None = Field(None, description="주석 보유 여부")
    size: int = Field(10, ge=0)
    from_: int = Field(0, ge=0, alias="from")
    sort_by: SortField | None = None
    ascending: bool = False


# ===================== 컴파일된 쿼리 =====================

class TermsFilter(BaseModel):
    """정확히 일치하는 값들 중 하나(filter context, 점수 미반영)."""
    model_config = ConfigDict(frozen=True)
    kind: Literal["terms"] = "terms"
    field: str
    values: tuple[Union[int, str], ...]

    def to_dsl(self) -> JSONDict:
        return {"terms": {self.field: list(self.values)}}


class ExistsFilter(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["exists"] = "exists"
    field: str

    def to_dsl(self) -> JSONDict:
        return {"exists": {"field": self.field}}


FilterClause = Annotated[Union[TermsFilter, ExistsFilter], Field(discriminator="kind")]


class PhraseClause(BaseModel):
    """should 절: 구문 일치(OR 결합)."""
    model_config = ConfigDict(frozen=True)
    kind: Literal["match_phrase"] = "match_phrase"
    field: str
    phrase: str

    def to_dsl(self) -> JSONDict:
        return {"match_phrase": {self.field: self.phrase}}


class FullTextClause(BaseModel):
    """must 절: 전문 검색."""
    model_config = ConfigDict(frozen=True)
    kind: Literal["simple_query_string"] = "simple_query_string"
    query: str
    fields: tuple[str, ...]
    default_operator: Literal["AND", "OR"] = "AND"

    def to_dsl(self) -> JSONDict:
        return {
            "simple_query_string": {
                "query": self.query,
                "fields": list(self.fields),
                "default_operator": self.default_operator,
            }
        }


class HighlightSpec(BaseModel):
    model_config = ConfigDict(frozen=True)
    fields: tuple[str, ...]
    fragment_size: int = 50
    number_of_fragments: int = 2
    pre_tags: tuple[str, ...] = ("<strong>",)
    post_tags: tuple[str, ...] = ("</strong>",)

    def to_dsl(self) -> JSONDict:
        return {
            "pre_tags": list(self.pre_tags),
            "post_tags": list(self.post_tags),
            "fields": {
                f: {
                    "fragment_size": self.fragment_size,
                    "number_of_fragments": self.number_of_fragments,
                }
                for f in self.fields
            },
        }


class SortSpec(BaseModel):
    model_config = ConfigDict(frozen=True)
    field: str
    ascending: bool = False

    def to_dsl(self) -> list[JSONDict]:
        return [{self.field: {"order": "asc" if self.ascending else "desc"}}]


class CompiledQuery(BaseModel):
    """
    검색 파라미터를 컴파일한 결과.
    최종 조건: (must: 전문검색) AND (filter: 모든 필터) AND (should가 있으면 최소 1개 일치)
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    filters: tuple[FilterClause, ...] = ()
    should: tuple[PhraseClause, ...] = ()
    must: FullTextClause | None = None
    highlight: HighlightSpec | None = None
    sort: SortSpec
    size: int = 10
    from_: int = Field(0, alias="from")

    @property
    def matches_all(self) -> bool:
        return not self.filters and not self.should and self.must is None

    def to_query_dsl(self) -> JSONDict:
        if self.matches_all:
            return {"match_all": {}}
        clause: JSONDict = {}
        if self.must is not None:
            clause["must"] = [self.must.to_dsl()]
        if self.filters:
            clause["filter"] = [f.to_dsl() for f in self.filters]
        if self.should:
            clause["should"] = [s.to_dsl() for s in self.should]
            # must/filter가 있으면 should는 기본적으로 선택 사항이 되므로 명시한다
            clause["minimum_should_match"] = 1
        return {"bool": clause}

    def to_body(self) -> JSONDict:
        """OpenSearch 요청 바디로 직렬화한다(경계에서만 호출)."""
        body: JSONDict = {
            "from": self.from_,
            "size": self.size,
            "query": self.to_query_dsl(),
            "sort": self.sort.to_dsl(),
        }
        if self.highlight is not None:
            body["highlight"] = self.highlight.to_dsl()
        return body


# ===================== 계약 문서 =====================

def _as_str(v: Any) -> Any:
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(int(v))
    return v


class GovernmentEntity(BaseModel):
    model_config = ConfigDict(extra="allow")
    entity: str = ""


class ProvincePair(BaseModel):
    """도/군 id 쌍. 색인에는 문자열 또는 숫자로 들어있다."""
    model_config = ConfigDict(extra="allow")
    province: str | None = None
    district: str | None = None

    @field_validator("province", "district", mode="before")
    @classmethod
    def _coerce_ids(cls, v: Any) -> Any:
        return _as_str(v)

    def ids(self) -> tuple[int, int] | None:
        """둘 다 양의 정수일 때만 (province, district)를 반환."""
        try:
            pid, did = int(self.province or ""), int(self.district or "")
        except ValueError:
            return None
        if pid > 0 and did > 0:
            return pid, did
        return None


class ContractMetadata(BaseModel):
    model_config = ConfigDict(extra="allow")

    contract_name: str
    open_contracting_id: str
    signature_date: str | None = None
    signature_year: str | None = None
    country_code: str | None = None
    country_name: str | None = None
    language: str | None = None
    resource: list[str] = Field(default_factory=list)
    contract_type: str | None = None
    document_type: str | None = None
    company_name: str | list[str] | None = None
    government_entity: list[GovernmentEntity] = Field(default_factory=list)
    provinces: list[ProvincePair] = Field(default_factory=list)
    project_title: str | None = None
    file_url: str | None = None

    @field_validator("signature_year", mode="before")
    @classmethod
    def _coerce_year(cls, v: Any) -> Any:
        return _as_str(v)

    @field_validator("resource", "government_entity", "provinces", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class ContractHit(BaseModel):
    """검색/조회 결과 1건. 응답 직렬화 후 버려진다."""
    id: str
    score: float | None = None
    metadata: ContractMetadata
    text: str | None = Field(None, description="pdf_text_string")
    annotations_text: str | None = Field(None, description="annotations_string")
    metadata_text: str | None = Field(None, description="metadata_string")
    highlight: dict[str, list[str]] = Field(default_factory=dict)


class ContractLabels(BaseModel):
    """화면 표시용 라벨."""
    resources: list[str] = Field(default_factory=list)
    contract_type: str | None = None
    document_type: str | None = None


class ContractItem(ContractHit):
    labels: ContractLabels = Field(default_factory=ContractLabels)


class SearchResult(BaseModel):
    total: int = Field(..., ge=0)
    took: int | None = None
    items: list[ContractItem] = Field(default_factory=list)
    skipped: int = Field(0, ge=0, description="디코딩 실패로 제외된 건수")


class ContractText(BaseModel):
    text: str | None = None


class ContractPreview(BaseModel):
    title: str
    description: str


# ===================== 주석 =====================

class Annotation(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    annotation_id: str | None = None
    contract_id: str | None = None
    open_contracting_id: str | None = None
    quote: str = ""
    text: str = Field("", validation_alias=AliasChoices("text", "string"))
    category: str = ""
    category_key: str | None = None
    article_reference: str | None = None
    page_no: int | None = Field(None, validation_alias=AliasChoices("page_no", "page"))
    shapes: list[JSONDict] = Field(default_factory=list)
    ranges: list[JSONDict] = Field(default_factory=list)
    cluster: str | None = None

    @field_validator("id", "annotation_id", "contract_id", mode="before")
    @classmethod
    def _coerce_ids(cls, v: Any) -> Any:
        return _as_str(v)

    @field_validator("shapes", "ranges", mode="before")
    @classmethod
    def _listify(cls, v: Any) -> Any:
        if v is None or v == "":
            return []
        if isinstance(v, dict):
            return [v]
        return v


class AnnotationPage(BaseModel):
    id: str
    page_no: int | None = None
    quote: str = ""
    article_reference: str | None = None
    shapes: list[JSONDict] = Field(default_factory=list)
    ranges: list[JSONDict] = Field(default_factory=list)


class AnnotationGroup(BaseModel):
    """같은 카테고리+텍스트를 가진 주석을 페이지에 걸쳐 묶은 것."""
    id: str
    contract_id: str | None = None
    open_contracting_id: str | None = None
    text: str = ""
    category_key: str | None = None
    category: str = ""
    cluster: str | None = None
    pages: list[AnnotationPage] = Field(default_factory=list)


class AnnotationList(BaseModel):
    total: int
    items: list[Annotation] = Field(default_factory=list)
    groups: list[AnnotationGroup] = Field(default_factory=list)


# ===================== 집계 =====================

class AggregationBucket(BaseModel):
    key: Union[int, str]
    doc_count: int


class NestedBucket(AggregationBucket):
    buckets: list[AggregationBucket] = Field(default_factory=list)


class Summary(BaseModel):
    aggs: dict[str, list[AggregationBucket]] = Field(default_factory=dict)
    resource_by_years: list[NestedBucket] = Field(default_factory=list)
    count: int = 0


class YearCount(BaseModel):
    year: Union[int, str]
    count: int


# ===================== 내보내기 =====================

class ExportFormat(str, Enum):
    tsv = "tsv"
    docx = "docx"


class ExportSection(BaseModel):
    title: str
    paragraphs: list[str] = Field(default_factory=list)


class ExportDocument(BaseModel):
    sections: list[ExportSection] = Field(default_factory=list)


class ExportArtifact(BaseModel):
    filename: str
    media_type: str
    content: bytes


# ===================== 조회 테이블(RDB) =====================

class Province(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    id: int
    name: str
    note: str | None = None
    parent_id: int | None = Field(None, alias="parentId")
    type: int


class Page(BaseModel):
    title: str
    content: str
    created_at: datetime | None = None


# ===================== 정정 =====================

class CorrectionItem(BaseModel):
    key: str = Field(..., min_length=1, description="현재 raw 값")
    value: str = Field(..., description="새 raw 값")


class CorrectionOutcome(BaseModel):
    key: str
    value: str
    updated: int = 0
    error: str | None = None


class CorrectionReport(BaseModel):
    vocabulary: str
    updated: int = 0
    items: list[CorrectionOutcome] = Field(default_factory=list)
