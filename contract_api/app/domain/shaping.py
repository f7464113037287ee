"""
검색 결과를 소비자별 형태로 바꾼다.

- JSON API : ContractItem (디코딩된 hit + 표시 라벨)
- 표 형식 : EXPORT_HEADER + 계약당 1행 (TSV)
- 문서 형식 : ExportDocument (계약별 제목 + 문단)
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Sequence

from contract_api.app.domain.models import (
    Annotation,
    AnnotationGroup,
    AnnotationPage,
    ContractHit,
    ContractItem,
    ContractLabels,
    ExportDocument,
    ExportSection,
)
from contract_api.app.domain.utils import rewrite_links, split_paragraphs
from contract_api.app.domain.vocabulary import Vocabulary, to_display

EXPORT_HEADER = [
    "#",
    "Гэрээний нэр",
    "Эрдсийн төрөл",
    "Гэрээний төрөл",
    "Гэрээ байгуулсан огноо",
    "Баримт бичгийн төрөл",
    "Аймаг / Сум",
    "Гэрээ байгуулсан төрийн байгууллага",
    "Компанийн нэр",
    "Төслийн нэр",
    "Гэрээний файл",
    "OCID",
    "Аннотацийн текст",
    "Метадата текст",
]

SEPARATOR = ";"


def _label(vocabulary: Vocabulary, raw: str | None) -> str | None:
    return to_display(vocabulary, raw) if raw is not None else None


def to_item(hit: ContractHit) -> ContractItem:
    """JSON 응답용: 원본 값은 그대로 두고 표시 라벨을 덧붙인다."""
    meta = hit.metadata
    labels = ContractLabels(
        resources=[to_display(Vocabulary.resources, r) for r in meta.resource],
        contract_type=_label(Vocabulary.contract_types, meta.contract_type),
        document_type=_label(Vocabulary.document_types, meta.document_type),
    )
    return ContractItem(**hit.model_dump(), labels=labels)


def _join(values: Iterable[str]) -> str:
    return SEPARATOR.join(v for v in values if v)


def _company(value: str | List[str] | None) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return _join(value)
    return value


def province_names(hit: ContractHit, units: Mapping[int, str]) -> str:
    """
    도/군 id 쌍을 이름으로 바꾼다.
    두 id가 모두 양의 정수인 쌍만 사용하고 나머지는 건너뛴다.
    """
    names: List[str] = []
    for pair in hit.metadata.provinces:
        ids = pair.ids()
        if ids is None:
            continue
        pid, did = ids
        names.append(f"{units.get(pid, '')} {units.get(did, '')}".strip())
    return _join(names)


def to_row(
    index: int,
    hit: ContractHit,
    units: Mapping[int, str],
    public_url: str,
    internal_storage_url: str,
) -> List[str]:
    """
    TSV 1행. EXPORT_HEADER 와 같은 순서.
    Args:
        index: int               : 1부터 시작하는 순번
        hit: ContractHit         : 계약
        units: Mapping[int, str] : 행정구역 id → 이름
        public_url: str          : 공개 URL (다운로드 링크/저장소 치환에 사용)
        internal_storage_url: str: 치환 대상 내부 저장소 주소
    """
    meta = hit.metadata
    metadata_text = ""
    if hit.metadata_text is not None:
        metadata_text = rewrite_links(hit.metadata_text, internal_storage_url, f"{public_url}/storage", 2)

    return [
        f"{index}.",
        meta.contract_name,
        _join(to_display(Vocabulary.resources, r) for r in meta.resource),
        _label(Vocabulary.contract_types, meta.contract_type) or "",
        meta.signature_date or "",
        _label(Vocabulary.document_types, meta.document_type) or "",
        province_names(hit, units),
        _join(g.entity for g in meta.government_entity),
        _company(meta.company_name),
        meta.project_title or "",
        f"{public_url}/api/contracts/download/{hit.id}/pdf",
        meta.open_contracting_id,
        hit.annotations_text or "",
        metadata_text,
    ]


def to_rows(
    hits: Sequence[ContractHit],
    units: Mapping[int, str],
    public_url: str,
    internal_storage_url: str,
) -> List[List[str]]:
    return [
        to_row(i, hit, units, public_url, internal_storage_url)
        for i, hit in enumerate(hits, start=1)
    ]


def to_document(hits: Sequence[ContractHit], numbered: bool = True) -> ExportDocument:
    """
    문서 내보내기 모델.
    numbered=True 이면 제목을 "1. 계약명" 형태로 붙인다(다건 내보내기).
    """
    sections: List[ExportSection] = []
    for i, hit in enumerate(hits, start=1):
        name = hit.metadata.contract_name
        title = f"{i}. {name}" if numbered else name
        sections.append(ExportSection(title=title, paragraphs=split_paragraphs(hit.text or "")))
    return ExportDocument(sections=sections)


def group_annotations(annotations: Sequence[Annotation]) -> List[AnnotationGroup]:
    """
    카테고리+텍스트가 같은 주석을 페이지에 걸쳐 묶는다.
    그룹 순서는 처음 등장한 순서, 그룹 안의 페이지는 페이지 번호 순.
    """
    groups: Dict[tuple[str, str], AnnotationGroup] = {}
    for a in annotations:
        key = (a.category, a.text)
        group = groups.get(key)
        if group is None:
            group = AnnotationGroup(
                id=a.annotation_id or a.id,
                contract_id=a.contract_id,
                open_contracting_id=a.open_contracting_id,
                text=a.text,
                category_key=a.category_key,
                category=a.category,
                cluster=a.cluster,
            )
            groups[key] = group
        group.pages.append(AnnotationPage(
            id=a.id,
            page_no=a.page_no,
            quote=a.quote,
            article_reference=a.article_reference,
            shapes=a.shapes,
            ranges=a.ranges,
        ))

    for group in groups.values():
        group.pages.sort(key=lambda p: (p.page_no is None, p.page_no or 0))
    return list(groups.values())
