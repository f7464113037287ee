"""
어휘 정정 테이블.

색인에 저장된 raw 값과 화면에 보여줄 라벨 사이의 양방향 매핑.
- 들어오는 필터 값: 라벨 → raw (to_raw)
- 나가는 결과 값: raw → 라벨 (to_display)
매핑이 없는 값은 그대로 통과한다(조회 실패 없음).
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class Vocabulary(str, Enum):
    resources = "resources"
    contract_types = "contract_types"
    document_types = "document_types"


# raw → 라벨
RESOURCES: Mapping[str, str] = MappingProxyType({
    "gold": "Алт",
    "copper": "Зэс",
    "coal": "Нүүрс",
    "iron ore": "Төмрийн хүдэр",
    "fluorspar": "Жонш",
    "uranium": "Уран",
    "zinc": "Цайр",
    "molybdenum": "Молибден",
    "tungsten": "Гянтболд",
    "silver": "Мөнгө",
    "oil": "Газрын тос",
    "construction minerals": "Барилгын материалын ашигт малтмал",
    "rare earth elements": "Газрын ховор элемент",
})

CONTRACT_TYPES: Mapping[str, str] = MappingProxyType({
    "Investment Agreement": "Хөрөнгө оруулалтын гэрээ",
    "Stability Agreement": "Тогтвортой байдлын гэрээ",
    "Local Development Agreement": "Орон нутгийн хөгжлийн гэрээ",
    "Cooperation Agreement": "Хамтын ажиллагааны гэрээ",
    "Environmental Protection Agreement": "Байгаль орчныг хамгаалах гэрээ",
    "Production Sharing Contract": "Бүтээгдэхүүн хуваах гэрээ",
    "Shareholders Agreement": "Хувьцаа эзэмшигчдийн гэрээ",
    "Land Use Agreement": "Газар ашиглах гэрээ",
    "Water Use Agreement": "Ус ашиглах гэрээ",
    "Other": "Бусад",
})

DOCUMENT_TYPES: Mapping[str, str] = MappingProxyType({
    "Contract": "Гэрээ",
    "Main Contract": "Үндсэн гэрээ",
    "Amendment": "Нэмэлт, өөрчлөлт",
    "Annex": "Хавсралт",
    "Memorandum of Understanding": "Харилцан ойлголцлын санамж бичиг",
    "Resolution": "Тогтоол",
    "Other": "Бусад",
})

_TABLES: dict[Vocabulary, Mapping[str, str]] = {
    Vocabulary.resources: RESOURCES,
    Vocabulary.contract_types: CONTRACT_TYPES,
    Vocabulary.document_types: DOCUMENT_TYPES,
}

# 라벨 → raw (한 번만 뒤집는다)
_REVERSE: dict[Vocabulary, Mapping[str, str]] = {
    vocab: MappingProxyType({label: raw for raw, label in table.items()})
    for vocab, table in _TABLES.items()
}


def to_display(vocabulary: Vocabulary, raw: str) -> str:
    """raw 값 → 표시 라벨. 매핑이 없으면 입력을 그대로 반환."""
    return _TABLES[vocabulary].get(raw, raw)


def to_raw(vocabulary: Vocabulary, label: str) -> str:
    """표시 라벨 → raw 값. 매핑이 없으면 입력을 그대로 반환."""
    return _REVERSE[vocabulary].get(label, label)


def table(vocabulary: Vocabulary) -> Mapping[str, str]:
    return _TABLES[vocabulary]
