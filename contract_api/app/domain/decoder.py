"""
검색 결과 디코더.

OpenSearch hit(dict)을 스키마 검증을 거쳐 ContractHit/Annotation으로 바꾼다.
형태가 맞지 않는 hit은 DecodeError로 보고하고, 배치 단위 함수는 그 hit만 건너뛴다.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Tuple

from pydantic import ValidationError

from contract_api.app.domain.models import Annotation, ContractHit, ContractMetadata
from contract_api.app.platform.exceptions import DecodeError

logger = logging.getLogger(__name__)


def _source(raw: Dict[str, Any]) -> Tuple[str | None, Dict[str, Any]]:
    if not isinstance(raw, dict):
        raise DecodeError(None, f"hit must be an object, got {type(raw).__name__}")
    hit_id = raw.get("_id")
    source = raw.get("_source")
    if not isinstance(source, dict):
        raise DecodeError(hit_id, "missing _source")
    return hit_id, source


def _optional_text(hit_id: str | None, source: Dict[str, Any], key: str) -> str | None:
    value = source.get(key)
    if value is None or isinstance(value, str):
        return value
    raise DecodeError(hit_id, f"'{key}' must be a string")


def decode_hit(raw: Dict[str, Any]) -> ContractHit:
    """
    계약 문서 hit 1건을 디코딩한다.
    Args:
        raw: Dict[str, Any] : {"_id", "_score", "_source", "highlight"}
    Returns:
        ContractHit
    Raises:
        DecodeError: 필수 필드가 없거나 타입이 맞지 않는 경우
    """
    hit_id, source = _source(raw)
    if hit_id is None:
        raise DecodeError(None, "missing _id")

    metadata = source.get("metadata")
    if not isinstance(metadata, dict):
        raise DecodeError(hit_id, "missing metadata")
    try:
        meta = ContractMetadata.model_validate(metadata)
    except ValidationError as e:
        raise DecodeError(hit_id, f"invalid metadata: {e.error_count()} error(s)") from e

    highlight = raw.get("highlight") or {}
    if not isinstance(highlight, dict):
        raise DecodeError(hit_id, "highlight must be an object")

    return ContractHit(
        id=str(hit_id),
        score=raw.get("_score"),
        metadata=meta,
        text=_optional_text(hit_id, source, "pdf_text_string"),
        annotations_text=_optional_text(hit_id, source, "annotations_string"),
        metadata_text=_optional_text(hit_id, source, "metadata_string"),
        highlight=highlight,
    )


def decode_hits(raw_hits: Iterable[Dict[str, Any]]) -> Tuple[List[ContractHit], List[DecodeError]]:
    """
    여러 hit을 디코딩한다. 실패한 hit은 로그를 남기고 건너뛴다.
    Returns:
        (디코딩된 hit 목록, 실패 목록)
    """
    hits: List[ContractHit] = []
    failures: List[DecodeError] = []
    for raw in raw_hits:
        try:
            hits.append(decode_hit(raw))
        except DecodeError as e:
            logger.warning("decode: skip hit: %s", e, extra={"hit_id": e.hit_id})
            failures.append(e)
    return hits, failures


def decode_annotation(raw: Dict[str, Any]) -> Annotation:
    hit_id, source = _source(raw)
    try:
        return Annotation.model_validate({"id": hit_id, **source})
    except ValidationError as e:
        raise DecodeError(hit_id, f"invalid annotation: {e.error_count()} error(s)") from e


def decode_annotations(raw_hits: Iterable[Dict[str, Any]]) -> Tuple[List[Annotation], List[DecodeError]]:
    items: List[Annotation] = []
    failures: List[DecodeError] = []
    for raw in raw_hits:
        try:
            items.append(decode_annotation(raw))
        except DecodeError as e:
            logger.warning("decode: skip annotation: %s", e, extra={"hit_id": e.hit_id})
            failures.append(e)
    return items, failures
