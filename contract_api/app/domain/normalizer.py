"""
검색 파라미터 정규화.

HTTP 쿼리스트링(문자열 매핑)을 검증된 SearchParameters로 바꾼다.
- 다중 값 필드는 콤마로 나누고 trim, 빈 조각은 버린다.
- 숫자 필드(year, district)는 변환 실패한 조각만 건너뛴다.
- 잘못된 boolean은 로그만 남기고 미설정으로 취급한다.
- size/from 은 메모리 할당을 좌우하므로 잘못된 값이면 요청 오류로 처리한다.
"""

from __future__ import annotations

import logging
from typing import Mapping

from contract_api.app.domain.models import SearchParameters, SortField
from contract_api.app.domain.utils import split_csv, parse_ints, parse_bool
from contract_api.app.platform.exceptions import InvalidInput

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 10
DEFAULT_FROM = 0


def _int_list(raw: Mapping[str, str], key: str) -> tuple[int, ...]:
    values, bad = parse_ints(split_csv(raw.get(key)))
    if bad:
        logger.debug("normalize: skip non-numeric %s values %s", key, bad)
    return tuple(values)


def _optional_str(raw: Mapping[str, str], key: str) -> str | None:
    value = (raw.get(key) or "").strip()
    return value or None


def _optional_bool(raw: Mapping[str, str], key: str) -> bool | None:
    value = (raw.get(key) or "").strip()
    if not value:
        return None
    try:
        return parse_bool(value)
    except ValueError:
        logger.warning("normalize: cannot parse boolean %s=%r, ignored", key, value)
        return None


def _paging(raw: Mapping[str, str], key: str, default: int) -> int:
    value = (raw.get(key) or "").strip()
    if not value:
        return default
    try:
        number = int(value)
    except ValueError:
        raise InvalidInput(f"'{key}' must be an integer: {value!r}")
    if number < 0:
        raise InvalidInput(f"'{key}' must be >= 0: {number}")
    return number


def _sort_field(raw: Mapping[str, str]) -> SortField | None:
    value = (raw.get("sort_by") or "").strip()
    if not value:
        return None
    try:
        return SortField(value)
    except ValueError:
        logger.debug("normalize: sort_by=%r not allowed, default order used", value)
        return None


def normalize(raw: Mapping[str, str]) -> SearchParameters:
    """
    쿼리스트링을 SearchParameters로 정규화한다.
    Args:
        raw: Mapping[str, str]  : 요청 쿼리 파라미터
    Returns:
        SearchParameters: 불변 검색 파라미터
    Raises:
        InvalidInput: size/from 이 숫자가 아니거나 음수인 경우
    """
    return SearchParameters(
        q=(raw.get("q") or "").strip(),
        years=_int_list(raw, "year"),
        resources=tuple(split_csv(raw.get("resource"))),
        contract_types=tuple(split_csv(raw.get("contract_type"))),
        document_types=tuple(split_csv(raw.get("document_type"))),
        annotation_categories=tuple(split_csv(raw.get("annotation_category"))),
        province=_optional_str(raw, "province"),
        districts=_int_list(raw, "district"),
        company=_optional_str(raw, "company"),
        government=_optional_str(raw, "government"),
        annotated=_optional_bool(raw, "annotated"),
        size=_paging(raw, "size", DEFAULT_SIZE),
        from_=_paging(raw, "from", DEFAULT_FROM),
        sort_by=_sort_field(raw),
        ascending=bool(_optional_bool(raw, "is_asc")),
    )
