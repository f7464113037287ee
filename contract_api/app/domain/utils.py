"""
유틸리티 함수.
"""

import re
from typing import Iterable, List

# Go strconv.ParseBool 과 같은 어휘
_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}

_WHITESPACE = re.compile(r"\s+")
_PDF_NAME = re.compile(r"/([^/]+\.pdf)$")


def split_csv(value: str | None) -> List[str]:
    """
    콤마로 구분된 문자열을 나눈다. 각 조각은 trim 하고 빈 조각은 버린다.
    Args:
        value: str | None (예: "gold, copper,,")
    Returns:
        List[str]: ["gold", "copper"]
    """
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def parse_ints(parts: Iterable[str]) -> tuple[List[int], List[str]]:
    """
    부호(+/-) 하나와 ASCII 숫자로만 된 조각을 정수로 모은다.
    "1_000", 전각/비ASCII 숫자처럼 int()만 받아주는 형태는 실패로 분류한다.
    Returns:
        (변환된 정수 목록, 변환 실패한 조각 목록)
    """
    ok: List[int] = []
    bad: List[str] = []
    for part in parts:
        digits = part[1:] if part[:1] in ("+", "-") else part
        if digits.isascii() and digits.isdigit():
            ok.append(int(part))
        else:
            bad.append(part)
    return ok, bad


def parse_bool(value: str) -> bool:
    """
    문자열을 bool로 변환한다.
    Raises:
        ValueError: 허용되지 않는 값
    """
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"invalid boolean: {value!r}")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text)


def rewrite_links(text: str, internal_prefix: str, public_prefix: str, limit: int = 2) -> str:
    """
    내부 저장소 주소를 공개 주소로 바꾼다. 앞에서부터 limit 번만 치환한다.
    """
    return text.replace(internal_prefix, public_prefix, limit)


def split_paragraphs(text: str) -> List[str]:
    """
    본문을 문단 목록으로 나눈다.
    - 연속 개행(\\n\\n)을 하나로 줄이고
    - &nbsp; 엔티티를 공백으로 바꾼 뒤
    - 개행 단위로 자른다.
    """
    single_lined = text.replace("\n\n", "\n")
    sanitized = single_lined.replace("&nbsp;", " ")
    return sanitized.split("\n")


def pdf_file_name(file_url: str | None) -> str | None:
    """파일 URL 끝의 '*.pdf' 파일명을 꺼낸다."""
    if not file_url:
        return None
    match = _PDF_NAME.search(file_url)
    return match.group(1) if match else None
