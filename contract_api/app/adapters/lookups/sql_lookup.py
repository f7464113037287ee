"""
행정구역(도/군)과 정적 페이지를 RDB(PostgreSQL)에서 읽는 LookupPort 구현체.
"""

from __future__ import annotations

import logging
from typing import Dict, List

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from contract_api.app.domain.models import Page, Province
from contract_api.app.domain.ports import LookupPort
from contract_api.app.platform.exceptions import LookupUnavailable

logger = logging.getLogger(__name__)

PROVINCE_TYPE = 1
DISTRICT_TYPE = 2

ALL_UNITS_SQL = text("select id, name from mongolian_provinces order by name asc")

PROVINCES_SQL = text(
    "select id, name, note, parent_id, type from mongolian_provinces "
    "where type = :type order by name asc"
)

DISTRICTS_SQL = text(
    "select id, name, note, parent_id, type from mongolian_provinces "
    "where type = :type and parent_id = :parent_id order by name asc"
)

PAGE_SQL = text(
    "select t.value as title, c.value as content, c.created_at "
    "from page_title_contents ptc "
    "join title t on t.id = ptc.title_id "
    "join content c on ptc.content_id = c.id "
    "where c.language = :locale and ptc.page_id = :id"
)

LAW_SQL = text(
    "select t.value as title, c.value as content, c.created_at "
    "from legal_title_contents ptc "
    "join title t on t.id = ptc.title_id "
    "join content c on ptc.content_id = c.id "
    "where c.language = :locale and ptc.legal_id = :id"
)


class SqlLookup(LookupPort):

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def all_units(self) -> Dict[int, str]:
        """
        모든 도/군의 id → 이름.
        """
        rows = self._fetch(ALL_UNITS_SQL, {})
        return {row["id"]: row["name"] for row in rows}

    def provinces(self, parent_id: int | None = None) -> List[Province]:
        """
        parent_id 가 없으면 도(type=1) 목록, 있으면 그 도에 속한 군(type=2) 목록.

        Args:
            parent_id (int | None): 상위 도 id
        Returns:
            List[Province]: 이름 오름차순
        """
        if parent_id is None:
            rows = self._fetch(PROVINCES_SQL, {"type": PROVINCE_TYPE})
        else:
            rows = self._fetch(DISTRICTS_SQL, {"type": DISTRICT_TYPE, "parent_id": parent_id})
        return [Province.model_validate(row) for row in rows]

    def page(self, page_id: int, locale: str) -> Page | None:
        return self._first_page(PAGE_SQL, page_id, locale)

    def law(self, law_id: int, locale: str) -> Page | None:
        return self._first_page(LAW_SQL, law_id, locale)

    def _first_page(self, statement, row_id: int, locale: str) -> Page | None:
        rows = self._fetch(statement, {"id": row_id, "locale": locale})
        if not rows:
            return None
        return Page.model_validate(rows[0])

    def _fetch(self, statement, params: Dict[str, object]) -> List[Dict[str, object]]:
        try:
            with self.engine.connect() as conn:
                result = conn.execute(statement, params)
                return [dict(row) for row in result.mappings()]
        except SQLAlchemyError as e:
            logger.error("lookup query failed: %s", e)
            raise LookupUnavailable(str(e)) from e
