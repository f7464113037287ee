from __future__ import annotations

from urllib.parse import urlparse

from fastapi import Depends, Request
from opensearchpy import OpenSearch
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from contract_api.app.domain.ports import IndexPort, LookupPort
from contract_api.app.domain.services.search_service import SearchService
from contract_api.app.domain.services.summary_service import SummaryService
from contract_api.app.domain.services.contract_service import ContractService
from contract_api.app.domain.services.correction_service import CorrectionService
from contract_api.app.domain.services.export_service import ExportService
from contract_api.app.adapters.searchers.opensearch_searcher import OpenSearchSearcher
from contract_api.app.adapters.lookups.sql_lookup import SqlLookup
from contract_api.app.adapters.exporters.tsv_writer import TsvWriter
from contract_api.app.adapters.exporters.docx_writer import DocxWriter
from contract_api.app.platform.config import settings


# ---- 클라이언트 ----
def create_opensearch(host: str) -> OpenSearch:
    u = urlparse(host)
    return OpenSearch(
        hosts=[
            {"host": u.hostname, "port": u.port or 9200, "scheme": u.scheme or "http"}
        ],
        verify_certs=False,
    )


def get_opensearch(request: Request) -> OpenSearch:
    """
    앱 시작 시 main.py의 lifespan에서 만들어 넣어둔 OpenSearch 클라이언트를 꺼낸다.
    없으면(테스트 등) 즉석 생성.
    """
    if hasattr(request.app.state, "opensearch"):
        return request.app.state.opensearch
    return create_opensearch(settings.OPENSEARCH_HOST)


def get_engine(request: Request) -> Engine:
    """
    lifespan에서 만든 SQLAlchemy 엔진. 없으면 즉석 생성(접속은 첫 쿼리 때).
    """
    if hasattr(request.app.state, "engine"):
        return request.app.state.engine
    return create_engine(settings.DATABASE_URL, pool_pre_ping=True)


# ---- 포트 ----
def get_searcher(os: OpenSearch = Depends(get_opensearch)) -> IndexPort:
    return OpenSearchSearcher(os)


def get_lookup(engine: Engine = Depends(get_engine)) -> LookupPort:
    return SqlLookup(engine)


# ---- 서비스 ----
def get_search_service(searcher: IndexPort = Depends(get_searcher)) -> SearchService:
    """
    검색은 본문/주석 텍스트가 모두 있는 master 인덱스를 대상으로 한다.
    """
    return SearchService(searcher, settings.OPENSEARCH_INDEX_MASTER)


def get_summary_service(searcher: IndexPort = Depends(get_searcher)) -> SummaryService:
    return SummaryService(searcher, settings.OPENSEARCH_INDEX_MASTER)


def get_contract_service(searcher: IndexPort = Depends(get_searcher)) -> ContractService:
    return ContractService(
        searcher,
        master_index=settings.OPENSEARCH_INDEX_MASTER,
        metadata_index=settings.OPENSEARCH_INDEX_METADATA,
        annotations_index=settings.OPENSEARCH_INDEX_ANNOTATIONS,
        storage_path=settings.STORAGE_PATH,
    )


def get_correction_service(searcher: IndexPort = Depends(get_searcher)) -> CorrectionService:
    return CorrectionService(searcher, settings.OPENSEARCH_INDEX_MASTER)


def get_export_service(lookup: LookupPort = Depends(get_lookup)) -> ExportService:
    return ExportService(
        lookup=lookup,
        tabular_writer=TsvWriter(),
        document_writer=DocxWriter(settings.DOCX_TEMPLATE),
        document_path=settings.DOCUMENT_PATH,
        public_url=settings.PUBLIC_URL,
        internal_storage_url=settings.INTERNAL_STORAGE_URL,
    )
