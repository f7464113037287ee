import sys
from pathlib import Path

# 프로젝트 루트 경로를 sys.path에 추가 (…/<project-root>)
ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
from fastapi.testclient import TestClient
from contract_api.app.main import app


@pytest.fixture(scope="session")
def client():
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def raw_hit():
    """
    OpenSearch 검색 결과 hit 1건을 만드는 팩토리.
    metadata 는 키워드 인자로 덮어쓴다.
    """
    def _make(hit_id="1042", score=3.2, source_extra=None, **metadata):
        meta = {
            "contract_name": "Gold mining agreement",
            "open_contracting_id": "ocds-591adf-1042",
            "signature_date": "2019-05-01",
            "signature_year": 2019,
            "resource": ["gold"],
            "contract_type": "Investment Agreement",
            "document_type": "Contract",
            "company_name": "Erdene LLC",
            "government_entity": [{"entity": "Ministry of Mining"}],
            "provinces": [{"province": "1", "district": "10"}],
            "project_title": "Khundii",
            "file_url": "https://admin.iltodgeree.mn/app/files/1042/contract.pdf",
        }
        meta.update(metadata)
        source = {
            "contract_id": hit_id,
            "metadata": meta,
            "pdf_text_string": "First line\n\nSecond&nbsp;line",
            "annotations_string": "royalty 5%",
            "metadata_string": "see https://admin.iltodgeree.mn/app/files/1042/contract.pdf",
        }
        source.update(source_extra or {})
        return {"_id": hit_id, "_score": score, "_source": source}
    return _make


@pytest.fixture(autouse=True)
def clear_overrides():
    yield
    app.dependency_overrides.clear()
