from unittest.mock import MagicMock
import pytest

from contract_api.app.main import app
from contract_api.app.api.deps import get_export_service, get_search_service
from contract_api.app.domain.decoder import decode_hit
from contract_api.app.domain.models import ExportArtifact, ExportFormat, SearchResult
from contract_api.app.domain.shaping import to_item
from contract_api.app.platform.exceptions import IndexUnavailable


@pytest.fixture
def mock_search_service(raw_hit):
    svc = MagicMock()
    svc.search.return_value = SearchResult(total=1, took=4, items=[to_item(decode_hit(raw_hit()))])
    svc.hits.return_value = [decode_hit(raw_hit())]
    return svc


@pytest.fixture
def mock_export_service():
    svc = MagicMock()
    svc.export_search.return_value = ExportArtifact(
        filename="abc.tsv", media_type="text/tab-separated-values", content=b"#\tname\n",
    )
    return svc


@pytest.fixture(autouse=True)
def override_dependency(mock_search_service, mock_export_service):
    app.dependency_overrides[get_search_service] = lambda: mock_search_service
    app.dependency_overrides[get_export_service] = lambda: mock_export_service
    yield


def test_search_returns_envelope(client, mock_search_service):
    resp = client.get("/api/search", params={"q": "gold", "year": "2019,2020,abc", "resource": "gold"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["data"]["total"] == 1
    item = body["data"]["items"][0]
    assert item["id"] == "1042"
    assert item["labels"]["resources"] == ["Алт"]

    params = mock_search_service.search.call_args.args[0]
    assert params.q == "gold"
    assert params.years == (2019, 2020)
    assert params.resources == ("gold",)


def test_search_echoes_request_id(client):
    resp = client.get("/api/search", headers={"X-Request-ID": "req-42"})

    assert resp.headers["X-Request-ID"] == "req-42"
    assert resp.json()["trace_id"] == "req-42"


def test_invalid_paging_returns_400(client, mock_search_service):
    resp = client.get("/api/search", params={"size": "abc"})

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "INVALID_INPUT"
    mock_search_service.search.assert_not_called()


def test_index_unavailable_returns_503(client, mock_search_service):
    mock_search_service.search.side_effect = IndexUnavailable("contracts-master", "connection refused")

    resp = client.get("/api/search")

    assert resp.status_code == 503
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == "SERVICE_UNAVAILABLE"
    assert body["error"]["details"]["index_name"] == "contracts-master"


def test_download_tsv(client, mock_search_service, mock_export_service):
    resp = client.get("/api/search", params={"resource": "gold", "download": "1", "type": "tsv"})

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/tab-separated-values")
    assert 'filename="abc.tsv"' in resp.headers["content-disposition"]
    assert resp.content == b"#\tname\n"
    hits, fmt = mock_export_service.export_search.call_args.args
    assert fmt is ExportFormat.tsv
    assert [h.id for h in hits] == ["1042"]
    mock_search_service.search.assert_not_called()


def test_download_with_unknown_type_returns_json(client, mock_export_service):
    resp = client.get("/api/search", params={"download": "1", "type": "pdf"})

    assert resp.status_code == 200
    assert resp.json()["success"] is True
    mock_export_service.export_search.assert_not_called()
