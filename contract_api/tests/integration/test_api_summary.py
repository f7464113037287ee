from unittest.mock import MagicMock
import pytest

from contract_api.app.main import app
from contract_api.app.api.deps import get_summary_service
from contract_api.app.domain.models import AggregationBucket, NestedBucket, Summary, YearCount


@pytest.fixture
def mock_summary_service():
    svc = MagicMock()
    svc.summarize.return_value = Summary(
        aggs={"year_summary": [AggregationBucket(key="2019", doc_count=3)]},
        resource_by_years=[
            NestedBucket(key="gold", doc_count=3, buckets=[AggregationBucket(key="2019", doc_count=3)]),
        ],
        count=3,
    )
    svc.summarize_by_province_year.return_value = [YearCount(year="2020", count=2)]
    return svc


@pytest.fixture(autouse=True)
def override_dependency(mock_summary_service):
    app.dependency_overrides[get_summary_service] = lambda: mock_summary_service
    yield


def test_summary(client):
    resp = client.get("/api/summary")

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["count"] == 3
    assert data["aggs"]["year_summary"] == [{"key": "2019", "doc_count": 3}]
    assert data["resource_by_years"][0]["buckets"] == [{"key": "2019", "doc_count": 3}]


def test_province_year_summary(client, mock_summary_service):
    resp = client.get("/api/summary/year/province/3")

    assert resp.json()["data"] == [{"year": "2020", "count": 2}]
    mock_summary_service.summarize_by_province_year.assert_called_once_with(3)


def test_province_id_must_be_integer(client):
    resp = client.get("/api/summary/year/province/abc")
    assert resp.status_code == 422
