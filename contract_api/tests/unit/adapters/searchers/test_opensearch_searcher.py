# contract_api/tests/unit/adapters/searchers/test_opensearch_searcher.py

from unittest.mock import MagicMock
import pytest
from opensearchpy.exceptions import ConnectionError, NotFoundError, RequestError, TransportError

from contract_api.app.adapters.searchers.opensearch_searcher import OpenSearchSearcher
from contract_api.app.platform.exceptions import IndexUnavailable, InvalidInput


@pytest.fixture
def mock_client():
    c = MagicMock()
    return c


@pytest.fixture
def searcher(mock_client):
    return OpenSearchSearcher(client=mock_client)


def test_search_passes_index_and_body(searcher, mock_client):
    mock_client.search.return_value = {"took": 2, "hits": {"hits": []}}
    body = {"query": {"match_all": {}}}

    res = searcher.search("contracts-master", body)

    mock_client.search.assert_called_once_with(index="contracts-master", body=body)
    assert res["took"] == 2


def test_get_returns_none_when_missing(searcher, mock_client):
    mock_client.get.side_effect = NotFoundError(404, "not_found", {})

    assert searcher.get("contracts-metadata", "missing") is None


def test_get_returns_document(searcher, mock_client):
    mock_client.get.return_value = {"_id": "1", "_source": {"metadata": {}}}

    assert searcher.get("contracts-metadata", "1")["_id"] == "1"
    mock_client.get.assert_called_once_with(index="contracts-metadata", id="1")


def test_count(searcher, mock_client):
    mock_client.count.return_value = {"count": 17}
    assert searcher.count("contracts-master") == 17


def test_update_by_query_returns_updated(searcher, mock_client):
    mock_client.update_by_query.return_value = {"updated": 4, "total": 4}
    query = {"term": {"metadata.document_type.keyword": "old"}}
    script = {"source": "ctx._source.metadata.document_type = params.new_value", "lang": "painless"}

    updated = searcher.update_by_query("contracts-master", query, script)

    kwargs = mock_client.update_by_query.call_args.kwargs
    assert kwargs["index"] == "contracts-master"
    assert kwargs["body"] == {"query": query, "script": script}
    assert updated == 4


@pytest.mark.parametrize(
    "error",
    [
        ConnectionError("N/A", "connection refused", None),
        TransportError(500, "search_phase_execution_exception", {}),
    ],
)
def test_transport_errors_become_index_unavailable(searcher, mock_client, error):
    mock_client.search.side_effect = error

    with pytest.raises(IndexUnavailable) as e:
        searcher.search("contracts-master", {})
    assert e.value.index_name == "contracts-master"


def test_rejected_query_becomes_invalid_input(searcher, mock_client):
    """
    인덱스가 쿼리를 거부(4xx)하면 장애(503)가 아니라 잘못된 입력(400)
    """
    mock_client.search.side_effect = RequestError(
        400, "search_phase_execution_exception", {"reason": "Result window is too large"},
    )

    with pytest.raises(InvalidInput) as e:
        searcher.search("contracts-master", {"size": 50000})
    assert "contracts-master" in str(e.value)


def test_rejected_update_by_query_becomes_invalid_input(searcher, mock_client):
    mock_client.update_by_query.side_effect = RequestError(400, "script_exception", {})

    with pytest.raises(InvalidInput):
        searcher.update_by_query("contracts-master", {"match_all": {}}, {"source": "x"})
