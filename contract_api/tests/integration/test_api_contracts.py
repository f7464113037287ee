from unittest.mock import MagicMock
import pytest

from contract_api.app.main import app
from contract_api.app.api.deps import get_contract_service, get_export_service
from contract_api.app.domain.decoder import decode_hit
from contract_api.app.domain.models import (
    AnnotationList,
    ContractPreview,
    ContractText,
    ExportArtifact,
)
from contract_api.app.platform.exceptions import ResourceNotFound


@pytest.fixture
def mock_contract_service():
    return MagicMock()


@pytest.fixture
def mock_export_service():
    return MagicMock()


@pytest.fixture(autouse=True)
def override_dependency(mock_contract_service, mock_export_service):
    app.dependency_overrides[get_contract_service] = lambda: mock_contract_service
    app.dependency_overrides[get_export_service] = lambda: mock_export_service
    yield


def test_get_contract(client, mock_contract_service, raw_hit):
    mock_contract_service.get_contract.return_value = decode_hit(raw_hit("1042"))

    resp = client.get("/api/contracts/1042")

    assert resp.status_code == 200
    assert resp.json()["data"]["metadata"]["contract_name"] == "Gold mining agreement"
    mock_contract_service.get_contract.assert_called_once_with("1042")


def test_get_contract_not_found(client, mock_contract_service):
    mock_contract_service.get_contract.side_effect = ResourceNotFound("contract", "contract 9 not found")

    resp = client.get("/api/contracts/9")

    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "NOT_FOUND"


def test_get_text(client, mock_contract_service):
    mock_contract_service.get_text.return_value = ContractText(text="body")

    resp = client.get("/api/contracts/1/text")

    assert resp.json()["data"] == {"text": "body"}


def test_get_annotations(client, mock_contract_service):
    mock_contract_service.annotations.return_value = AnnotationList(total=0)

    resp = client.get("/api/contracts/1/annotations")

    assert resp.status_code == 200
    assert resp.json()["data"] == {"total": 0, "items": [], "groups": []}


def test_latest(client, mock_contract_service, raw_hit):
    mock_contract_service.latest.return_value = [decode_hit(raw_hit("1")), decode_hit(raw_hit("2"))]

    resp = client.get("/api/contracts-latest")

    assert [c["id"] for c in resp.json()["data"]] == ["1", "2"]
    mock_contract_service.latest.assert_called_once_with(20)


def test_metadata_preview(client, mock_contract_service):
    mock_contract_service.get_metadata.return_value = ContractPreview(title="T", description="D")

    resp = client.get("/api/metadata/1")

    assert resp.json()["data"] == {"title": "T", "description": "D"}


def test_download_pdf(client, mock_contract_service, tmp_path):
    pdf = tmp_path / "contract.pdf"
    pdf.write_bytes(b"%PDF-1.4")
    mock_contract_service.pdf_path.return_value = pdf

    resp = client.get("/api/contracts/download/1042/pdf")

    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.content == b"%PDF-1.4"


def test_download_docx(client, mock_contract_service, mock_export_service, raw_hit):
    hit = decode_hit(raw_hit("1042"))
    mock_contract_service.get_master.return_value = hit
    mock_export_service.export_single.return_value = ExportArtifact(
        filename="1042.docx", media_type="application/octet-stream", content=b"PK",
    )

    resp = client.get("/api/contracts/download/1042/docx")

    assert resp.status_code == 200
    assert 'filename="1042.docx"' in resp.headers["content-disposition"]
    mock_export_service.export_single.assert_called_once_with(hit)


def test_download_unknown_type_is_rejected(client):
    resp = client.get("/api/contracts/download/1042/xls")

    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"
