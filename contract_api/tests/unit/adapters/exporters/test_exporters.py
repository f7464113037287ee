import csv

from docx import Document

from contract_api.app.adapters.exporters.docx_writer import DocxWriter
from contract_api.app.adapters.exporters.tsv_writer import TsvWriter
from contract_api.app.domain.models import ExportDocument, ExportSection


def test_tsv_writer_writes_header_and_rows(tmp_path):
    path = tmp_path / "out.tsv"

    written = TsvWriter().write(path, ["#", "Гэрээний нэр"], [["1.", "Gold; copper"], ["2.", "Coal"]])

    assert written == path
    with open(path, encoding="utf-8", newline="") as f:
        rows = list(csv.reader(f, delimiter="\t"))
    assert rows == [["#", "Гэрээний нэр"], ["1.", "Gold; copper"], ["2.", "Coal"]]


def test_docx_writer_heading_per_section(tmp_path):
    document = ExportDocument(sections=[
        ExportSection(title="1. Gold mining agreement", paragraphs=["First line", "Second line"]),
        ExportSection(title="2. Copper deal", paragraphs=[]),
    ])
    path = tmp_path / "out.docx"

    DocxWriter().write(path, document)

    doc = Document(str(path))
    texts = [(p.style.name, p.text) for p in doc.paragraphs]
    assert texts == [
        ("Heading 1", "1. Gold mining agreement"),
        ("Normal", "First line"),
        ("Normal", "Second line"),
        ("Heading 1", "2. Copper deal"),
    ]


def test_docx_writer_uses_template(tmp_path):
    template = tmp_path / "template.docx"
    base = Document()
    base.add_paragraph("Header from template")
    base.save(str(template))

    path = tmp_path / "out.docx"
    DocxWriter(str(template)).write(path, ExportDocument(sections=[ExportSection(title="Title")]))

    doc = Document(str(path))
    assert [p.text for p in doc.paragraphs] == ["Header from template", "Title"]
