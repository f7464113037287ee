"""
ExportDocument 를 python-docx 로 DOCX 파일로 만드는 DocumentWriterPort 구현체.
"""

from __future__ import annotations

from pathlib import Path

from docx import Document

from contract_api.app.domain.models import ExportDocument
from contract_api.app.domain.ports import DocumentWriterPort


class DocxWriter(DocumentWriterPort):

    def __init__(self, template: str | None = None) -> None:
        """
        Args:
            template (str | None): 스타일을 가져올 .docx 템플릿 경로 (없으면 기본 문서)
        """
        self.template = template

    def write(self, path: Path, document: ExportDocument) -> Path:
        """
        섹션마다 Heading 1 제목과 줄 단위 문단을 추가한다.
        """
        doc = Document(self.template) if self.template else Document()
        for section in document.sections:
            doc.add_heading(section.title, level=1)
            for paragraph in section.paragraphs:
                doc.add_paragraph(paragraph)
        doc.save(str(path))
        return path
