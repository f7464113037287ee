"""
ExportService
=============

검색 결과/단일 계약을 파일(TSV, DOCX)로 내보낸다.

파일은 요청마다 만드는 임시 폴더 DOCUMENT_PATH/result/{uuid} 에 쓰고,
바이트를 읽어 들인 뒤 폴더를 지운다. 예외가 나도 폴더는 남지 않는다.
"""

from __future__ import annotations

import logging
import shutil
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Sequence

from contract_api.app.domain.models import ContractHit, ExportArtifact, ExportFormat
from contract_api.app.domain.ports import DocumentWriterPort, LookupPort, TabularWriterPort
from contract_api.app.domain.shaping import EXPORT_HEADER, to_document, to_rows

logger = logging.getLogger(__name__)

MEDIA_TYPES = {
    ExportFormat.tsv: "text/tab-separated-values",
    ExportFormat.docx: "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


class ExportService:

    def __init__(
        self,
        lookup: LookupPort,
        tabular_writer: TabularWriterPort,
        document_writer: DocumentWriterPort,
        document_path: str,
        public_url: str,
        internal_storage_url: str,
    ) -> None:
        self._lookup = lookup
        self._tabular_writer = tabular_writer
        self._document_writer = document_writer
        self._document_path = Path(document_path)
        self._public_url = public_url.rstrip("/")
        self._internal_storage_url = internal_storage_url

    @contextmanager
    def scratch_dir(self) -> Iterator[tuple[str, Path]]:
        """
        요청 단위 임시 폴더.
        Returns:
            (token, path): uuid 문자열과 생성된 폴더 경로
        """
        token = str(uuid.uuid4())
        path = self._document_path / "result" / token
        path.mkdir(parents=True, exist_ok=True)
        try:
            yield token, path
        finally:
            shutil.rmtree(path, ignore_errors=True)

    # ================= public API =================
    def export_search(self, hits: Sequence[ContractHit], fmt: ExportFormat) -> ExportArtifact:
        """
        검색 결과 전체를 내보낸다.
        Args:
            hits: Sequence[ContractHit] : 디코딩된 검색 결과
            fmt: ExportFormat           : tsv | docx
        """
        if fmt is ExportFormat.tsv:
            return self._export_tsv(hits)
        return self._export_docx(hits, numbered=True)

    def export_single(self, hit: ContractHit) -> ExportArtifact:
        """계약 1건을 DOCX 로. 제목은 번호 없이 계약명."""
        return self._export_docx([hit], numbered=False, name=hit.id)

    # ================= internals =================
    def _export_tsv(self, hits: Sequence[ContractHit]) -> ExportArtifact:
        units = self._lookup.all_units()
        rows = to_rows(hits, units, self._public_url, self._internal_storage_url)
        with self.scratch_dir() as (token, folder):
            written = self._tabular_writer.write(folder / f"{token}.tsv", EXPORT_HEADER, rows)
            content = written.read_bytes()
        logger.info("export: tsv rows=%d", len(rows), extra={"export_format": "tsv", "total": len(rows)})
        return ExportArtifact(filename=f"{token}.tsv", media_type=MEDIA_TYPES[ExportFormat.tsv], content=content)

    def _export_docx(
        self,
        hits: Sequence[ContractHit],
        numbered: bool,
        name: str | None = None,
    ) -> ExportArtifact:
        document = to_document(hits, numbered=numbered)
        with self.scratch_dir() as (token, folder):
            filename = f"{name or token}.docx"
            written = self._document_writer.write(folder / filename, document)
            content = written.read_bytes()
        logger.info(
            "export: docx sections=%d", len(document.sections),
            extra={"export_format": "docx", "total": len(document.sections)},
        )
        return ExportArtifact(filename=filename, media_type=MEDIA_TYPES[ExportFormat.docx], content=content)
