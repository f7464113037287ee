from __future__ import annotations

import csv
from pathlib import Path
from typing import Sequence

from contract_api.app.domain.ports import TabularWriterPort


class TsvWriter(TabularWriterPort):
    """
    헤더 1행 + 데이터 행을 탭 구분 파일로 쓴다.
    """
    def write(self, path: Path, header: Sequence[str], rows: Sequence[Sequence[str]]) -> Path:
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f, delimiter="\t")
            writer.writerow(header)
            writer.writerows(rows)
        return path
