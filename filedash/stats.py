#stats.py
from dataclasses import dataclass
from typing import Iterable, Optional

from .classifiers import RiskClassification, RiskTier, classify_risk
from .schemas import FileRecord

SIZE_UNITS = ["B", "KB", "MB", "GB", "TB"]


@dataclass(frozen=True)
class Stats:
    total_count: int
    total_bytes: int
    storage_used: str
    average_risk_score: Optional[float]
    average_risk: RiskClassification

    @property
    def risk_label(self) -> str:
        if self.average_risk.tier is RiskTier.UNKNOWN:
            return "-"
        return f"{self.average_risk.label} Risk"

    @property
    def risk_score_text(self) -> str:
        if self.average_risk_score is None:
            return "Risk Score: -"
        return f"Risk Score: {self.average_risk_score:.1f}%"


def format_file_size(size_bytes: Optional[int]) -> str:
    """Человекочитаемый размер по основанию 1024, до двух знаков после запятой"""
    if not size_bytes:
        return "0 B"

    value = float(size_bytes)
    unit = 0
    while value >= 1024 and unit < len(SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {SIZE_UNITS[unit]}"


def compute_stats(records: Iterable[FileRecord]) -> Stats:
    records = list(records)
    total_bytes = sum(record.size for record in records)

    # Средний риск считается только по файлам с оценкой
    scores = [record.risk_score for record in records if record.risk_score is not None]
    average = sum(scores) / len(scores) if scores else None

    return Stats(
        total_count=len(records),
        total_bytes=total_bytes,
        storage_used=format_file_size(total_bytes),
        average_risk_score=average,
        average_risk=classify_risk(average),
    )
