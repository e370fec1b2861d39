#view.py
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from functools import partial
from typing import Callable, Iterable, List, Optional

from pydantic import TypeAdapter, ValidationError

from .classifiers import STATUS_STYLES, RiskTier, StatusTier, classify_risk, classify_status
from .schemas import FileRecord
from .stats import format_file_size

ALL = "all"

EARLIEST = datetime.min.replace(tzinfo=timezone.utc)
_DATETIME = TypeAdapter(datetime)


@dataclass(frozen=True)
class Query:
    search_text: str = ""
    type_filter: str = ALL
    risk_filter: str = ALL
    sort_key: str = "newest"

    def update(self, **changes) -> "Query":
        return replace(self, **changes)


@dataclass(frozen=True)
class ViewRow:
    """Строка таблицы для слоя отрисовки"""
    id: str
    filename: str
    risk_label: str
    risk_tier: RiskTier
    risk_style: str
    risk_factor: str
    size: str
    upload_time: str
    status_label: str
    status_tier: StatusTier
    status_style: str
    on_view: Optional[Callable[[], object]] = None
    on_delete: Optional[Callable[[], object]] = None


def matches(record: FileRecord, query: Query) -> bool:
    search = query.search_text.lower()
    filename = record.filename.lower()

    matches_search = search in filename or search in record.id.lower()
    matches_type = query.type_filter == ALL or filename.endswith(query.type_filter.lower())

    risk = query.risk_filter.lower()
    matches_risk = risk == ALL or (
        record.risk_assessment is not None
        and record.risk_assessment.level.lower() == risk
    )
    return matches_search and matches_type and matches_risk


def filter_files(records: Iterable[FileRecord], query: Query) -> List[FileRecord]:
    return [record for record in records if matches(record, query)]


def parse_upload_time(value: Optional[str]) -> datetime:
    """Время загрузки как aware datetime; нераспознанное значение считается самым ранним"""
    if not value:
        return EARLIEST
    try:
        parsed = _DATETIME.validate_python(value.strip())
    except ValidationError:
        return EARLIEST
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _name_key(record: FileRecord):
    # При равенстве без учёта регистра строчные идут раньше прописных, как в localeCompare
    return (record.filename.casefold(), record.filename.swapcase())


def _score_key(record: FileRecord) -> float:
    return record.risk_score or 0


SORTS = {
    "name": (_name_key, False),
    "newest": (lambda record: parse_upload_time(record.upload_time), True),
    "oldest": (lambda record: parse_upload_time(record.upload_time), False),
    "size": (lambda record: record.size, True),
    "risk": (_score_key, True),
}


def sort_files(records: Iterable[FileRecord], sort_key: str) -> List[FileRecord]:
    """Стабильная сортировка копии; неизвестный ключ оставляет порядок как есть"""
    records = list(records)
    if sort_key not in SORTS:
        return records
    key, descending = SORTS[sort_key]
    return sorted(records, key=key, reverse=descending)


def apply_query(records: Iterable[FileRecord], query: Query) -> List[FileRecord]:
    return sort_files(filter_files(records, query), query.sort_key)


def _format_score(score: float) -> str:
    if float(score).is_integer():
        return str(int(score))
    return str(score)


def build_row(
    record: FileRecord,
    on_view: Optional[Callable[[str], object]] = None,
    on_delete: Optional[Callable[[str], object]] = None,
) -> ViewRow:
    risk = classify_risk(record.risk_score)
    assessment = record.risk_assessment

    if assessment is not None:
        score = assessment.score if assessment.score is not None else 0
        risk_label = f"{assessment.level} ({_format_score(score)}%)"
        risk_factor = assessment.factors[0] if assessment.factors else ""
    else:
        risk_label = RiskTier.UNKNOWN.value
        risk_factor = ""

    status = classify_status(record.has_static_analysis, record.has_dynamic_analysis)

    return ViewRow(
        id=record.id,
        filename=record.filename,
        risk_label=risk_label,
        risk_tier=risk.tier,
        risk_style=risk.style_class,
        risk_factor=risk_factor,
        size=format_file_size(record.file_size),
        upload_time=record.upload_time or "",
        status_label=status.label,
        status_tier=status.tier,
        status_style=STATUS_STYLES[status.tier],
        on_view=partial(on_view, record.id) if on_view else None,
        on_delete=partial(on_delete, record.id) if on_delete else None,
    )


def build_rows(records: Iterable[FileRecord], on_view=None, on_delete=None) -> List[ViewRow]:
    return [build_row(record, on_view, on_delete) for record in records]
