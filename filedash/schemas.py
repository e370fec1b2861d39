from pydantic import BaseModel, ValidationError, field_validator
from typing import Dict, List, Optional

from .errors import LoadError


class RiskAssessment(BaseModel):
    score: Optional[float] = None
    level: str = ""
    factors: List[str] = []


class FileRecord(BaseModel):
    id: str
    filename: str
    file_size: Optional[int] = None
    upload_time: Optional[str] = None
    has_static_analysis: bool = False
    has_dynamic_analysis: bool = False
    risk_assessment: Optional[RiskAssessment] = None

    class Config:
        from_attributes = True
        frozen = True

    @field_validator("id", "filename")
    @classmethod
    def not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("file_size")
    @classmethod
    def not_negative(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 0:
            raise ValueError("must not be negative")
        return value

    @property
    def size(self) -> int:
        return self.file_size or 0

    @property
    def risk_score(self) -> Optional[float]:
        if self.risk_assessment is None:
            return None
        return self.risk_assessment.score


class FilesResponse(BaseModel):
    status: str
    files: Dict[str, dict]


def parse_files_payload(payload) -> List[FileRecord]:
    """Разбор ответа GET /files: словарь id -> запись превращается в список с полем id"""
    try:
        response = FilesResponse.model_validate(payload)
    except ValidationError as e:
        raise LoadError(f"Malformed /files payload: {e}") from e

    if response.status != "success":
        raise LoadError(f"Backend returned status {response.status!r}")

    try:
        return [
            FileRecord.model_validate({**record, "id": file_id})
            for file_id, record in response.files.items()
        ]
    except ValidationError as e:
        raise LoadError(f"Malformed file record: {e}") from e
