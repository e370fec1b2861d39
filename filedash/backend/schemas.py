from pydantic import BaseModel
from typing import Dict, List, Optional

class RiskAssessmentOut(BaseModel):
    score: float
    level: str
    factors: List[str] = []

class FileOut(BaseModel):
    filename: str
    file_size: int
    upload_time: str
    has_static_analysis: bool
    has_dynamic_analysis: bool
    risk_assessment: Optional[RiskAssessmentOut] = None

class FilesResponse(BaseModel):
    status: str
    files: Dict[str, FileOut]

class FileUploadResponse(BaseModel):
    id: str
    filename: str
    file_size: int
    upload_time: str

class StatusResponse(BaseModel):
    status: str
    message: str
