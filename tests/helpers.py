import httpx
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from filedash.backend.models import File as FileModel, Analysis
from filedash.client import BackendClient
from filedash.schemas import FileRecord, RiskAssessment

# Тестовая база данных
engine = create_engine(
    "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def override_get_db():
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


class RecordingSink:
    """Запоминает всё, что дашборд отдал на отрисовку"""

    def __init__(self):
        self.renders = []

    def render(self, rows, stats):
        self.renders.append((rows, stats))

    @property
    def rows(self):
        return self.renders[-1][0]

    @property
    def stats(self):
        return self.renders[-1][1]


def make_record(file_id, filename=None, file_size=None, upload_time=None,
                score=None, level=None, factors=None, static=False, dynamic=False):
    risk = None
    if score is not None or level is not None:
        risk = RiskAssessment(score=score, level=level or "", factors=factors or [])
    return FileRecord(
        id=file_id,
        filename=filename or f"{file_id}.bin",
        file_size=file_size,
        upload_time=upload_time,
        has_static_analysis=static,
        has_dynamic_analysis=dynamic,
        risk_assessment=risk,
    )


def add_file(file_id, filename, file_size=0, score=None, level=None, factors=None,
             analyses=()):
    db = TestingSessionLocal()
    try:
        file_db = FileModel(
            id=file_id,
            filename=filename,
            file_size=file_size,
            risk_score=score,
            risk_level=level,
            risk_factors=factors,
        )
        file_db.analyses = [Analysis(kind=kind, result="ok") for kind in analyses]
        db.add(file_db)
        db.commit()
    finally:
        db.close()


def failing_backend(status_code=500, json=None):
    """Клиент, у которого любой запрос отвечает заданным статусом"""
    def handler(request):
        return httpx.Response(status_code, json=json if json is not None else {"detail": "boom"})

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://testserver")
    return BackendClient(base_url="http://testserver", client=http)
