from fastapi import FastAPI, UploadFile, File, HTTPException, Depends
from sqlalchemy.orm import Session
import hashlib
import os
import logging

from .database import SessionLocal, init_db
from .models import File as FileModel, STATIC, DYNAMIC
from .schemas import FileOut, FilesResponse, FileUploadResponse, RiskAssessmentOut, StatusResponse

# Настройка логирования
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="File Dashboard Backend",
    description="Бэкенд для дашборда загруженных и проанализированных файлов",
    version="1.0.0"
)

init_db()

STORAGE_DIR = os.environ.get("FILEDASH_STORAGE_DIR", "./storage")
os.makedirs(STORAGE_DIR, exist_ok=True)
logger.info(f"Storage directory initialized at {STORAGE_DIR}")

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def to_file_out(file_db: FileModel) -> FileOut:
    risk = None
    if file_db.risk_score is not None:
        risk = RiskAssessmentOut(
            score=file_db.risk_score,
            level=file_db.risk_level or "",
            factors=file_db.risk_factors or []
        )
    return FileOut(
        filename=file_db.filename,
        file_size=file_db.file_size or 0,
        upload_time=file_db.upload_time.isoformat(),
        has_static_analysis=file_db.has_analysis(STATIC),
        has_dynamic_analysis=file_db.has_analysis(DYNAMIC),
        risk_assessment=risk
    )

def get_file_or_404(file_id: str, db: Session) -> FileModel:
    file_db = db.query(FileModel).filter(FileModel.id == file_id).first()
    if not file_db:
        logger.warning(f"File not found: {file_id}")
        raise HTTPException(status_code=404, detail="Файл не найден")
    return file_db

def remove_from_disk(file_db: FileModel):
    if file_db.path and os.path.exists(file_db.path):
        os.remove(file_db.path)
        logger.info(f"File removed from disk: {file_db.path}")

@app.get("/")
def root():
    """Корневой эндпоинт"""
    return {
        "message": "File Dashboard API",
        "version": "1.0.0",
        "endpoints": {
            "upload": "POST /files/upload",
            "list": "GET /files",
            "info": "GET /file/{file_id}/info",
            "delete": "DELETE /file/{file_id}",
            "cleanup": "POST /cleanup"
        }
    }

@app.post("/files/upload", response_model=FileUploadResponse)
async def upload_file(file: UploadFile = File(...), db: Session = Depends(get_db)):
    """Загрузка файла; идентификатор - md5 содержимого"""
    if not file.filename:
        logger.warning("Upload attempt with no filename")
        raise HTTPException(status_code=400, detail="Файл не выбран")

    logger.info(f"Uploading file: {file.filename}")

    contents = await file.read()
    file_id = hashlib.md5(contents).hexdigest()

    # Повторная загрузка того же содержимого возвращает существующую запись
    existing = db.query(FileModel).filter(FileModel.id == file_id).first()
    if existing:
        logger.info(f"File already stored: {file_id}")
        file_db = existing
    else:
        filepath = os.path.join(STORAGE_DIR, file_id)
        with open(filepath, "wb") as f:
            f.write(contents)

        logger.info(f"File saved to {filepath}, size: {len(contents)} bytes")

        file_db = FileModel(
            id=file_id,
            filename=file.filename,
            path=filepath,
            file_size=len(contents)
        )
        db.add(file_db)
        db.commit()
        db.refresh(file_db)

        logger.info(f"File record created in DB with ID: {file_db.id}")

    return FileUploadResponse(
        id=file_db.id,
        filename=file_db.filename,
        file_size=file_db.file_size,
        upload_time=file_db.upload_time.isoformat()
    )

@app.get("/files", response_model=FilesResponse)
def get_files(db: Session = Depends(get_db)):
    """Получение всех файлов в виде словаря id -> запись"""
    logger.info("Fetching all files")
    files = db.query(FileModel).order_by(FileModel.upload_time.desc()).all()

    logger.info(f"Found {len(files)} files")

    return FilesResponse(
        status="success",
        files={f.id: to_file_out(f) for f in files}
    )

@app.get("/file/{file_id}/info", response_model=FileOut)
def get_file_info(file_id: str, db: Session = Depends(get_db)):
    """Получение информации о конкретном файле"""
    logger.info(f"Fetching file info for ID: {file_id}")
    return to_file_out(get_file_or_404(file_id, db))

@app.delete("/file/{file_id}", response_model=StatusResponse)
def delete_file(file_id: str, db: Session = Depends(get_db)):
    """Удаление файла вместе с результатами анализа"""
    logger.info(f"Deleting file with ID: {file_id}")

    file_db = get_file_or_404(file_id, db)
    remove_from_disk(file_db)
    db.delete(file_db)
    db.commit()

    logger.info(f"File deleted: {file_id}")
    return StatusResponse(status="success", message="Файл удалён")

@app.post("/cleanup", response_model=StatusResponse)
def cleanup(db: Session = Depends(get_db)):
    """Удаление всех файлов"""
    files = db.query(FileModel).all()
    logger.info(f"Cleaning up {len(files)} files")

    for file_db in files:
        remove_from_disk(file_db)
        db.delete(file_db)
    db.commit()

    return StatusResponse(status="success", message=f"Удалено файлов: {len(files)}")
