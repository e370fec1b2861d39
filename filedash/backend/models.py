#models.py
from sqlalchemy import Column, Integer, String, DateTime, Float, ForeignKey, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from .database import Base

STATIC = "static"
DYNAMIC = "dynamic"

class File(Base):
    __tablename__ = "files"
    id = Column(String, primary_key=True)  # md5 содержимого
    filename = Column(String, nullable=False)
    path = Column(String)
    file_size = Column(Integer)
    upload_time = Column(DateTime, default=datetime.utcnow)
    risk_score = Column(Float, nullable=True)
    risk_level = Column(String, nullable=True)
    risk_factors = Column(JSON, nullable=True)

    analyses = relationship("Analysis", back_populates="file", cascade="all, delete-orphan")

    def has_analysis(self, kind: str) -> bool:
        return any(a.kind == kind for a in self.analyses)

class Analysis(Base):
    __tablename__ = "analysis"
    id = Column(Integer, primary_key=True)
    file_id = Column(String, ForeignKey("files.id"))
    kind = Column(String)  # static | dynamic
    result = Column(String)

    file = relationship("File", back_populates="analyses")
