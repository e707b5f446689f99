from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BrandProject(Base):
    """Snapshot of one brand kit request. Never updated after insert."""

    __tablename__ = "brand_projects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(255), nullable=False, index=True)
    brand_name = Column(String(255), nullable=False)
    industry = Column(Text, nullable=True)
    audience = Column(Text, nullable=True)
    personality = Column(Text, nullable=True)
    details = Column(JSONDocument, nullable=True)
    profile = Column(String(64), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False, index=True)

    kits = relationship(
        "BrandKitRecord",
        back_populates="project",
        order_by="BrandKitRecord.id.desc()",
    )


class BrandKitRecord(Base):
    """Generated kit for a project; ``result`` is the parsed model output as-is."""

    __tablename__ = "brand_kits"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("brand_projects.id", ondelete="CASCADE"), nullable=False, index=True)
    result = Column(JSONDocument, nullable=False)
    profile = Column(String(64), nullable=True)
    model = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False)

    project = relationship("BrandProject", back_populates="kits")
