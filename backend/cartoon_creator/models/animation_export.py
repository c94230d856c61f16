from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Enum
from sqlalchemy.orm import relationship

from cartoon_creator.db.base import Base

import enum


class ExportStatus(str, enum.Enum):
    pending = "pending"
    running = "running"
    completed = "completed"
    failed = "failed"


class AnimationExport(Base):
    __tablename__ = "animation_exports"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), index=True)

    status = Column(Enum(ExportStatus), default=ExportStatus.pending)
    format = Column(String(16), nullable=False, default="mp4")

    # Where the rendered file lives once the worker is done
    output_path = Column(String(1024), nullable=True)
    mime_type = Column(String(64), nullable=True)
    error = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow
    )

    project = relationship("Project", back_populates="exports")
