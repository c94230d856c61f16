from datetime import datetime
from sqlalchemy import Boolean, Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship

from cartoon_creator.db.base import Base


class Character(Base):
    __tablename__ = "characters"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), index=True)

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    character_type = Column(String(64), nullable=False, default="cartoon")

    # avatar URL built by the avatar service (no image bytes stored)
    image_url = Column(String(2048), nullable=True)
    is_ai_generated = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=datetime.utcnow)

    project = relationship("Project", back_populates="characters")
    placements = relationship("SceneCharacter", back_populates="character")
