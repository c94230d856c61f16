from datetime import datetime
from sqlalchemy import Column, Integer, DateTime, ForeignKey, Text, JSON
from sqlalchemy.orm import relationship

from cartoon_creator.db.base import Base


class Scene(Base):
    __tablename__ = "scenes"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), index=True)

    scene_number = Column(Integer, nullable=False)
    description = Column(Text, nullable=True)
    background_image_url = Column(Text, nullable=True)

    # data: URL (base64 TTS output) or a plain http(s) URL
    audio_url = Column(Text, nullable=True)

    duration = Column(Integer, nullable=False, default=5)  # seconds
    animations = Column(JSON, default=list)  # e.g. [{"type": "fadeIn", "duration": 1}]

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    project = relationship("Project", back_populates="scenes")
    scene_characters = relationship(
        "SceneCharacter", back_populates="scene", order_by="SceneCharacter.id"
    )
