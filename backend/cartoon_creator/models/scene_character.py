from sqlalchemy import Column, Integer, String, Float, ForeignKey
from sqlalchemy.orm import relationship

from cartoon_creator.db.base import Base


class SceneCharacter(Base):
    """Placement of a character inside a scene."""

    __tablename__ = "scene_characters"

    id = Column(Integer, primary_key=True, index=True)
    scene_id = Column(Integer, ForeignKey("scenes.id", ondelete="CASCADE"), index=True, nullable=False)
    character_id = Column(Integer, ForeignKey("characters.id", ondelete="CASCADE"), index=True, nullable=False)

    # percentages of the canvas; y is measured from the bottom edge
    position_x = Column(Float, nullable=False, default=50.0)
    position_y = Column(Float, nullable=False, default=50.0)
    scale = Column(Float, nullable=False, default=1.0)
    expression = Column(String(64), nullable=False, default="happy")

    scene = relationship("Scene", back_populates="scene_characters")
    character = relationship("Character", back_populates="placements")
