from cartoon_creator.db.base import Base
from .project import Project
from .character import Character
from .scene import Scene
from .scene_character import SceneCharacter
from .animation_export import AnimationExport, ExportStatus

__all__ = ["Base", "Project", "Character", "Scene", "SceneCharacter", "AnimationExport", "ExportStatus"]
