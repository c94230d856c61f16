from .project import Project, ProjectCreate, ProjectUpdate
from .character import Character, CharacterCreate, CharacterUpdate, CharacterGenerateRequest
from .scene_character import SceneCharacter, SceneCharacterCreate, SceneCharacterUpdate
from .scene import Scene, SceneCreate, SceneUpdate, SceneNarrationRequest, SceneGenerateRequest
from .story import (
    StoryRequest,
    StoryResponse,
    SimpleStoryRequest,
    SimpleStoryResponse,
    ProjectStoryGenerateRequest,
    ProjectStoryGenerateResponse,
    StoryApplyRequest,
    StoryApplyResponse,
)
from .ai import (
    SceneSuggestionRequest,
    SceneSuggestionResponse,
    AvatarRequest,
    AvatarResponse,
    MockSceneRequest,
    MockSceneResponse,
)
from .audio import SpeechRequest, SpeechResponse
from .export import AnimationExport, AnimationExportCreate, AnimationExportList

__all__ = [
    "Project",
    "ProjectCreate",
    "ProjectUpdate",
    "Character",
    "CharacterCreate",
    "CharacterUpdate",
    "CharacterGenerateRequest",
    "SceneCharacter",
    "SceneCharacterCreate",
    "SceneCharacterUpdate",
    "Scene",
    "SceneCreate",
    "SceneUpdate",
    "SceneNarrationRequest",
    "SceneGenerateRequest",
    "StoryRequest",
    "StoryResponse",
    "SimpleStoryRequest",
    "SimpleStoryResponse",
    "ProjectStoryGenerateRequest",
    "ProjectStoryGenerateResponse",
    "StoryApplyRequest",
    "StoryApplyResponse",
    "SceneSuggestionRequest",
    "SceneSuggestionResponse",
    "AvatarRequest",
    "AvatarResponse",
    "MockSceneRequest",
    "MockSceneResponse",
    "SpeechRequest",
    "SpeechResponse",
    "AnimationExport",
    "AnimationExportCreate",
    "AnimationExportList",
]
