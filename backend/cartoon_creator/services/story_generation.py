# cartoon_creator/services/story_generation.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict

import openai
import requests
from openai import OpenAI

from cartoon_creator.core.config import settings
from cartoon_creator.services import story_templates
from cartoon_creator.services.errors import (
    ConfigurationError,
    ServiceError,
    StoryGenerationError,
    UpstreamServiceError,
)
from cartoon_creator.services.story_parser import STORY_END, STORY_START

logger = logging.getLogger(__name__)

GROQ_SETUP_INSTRUCTIONS = (
    "Get a free API key from https://console.groq.com and add GROQ_API_KEY=your_key to .env"
)

LENGTH_CONFIG: Dict[str, Dict[str, int]] = {
    "short": {"max_tokens": 800, "scene_count": 3},
    "medium": {"max_tokens": 1200, "scene_count": 4},
    "long": {"max_tokens": 2000, "scene_count": 5},
}

SUPPORTED_GROQ_MODELS = [
    "llama3-70b-8192",
    "llama3-8b-8192",
    "llama-3.1-8b-instant",
    "gemma2-9b-it",
]


@dataclass
class GeneratedStory:
    text: str
    model: str


def ensure_story_markers(story: str) -> str:
    if STORY_START in story and STORY_END in story:
        return story
    logger.warning("[Story] Story format warning - adding headers")
    return f"{STORY_START}\n{story}\n{STORY_END}"


def story_template(genre: str, age_group: str, scene_count: int, dialogue_hint: str) -> str:
    scenes = "".join(
        f"""SCENE {i + 1}: [Scene title]
LOCATION: [Vivid location description]
CHARACTERS: [Character names present]
ACTION: [What happens in this scene]
DIALOGUE: [{dialogue_hint}]

"""
        for i in range(scene_count)
    )
    return f"""{STORY_START}
TITLE: [Creative Title Here]
GENRE: {genre}
AGE GROUP: {age_group}

SUMMARY: [2-3 sentence engaging summary]

CHARACTERS:
• [Character 1 name] - [Brief description, age, personality]
• [Character 2 name] - [Brief description, age, personality]

{scenes}
MORAL: [The lesson learned]

STORY ENDING: [1-2 sentence conclusion]
{STORY_END}"""


class StoryGenerationService:
    """
    Generate structured cartoon stories.
    Groq (OpenAI-compatible chat completions) first, Hugging Face Inference as fallback.
    """

    def generate(
        self,
        prompt: str,
        *,
        genre: str = "fantasy",
        age_group: str = "children",
        length: str = "medium",
    ) -> GeneratedStory:
        prompt = prompt.strip()
        try:
            text = self._call_groq(prompt, genre, age_group, length)
            logger.info("[Story] Generated with Groq (%d characters)", len(text))
            return GeneratedStory(text=text, model=settings.GROQ_STORY_MODEL)
        except ServiceError as groq_error:
            logger.warning("[Story] Groq failed, trying Hugging Face: %s", groq_error.message)

            try:
                text = self._call_huggingface(prompt, genre, age_group, length)
            except ServiceError as hf_error:
                logger.error("[Story] Both Groq and Hugging Face failed")
                raise StoryGenerationError(
                    groq_error.message,
                    status_code=groq_error.status_code,
                    details=(
                        f"Story generation failed. Groq error: {groq_error.message}. "
                        f"Hugging Face error: {hf_error.message}"
                    ),
                    instructions=groq_error.instructions,
                ) from hf_error

            logger.info("[Story] Generated with Hugging Face (%d characters)", len(text))
            return GeneratedStory(text=text, model=settings.HUGGINGFACE_MODEL)

    def generate_simple(self, prompt: str) -> str:
        """Best-effort plain story; never raises."""
        if settings.HUGGINGFACE_API_TOKEN:
            try:
                data = self._post_huggingface(
                    f"Create a children's cartoon story about: {prompt}. "
                    "The story should be suitable for kids and have 4 scenes.",
                    {"max_new_tokens": 300, "temperature": 0.7, "top_p": 0.9},
                )
                return self._extract_generated_text(data) or story_templates.outline_story(prompt)
            except ServiceError as e:
                logger.info("[Story] Hugging Face error, using template: %s", e.message)

        return story_templates.random_template_story(prompt)

    # ------------------------------------------------------------------
    # Groq
    # ------------------------------------------------------------------

    def _groq_client(self) -> OpenAI:
        if not settings.GROQ_API_KEY:
            raise ConfigurationError(
                "API key not configured",
                status_code=400,
                details="GROQ_API_KEY is not configured",
                instructions=GROQ_SETUP_INSTRUCTIONS,
            )
        return OpenAI(
            api_key=settings.GROQ_API_KEY,
            base_url=settings.GROQ_BASE_URL,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
            max_retries=0,
        )

    def _call_groq(self, prompt: str, genre: str, age_group: str, length: str) -> str:
        client = self._groq_client()
        config = LENGTH_CONFIG[length]

        system_prompt = self._groq_system_prompt(prompt, genre, age_group, config["scene_count"])

        try:
            completion = client.chat.completions.create(
                model=settings.GROQ_STORY_MODEL,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": f"Create a {genre} story for {age_group} about: {prompt}"},
                ],
                temperature=0.8,
                max_tokens=config["max_tokens"],
                top_p=0.9,
                stream=False,
            )
        except openai.AuthenticationError as e:
            raise UpstreamServiceError(
                "Invalid API key",
                status_code=401,
                details=f"Invalid API key - check your GROQ_API_KEY: {e}",
                instructions="Check your GROQ_API_KEY in .env",
            )
        except openai.RateLimitError as e:
            raise UpstreamServiceError(
                "Rate limit exceeded",
                status_code=429,
                details=f"Rate limit exceeded - free tier has limits: {e}",
                instructions="Free tier has limits. Wait a minute or upgrade your plan.",
            )
        except (openai.NotFoundError, openai.BadRequestError) as e:
            if isinstance(e, openai.NotFoundError) or "decommissioned" in str(e):
                raise UpstreamServiceError(
                    "Model has been decommissioned",
                    status_code=400,
                    details=str(e),
                    instructions=f"Set GROQ_STORY_MODEL to one of: {', '.join(SUPPORTED_GROQ_MODELS)}",
                )
            raise UpstreamServiceError("Failed to generate story", details=str(e))
        except openai.APITimeoutError as e:
            raise UpstreamServiceError(
                "Request timeout",
                status_code=504,
                details=str(e),
                instructions="The story was taking too long. Try a simpler prompt.",
            )
        except openai.APIStatusError as e:
            if e.status_code == 503:
                message = "Service temporarily unavailable - try again soon"
            else:
                message = f"API error: {e.status_code}"
            raise UpstreamServiceError(message, details=str(e))
        except openai.APIConnectionError as e:
            raise UpstreamServiceError("Failed to reach Groq", details=str(e))

        story = completion.choices[0].message.content if completion.choices else None
        if not story or not story.strip():
            raise UpstreamServiceError("No story generated - empty response from AI")

        return ensure_story_markers(story)

    def _groq_system_prompt(self, prompt: str, genre: str, age_group: str, scene_count: int) -> str:
        template = story_template(
            genre,
            age_group,
            scene_count,
            "\"Character name says: 'Actual spoken dialogue here'\", "
            "\"Another character says: 'More dialogue here'\"",
        )
        return f"""You are a professional children's cartoon story writer.
Create a story about "{prompt}" with this EXACT format:

{template}

CRITICAL REQUIREMENTS:
1. EVERY scene MUST have dialogue in the DIALOGUE field
2. Dialogue must be in quotes with character names, like: "Character Name: 'What they say'"
3. Include at least 2-3 lines of dialogue per scene
4. Make it {age_group}-appropriate
5. Include colorful, animated descriptions
6. Each scene should advance the plot
7. Dialogue should reveal character personality and move the story forward
8. Keep sentences simple and engaging"""

    # ------------------------------------------------------------------
    # Hugging Face
    # ------------------------------------------------------------------

    def _call_huggingface(self, prompt: str, genre: str, age_group: str, length: str) -> str:
        config = LENGTH_CONFIG[length]
        template = story_template(genre, age_group, config["scene_count"], '"Character dialogue in quotes"')
        full_prompt = f"""You are a professional children's cartoon story writer.
Create a {genre} story for {age_group} about: {prompt}

Format the story EXACTLY like this:

{template}

Guidelines:
1. Make it {age_group}-appropriate
2. Include colorful, animated descriptions
3. Each scene should advance the plot
4. Include fun dialogue that reveals character
5. Keep sentences simple and engaging"""

        data = self._post_huggingface(
            full_prompt,
            {
                "max_new_tokens": config["max_tokens"],
                "temperature": 0.8,
                "top_p": 0.9,
                "return_full_text": False,
            },
            options={"wait_for_model": True},
        )

        story = self._extract_generated_text(data)
        if story is None:
            raise UpstreamServiceError("Unexpected response format from Hugging Face")
        if not story.strip():
            raise UpstreamServiceError("No story generated - empty response from Hugging Face")

        return ensure_story_markers(story)

    def _post_huggingface(self, inputs: str, parameters: Dict[str, Any], options=None) -> Any:
        if not settings.HUGGINGFACE_API_TOKEN:
            raise ConfigurationError("HUGGINGFACE_API_TOKEN is not configured")

        url = f"{settings.HUGGINGFACE_API_URL}/{settings.HUGGINGFACE_MODEL}"
        payload: Dict[str, Any] = {"inputs": inputs, "parameters": parameters}
        if options:
            payload["options"] = options

        try:
            resp = requests.post(
                url,
                headers={
                    "Authorization": f"Bearer {settings.HUGGINGFACE_API_TOKEN}",
                    "Content-Type": "application/json",
                },
                json=payload,
                timeout=settings.HTTP_TIMEOUT_SECONDS,
            )
        except requests.RequestException as e:
            raise UpstreamServiceError(f"Hugging Face request failed: {e}")

        if resp.status_code != 200:
            if "currently loading" in resp.text:
                raise UpstreamServiceError(
                    "Model is loading, please wait a moment and try again", status_code=503
                )
            raise UpstreamServiceError(f"Hugging Face API error: {resp.status_code} - {resp.text}")

        try:
            return resp.json()
        except ValueError as e:
            raise UpstreamServiceError(f"Invalid JSON from Hugging Face: {e}")

    @staticmethod
    def _extract_generated_text(data: Any):
        if isinstance(data, list) and data and isinstance(data[0], dict):
            return data[0].get("generated_text")
        if isinstance(data, dict):
            return data.get("generated_text")
        if isinstance(data, str):
            return data
        return None
