import base64
from unittest.mock import patch

import pytest

from cartoon_creator.core.config import settings
from helpers import mock_response


@pytest.fixture
def groq_key(monkeypatch):
    monkeypatch.setattr(settings, "GROQ_API_KEY", "gsk_test")


@pytest.fixture
def tts_post():
    with patch("cartoon_creator.services.speech.requests.post") as post:
        yield post


def test_empty_text_is_400(client, groq_key):
    resp = client.post("/api/audio/speech", json={"text": "  "})

    assert resp.status_code == 400
    assert resp.json()["error"] == "Text is required for audio generation"


def test_text_over_5000_chars_is_400(client, groq_key, tts_post):
    resp = client.post("/api/audio/speech", json={"text": "a" * 5001, "voice": "Nope"})

    assert resp.status_code == 400
    assert "Maximum 5000" in resp.json()["error"]
    tts_post.assert_not_called()


def test_text_of_exactly_5000_chars_is_accepted(client, groq_key, tts_post):
    tts_post.return_value = mock_response(200, content=b"RIFF")

    resp = client.post("/api/audio/speech", json={"text": "a" * 5000})

    assert resp.status_code == 200


def test_unknown_voice_is_400(client, groq_key):
    resp = client.post("/api/audio/speech", json={"text": "Hello", "voice": "Robo-Voice"})

    assert resp.status_code == 400
    assert "Fritz-PlayAI" in resp.json()["error"]


@pytest.mark.parametrize("voice", ["", None])
def test_blank_or_null_voice_is_400(client, groq_key, tts_post, voice):
    resp = client.post("/api/audio/speech", json={"text": "Hello", "voice": voice})

    assert resp.status_code == 400
    assert resp.json()["error"].startswith("Invalid voice")
    tts_post.assert_not_called()


def test_missing_key_is_500(client):
    resp = client.post("/api/audio/speech", json={"text": "Hello"})

    assert resp.status_code == 500


def test_success_returns_base64_audio(client, groq_key, tts_post):
    tts_post.return_value = mock_response(200, content=b"RIFFfakewav")

    resp = client.post("/api/audio/speech", json={"text": " Hello there "})

    assert resp.status_code == 200
    body = resp.json()
    assert base64.b64decode(body["audio"]) == b"RIFFfakewav"
    assert body["voice"] == "Fritz-PlayAI"
    assert body["format"] == "wav"
    assert body["audio_size"] == len(b"RIFFfakewav")
    assert body["text_length"] == len(" Hello there ")

    sent = tts_post.call_args.kwargs["json"]
    assert sent["input"] == "Hello there"
    assert sent["model"] == settings.GROQ_TTS_MODEL
    assert tts_post.call_args.kwargs["headers"]["Authorization"] == "Bearer gsk_test"


@pytest.mark.parametrize(
    "status, message",
    [
        (401, "Invalid API key - check your GROQ_API_KEY"),
        (429, "Rate limit exceeded"),
        (500, "Failed to generate audio"),
    ],
)
def test_upstream_errors_keep_status(client, groq_key, tts_post, status, message):
    tts_post.return_value = mock_response(status, text="upstream said no")

    resp = client.post("/api/audio/speech", json={"text": "Hello"})

    assert resp.status_code == status
    assert resp.json()["error"] == message
    assert resp.json()["details"] == "upstream said no"


def test_health(client):
    body = client.get("/api/audio/speech").json()

    assert body["availableVoices"] == ["Fritz-PlayAI"]
    assert body["maxTextLength"] == 5000
