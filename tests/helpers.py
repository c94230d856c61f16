"""Stand-ins for third-party response objects."""

from types import SimpleNamespace
from unittest.mock import MagicMock


def mock_response(status_code: int = 200, json_data=None, content: bytes = b"", text: str = ""):
    """Stand-in for a requests.Response."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = json_data
    resp.content = content
    resp.text = text
    return resp


def chat_completion(content):
    """Stand-in for an OpenAI chat completion with one choice."""
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])
