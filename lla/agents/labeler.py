"""Labeler: derives a short conversation title from the first user message."""

from lla.agents.agent import Agent
from lla.messages import Message

DEFAULT_TITLE = "untitled conversation"
MAX_TITLE_CHARS = 80

_QUOTES = "\"'`"


def _clean_title(text: str) -> str:
    """First non-empty line of the reply, without surrounding quotes, cut to MAX_TITLE_CHARS."""
    for line in text.splitlines():
        title = line.strip().strip(_QUOTES).strip()
        if title:
            if len(title) > MAX_TITLE_CHARS:
                title = title[:MAX_TITLE_CHARS].rsplit(" ", 1)[0].rstrip()
            return title
    return DEFAULT_TITLE


class Labeler:
    def __init__(self, model: str, base_url: str, system_prompt: str, timeout: float | None = None):
        self._agent = Agent(model, base_url, system_prompt, timeout=timeout)

    def label(self, message: Message) -> str:
        """Return a title for a conversation opened by ``message``. Raises BackendError."""
        response = self._agent.chat([self._agent.system_message(), message])
        return _clean_title(response.content)
