"""Agent: one backend model plus a fixed persona, called over a local Ollama server."""

from typing import Sequence

from langchain_ollama import ChatOllama

from lla.errors import BackendError
from lla.messages import Message, create_message
from lla.utils.parsing import invoke_with_retry


class Agent:
    """Stateless request/response wrapper around a chat model.

    Holds only the model name, backend address, persona text and an optional
    transport timeout. A chat model client is built per call.
    """

    def __init__(self, model: str, base_url: str, system_prompt: str, timeout: float | None = None):
        self._model = model
        self._base_url = base_url
        self._system_prompt = system_prompt
        self._timeout = timeout

    @property
    def model(self) -> str:
        return self._model

    def system_message(self) -> Message:
        return create_message("system", self._system_prompt)

    def _build_llm(self) -> ChatOllama:
        kwargs = {"model": self._model, "base_url": self._base_url, "temperature": 0}
        if self._timeout is not None:
            kwargs["client_kwargs"] = {"timeout": self._timeout}
        return ChatOllama(**kwargs)

    def chat(self, messages: Sequence[Message]) -> Message:
        """Send ``messages`` to the backend and return the assistant reply.

        Raises ValueError on an empty message list and BackendError on any
        transport or decode failure. No retry beyond the transport policy.
        """
        if not messages:
            raise ValueError("Agent.chat requires at least one message.")

        payload = [m.to_dict() for m in messages]
        try:
            response = invoke_with_retry(self._build_llm(), payload)
        except Exception as exc:
            raise BackendError(f"Backend call to model '{self._model}' failed: {exc}") from exc

        content = getattr(response, "content", None)
        if not isinstance(content, str):
            raise BackendError(
                f"Backend reply from model '{self._model}' has no text content: {content!r}"
            )
        return create_message("assistant", content)
