"""Conversationalist: general-purpose conversation agent."""

from typing import Sequence

from lla.agents.agent import Agent
from lla.agents.base import ChatAgent
from lla.messages import Message

NAME = "conversationalist"
DESCRIPTION = "For general conversation, brainstorming, advice, and discussion"


class Conversationalist(ChatAgent):
    def __init__(
        self,
        model: str,
        base_url: str,
        system_prompt: str,
        name: str = NAME,
        description: str = DESCRIPTION,
        timeout: float | None = None,
    ):
        self._agent = Agent(model, base_url, system_prompt, timeout=timeout)
        self._name = name
        self._description = description

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def model(self) -> str:
        return self._agent.model

    def system_message(self) -> Message:
        return self._agent.system_message()

    def chat(self, messages: Sequence[Message]) -> Message:
        return self._agent.chat(messages)
