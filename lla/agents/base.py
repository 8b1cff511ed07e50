"""ChatAgent interface: the capability set every routable agent provides.

Agents are stateless processors: they receive the caller's messages and return a
response. They never hold or modify conversation state; the caller appends.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from lla.messages import Message


@dataclass(frozen=True)
class AgentInfo:
    """Name and description of a registered agent, used for routing prompts."""

    name: str
    description: str


class ChatAgent(ABC):
    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier used for routing."""

    @property
    @abstractmethod
    def description(self) -> str:
        """What this agent is for, shown to the orchestrator."""

    @abstractmethod
    def system_message(self) -> Message:
        """The persona message that opens a conversation with this agent."""

    @abstractmethod
    def chat(self, messages: Sequence[Message]) -> Message:
        """Return the assistant's reply to ``messages``. Raises BackendError."""

    def info(self) -> AgentInfo:
        return AgentInfo(name=self.name, description=self.description)
