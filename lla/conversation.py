"""Conversation state: the append-only message log and the session that persists it."""

from lla.messages import Message
from lla.storage.archivist import Archivist


class Conversation:
    """A titled, append-only sequence of messages opened by a persona message."""

    def __init__(self, title: str, system_message: Message):
        if system_message.role != "system":
            raise ValueError("A conversation must start with a system message.")
        self.title = title
        self._messages = [system_message]

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def add_message(self, message: Message) -> None:
        self._messages.append(message)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "messages": [m.to_dict() for m in self._messages],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Conversation":
        if "title" not in data or "messages" not in data:
            raise ValueError("Conversation missing required fields (title, messages).")
        if not isinstance(data["title"], str):
            raise ValueError(f"Conversation title must be a string, got {data['title']!r}.")
        if not isinstance(data["messages"], list):
            raise ValueError("Conversation messages must be a list.")
        messages = [Message.from_dict(m) for m in data["messages"]]
        if not messages:
            raise ValueError("Conversation has no messages.")
        conversation = cls(data["title"], messages[0])
        for message in messages[1:]:
            conversation.add_message(message)
        return conversation


class ConversationSession:
    """Owns the active conversation and writes it to the archive after every append."""

    def __init__(self, archivist: Archivist):
        self.archivist = archivist
        self.conversation: Conversation | None = None

    def has_conversation(self) -> bool:
        return self.conversation is not None

    def start_conversation(self, title: str, system_message: Message) -> Conversation:
        self.conversation = Conversation(title, system_message)
        self.save()
        return self.conversation

    def resume(self, identifier: str) -> Conversation:
        self.conversation = self.archivist.load(identifier)
        return self.conversation

    @property
    def messages(self) -> tuple[Message, ...]:
        if self.conversation is None:
            return ()
        return self.conversation.messages

    def add_message(self, message: Message) -> None:
        if self.conversation is None:
            raise RuntimeError("No active conversation; start or resume one first.")
        self.conversation.add_message(message)
        self.save()

    def save(self) -> None:
        if self.conversation is not None:
            self.archivist.save(self.conversation)

    def reset(self) -> None:
        self.conversation = None
