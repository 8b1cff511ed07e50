"""Shared fixtures for the assistant test suite."""

from unittest.mock import patch

import pytest

from lla.agents.base import ChatAgent
from lla.agents.registry import AgentRegistry
from lla.conversation import ConversationSession
from lla.messages import create_message
from lla.storage.archivist import Archivist


class ScriptedAgent(ChatAgent):
    """ChatAgent that replies from a fixed script and records what it was sent."""

    def __init__(self, name, replies, description="test agent", persona="You are a test agent."):
        self._name = name
        self._description = description
        self._persona = persona
        self._replies = list(replies)
        self.calls = []

    @property
    def name(self):
        return self._name

    @property
    def description(self):
        return self._description

    def system_message(self):
        return create_message("system", self._persona)

    def chat(self, messages):
        self.calls.append(list(messages))
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return create_message("assistant", reply)


class ScriptedOrchestrationAgent:
    """Stand-in for the orchestration Agent used by Router and Evaluator."""

    def __init__(self, replies, prompt="You are an orchestrator."):
        self._prompt = prompt
        self._replies = list(replies)
        self.calls = []

    def system_message(self):
        return create_message("system", self._prompt)

    def chat(self, messages):
        self.calls.append(list(messages))
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return create_message("assistant", reply)


class StaticLabeler:
    def __init__(self, title="Test Chat"):
        self.title = title
        self.calls = []

    def label(self, message):
        self.calls.append(message)
        return self.title


@pytest.fixture
def make_agent():
    return ScriptedAgent


@pytest.fixture
def make_orchestration_agent():
    return ScriptedOrchestrationAgent


@pytest.fixture
def labeler():
    return StaticLabeler()


@pytest.fixture
def archivist(tmp_path):
    return Archivist(tmp_path / "history")


@pytest.fixture
def session(archivist):
    return ConversationSession(archivist)


@pytest.fixture
def active_session(session):
    """Session with a started conversation holding only its persona."""
    session.start_conversation("Test Chat", create_message("system", "You are a test agent."))
    return session


@pytest.fixture
def registry_factory():
    def _build(*agents):
        registry = AgentRegistry()
        for agent in agents:
            registry.register(agent)
        return registry

    return _build


@pytest.fixture
def mock_config():
    """Patch the config singleton with test-friendly values."""
    test_config = {
        "ollama_url": "http://localhost:11434",
        "orchestrator_model": "llama3.2",
        "conversationalist_model": "llama3.2",
        "labeler_model": "llama3.2:1b",
        "max_iterations": 5,
        "history_dir": "./message_history",
        "username": None,
        "llm_max_retries": 0,
        "request_timeout": None,
    }
    with patch("lla.config._config", test_config):
        yield test_config
