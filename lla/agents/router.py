"""Router: asks the orchestration agent which registered agent should answer.

The orchestration agent is a plain Agent whose persona lists every registered
agent. The same agent instance backs the Evaluator.
"""

import sys
from typing import Sequence

from lla.agents.agent import Agent
from lla.agents.base import AgentInfo
from lla.messages import Message
from lla.utils.parsing import normalize_reply

FALLBACK_AGENT_NAME = "conversationalist"

ORCHESTRATOR_PROMPT = """\
You are an orchestrator that routes user requests and evaluates responses.

Available agents:
{agent_list}

You have two jobs:

1. ROUTING: When given a user request (no response yet), decide which agent should handle it.
   Reply with just the agent name, nothing else.

2. EVALUATING: When given a request AND a response, decide if the request is complete.
   Reply with either:
   - "complete" if the response fully addresses the request
   - "incomplete: <reason>" if more work is needed

Be concise. One word for routing, one line for evaluation."""


def build_orchestrator_prompt(agents: Sequence[AgentInfo]) -> str:
    """Render the orchestrator persona with a bulleted name: description list."""
    agent_list = "\n".join(f"- {a.name}: {a.description}" for a in agents)
    return ORCHESTRATOR_PROMPT.format(agent_list=agent_list)


def create_orchestration_agent(
    model: str, base_url: str, agents: Sequence[AgentInfo], timeout: float | None = None
) -> Agent:
    return Agent(model, base_url, build_orchestrator_prompt(agents), timeout=timeout)


class Router:
    """Picks an agent name for the current conversation.

    The agent list is captured at construction; later registrations are not seen.
    """

    def __init__(self, agent: Agent, agents: Sequence[AgentInfo]):
        self.agent = agent
        self.available_agents = list(agents)
        # lowercase -> registered spelling
        self._known = {a.name.lower(): a.name for a in self.available_agents}

    @property
    def fallback_name(self) -> str:
        if self.available_agents:
            return self.available_agents[0].name
        return FALLBACK_AGENT_NAME

    def route(self, messages: Sequence[Message]) -> str:
        """Return the chosen agent name, or the fallback when the reply is unknown.

        Raises BackendError if the orchestration call fails.
        """
        print("[LLA] Deciding what to do...")
        response = self.agent.chat([self.agent.system_message(), *messages])
        choice = normalize_reply(response.content)

        if choice in self._known:
            name = self._known[choice]
            print(f"[LLA] Agent: {name}")
            return name

        fallback = self.fallback_name
        print(f"[LLA] Warning: unrecognised agent '{choice}', using {fallback}.", file=sys.stderr)
        return fallback
