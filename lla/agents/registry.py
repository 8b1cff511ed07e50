"""AgentRegistry: the named agents available for routing."""

from lla.agents.base import AgentInfo, ChatAgent


class AgentRegistry:
    """Agents keyed by name, in registration order.

    Re-registering a name replaces the agent but keeps its original position,
    so the default agent is always the first name ever registered.
    """

    def __init__(self):
        self._agents: dict[str, ChatAgent] = {}

    def register(self, agent: ChatAgent) -> None:
        self._agents[agent.name] = agent

    def get(self, name: str) -> ChatAgent | None:
        return self._agents.get(name)

    def list(self) -> list[AgentInfo]:
        return [agent.info() for agent in self._agents.values()]

    def default_agent(self) -> ChatAgent | None:
        return next(iter(self._agents.values()), None)

    def __len__(self) -> int:
        return len(self._agents)

    def __contains__(self, name: str) -> bool:
        return name in self._agents
