"""Assistant: one full user turn around the orchestrator."""

from lla.agents.labeler import Labeler
from lla.agents.registry import AgentRegistry
from lla.conversation import ConversationSession
from lla.errors import ConfigurationFault
from lla.graph import Orchestrator, TurnOutcome
from lla.messages import create_message
from lla.utils.validator import validate_turn


class Assistant:
    def __init__(
        self,
        labeler: Labeler,
        registry: AgentRegistry,
        orchestrator: Orchestrator,
        session: ConversationSession,
    ):
        self.labeler = labeler
        self.registry = registry
        self.orchestrator = orchestrator
        self.session = session

    def _start_conversation(self, user_message) -> None:
        title = self.labeler.label(user_message)
        default_agent = self.registry.default_agent()
        if default_agent is None:
            raise ConfigurationFault("At least one agent must be registered.")
        self.session.start_conversation(title, default_agent.system_message())
        print(f"[LLA] Conversation: {title}")

    def handle(self, user_input: str) -> TurnOutcome:
        """Run one turn and commit it.

        The first turn of a new conversation derives a title and opens the
        conversation with the default agent's persona. The user message is
        committed only with the turn's first refinement pair or its final
        response. Raises ValueError on empty input and BackendError when a
        backend call fails; a failed turn leaves no user message behind.
        """
        user_message = create_message("user", validate_turn(user_input))

        if not self.session.has_conversation():
            self._start_conversation(user_message)

        outcome = self.orchestrator.run_turn(self.session, user_message)
        for message in outcome.pending:
            self.session.add_message(message)
        self.session.add_message(outcome.response)
        return outcome
