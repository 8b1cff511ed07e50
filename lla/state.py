"""Turn state: passed through the refinement graph for one user turn."""

from typing import Literal, TypedDict

from lla.agents.evaluator import OrchestratorDecision
from lla.conversation import ConversationSession
from lla.messages import Message


class TurnState(TypedDict):
    session: ConversationSession  # Owner of the conversation for this turn.
    user_input: str  # Original user request. Immutable for the turn.
    pending: tuple[Message, ...]  # Turn messages seen by agents but not yet committed.
    agent_name: str  # Agent resolved by routing. Fixed after the route node.
    response: Message | None  # Latest agent response, not yet committed.
    decision: OrchestratorDecision | None  # Latest evaluator decision.
    iteration: int  # Elaboration round-trips so far. Starts at 0.
    status: Literal["in_progress", "complete", "max_iterations_reached"]
